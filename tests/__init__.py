"""
aqlstore test suite.

This package contains:
- unit/: codec, models, store, config and generator tests (tmp_path only)
- integration/: the aql CLI driven through click's CliRunner
"""
