"""Flat-file person store: one human-readable .aql file per collection.

Layout:
    aql.toml          # project config
    .aql/
        people.aql    # header + one block per record (the source of truth)

people.aql:
    aql_version: 1.0                 # header (line 1-3), kept on every rewrite
    entity: person
    ---
    - id: 1                          # record
      name: "Alice"
      age: 30
      city: "Springfield"

Ids are assigned on add as max(id) + 1. Adds append; updates and deletes
rewrite the whole file. Single writer only.
"""

from aqlstore.codec import FormatError
from aqlstore.config import AqlConfig, init_config, load_config
from aqlstore.models import Person, PersonForm, apply_form
from aqlstore.store import PersonStore

__all__ = [
    "AqlConfig",
    "FormatError",
    "Person",
    "PersonForm",
    "PersonStore",
    "apply_form",
    "init_config",
    "load_config",
]
