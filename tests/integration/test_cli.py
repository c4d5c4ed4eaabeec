"""
Integration tests for the aql CLI.

Each test runs against a fresh project directory created with `aql init`.
"""

import pytest
from click.testing import CliRunner

from aqlstore.cli import cli
from aqlstore.codec import HEADER


class TestCli:
    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def project(self, runner, tmp_path):
        result = runner.invoke(cli, ["init", "--dir", str(tmp_path)])
        assert result.exit_code == 0, result.output
        return tmp_path

    @pytest.fixture
    def aql(self, runner, project):
        def _run(*args):
            return runner.invoke(cli, ["--config-dir", str(project), *args])
        return _run

    def test_init_creates_config_and_store(self, project):
        assert (project / "aql.toml").exists()
        assert (project / ".aql" / "people.aql").read_text() == HEADER

    def test_init_twice_skips(self, runner, project):
        result = runner.invoke(cli, ["init", "--dir", str(project)])
        assert result.exit_code == 0
        assert "already exists" in result.output

    def test_list_empty(self, aql):
        result = aql("list")
        assert result.exit_code == 0
        assert result.output == "(no records)\n"

    def test_add_list_show(self, aql):
        assert aql("add", "--name", "Alice", "--age", "30", "--city", "X").output == "1\n"
        assert aql("add", "--name", "Bob", "--age", "25", "--city", "Y").output == "2\n"

        listing = aql("list").output.splitlines()
        assert len(listing) == 2
        assert listing[0].split() == ["1", "Alice", "30", "X"]

        shown = aql("show", "2")
        assert shown.exit_code == 0
        assert shown.output == '- id: 2\n  name: "Bob"\n  age: 25\n  city: "Y"\n'

    def test_add_bad_age(self, aql):
        result = aql("add", "--name", "Alice", "--age", "old")
        assert result.exit_code == 2
        assert "age" in result.output

    def test_update_partial(self, aql):
        aql("add", "--name", "Alice", "--age", "30", "--city", "X")
        result = aql("update", "1", "--city", "Z")
        assert result.exit_code == 0
        assert result.output == "Updated 1\n"
        assert aql("show", "1").output == '- id: 1\n  name: "Alice"\n  age: 30\n  city: "Z"\n'

    def test_update_missing(self, aql):
        result = aql("update", "9", "--name", "X")
        assert result.exit_code == 1
        assert "Not found: 9" in result.output

    def test_delete(self, aql):
        aql("add", "--name", "Alice")
        assert aql("delete", "1").output == "Deleted 1\n"
        assert aql("delete", "1").output == "Not found: 1\n"
        assert aql("list").output == "(no records)\n"

    def test_raw(self, aql, project):
        aql("add", "--name", "Alice", "--age", "30", "--city", "X")
        result = aql("raw")
        assert result.output == (project / ".aql" / "people.aql").read_text()

    def test_generate(self, aql):
        result = aql("generate", "5", "--seed", "3")
        assert result.exit_code == 0
        assert result.output == "Generated 5 records (ids 1..5)\n"
        assert len(aql("list").output.splitlines()) == 5

    def test_export(self, aql, tmp_path):
        aql("add", "--name", "Alice", "--age", "30", "--city", "X")
        out_dir = tmp_path / "out"
        result = aql("export", "1", "--out", str(out_dir))
        assert result.exit_code == 0
        assert (out_dir / "person_1.aql").exists()
        assert aql("export", "2", "--out", str(out_dir)).exit_code == 1

    def test_non_utf8_store(self, aql, project):
        (project / ".aql" / "people.aql").write_bytes(HEADER.encode() + b"- id: 1\n  name: \"\xff\"\n")
        raw = aql("raw")
        assert raw.exit_code == 0
        assert "\ufffd" in raw.output
        listing = aql("list")
        assert listing.exit_code == 1
        assert "Corrupt store" in listing.output

    def test_corrupt_store_reported(self, aql, project):
        (project / ".aql" / "people.aql").write_text(HEADER + "- id: one\n")
        result = aql("list")
        assert result.exit_code == 1
        assert "Corrupt store" in result.output
