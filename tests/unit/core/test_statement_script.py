"""Unit tests for statement-script parsing and execution."""

from __future__ import annotations

import pytest

from core.errors import SmartErpScriptError
from core.statement_script import execute_statement_script, load_statement_script
from store.key_value_storage import MemoryKeyValueStorage
from store.record_store import RecordStore
from tests.fixture_paths import script_fixture


def test_load_statement_script_parses_strings_and_mappings() -> None:
    """Both bare strings and sql/params mappings should parse."""
    script = load_statement_script(script_fixture("seed_leads.yaml"))

    assert len(script.statements) == 5 and script.statements[1].params == ("Acme Corp", "new")


@pytest.mark.parametrize(
    "file_name",
    [
        "invalid_version.yaml",
        "unknown_key.yaml",
        "empty_statements.yaml",
        "nested_param.yaml",
        "does_not_exist.yaml",
    ],
)
def test_load_statement_script_rejects_invalid_files(file_name: str) -> None:
    """Schema violations should raise a script error."""
    with pytest.raises(SmartErpScriptError):
        load_statement_script(script_fixture(file_name))
    assert True


def test_load_statement_script_rejects_malformed_yaml(tmp_path) -> None:
    """YAML syntax errors should be reported as script errors."""
    script_file = tmp_path / "broken.yaml"
    script_file.write_text("version: 1\nstatements: [\n", encoding="utf-8")

    with pytest.raises(SmartErpScriptError):
        load_statement_script(str(script_file))

    assert script_file.exists()


def test_execute_statement_script_runs_in_order() -> None:
    """Execution should return one result per statement in file order."""
    store = RecordStore(MemoryKeyValueStorage(), "smarterp_tables")

    results = execute_statement_script(store, script_fixture("seed_leads.yaml"))

    acme = store.execute("SELECT * FROM leads WHERE name = ?", ["Acme Corp"]).rows[0]
    assert (
        [result.row_count for result in results] == [0, 1, 1, 1, 1]
        and results[-1].rows[0]["count"] == 2
        and acme["status"] == "contacted"
    )
