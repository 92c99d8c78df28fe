"""Typed statement-script parsing and execution.

This module loads YAML files that list store statements with their
parameters, validates them against one strict schema, and runs them in
order against any object exposing ``execute``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Protocol, Sequence, cast

from core.constants import SCRIPT_VERSION
from core.errors import SmartErpDependencyError, SmartErpScriptError
from core.types import QueryResult, Scalar

_STATEMENT_KEYS = {"sql", "params"}
_ROOT_KEYS = {"version", "statements"}


@dataclass(frozen=True)
class ScriptStatement:
    """One statement with its positional parameters."""

    sql: str
    params: tuple[Scalar, ...] = ()


@dataclass(frozen=True)
class StatementScript:
    """Validated statement-script root object."""

    version: int
    statements: tuple[ScriptStatement, ...]


class StatementExecutor(Protocol):
    """Store API required to run a statement script."""

    def execute(self, sql: str, parameters: Sequence[Scalar] | None = None) -> QueryResult: ...


def load_statement_script(script_path: str) -> StatementScript:
    """Load and validate a YAML statement script from disk.

    Args:
        script_path: File path to the YAML script.

    Returns:
        Fully validated script.

    Raises:
        SmartErpDependencyError: If PyYAML is unavailable.
        SmartErpScriptError: If the file is invalid or schema checks fail.
    """
    payload = _load_yaml_payload(script_path)
    root_mapping = _expect_mapping(payload, "statement script root")
    _validate_keys(root_mapping, _ROOT_KEYS, "statement script root")
    version = _parse_version(root_mapping)
    statements = _parse_statements(root_mapping)
    return StatementScript(version=version, statements=statements)


def execute_statement_script(
    executor: StatementExecutor,
    script_path: str,
) -> tuple[QueryResult, ...]:
    """Run every statement of a script in file order.

    Args:
        executor: Store or client that executes statements.
        script_path: File path to the YAML script.

    Returns:
        One result per statement.
    """
    script = load_statement_script(script_path)
    return tuple(
        executor.execute(statement.sql, list(statement.params))
        for statement in script.statements
    )


def _load_yaml_payload(script_path: str) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise SmartErpDependencyError(
            "Statement scripts require PyYAML. Install with 'pip install pyyaml'."
        ) from error
    script_file = Path(script_path).expanduser().resolve()
    if not script_file.exists():
        raise SmartErpScriptError(
            f"Statement script does not exist at {script_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(script_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise SmartErpScriptError(
            f"Failed to read statement script at {script_file}: {error}. "
            "Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise SmartErpScriptError(
            f"Failed to parse YAML statement script at {script_file}: {error}. "
            "Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise SmartErpScriptError(
            f"Statement script at {script_file} is empty. Define 'version' and 'statements'."
        )
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise SmartErpScriptError(
            f"Invalid {context}: expected object mapping, got {type(value).__name__}."
        )
    for key in value:
        if not isinstance(key, str):
            raise SmartErpScriptError(
                f"Invalid {context}: expected string keys, got {type(key).__name__}."
            )
    return cast(Mapping[str, object], value)


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise SmartErpScriptError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise SmartErpScriptError(
            f"Statement script field 'version' must be an integer. Set version: {SCRIPT_VERSION}."
        )
    if raw_version != SCRIPT_VERSION:
        raise SmartErpScriptError(
            f"Unsupported statement script version {raw_version}. Use version: {SCRIPT_VERSION}."
        )
    return raw_version


def _parse_statements(root_mapping: Mapping[str, object]) -> tuple[ScriptStatement, ...]:
    raw_statements = root_mapping.get("statements")
    if raw_statements is None:
        raise SmartErpScriptError(
            "Statement script missing required field 'statements'. "
            "Add a non-empty list of statements."
        )
    rows = _expect_sequence(raw_statements, "statement script statements")
    if len(rows) == 0:
        raise SmartErpScriptError("Statement script field 'statements' must not be empty.")
    return tuple(_parse_statement(row, index) for index, row in enumerate(rows))


def _parse_statement(value: object, index: int) -> ScriptStatement:
    context = f"statement #{index + 1}"
    if isinstance(value, str):
        return ScriptStatement(sql=value)
    statement_mapping = _expect_mapping(value, context)
    _validate_keys(statement_mapping, _STATEMENT_KEYS, context)
    sql = statement_mapping.get("sql")
    if not isinstance(sql, str) or not sql.strip():
        raise SmartErpScriptError(f"Invalid {context}: field 'sql' must be a non-empty string.")
    raw_params = statement_mapping.get("params")
    if raw_params is None:
        return ScriptStatement(sql=sql)
    params = _expect_sequence(raw_params, f"{context} params")
    for param in params:
        if param is not None and not isinstance(param, (str, int, float, bool)):
            raise SmartErpScriptError(
                f"Invalid {context} params: expected scalar values, got {type(param).__name__}."
            )
    return ScriptStatement(sql=sql, params=tuple(cast(Sequence[Scalar], params)))


def _validate_keys(mapping: Mapping[str, object], allowed_keys: set[str], context: str) -> None:
    unknown_keys = sorted(set(mapping) - allowed_keys)
    if unknown_keys:
        raise SmartErpScriptError(f"Invalid {context}: unknown fields {', '.join(unknown_keys)}.")
