"""Pseudo-SQL statement parsing.

This module turns statement text plus positional parameters into a typed
StatementCommand. Parsing is regex based and deliberately narrow: one
table per statement, and a WHERE clause understood only as a single
``field = ?`` equality whose value is the last supplied parameter.
"""

from __future__ import annotations

import math
import re
from typing import Sequence

from core.constants import STATEMENT_VERBS, UNKNOWN_TABLE_NAME
from core.types import (
    MISSING_VALUE,
    ColumnAssignment,
    FieldEquals,
    MatchAll,
    Scalar,
    StatementCommand,
    StatementVerb,
    WherePredicate,
)

_TABLE_NAME_PATTERN = re.compile(
    r"\b(?:FROM|INTO|UPDATE|CREATE\s+TABLE(?:\s+IF\s+NOT\s+EXISTS)?)\s+[\"`]?(\w+)",
    re.IGNORECASE,
)
_WHERE_PATTERN = re.compile(
    r"\bWHERE\s+(.+?)(?:\s+ORDER\b|\s+GROUP\b|\s+LIMIT\b|$)",
    re.IGNORECASE | re.DOTALL,
)
_WHERE_MARKER_PATTERN = re.compile(r"\bWHERE\b", re.IGNORECASE)
_COUNT_MARKER_PATTERN = re.compile(r"COUNT\(\*\)", re.IGNORECASE)
_SET_PATTERN = re.compile(r"\bSET\s+(.+?)(?:\s+WHERE\b|$)", re.IGNORECASE | re.DOTALL)
_COLUMN_LIST_PATTERN = re.compile(r"\(([^)]+)\)")


def statement_verb(sql: str) -> StatementVerb | None:
    """Return the verb a statement starts with.

    Args:
        sql: Statement text.

    Returns:
        Matched verb, or None for anything the store does not handle.
    """
    normalized = sql.strip().lower()
    for verb in STATEMENT_VERBS:
        if normalized.startswith(verb):
            return verb  # type: ignore[return-value]
    return None


def parse_statement(sql: str, parameters: Sequence[Scalar] | None = None) -> StatementCommand | None:
    """Parse statement text into a typed command.

    Args:
        sql: Statement text.
        parameters: Positional parameters bound to ``?`` placeholders.

    Returns:
        Parsed command, or None when the verb is not recognized.

    Raises:
        TypeError: If parameters is a string instead of a sequence of values.
        ValueError: If a parameter is NaN or infinite.
    """
    params = _normalize_parameters(parameters)
    verb = statement_verb(sql)
    if verb is None:
        return None
    table_name = extract_table_name(sql)
    if verb == "select":
        if _COUNT_MARKER_PATTERN.search(sql):
            return StatementCommand(verb=verb, table_name=table_name, count_only=True)
        predicate: WherePredicate = MatchAll()
        if _WHERE_MARKER_PATTERN.search(sql):
            predicate = build_predicate(extract_where_clause(sql), params)
        return StatementCommand(verb=verb, table_name=table_name, predicate=predicate)
    if verb == "insert":
        return StatementCommand(
            verb=verb,
            table_name=table_name,
            assignments=_bind_columns(extract_insert_columns(sql), params),
        )
    if verb == "update":
        return StatementCommand(
            verb=verb,
            table_name=table_name,
            assignments=_bind_columns(extract_set_columns(sql), params),
            predicate=build_predicate(extract_where_clause(sql), params),
        )
    if verb == "delete":
        return StatementCommand(
            verb=verb,
            table_name=table_name,
            predicate=build_predicate(extract_where_clause(sql), params),
        )
    return StatementCommand(verb=verb, table_name=table_name)


def extract_table_name(sql: str) -> str:
    """Return the word after FROM, INTO, UPDATE, or CREATE TABLE.

    Falls back to the shared ``unknown`` table when nothing matches.
    """
    match = _TABLE_NAME_PATTERN.search(sql)
    return match.group(1) if match else UNKNOWN_TABLE_NAME


def extract_where_clause(sql: str) -> str:
    """Return the WHERE clause body, or an empty string when absent."""
    match = _WHERE_PATTERN.search(sql)
    return match.group(1).strip() if match else ""


def extract_insert_columns(sql: str) -> tuple[str, ...]:
    """Return column names from the first parenthesized list."""
    match = _COLUMN_LIST_PATTERN.search(sql)
    if match is None:
        return ()
    return tuple(column.strip() for column in match.group(1).split(","))


def extract_set_columns(sql: str) -> tuple[str, ...]:
    """Return SET target columns in statement order.

    The segment runs to WHERE, or to the end of the statement when the
    update has no WHERE clause.
    """
    match = _SET_PATTERN.search(sql)
    if match is None:
        return ()
    return tuple(pair.split("=")[0].strip() for pair in match.group(1).split(","))


def build_predicate(where_clause: str, parameters: Sequence[Scalar]) -> WherePredicate:
    """Build the row predicate for a WHERE clause.

    Only the field name is read from the clause text. The compared value
    is always the last parameter, no matter how many placeholders the
    clause contains.

    Args:
        where_clause: Clause body without the WHERE keyword.
        parameters: Statement parameters.

    Returns:
        MatchAll for empty or equality-free clauses, FieldEquals otherwise.
    """
    if not where_clause or "=" not in where_clause:
        return MatchAll()
    field_name = where_clause.split("=")[0].strip()
    value = parameters[-1] if parameters else MISSING_VALUE
    return FieldEquals(field_name=field_name, value=value)


def _bind_columns(
    columns: tuple[str, ...],
    parameters: Sequence[Scalar],
) -> tuple[ColumnAssignment, ...]:
    """Pair the Nth column with the Nth parameter.

    Empty column names keep their position but produce no assignment.
    """
    assignments: list[ColumnAssignment] = []
    for index, column in enumerate(columns):
        if not column:
            continue
        value = parameters[index] if index < len(parameters) else MISSING_VALUE
        assignments.append(ColumnAssignment(column=column, value=value))
    return tuple(assignments)


def _normalize_parameters(parameters: Sequence[Scalar] | None) -> tuple[Scalar, ...]:
    if parameters is None:
        return ()
    if isinstance(parameters, (str, bytes, bytearray)):
        raise TypeError(
            f"statement parameters must be a sequence of values, got {type(parameters).__name__}"
        )
    params = tuple(parameters)
    for index, value in enumerate(params):
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(
                f"statement parameter #{index + 1} is {value!r}; "
                "non-finite numbers cannot be stored"
            )
    return params
