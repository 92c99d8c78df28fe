"""Unit tests for pseudo-SQL statement parsing."""

from __future__ import annotations

import pytest

from core.types import MISSING_VALUE, ColumnAssignment, FieldEquals, MatchAll
from store.statement_parser import (
    extract_insert_columns,
    extract_set_columns,
    extract_table_name,
    extract_where_clause,
    parse_statement,
    statement_verb,
)


@pytest.mark.parametrize(
    ("sql", "expected"),
    [
        ("  SELECT * FROM users", "select"),
        ("insert into users (name) values (?)", "insert"),
        ("Update users SET name = ?", "update"),
        ("DELETE FROM users", "delete"),
        ("create table users", "create"),
        ("DROP TABLE users", None),
    ],
)
def test_statement_verb_matches_leading_keyword(sql: str, expected: str | None) -> None:
    """Verb detection should trim and ignore case."""
    assert statement_verb(sql) == expected


@pytest.mark.parametrize(
    ("sql", "expected"),
    [
        ("SELECT * FROM users WHERE id = ?", "users"),
        ("insert into leads (name) values (?)", "leads"),
        ("UPDATE products SET price = ?", "products"),
        ("CREATE TABLE IF NOT EXISTS users (id TEXT)", "users"),
        ('create table "employees"', "employees"),
        ("SELECT last_update FROM audit", "audit"),
        ("SELECT 1", "unknown"),
    ],
)
def test_extract_table_name(sql: str, expected: str) -> None:
    """Table extraction should take the word after the table keyword."""
    assert extract_table_name(sql) == expected


def test_extract_where_clause_stops_at_order_by() -> None:
    """WHERE body should end before ORDER, GROUP, or LIMIT."""
    clause = extract_where_clause("SELECT * FROM users WHERE email = ? ORDER BY name LIMIT 5")

    assert clause == "email = ?"


def test_extract_where_clause_empty_without_where() -> None:
    """Statements without WHERE should produce an empty clause."""
    assert extract_where_clause("DELETE FROM users") == ""


def test_extract_insert_columns_trims_names() -> None:
    """Insert columns should come from the first parenthesized list."""
    columns = extract_insert_columns("INSERT INTO users ( name ,email) VALUES (?, ?)")

    assert columns == ("name", "email")


def test_extract_set_columns_runs_to_end_without_where() -> None:
    """SET targets should be read up to WHERE or the end of the statement."""
    with_where = extract_set_columns("UPDATE users SET name = ?, role = ? WHERE id = ?")
    without_where = extract_set_columns("UPDATE users SET status = ?")

    assert with_where == ("name", "role") and without_where == ("status",)


def test_parse_update_binds_set_by_position_and_where_to_last_parameter() -> None:
    """Update parsing should keep the two parameter reads independent."""
    command = parse_statement("UPDATE users SET role = ? WHERE id = ?", ["manager", "abc"])

    assert command is not None and (
        command.assignments == (ColumnAssignment(column="role", value="manager"),)
        and command.predicate == FieldEquals(field_name="id", value="abc")
    )


def test_parse_insert_marks_missing_parameters() -> None:
    """Columns past the end of the parameter list should be marked missing."""
    command = parse_statement("INSERT INTO users (name, email) VALUES (?, ?)", ["Asha"])

    assert command is not None and command.assignments[1].value is MISSING_VALUE


def test_parse_select_count_takes_precedence() -> None:
    """COUNT(*) should win over a WHERE marker."""
    command = parse_statement("select count(*) from users where id = ?", ["x"])

    assert command is not None and command.count_only


def test_parse_select_where_without_equality_is_match_all() -> None:
    """Clauses with no '=' should not filter."""
    command = parse_statement("SELECT * FROM users WHERE name LIKE ?", ["a%"])

    assert command is not None and command.predicate == MatchAll()


def test_parse_unknown_verb_returns_none() -> None:
    """Unrecognized verbs should not produce a command."""
    assert parse_statement("VACUUM") is None


def test_parse_rejects_string_parameters() -> None:
    """A bare string is not a parameter sequence."""
    with pytest.raises(TypeError):
        parse_statement("SELECT * FROM users WHERE id = ?", "abc")  # type: ignore[arg-type]
    assert True


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_parse_rejects_non_finite_parameters(value: float) -> None:
    """Non-finite floats cannot be stored and should fail at bind time."""
    with pytest.raises(ValueError, match="non-finite"):
        parse_statement("INSERT INTO products (price) VALUES (?)", [value])
