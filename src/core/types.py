"""Shared typed models.

This module defines immutable data models used by the statement parser,
record store, bootstrap, and SDK layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

Scalar = Union[str, int, float, bool, None]
Record = dict[str, Scalar]
StatementVerb = Literal["select", "insert", "update", "delete", "create"]


class _MissingValue:
    """Marker for a parameter position the caller did not supply."""

    _instance: "_MissingValue | None" = None

    def __new__(cls) -> "_MissingValue":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING_VALUE"


MISSING_VALUE = _MissingValue()


@dataclass(frozen=True)
class MatchAll:
    """Predicate that matches every record."""


@dataclass(frozen=True)
class FieldEquals:
    """Predicate matching records whose field strictly equals a value.

    Attributes:
        field_name: Column name compared against the value.
        value: Expected value, or MISSING_VALUE to match absent fields.
    """

    field_name: str
    value: Scalar | _MissingValue


WherePredicate = Union[MatchAll, FieldEquals]


@dataclass(frozen=True)
class ColumnAssignment:
    """One column/value pair taken from an insert or SET list.

    Attributes:
        column: Target column name.
        value: Bound parameter, or MISSING_VALUE when none was supplied.
    """

    column: str
    value: Scalar | _MissingValue


@dataclass(frozen=True)
class StatementCommand:
    """Typed form of one store statement.

    Attributes:
        verb: Operation to run.
        table_name: Target table.
        assignments: Insert columns or SET assignments, in statement order.
        predicate: Row filter for select, update, and delete.
        count_only: Whether a select returns only the table size.
    """

    verb: StatementVerb
    table_name: str
    assignments: tuple[ColumnAssignment, ...] = ()
    predicate: WherePredicate = field(default_factory=MatchAll)
    count_only: bool = False


@dataclass(frozen=True)
class QueryResult:
    """Outcome of one statement.

    Attributes:
        rows: Copies of the returned records.
        row_count: Number of rows returned or affected.
    """

    rows: tuple[Record, ...] = ()
    row_count: int = 0


@dataclass(frozen=True)
class TableSummary:
    """Table name with its current record count."""

    name: str
    size: int


@dataclass(frozen=True)
class AdminAccount:
    """Admin user seeded by schema bootstrap.

    Attributes:
        email: Login email, also used to detect an existing admin.
        password: Plain password; only its digest is stored.
    """

    email: str
    password: str


@dataclass(frozen=True)
class BootstrapReport:
    """Result of the default schema bootstrap.

    Attributes:
        tables_created: Default tables that did not exist before the run.
        admin_seeded: Whether the admin user was inserted by this run.
    """

    tables_created: tuple[str, ...]
    admin_seeded: bool
