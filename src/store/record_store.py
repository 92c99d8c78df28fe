"""Embedded record store.

This module keeps named tables of records in memory, interprets a small
set of SQL-shaped statements against them, and writes the whole table
set back to key/value storage after every mutation.
"""

from __future__ import annotations

from datetime import datetime, timezone
import json
import secrets
from typing import Any, Sequence

from core.constants import (
    COUNT_FIELD,
    CREATED_AT_FIELD,
    DEFAULT_STORAGE_KEY,
    RECORD_ID_ALPHABET,
    RECORD_ID_FIELD,
    RECORD_ID_LENGTH,
    SYSTEM_FIELDS,
    UPDATED_AT_FIELD,
)
from core.errors import SmartErpQueryError, SmartErpStoreError
from core.logging_config import get_logger
from core.types import (
    MISSING_VALUE,
    ColumnAssignment,
    FieldEquals,
    QueryResult,
    Record,
    Scalar,
    StatementCommand,
    TableSummary,
    WherePredicate,
)
from store.key_value_storage import KeyValueStorage
from store.statement_parser import parse_statement

_LOGGER = get_logger(__name__)


class RecordStore:
    """In-memory table set persisted as one JSON blob.

    The store owns every table and record. Callers only ever receive
    copies, so mutating a returned row never changes stored state.
    Reads and writes run synchronously in call order.
    """

    def __init__(self, storage: KeyValueStorage, storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        """Create a store and hydrate it from storage.

        Args:
            storage: Backend holding the serialized table blob.
            storage_key: Key of the blob inside the backend.
        """
        self._storage = storage
        self._storage_key = storage_key
        self._tables: dict[str, list[Record]] = {}
        self._last_timestamp = ""
        self.last_persist_error: str | None = None
        self._load_tables()

    async def query(
        self,
        sql: str,
        parameters: Sequence[Scalar] | None = None,
    ) -> QueryResult:
        """Run a statement behind an awaitable interface.

        The statement is interpreted synchronously; the coroutine never
        suspends.

        Args:
            sql: Statement text.
            parameters: Positional parameters for ``?`` placeholders.

        Returns:
            Statement result.

        Raises:
            SmartErpQueryError: If the statement fails while interpreted.
        """
        return self.execute(sql, parameters)

    def execute(
        self,
        sql: str,
        parameters: Sequence[Scalar] | None = None,
    ) -> QueryResult:
        """Run a statement synchronously.

        Statements that do not start with select, insert, update, delete,
        or create produce an empty result instead of an error.

        Args:
            sql: Statement text.
            parameters: Positional parameters for ``?`` placeholders.

        Returns:
            Statement result.

        Raises:
            SmartErpQueryError: If the statement fails while interpreted.
        """
        try:
            command = parse_statement(sql, parameters)
            if command is None:
                return QueryResult()
            return self.run_command(command)
        except Exception as error:
            _LOGGER.error("query_failed", sql=str(sql), error=str(error))
            raise SmartErpQueryError(
                f"Failed to execute statement {sql!r}: {error}. "
                "Check the statement text and its parameters."
            ) from error

    def run_command(self, command: StatementCommand) -> QueryResult:
        """Run a typed statement command.

        Args:
            command: Parsed or directly constructed command.

        Returns:
            Statement result.
        """
        if command.verb == "select":
            return self._select(command)
        if command.verb == "insert":
            return self._insert(command)
        if command.verb == "update":
            return self._update(command)
        if command.verb == "delete":
            return self._delete(command)
        return self._create(command)

    def tables(self) -> tuple[TableSummary, ...]:
        """Return every table name with its record count, sorted by name."""
        return tuple(
            TableSummary(name=name, size=len(records))
            for name, records in sorted(self._tables.items())
        )

    def serialize(self) -> str:
        """Return the JSON blob written to storage."""
        return json.dumps(self._tables, separators=(",", ":"), allow_nan=False)

    def _select(self, command: StatementCommand) -> QueryResult:
        table = self._table(command.table_name)
        if command.count_only:
            return QueryResult(rows=({COUNT_FIELD: len(table)},), row_count=1)
        rows = tuple(dict(record) for record in table if _matches(record, command.predicate))
        return QueryResult(rows=rows, row_count=len(rows))

    def _insert(self, command: StatementCommand) -> QueryResult:
        table = self._table(command.table_name)
        record: Record = {
            assignment.column: assignment.value
            for assignment in command.assignments
            if assignment.value is not MISSING_VALUE
        }
        timestamp = self._next_timestamp()
        record[RECORD_ID_FIELD] = _new_record_id(table)
        record[CREATED_AT_FIELD] = timestamp
        record[UPDATED_AT_FIELD] = timestamp
        table.append(record)
        self._save_tables()
        _LOGGER.info(
            "records_inserted",
            table_name=command.table_name,
            record_id=record[RECORD_ID_FIELD],
        )
        return QueryResult(rows=(dict(record),), row_count=1)

    def _update(self, command: StatementCommand) -> QueryResult:
        table = self._table(command.table_name)
        assignments = _user_assignments(command)
        timestamp = self._next_timestamp()
        updated_count = 0
        for record in table:
            if not _matches(record, command.predicate):
                continue
            for assignment in assignments:
                if assignment.value is MISSING_VALUE:
                    record.pop(assignment.column, None)
                else:
                    record[assignment.column] = assignment.value
            record[UPDATED_AT_FIELD] = _not_before_created(record, timestamp)
            updated_count += 1
        self._save_tables()
        _LOGGER.info(
            "records_updated",
            table_name=command.table_name,
            row_count=updated_count,
        )
        return QueryResult(row_count=updated_count)

    def _delete(self, command: StatementCommand) -> QueryResult:
        table = self._table(command.table_name)
        kept = [record for record in table if not _matches(record, command.predicate)]
        removed_count = len(table) - len(kept)
        self._tables[command.table_name] = kept
        self._save_tables()
        _LOGGER.info(
            "records_deleted",
            table_name=command.table_name,
            row_count=removed_count,
        )
        return QueryResult(row_count=removed_count)

    def _create(self, command: StatementCommand) -> QueryResult:
        if command.table_name not in self._tables:
            self._tables[command.table_name] = []
            _LOGGER.info("table_created", table_name=command.table_name)
        self._save_tables()
        return QueryResult()

    def _table(self, table_name: str) -> list[Record]:
        """Return a table, registering an empty one on first access."""
        return self._tables.setdefault(table_name, [])

    def _next_timestamp(self) -> str:
        """Return a UTC timestamp that never moves backwards within this store."""
        timestamp = _utc_timestamp()
        if timestamp < self._last_timestamp:
            timestamp = self._last_timestamp
        self._last_timestamp = timestamp
        return timestamp

    def _load_tables(self) -> None:
        try:
            blob = self._storage.get_item(self._storage_key)
            self._tables = {} if blob is None else _decode_tables(blob)
        except SmartErpStoreError as error:
            _LOGGER.error("store_load_failed", storage_key=self._storage_key, error=str(error))
            self._tables = {}
            return
        _LOGGER.debug(
            "store_loaded",
            storage_key=self._storage_key,
            table_count=len(self._tables),
        )

    def _save_tables(self) -> None:
        """Persist every table; failures are logged and not raised."""
        try:
            self._storage.set_item(self._storage_key, self.serialize())
        except (SmartErpStoreError, TypeError, ValueError) as error:
            self.last_persist_error = str(error)
            _LOGGER.error("store_save_failed", storage_key=self._storage_key, error=str(error))
            return
        self.last_persist_error = None


def _decode_tables(blob: str) -> dict[str, list[Record]]:
    """Parse and validate a stored table blob.

    Args:
        blob: JSON text read from storage.

    Returns:
        Table name to record list mapping.

    Raises:
        SmartErpStoreError: If the blob is not a mapping of record arrays.
    """
    try:
        payload: Any = json.loads(blob)
    except json.JSONDecodeError as error:
        raise SmartErpStoreError(f"Stored tables are not valid JSON: {error.msg}.") from error
    except (ValueError, RecursionError) as error:
        raise SmartErpStoreError(f"Stored tables could not be decoded: {error}.") from error
    if not isinstance(payload, dict):
        raise SmartErpStoreError("Stored tables must be a JSON object of table arrays.")
    tables: dict[str, list[Record]] = {}
    for table_name, records in payload.items():
        if not isinstance(records, list) or not all(isinstance(row, dict) for row in records):
            raise SmartErpStoreError(
                f"Stored table '{table_name}' must be an array of record objects."
            )
        tables[table_name] = records
    return tables


def _matches(record: Record, predicate: WherePredicate) -> bool:
    if not isinstance(predicate, FieldEquals):
        return True
    actual = record.get(predicate.field_name, MISSING_VALUE)
    return _strictly_equal(actual, predicate.value)


def _strictly_equal(left: object, right: object) -> bool:
    """Compare values without cross-type coercion.

    Integers and floats compare numerically; booleans only equal booleans.
    """
    if left is MISSING_VALUE or right is MISSING_VALUE:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    numeric_types = (int, float)
    if isinstance(left, numeric_types) and isinstance(right, numeric_types):
        return left == right
    return type(left) is type(right) and left == right


def _user_assignments(command: StatementCommand) -> tuple[ColumnAssignment, ...]:
    """Drop SET assignments that target system-managed fields."""
    kept: list[ColumnAssignment] = []
    for assignment in command.assignments:
        if assignment.column in SYSTEM_FIELDS:
            _LOGGER.warning(
                "system_field_assignment_ignored",
                table_name=command.table_name,
                column=assignment.column,
            )
            continue
        kept.append(assignment)
    return tuple(kept)


def _new_record_id(table: list[Record]) -> str:
    """Generate a base-36 id that no record in the table uses yet."""
    used_ids = {record.get(RECORD_ID_FIELD) for record in table}
    while True:
        record_id = "".join(secrets.choice(RECORD_ID_ALPHABET) for _ in range(RECORD_ID_LENGTH))
        if record_id not in used_ids:
            return record_id


def _not_before_created(record: Record, timestamp: str) -> str:
    created_at = record.get(CREATED_AT_FIELD)
    if isinstance(created_at, str) and created_at > timestamp:
        return created_at
    return timestamp


def _utc_timestamp() -> str:
    """Return the current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
