"""Public SDK surface for the SmartERP record store.

This module provides a stable import path for application code.
It re-exports the client, the store, and typed models.
"""

from __future__ import annotations

from core.config import SmartErpConfig
from core.errors import (
    SmartErpError,
    SmartErpQueryError,
    SmartErpScriptError,
    SmartErpStoreError,
)
from core.types import (
    BootstrapReport,
    ColumnAssignment,
    FieldEquals,
    MatchAll,
    QueryResult,
    StatementCommand,
    TableSummary,
)
from store.client_sdk import SmartErpClient
from store.key_value_storage import FileKeyValueStorage, MemoryKeyValueStorage
from store.record_store import RecordStore
from store.statement_parser import parse_statement

__all__ = [
    "BootstrapReport",
    "ColumnAssignment",
    "FieldEquals",
    "FileKeyValueStorage",
    "MatchAll",
    "MemoryKeyValueStorage",
    "QueryResult",
    "RecordStore",
    "SmartErpClient",
    "SmartErpConfig",
    "SmartErpError",
    "SmartErpQueryError",
    "SmartErpScriptError",
    "SmartErpStoreError",
    "StatementCommand",
    "TableSummary",
    "parse_statement",
]
