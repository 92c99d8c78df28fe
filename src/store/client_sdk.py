"""Python SDK for record store operations.

This module exposes the application context that owns one record store
and wires bootstrap, querying, and statement scripts onto it.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Sequence

from core.config import SmartErpConfig
from core.statement_script import execute_statement_script
from core.types import AdminAccount, BootstrapReport, QueryResult, Scalar, TableSummary
from store.key_value_storage import FileKeyValueStorage, KeyValueStorage
from store.record_store import RecordStore
from store.schema_bootstrap import create_default_tables


class SmartErpClient:
    """Primary SDK entry point holding a single record store."""

    def __init__(
        self,
        config: SmartErpConfig | None = None,
        storage: KeyValueStorage | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            storage: Optional storage backend; files under the data root
                are used when omitted.
        """
        self._config = config or SmartErpConfig.from_env()
        backend = storage if storage is not None else FileKeyValueStorage(self._config.data_root)
        self._store = RecordStore(backend, self._config.storage_key)

    @property
    def store(self) -> RecordStore:
        return self._store

    def initialize(self) -> BootstrapReport:
        """Create default tables and seed the configured admin user.

        Returns:
            Bootstrap report.
        """
        admin = AdminAccount(
            email=self._config.admin_email,
            password=self._config.admin_password,
        )
        return create_default_tables(self._store, admin)

    async def query(self, sql: str, parameters: Sequence[Scalar] | None = None) -> QueryResult:
        """Run a statement through the awaitable store interface."""
        return await self._store.query(sql, parameters)

    def execute(self, sql: str, parameters: Sequence[Scalar] | None = None) -> QueryResult:
        """Run a statement synchronously."""
        return self._store.execute(sql, parameters)

    def tables(self) -> tuple[TableSummary, ...]:
        return self._store.tables()

    def run_script(self, script_file: str) -> tuple[QueryResult, ...]:
        """Execute a YAML statement script against this client's store.

        Args:
            script_file: Path to the YAML script.

        Returns:
            One result per statement, in script order.
        """
        return execute_statement_script(self._store, script_file)

    def with_data_root(self, data_root: str) -> "SmartErpClient":
        """Clone the client with a different local data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance backed by files under that root.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        updated_config = replace(self._config, data_root=resolved_root)
        return SmartErpClient(updated_config)
