"""Default table bootstrap.

This module creates the portal's default tables and seeds the admin
account the login screen expects on a fresh install.
"""

from __future__ import annotations

import hashlib

from core.constants import (
    DEFAULT_ADMIN_DEPARTMENT,
    DEFAULT_ADMIN_NAME,
    DEFAULT_ADMIN_PHONE,
    DEFAULT_ADMIN_ROLE,
    DEFAULT_ADMIN_STATUS,
    HASH_ALGORITHM,
)
from core.errors import SmartErpError
from core.logging_config import get_logger
from core.types import AdminAccount, BootstrapReport
from store.record_store import RecordStore

_LOGGER = get_logger(__name__)

DEFAULT_TABLE_STATEMENTS: dict[str, str] = {
    "users": """CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT UNIQUE NOT NULL,
        password_hash TEXT NOT NULL,
        role TEXT NOT NULL,
        department TEXT,
        phone TEXT,
        status TEXT DEFAULT 'active',
        created_at TEXT,
        updated_at TEXT,
        last_login TEXT
    )""",
    "leads": """CREATE TABLE IF NOT EXISTS leads (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT,
        phone TEXT,
        company TEXT,
        status TEXT DEFAULT 'new',
        source TEXT,
        value REAL,
        created_at TEXT,
        updated_at TEXT
    )""",
    "products": """CREATE TABLE IF NOT EXISTS products (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        description TEXT,
        price REAL,
        cost REAL,
        stock_quantity INTEGER,
        category TEXT,
        sku TEXT,
        created_at TEXT,
        updated_at TEXT
    )""",
}

_FIND_ADMIN_SQL = "SELECT * FROM users WHERE email = ?"
_INSERT_ADMIN_SQL = """INSERT INTO users (name, email, password_hash, role, department, phone, status)
    VALUES (?, ?, ?, ?, ?, ?, ?)"""


def create_default_tables(store: RecordStore, admin: AdminAccount) -> BootstrapReport:
    """Ensure default tables exist and the admin user is present.

    Safe to run on every start: existing tables and an existing admin
    are left untouched. A failed admin seed is logged, not raised.

    Args:
        store: Record store to bootstrap.
        admin: Admin account to seed when missing.

    Returns:
        Which tables were created and whether the admin was inserted.
    """
    existing_tables = {summary.name for summary in store.tables()}
    for statement in DEFAULT_TABLE_STATEMENTS.values():
        store.execute(statement)
    tables_created = tuple(name for name in DEFAULT_TABLE_STATEMENTS if name not in existing_tables)
    return BootstrapReport(tables_created=tables_created, admin_seeded=_seed_admin(store, admin))


def hash_password(password: str) -> str:
    """Return the hex digest stored in ``users.password_hash``."""
    return hashlib.new(HASH_ALGORITHM, password.encode("utf-8")).hexdigest()


def _seed_admin(store: RecordStore, admin: AdminAccount) -> bool:
    try:
        existing = store.execute(_FIND_ADMIN_SQL, [admin.email])
        if existing.row_count > 0:
            return False
        store.execute(
            _INSERT_ADMIN_SQL,
            [
                DEFAULT_ADMIN_NAME,
                admin.email,
                hash_password(admin.password),
                DEFAULT_ADMIN_ROLE,
                DEFAULT_ADMIN_DEPARTMENT,
                DEFAULT_ADMIN_PHONE,
                DEFAULT_ADMIN_STATUS,
            ],
        )
    except SmartErpError as error:
        _LOGGER.error("admin_seed_failed", email=admin.email, error=str(error))
        return False
    _LOGGER.info("admin_seeded", email=admin.email)
    return True
