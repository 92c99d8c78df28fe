"""Unit tests for default table bootstrap."""

from __future__ import annotations

from core.types import AdminAccount
from store.key_value_storage import MemoryKeyValueStorage
from store.record_store import RecordStore
from store.schema_bootstrap import create_default_tables, hash_password

_ADMIN = AdminAccount(email="admin@example.com", password="secret")


def _store() -> RecordStore:
    return RecordStore(MemoryKeyValueStorage(), "smarterp_tables")


def test_bootstrap_creates_default_tables() -> None:
    """Bootstrap should register users, leads, and products."""
    store = _store()

    report = create_default_tables(store, _ADMIN)

    table_names = {summary.name for summary in store.tables()}
    assert report.tables_created == ("users", "leads", "products") and table_names == {
        "users",
        "leads",
        "products",
    }


def test_bootstrap_seeds_admin_with_hashed_password() -> None:
    """Admin user should be inserted once with a password digest."""
    store = _store()

    report = create_default_tables(store, _ADMIN)

    admin = store.execute("SELECT * FROM users WHERE email = ?", [_ADMIN.email]).rows[0]
    assert (
        report.admin_seeded
        and admin["role"] == "admin"
        and admin["status"] == "active"
        and admin["password_hash"] == hash_password("secret")
        and admin["password_hash"] != "secret"
    )


def test_bootstrap_is_idempotent() -> None:
    """A second run should neither recreate tables nor reseed the admin."""
    store = _store()
    create_default_tables(store, _ADMIN)

    report = create_default_tables(store, _ADMIN)

    users = store.execute("SELECT COUNT(*) FROM users").rows[0]["count"]
    assert report.tables_created == () and not report.admin_seeded and users == 1
