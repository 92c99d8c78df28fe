"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import SmartErpConfig
from core.errors import SmartErpConfigError


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("SMARTERP_DATA_ROOT", "./.tmp-smarterp")

    config = SmartErpConfig.from_env()

    assert config.data_root.name == ".tmp-smarterp"


def test_from_env_uses_default_storage_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Storage key should default to the portal's table blob key."""
    monkeypatch.delenv("SMARTERP_STORAGE_KEY", raising=False)

    config = SmartErpConfig.from_env()

    assert config.storage_key == "smarterp_tables"


def test_from_env_raises_for_invalid_storage_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject keys that are unsafe as file names."""
    monkeypatch.setenv("SMARTERP_STORAGE_KEY", "../tables")

    with pytest.raises(SmartErpConfigError):
        SmartErpConfig.from_env()

    assert os.getenv("SMARTERP_STORAGE_KEY") == "../tables"


def test_from_env_raises_for_blank_admin_email(monkeypatch: pytest.MonkeyPatch) -> None:
    """A blank admin email should be rejected."""
    monkeypatch.setenv("SMARTERP_ADMIN_EMAIL", "  ")

    with pytest.raises(SmartErpConfigError):
        SmartErpConfig.from_env()

    assert True
