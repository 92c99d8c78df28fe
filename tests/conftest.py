"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ENV_VARS = (
    "SMARTERP_DATA_ROOT",
    "SMARTERP_STORAGE_KEY",
    "SMARTERP_ADMIN_EMAIL",
    "SMARTERP_ADMIN_PASSWORD",
)


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point the default data root at a temp dir and drop caller overrides."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SMARTERP_DATA_ROOT", str(tmp_path / "default-data-root"))
