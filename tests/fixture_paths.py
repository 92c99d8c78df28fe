"""Shared fixture path helpers for tests."""

from __future__ import annotations

from pathlib import Path


def script_fixture(file_name: str) -> str:
    """Resolve a statement-script fixture under tests/fixtures/scripts.

    Args:
        file_name: YAML file name.

    Returns:
        Absolute fixture path as a string.
    """
    tests_root = Path(__file__).resolve().parent
    return str(tests_root / "fixtures" / "scripts" / file_name)
