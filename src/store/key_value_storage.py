"""Key/value storage backends for persisted table blobs.

This module provides the string-keyed storage area the record store
serializes into, with a filesystem backend and an in-memory backend.
"""

from __future__ import annotations

from pathlib import Path
import re
from typing import Protocol

from core.constants import STORAGE_FILE_SUFFIX, STORAGE_KEY_PATTERN
from core.errors import SmartErpStoreError


class KeyValueStorage(Protocol):
    """String storage contract used by the record store."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryKeyValueStorage:
    """Process-local storage backed by a dictionary."""

    def __init__(self, initial_items: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial_items or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileKeyValueStorage:
    """Filesystem storage that keeps one UTF-8 file per key.

    Each key maps to ``<root>/<key>.json``. The root directory is created
    on construction so later writes only touch the value file.
    """

    def __init__(self, root: Path) -> None:
        """Initialize storage rooted at a directory.

        Args:
            root: Directory that holds the value files.
        """
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)

    def get_item(self, key: str) -> str | None:
        """Read the value stored under a key.

        Args:
            key: Storage key.

        Returns:
            Stored text, or None when the key was never written.

        Raises:
            SmartErpStoreError: If the value file cannot be read.
        """
        item_path = self._item_path(key)
        if not item_path.exists():
            return None
        try:
            return item_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            raise SmartErpStoreError(
                f"Failed to read storage item '{key}' at {item_path}: {error}. "
                "Check file permissions or remove the corrupt file."
            ) from error

    def set_item(self, key: str, value: str) -> None:
        """Replace the value stored under a key.

        Args:
            key: Storage key.
            value: Text to store.

        Raises:
            SmartErpStoreError: If the value file cannot be written.
        """
        item_path = self._item_path(key)
        try:
            item_path.write_text(value, encoding="utf-8")
        except OSError as error:
            raise SmartErpStoreError(
                f"Failed to write storage item '{key}' at {item_path}: {error}. "
                "Check free disk space and directory permissions."
            ) from error

    def remove_item(self, key: str) -> None:
        """Delete the value stored under a key if present."""
        item_path = self._item_path(key)
        try:
            item_path.unlink(missing_ok=True)
        except OSError as error:
            raise SmartErpStoreError(
                f"Failed to remove storage item '{key}' at {item_path}: {error}."
            ) from error

    def _item_path(self, key: str) -> Path:
        if re.fullmatch(STORAGE_KEY_PATTERN, key) is None:
            raise SmartErpStoreError(
                f"Invalid storage key '{key}': "
                "use only letters, digits, '_', '.' or '-'."
            )
        return self._root / f"{key}{STORAGE_FILE_SUFFIX}"
