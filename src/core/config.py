"""Runtime configuration model for SmartERP.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import re

from core.constants import (
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_DATA_ROOT,
    DEFAULT_STORAGE_KEY,
    STORAGE_KEY_PATTERN,
)
from core.errors import SmartErpConfigError


@dataclass(frozen=True)
class SmartErpConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for persisted storage blobs.
        storage_key: Key under which the table blob is stored.
        admin_email: Email of the admin user seeded on bootstrap.
        admin_password: Password of the admin user seeded on bootstrap.
    """

    data_root: Path
    storage_key: str
    admin_email: str
    admin_password: str

    @classmethod
    def from_env(cls) -> "SmartErpConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SmartErpConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("SMARTERP_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        storage_key = _parse_storage_key(os.getenv("SMARTERP_STORAGE_KEY", DEFAULT_STORAGE_KEY))
        admin_email = os.getenv("SMARTERP_ADMIN_EMAIL", DEFAULT_ADMIN_EMAIL).strip()
        admin_password = os.getenv("SMARTERP_ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD)
        if not admin_email:
            raise SmartErpConfigError(
                "Invalid SMARTERP_ADMIN_EMAIL value: expected a non-empty email. "
                "Unset it to use the default admin account."
            )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            storage_key=storage_key,
            admin_email=admin_email,
            admin_password=admin_password,
        )


def _parse_storage_key(raw_value: str) -> str:
    """Validate the storage key environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Storage key usable as a file name.

    Raises:
        SmartErpConfigError: If the key contains unsupported characters.
    """
    storage_key = raw_value.strip()
    if re.fullmatch(STORAGE_KEY_PATTERN, storage_key) is None:
        raise SmartErpConfigError(
            "Invalid SMARTERP_STORAGE_KEY value: "
            f"expected letters, digits, '_', '.' or '-', got '{raw_value}'. "
            "Choose a key that is safe to use as a file name."
        )
    return storage_key
