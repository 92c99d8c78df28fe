"""Core constants used across SmartERP modules.

This module centralizes storage keys, defaults, and statement keywords.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".smarterp")
DEFAULT_STORAGE_KEY = "smarterp_tables"
STORAGE_FILE_SUFFIX = ".json"
STORAGE_KEY_PATTERN = r"[A-Za-z0-9_.-]+"
UNKNOWN_TABLE_NAME = "unknown"
RECORD_ID_FIELD = "id"
CREATED_AT_FIELD = "created_at"
UPDATED_AT_FIELD = "updated_at"
SYSTEM_FIELDS = (RECORD_ID_FIELD, CREATED_AT_FIELD, UPDATED_AT_FIELD)
RECORD_ID_LENGTH = 9
RECORD_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
COUNT_FIELD = "count"
STATEMENT_VERBS = ("select", "insert", "update", "delete", "create")
SCRIPT_VERSION = 1
DEFAULT_ADMIN_NAME = "Admin User"
DEFAULT_ADMIN_EMAIL = "admin@globalcyberit.com"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_ADMIN_ROLE = "admin"
DEFAULT_ADMIN_DEPARTMENT = "IT"
DEFAULT_ADMIN_PHONE = "+91 9876543210"
DEFAULT_ADMIN_STATUS = "active"
HASH_ALGORITHM = "sha256"
