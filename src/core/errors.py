"""SmartERP exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class SmartErpError(Exception):
    """Base exception for all SmartERP failures."""


class SmartErpConfigError(SmartErpError):
    """Raised for invalid runtime configuration."""


class SmartErpStoreError(SmartErpError):
    """Raised for key/value storage backend failures."""


class SmartErpQueryError(SmartErpError):
    """Raised when a statement fails while being interpreted."""


class SmartErpScriptError(SmartErpError):
    """Raised for invalid or unsupported statement script files."""


class SmartErpDependencyError(SmartErpError):
    """Raised when an optional runtime dependency is missing."""
