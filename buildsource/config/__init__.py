"""BuildSource configuration.

This package contains:
- settings: Environment variables and configuration
- errors: Custom exceptions and error codes
"""

from config.settings import settings, Settings
from config.errors import (
    BuildSourceError,
    ErrorCode,
    ValidationError,
    InsufficientDataError,
    MaterialNotFoundError,
    DataStoreError,
)

__all__ = [
    "settings",
    "Settings",
    "BuildSourceError",
    "ErrorCode",
    "ValidationError",
    "InsufficientDataError",
    "MaterialNotFoundError",
    "DataStoreError",
]
