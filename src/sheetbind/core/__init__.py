"""Core module exports."""

from sheetbind.core.errors import (
    AccessError,
    ConfigurationError,
    ErrorCode,
    SettingsError,
    SheetbindError,
)
from sheetbind.core.logging import (
    clear_export_id,
    configure_logging,
    get_export_id,
    get_logger,
    set_export_id,
)

__all__ = [
    # Errors
    "AccessError",
    "ConfigurationError",
    "ErrorCode",
    "SettingsError",
    "SheetbindError",
    # Logging
    "clear_export_id",
    "configure_logging",
    "get_export_id",
    "get_logger",
    "set_export_id",
]
