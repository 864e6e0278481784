"""Config module exports."""

from sheetbind.config.loader import load_config
from sheetbind.config.models import (
    CacheConfig,
    LoggingConfig,
    LogOutputConfig,
    SheetbindConfig,
)

__all__ = [
    "load_config",
    "CacheConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "SheetbindConfig",
]
