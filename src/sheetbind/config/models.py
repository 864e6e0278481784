"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SHEETBIND__SECTION__KEY)
3. Explicit YAML file passed to load_config()
4. Global YAML (~/.config/sheetbind/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    SHEETBIND__<SECTION>__<KEY>=<VALUE>

Examples:
    SHEETBIND__LOGGING__LEVEL=DEBUG
    SHEETBIND__CACHE__RETENTION=strong
    SHEETBIND__CACHE__ENABLED=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SHEETBIND__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every binding resolution.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CacheConfig(BaseModel):
    """Binding cache configuration.

    Env vars:
        SHEETBIND__CACHE__ENABLED: Cache resolved bindings per record class
        SHEETBIND__CACHE__RETENTION: weak or strong key retention
    """

    enabled: bool = Field(
        default=True,
        description="Cache resolved bindings. Disabling re-introspects the class on every call.",
    )
    retention: Literal["weak", "strong"] = Field(
        default="weak",
        description="weak: entries vanish once the record class is otherwise unreachable. "
        "strong: entries live for the process lifetime. "
        "RISK: strong retention grows without bound when many classes are created at runtime.",
    )


class SheetbindConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
