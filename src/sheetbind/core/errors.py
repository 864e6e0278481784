"""Sheetbind error types with typed error codes.

Error code ranges:
- 2xxx: Settings
- 3xxx: Column configuration
- 4xxx: Field access

Every error raised here is fatal for the offending record class: it points
at a static defect, so none of them is retryable.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Settings (2xxx)
    SETTINGS_PARSE_ERROR = 2001
    SETTINGS_INVALID_VALUE = 2002

    # Column configuration (3xxx)
    DUPLICATE_INDEX = 3001
    DUPLICATE_TITLE = 3002
    NO_COLUMN_METADATA = 3003
    CONFLICTING_METADATA = 3004
    UNRESOLVED_ANNOTATION = 3005

    # Access (4xxx)
    FIELD_READ_FAILED = 4001
    INSTANTIATION_FAILED = 4002


@dataclass(frozen=True)
class SheetbindError(Exception):
    """Base error with structured context.

    Not slotted: the interpreter sets ``__traceback__`` and ``__notes__`` on
    subclass instances while they propagate.
    """

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'DUPLICATE_INDEX')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class SettingsError(SheetbindError):
    """Errors loading sheetbind's own settings."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "SettingsError":
        return cls(
            code=ErrorCode.SETTINGS_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "SettingsError":
        return cls(
            code=ErrorCode.SETTINGS_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ConfigurationError(SheetbindError):
    """A record class declares column metadata that cannot be bound.

    Raised at the first resolution attempt for the class. Callers should not
    export records of that class at all.
    """

    @classmethod
    def duplicate_index(cls, owner: str, index: int, first: str, second: str) -> "ConfigurationError":
        return cls(
            code=ErrorCode.DUPLICATE_INDEX,
            message=f"Index cannot be repeated: {index} ({owner}.{first} and {owner}.{second})",
            details={"type": owner, "index": index, "fields": [first, second]},
        )

    @classmethod
    def duplicate_title(cls, owner: str, title: str, first: str, second: str) -> "ConfigurationError":
        return cls(
            code=ErrorCode.DUPLICATE_TITLE,
            message=f"Title cannot be repeated: {title!r} ({owner}.{first} and {owner}.{second})",
            details={"type": owner, "title": title, "fields": [first, second]},
        )

    @classmethod
    def no_column_metadata(cls, owner: str) -> "ConfigurationError":
        return cls(
            code=ErrorCode.NO_COLUMN_METADATA,
            message=f"There is no field with column metadata on {owner}",
            details={"type": owner},
        )

    @classmethod
    def conflicting_metadata(cls, owner: str, name: str) -> "ConfigurationError":
        return cls(
            code=ErrorCode.CONFLICTING_METADATA,
            message=f"Column metadata declared twice on {owner}.{name}",
            details={"type": owner, "field": name},
        )

    @classmethod
    def unresolved_annotation(cls, owner: str, reason: str) -> "ConfigurationError":
        return cls(
            code=ErrorCode.UNRESOLVED_ANNOTATION,
            message=f"Cannot resolve annotations of {owner}: {reason}",
            details={"type": owner, "reason": reason},
        )


class AccessError(SheetbindError):
    """A descriptor could not be applied to an instance.

    Signals a descriptor/instance mismatch, i.e. a programming defect rather
    than bad record data.
    """

    @classmethod
    def read_failed(cls, owner: str, name: str, instance_type: str, reason: str) -> "AccessError":
        return cls(
            code=ErrorCode.FIELD_READ_FAILED,
            message=f"Cannot read {owner}.{name} from {instance_type} instance: {reason}",
            details={"type": owner, "field": name, "instance_type": instance_type, "reason": reason},
        )

    @classmethod
    def instantiation_failed(cls, owner: str, reason: str) -> "AccessError":
        return cls(
            code=ErrorCode.INSTANTIATION_FAILED,
            message=f"Cannot instantiate {owner}: {reason}",
            details={"type": owner, "reason": reason},
        )
