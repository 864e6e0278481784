"""Sheetbind - column bindings for exporting record classes to sheets."""

from sheetbind.core.errors import AccessError, ConfigurationError, SheetbindError
from sheetbind.reflect import (
    Column,
    ColumnResolver,
    FieldDescriptor,
    column,
    compare_fields,
    get_value,
    is_included,
    resolve_index_binding,
    resolve_title_binding,
    select_fields,
)

__version__ = "0.1.0"

__all__ = [
    "AccessError",
    "Column",
    "ColumnResolver",
    "ConfigurationError",
    "FieldDescriptor",
    "SheetbindError",
    "column",
    "compare_fields",
    "get_value",
    "is_included",
    "resolve_index_binding",
    "resolve_title_binding",
    "select_fields",
]
