"""Field reflection and column binding for tabular export."""

from sheetbind.reflect._internal.discovery import classify, discover, is_dynamic
from sheetbind.reflect.access import get_value, new_instance
from sheetbind.reflect.models import (
    Column,
    FieldAccessor,
    FieldContainer,
    FieldDescriptor,
    IndexBinding,
    TitleBinding,
    ValueKind,
    column,
)
from sheetbind.reflect.ops import (
    ColumnResolver,
    clear_caches,
    configure,
    get_resolver,
    resolve_index_binding,
    resolve_title_binding,
)
from sheetbind.reflect.selection import compare_fields, is_included, select_fields, sort_fields

__all__ = [
    # Models
    "Column",
    "FieldAccessor",
    "FieldContainer",
    "FieldDescriptor",
    "IndexBinding",
    "TitleBinding",
    "ValueKind",
    "column",
    # Discovery
    "classify",
    "discover",
    "is_dynamic",
    # Resolution
    "ColumnResolver",
    "clear_caches",
    "configure",
    "get_resolver",
    "resolve_index_binding",
    "resolve_title_binding",
    # Selection
    "compare_fields",
    "is_included",
    "select_fields",
    "sort_fields",
    # Access
    "get_value",
    "new_instance",
]
