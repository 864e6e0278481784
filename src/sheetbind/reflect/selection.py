"""Group filtering and declared-order sorting of field descriptors."""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from functools import cmp_to_key
from typing import Literal

from sheetbind.reflect._internal.discovery import is_dynamic
from sheetbind.reflect.models import FieldDescriptor, as_groups
from sheetbind.reflect.ops import get_resolver

DEFAULT_ORDER = 0


def is_included(requested_groups: Iterable[Hashable] | str, descriptor: FieldDescriptor) -> bool:
    """Whether ``descriptor`` belongs to any of ``requested_groups``.

    No requested groups disables filtering. Otherwise a field only takes part
    by declaring at least one group of its own. A bare string is one group.
    """
    requested = as_groups(requested_groups)
    if not requested:
        return True
    if descriptor.column is None or not descriptor.column.groups:
        return False
    return not requested.isdisjoint(descriptor.column.groups)


def compare_fields(a: FieldDescriptor, b: FieldDescriptor) -> Literal[-1, 0, 1]:
    """Compare by declared order; fields without metadata sort at DEFAULT_ORDER.

    Equal orders compare equal with no tiebreak, so use a stable sort to keep
    discovery order among ties.
    """
    if a.column is None and b.column is None:
        return 0
    order_a = a.column.order if a.column is not None else DEFAULT_ORDER
    order_b = b.column.order if b.column is not None else DEFAULT_ORDER
    if order_a == order_b:
        return 0
    return 1 if order_a > order_b else -1


def sort_fields(descriptors: Iterable[FieldDescriptor]) -> list[FieldDescriptor]:
    return sorted(descriptors, key=cmp_to_key(compare_fields))


def select_fields(cls: type, groups: Iterable[Hashable] | str = ()) -> list[FieldDescriptor]:
    """Fields of ``cls`` in the requested groups, in declared order.

    Descriptors are the ones the default resolver binds. Ties keep flattened
    discovery order (most-derived level first).
    """
    if is_dynamic(cls):
        return []
    requested = as_groups(groups)
    fields = get_resolver().container(cls).fields()
    return sort_fields(d for d in fields if is_included(requested, d))
