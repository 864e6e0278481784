"""Reading field values off record instances."""

from __future__ import annotations

from typing import Any, TypeVar

from sheetbind.core.errors import AccessError
from sheetbind.reflect.models import FieldDescriptor

T = TypeVar("T")


def get_value(instance: Any, descriptor: FieldDescriptor | None) -> Any:
    """Read ``descriptor``'s field from ``instance``.

    Returns None when either argument is None. Any failure of the accessor
    means the descriptor does not fit the instance and raises AccessError.
    """
    if instance is None or descriptor is None:
        return None
    try:
        return descriptor.accessor(instance)
    except Exception as e:
        raise AccessError.read_failed(
            descriptor.owner,
            descriptor.name,
            type(instance).__qualname__,
            f"{type(e).__name__}: {e}",
        ) from e


def new_instance(cls: type[T]) -> T:
    """Create an empty record, e.g. to be filled by an import pipeline."""
    try:
        return cls()
    except Exception as e:
        raise AccessError.instantiation_failed(cls.__qualname__, f"{type(e).__name__}: {e}") from e
