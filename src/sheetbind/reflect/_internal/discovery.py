"""Field discovery over a class hierarchy.

Each level of ``cls.__mro__`` contributes the fields it annotates itself,
in declaration order. Levels are linked child to parent, so a name declared
at two levels yields two descriptors.
"""

from __future__ import annotations

import dataclasses
import inspect
import numbers
import types
import typing
from collections.abc import Mapping
from datetime import date, time
from typing import Annotated, Any, ClassVar, Union

import structlog

from sheetbind.core.errors import ConfigurationError
from sheetbind.reflect.models import (
    COLUMN_KEY,
    Column,
    FieldAccessor,
    FieldContainer,
    FieldDescriptor,
    ValueKind,
)

log = structlog.get_logger(__name__)

# Levels defined in these top-level packages carry no record fields
_FRAMEWORK_PACKAGES = frozenset({"builtins", "typing", "typing_extensions", "pydantic"})


def is_dynamic(cls: Any) -> bool:
    """True for associative records whose keys vary per instance."""
    cls = typing.get_origin(cls) or cls
    return isinstance(cls, type) and issubclass(cls, Mapping)


def discover(cls: type) -> FieldContainer:
    """Build the container chain for ``cls``, most-derived level first."""
    root: FieldContainer | None = None
    previous: FieldContainer | None = None
    for level in _record_levels(cls):
        container = _collect_level(level)
        if previous is None:
            root = container
        else:
            previous.parent = container
        previous = container

    if root is None:
        root = FieldContainer(owner=cls.__qualname__)
    log.debug(
        "fields_discovered",
        type=cls.__qualname__,
        levels=sum(1 for _ in root.levels()),
        fields=len(root.fields()),
    )
    return root


def classify(hint: Any) -> ValueKind:
    """Classify a declared type; ``Optional[X]`` classifies as ``X``."""
    origin = typing.get_origin(hint)
    if origin is Annotated:
        return classify(typing.get_args(hint)[0])
    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        return classify(args[0]) if len(args) == 1 else ValueKind.OTHER
    if origin is not None or not isinstance(hint, type):
        return ValueKind.OTHER
    if issubclass(hint, bool):
        return ValueKind.BOOL
    if issubclass(hint, numbers.Number):
        return ValueKind.NUMBER
    if issubclass(hint, (date, time)):
        return ValueKind.DATE
    if issubclass(hint, str):
        return ValueKind.TEXT
    return ValueKind.OTHER


def _record_levels(cls: type) -> list[type]:
    return [
        level
        for level in cls.__mro__
        if level.__module__.partition(".")[0] not in _FRAMEWORK_PACKAGES
    ]


def _collect_level(level: type) -> FieldContainer:
    owner = level.__qualname__
    try:
        hints = inspect.get_annotations(level, eval_str=True)
    except Exception as e:
        raise ConfigurationError.unresolved_annotation(owner, f"{type(e).__name__}: {e}") from e

    dc_fields: dict[str, dataclasses.Field[Any]] = level.__dict__.get("__dataclass_fields__", {})
    container = FieldContainer(owner=owner)
    for attribute, hint in hints.items():
        if _is_pseudo_field(hint):
            continue
        name = _demangle(attribute, level)
        container.add(
            FieldDescriptor(
                name=name,
                owner=owner,
                kind=classify(hint),
                accessor=FieldAccessor(attribute),
                column=_column_of(owner, name, hint, dc_fields.get(attribute)),
            )
        )
    return container


def _is_pseudo_field(hint: Any) -> bool:
    """ClassVar, InitVar and KW_ONLY annotations declare no instance state."""
    if hint is ClassVar or typing.get_origin(hint) is ClassVar:
        return True
    if hint is dataclasses.InitVar or isinstance(hint, dataclasses.InitVar):
        return True
    return hint is dataclasses.KW_ONLY


def _column_of(
    owner: str,
    name: str,
    hint: Any,
    dc_field: dataclasses.Field[Any] | None,
) -> Column | None:
    found: list[Column] = []
    if typing.get_origin(hint) is Annotated:
        found.extend(m for m in hint.__metadata__ if isinstance(m, Column))
    if dc_field is not None and COLUMN_KEY in dc_field.metadata:
        found.append(dc_field.metadata[COLUMN_KEY])
    if len(found) > 1:
        raise ConfigurationError.conflicting_metadata(owner, name)
    return found[0] if found else None


def _demangle(attribute: str, level: type) -> str:
    """Map ``_Owner__secret`` back to the declared ``__secret``."""
    prefix = "_" + level.__name__.lstrip("_")
    if (
        prefix != "_"
        and attribute.startswith(prefix + "__")
        and not attribute.endswith("__")
    ):
        return attribute[len(prefix) :]
    return attribute
