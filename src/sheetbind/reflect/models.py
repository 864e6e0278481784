"""Reflect models - column metadata, field descriptors and containers."""

from __future__ import annotations

import dataclasses
from collections.abc import Hashable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

COLUMN_KEY = "column"
"""Key under which dataclass field metadata carries a Column."""


@dataclass(frozen=True, slots=True)
class Column:
    """Export metadata attached to one field.

    Attach it with ``Annotated[T, Column(...)]`` or through dataclass field
    metadata (see :func:`column`). A negative ``index`` keeps the field out
    of the index binding; an empty ``title`` keeps it out of the title
    binding.
    """

    index: int = -1
    title: str = ""
    order: int = 0
    groups: frozenset[Hashable] = frozenset()

    def __post_init__(self) -> None:
        if not isinstance(self.groups, frozenset):
            object.__setattr__(self, "groups", as_groups(self.groups))


def as_groups(groups: Iterable[Hashable] | str) -> frozenset[Hashable]:
    """Normalize group tags; a bare string is one tag."""
    if isinstance(groups, str):
        return frozenset((groups,))
    return frozenset(groups)


def column(
    index: int = -1,
    title: str = "",
    order: int = 0,
    groups: Iterable[Hashable] = (),
    **field_kwargs: Any,
) -> Any:
    """Declare a dataclass field carrying a Column.

    Remaining keyword arguments (``default``, ``default_factory``, ``repr``...)
    go to :func:`dataclasses.field`.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[COLUMN_KEY] = Column(index=index, title=title, order=order, groups=groups)  # type: ignore[arg-type]
    return dataclasses.field(metadata=metadata, **field_kwargs)


class ValueKind(Enum):
    """Kind of value a field declares."""

    NUMBER = "number"
    BOOL = "bool"
    DATE = "date"
    TEXT = "text"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class FieldAccessor:
    """Reads one attribute off an instance.

    ``attribute`` is the real attribute name, i.e. already mangled for
    double-underscore private fields.
    """

    attribute: str

    def __call__(self, instance: Any) -> Any:
        return getattr(instance, self.attribute)


@dataclass(frozen=True, slots=True, eq=False)
class FieldDescriptor:
    """One declared field of one class level.

    Holds the owner's qualified name rather than the class itself so cached
    descriptors never keep their class alive. Two descriptors are equal when
    they describe the same declaration: same owner level, same declared name,
    same attribute. Metadata does not take part.
    """

    name: str
    owner: str
    kind: ValueKind
    accessor: FieldAccessor
    column: Column | None = None

    @property
    def has_column(self) -> bool:
        return self.column is not None

    def _key(self) -> tuple[str, str, str]:
        return (self.owner, self.name, self.accessor.attribute)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldDescriptor):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"FieldDescriptor({self.owner}.{self.name}, kind={self.kind.value}, column={self.column})"


@dataclass
class FieldContainer:
    """Fields declared directly on one level of a class hierarchy."""

    owner: str
    declared_fields: list[FieldDescriptor] = field(default_factory=list)
    field_map: dict[str, FieldDescriptor] = field(default_factory=dict)
    parent: FieldContainer | None = None

    def add(self, descriptor: FieldDescriptor) -> None:
        self.declared_fields.append(descriptor)
        self.field_map[descriptor.name] = descriptor

    def levels(self) -> Iterator[FieldContainer]:
        """Yield this container, then each ancestor level up to the top."""
        container: FieldContainer | None = self
        while container is not None:
            yield container
            container = container.parent

    def fields(self) -> list[FieldDescriptor]:
        """All fields, most-derived level first, each level in declaration order."""
        return [d for level in self.levels() for d in level.declared_fields]

    def fields_with_column(self) -> list[FieldDescriptor]:
        return [d for d in self.fields() if d.has_column]

    def get(self, name: str) -> FieldDescriptor | None:
        """Nearest declaration of ``name``, searching upward from this level."""
        for level in self.levels():
            if name in level.field_map:
                return level.field_map[name]
        return None


IndexBinding = Mapping[int, FieldDescriptor]
TitleBinding = Mapping[str, FieldDescriptor]
