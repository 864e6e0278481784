"""Tests for reflect models."""

import dataclasses
from dataclasses import dataclass

import pytest

from sheetbind.reflect import Column, FieldAccessor, FieldContainer, FieldDescriptor, ValueKind, column
from sheetbind.reflect.models import COLUMN_KEY


def _descriptor(name: str, owner: str, col: Column | None = None) -> FieldDescriptor:
    return FieldDescriptor(name=name, owner=owner, kind=ValueKind.TEXT, accessor=FieldAccessor(name), column=col)


class TestColumn:
    """Tests for the Column metadata record."""

    def test_defaults(self) -> None:
        """Defaults bind nowhere and sort at order zero."""
        col = Column()

        assert col.index == -1
        assert col.title == ""
        assert col.order == 0
        assert col.groups == frozenset()

    def test_groups_normalized_to_frozenset(self) -> None:
        """Any iterable of tags becomes a frozenset."""
        col = Column(groups=["admin", "audit", "admin"])  # type: ignore[arg-type]

        assert col.groups == frozenset({"admin", "audit"})

    def test_is_immutable(self) -> None:
        """Column records cannot change after declaration."""
        col = Column(index=1)

        with pytest.raises(dataclasses.FrozenInstanceError):
            col.index = 2  # type: ignore[misc]


class TestColumnHelper:
    """Tests for column()."""

    def test_builds_dataclass_field_metadata(self) -> None:
        """column() stores a Column under the metadata key."""

        @dataclass
        class Row:
            value: int = column(index=3, title="Value", order=2, groups={"ops"}, default=0)

        (value_field,) = dataclasses.fields(Row)
        assert value_field.metadata[COLUMN_KEY] == Column(
            index=3, title="Value", order=2, groups=frozenset({"ops"})
        )
        assert Row().value == 0

    def test_preserves_other_metadata(self) -> None:
        """Caller metadata survives next to the Column."""
        f = column(index=0, metadata={"unit": "kg"})

        assert f.metadata["unit"] == "kg"
        assert f.metadata[COLUMN_KEY].index == 0


class TestFieldAccessor:
    """Tests for FieldAccessor."""

    def test_reads_attribute(self) -> None:
        """The accessor reads its bound attribute."""

        class Box:
            def __init__(self) -> None:
                self.content = "toy"

        assert FieldAccessor("content")(Box()) == "toy"

    def test_missing_attribute_raises(self) -> None:
        """Accessors do not hide lookup failures."""
        with pytest.raises(AttributeError):
            FieldAccessor("nope")(object())


class TestFieldContainer:
    """Tests for FieldContainer."""

    def _chain(self) -> FieldContainer:
        top = FieldContainer(owner="Top")
        top.add(_descriptor("id", "Top", Column(index=0)))
        top.add(_descriptor("name", "Top"))
        bottom = FieldContainer(owner="Bottom", parent=top)
        bottom.add(_descriptor("name", "Bottom", Column(index=1)))
        return bottom

    def test_add_keeps_order_and_map(self) -> None:
        """add() appends and indexes by name."""
        container = self._chain()

        assert [d.name for d in container.declared_fields] == ["name"]
        assert container.field_map["name"].owner == "Bottom"

    def test_fields_flatten_bottom_up(self) -> None:
        """fields() lists the most-derived level first."""
        container = self._chain()

        assert [(d.owner, d.name) for d in container.fields()] == [
            ("Bottom", "name"),
            ("Top", "id"),
            ("Top", "name"),
        ]

    def test_fields_with_column(self) -> None:
        """Only metadata-bearing fields are selected."""
        container = self._chain()

        assert [(d.owner, d.name) for d in container.fields_with_column()] == [
            ("Bottom", "name"),
            ("Top", "id"),
        ]

    def test_descriptors_compare_by_declaration(self) -> None:
        """Descriptors of one declaration are equal even when built separately."""
        a = _descriptor("name", "Same")
        b = _descriptor("name", "Same", Column(index=3))

        assert a == b
        assert hash(a) == hash(b)
        assert a.has_column is False

    def test_same_name_on_other_level_differs(self) -> None:
        """A redeclared name on another level is a different field."""
        child = _descriptor("name", "Child")
        base = _descriptor("name", "Base")

        assert child != base
        assert len({child, base}) == 2
        assert child != "name"
