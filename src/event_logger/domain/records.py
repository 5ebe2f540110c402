"""Domain models for record snapshots and field-level changes."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class FieldSource(Protocol):
    """Anything that can expose its fields as an ordered mapping."""

    def fields(self) -> Mapping[str, object]:
        """Return the record's fields by name."""


@dataclass(frozen=True)
class FullRecord:
    """A complete snapshot of an entity."""

    values: Mapping[str, object] = field(default_factory=dict)

    def fields(self) -> Mapping[str, object]:
        return self.values


@dataclass(frozen=True)
class PartialRecord:
    """A snapshot where only a few fields are guaranteed to be present."""

    known_fields: Mapping[str, object] = field(default_factory=dict)

    def fields(self) -> Mapping[str, object]:
        return self.known_fields


@dataclass(frozen=True)
class Added:
    """Field present only in the new snapshot."""

    path: str
    new: object


@dataclass(frozen=True)
class Removed:
    """Field present only in the old snapshot."""

    path: str
    old: object


@dataclass(frozen=True)
class Modified:
    """Field present in both snapshots with different values."""

    path: str
    old: object
    new: object


@dataclass(frozen=True)
class ListDelta:
    """List-valued field with items added and/or removed."""

    path: str
    added: tuple[object, ...]
    removed: tuple[object, ...]


FieldChange = Added | Removed | Modified | ListDelta
DiffSet = dict[str, FieldChange]
Snapshot = Mapping[str, object] | FieldSource


def as_fields(value: object) -> Mapping[str, object] | None:
    """Return the field view of a record-like value, or None for non-records."""
    if isinstance(value, Mapping):
        return value
    if isinstance(value, FieldSource):
        return value.fields()
    return None
