"""Structural diff between two record snapshots."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from event_logger.domain.records import (
    Added,
    DiffSet,
    ListDelta,
    Modified,
    Removed,
    Snapshot,
    as_fields,
)

VOLATILE_FIELDS = frozenset(
    {"edited_timestamp", "last_message_id", "last_pin_timestamp"}
)


@dataclass
class RecordDiffer:
    """Compare two snapshots field by field and report what changed.

    Fields are matched by name, never by position. Nested records are compared
    recursively and their changes are reported under a dotted path such as
    ``tags.bot_id``. Lists are compared as value sets, so reordering a list is
    not a change. Fields named in ``volatile_fields`` are ignored at any depth.
    """

    volatile_fields: frozenset[str] = field(default=VOLATILE_FIELDS)

    def diff(self, new: Snapshot, old: Snapshot | None) -> DiffSet:
        """Return the changes from ``old`` to ``new``.

        An absent ``old`` snapshot yields an empty diff; callers decide how to
        render an event that has nothing to compare against.
        """
        if old is None:
            return {}
        changes: DiffSet = {}
        self._diff_fields(_fields_of(new), _fields_of(old), "", changes)
        return changes

    def _diff_fields(
        self,
        new: Mapping[str, object],
        old: Mapping[str, object],
        prefix: str,
        changes: DiffSet,
    ) -> None:
        names = list(new)
        names.extend(name for name in old if name not in new)
        for name in names:
            if name in self.volatile_fields:
                continue
            path = f"{prefix}{name}"
            if name not in old:
                changes[path] = Added(path=path, new=new[name])
                continue
            if name not in new:
                changes[path] = Removed(path=path, old=old[name])
                continue
            new_value = new[name]
            old_value = old[name]
            if isinstance(new_value, list) and isinstance(old_value, list):
                new_items = [self._strip_volatile(item) for item in new_value]
                old_items = [self._strip_volatile(item) for item in old_value]
                added = _difference(new_items, old_items)
                removed = _difference(old_items, new_items)
                if added or removed:
                    changes[path] = ListDelta(path=path, added=added, removed=removed)
                continue
            new_fields = as_fields(new_value)
            old_fields = as_fields(old_value)
            if new_fields is not None and old_fields is not None:
                self._diff_fields(new_fields, old_fields, f"{path}.", changes)
                continue
            if new_value != old_value:
                changes[path] = Modified(path=path, old=old_value, new=new_value)

    def _strip_volatile(self, value: object) -> object:
        """Return a list item with volatile keys removed from any records in it."""
        fields = as_fields(value)
        if fields is not None:
            return {
                name: self._strip_volatile(item)
                for name, item in fields.items()
                if name not in self.volatile_fields
            }
        if isinstance(value, list):
            return [self._strip_volatile(item) for item in value]
        return value


def _fields_of(snapshot: Snapshot) -> Mapping[str, object]:
    fields = as_fields(snapshot)
    if fields is None:
        raise TypeError(f"Not a record: {type(snapshot).__name__}")
    return fields


def _difference(
    items: Iterable[object], other: Iterable[object]
) -> tuple[object, ...]:
    """Return unique items of ``items`` absent from ``other``, in first-seen order."""
    other_items = list(other)
    result: list[object] = []
    for item in items:
        if item in other_items or item in result:
            continue
        result.append(item)
    return tuple(result)
