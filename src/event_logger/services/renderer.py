"""Render events into human-readable audit messages."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from event_logger.discord_events import event_summaries
from event_logger.domain.audit import AuditMessage
from event_logger.domain.records import (
    Added,
    DiffSet,
    FieldChange,
    ListDelta,
    Modified,
    PartialRecord,
    Removed,
    Snapshot,
    as_fields,
)
from event_logger.services.differ import RecordDiffer

_DISPLAY_KEYS = ("username", "name", "id")


@dataclass
class AuditRenderer:
    """Turn an event into a titled audit message."""

    differ: RecordDiffer = field(default_factory=RecordDiffer)
    summaries: Mapping[str, str] = field(default_factory=event_summaries)

    def render(
        self,
        event_name: str,
        tenant_id: str,
        content: str | Snapshot,
        previous: Snapshot | None = None,
    ) -> AuditMessage:
        """Render an event as an audit message titled with the event name."""
        if isinstance(content, str):
            body = content
        else:
            body = self._render_record(event_name, content, previous)
        return AuditMessage(
            event_name=event_name, tenant_id=tenant_id, title=event_name, body=body
        )

    def _render_record(
        self, event_name: str, content: Snapshot, previous: Snapshot | None
    ) -> str:
        fields = as_fields(content) or {}
        old_fields = as_fields(previous)
        compared: Snapshot = fields
        # Only fields a partial snapshot carried can be compared.
        if isinstance(previous, PartialRecord):
            compared = _only(fields, previous.known_fields)
        if isinstance(content, PartialRecord) and old_fields is not None:
            old_fields = _only(old_fields, content.known_fields)
        changes = self.differ.diff(compared, old_fields)
        if changes:
            return render_changes(changes)
        summary = self._summarize(event_name, fields)
        if summary is not None:
            return summary
        return "\n".join(serialize_fields(fields))

    def _summarize(self, event_name: str, fields: Mapping[str, object]) -> str | None:
        template = self.summaries.get(event_name)
        if template is None:
            return None
        values = {name: _display(value) for name, value in fields.items()}
        try:
            return template.format_map(values)
        except (KeyError, IndexError, ValueError):
            return None


def _only(
    fields: Mapping[str, object], names: Mapping[str, object]
) -> dict[str, object]:
    return {name: value for name, value in fields.items() if name in names}


def render_changes(changes: DiffSet) -> str:
    """Render a diff as newline-separated lines in discovery order."""
    lines: list[str] = []
    for change in changes.values():
        lines.extend(_change_lines(change))
    return "\n".join(lines)


def _change_lines(change: FieldChange) -> list[str]:
    if isinstance(change, Added):
        return [f"{change.path} added: {format_value(change.new)}"]
    if isinstance(change, Removed):
        return [f"{change.path} removed: {format_value(change.old)}"]
    if isinstance(change, ListDelta):
        lines = []
        if change.added:
            lines.append(f"{change.path} added: {format_value(list(change.added))}")
        if change.removed:
            lines.append(
                f"{change.path} removed: {format_value(list(change.removed))}"
            )
        return lines
    return [
        f"{change.path} changed:",
        f"Old: `{format_value(change.old)}`",
        f"New: `{format_value(change.new)}`",
    ]


def serialize_fields(fields: Mapping[str, object], prefix: str = "") -> list[str]:
    """Serialize a record as one ``path: value`` line per leaf field."""
    lines: list[str] = []
    for name, value in fields.items():
        path = f"{prefix}{name}"
        nested = as_fields(value)
        if nested:
            lines.extend(serialize_fields(nested, f"{path}."))
        else:
            lines.append(f"{path}: {format_value(value)}")
    return lines


def format_value(value: object) -> str:
    """Format a field value for display."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list | tuple):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    nested = as_fields(value)
    if nested is not None:
        inner = ", ".join(
            f"{name}: {format_value(item)}" for name, item in nested.items()
        )
        return "{" + inner + "}"
    return str(value)


def _display(value: object) -> object:
    """Return the most readable identifier for a user/role/channel-like value."""
    nested = as_fields(value)
    if nested is None:
        return value
    for key in _DISPLAY_KEYS:
        if nested.get(key) is not None:
            return nested[key]
    return format_value(value)
