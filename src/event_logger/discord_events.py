"""Discord gateway event configuration."""

from dataclasses import dataclass
from enum import Enum

from event_logger.domain.errors import ValidationError


@dataclass(frozen=True)
class EventDefinition:
    """Declarative definition of a logged gateway event."""

    name: str
    description: str
    record_key: str | None = None
    partial: bool = False
    summary: str | None = None


class DiscordEvent(Enum):
    """Enum of logged gateway events (single source of truth)."""

    CHANNEL_CREATE = EventDefinition("CHANNEL_CREATE", "Channel created")
    CHANNEL_UPDATE = EventDefinition("CHANNEL_UPDATE", "Channel updated")
    CHANNEL_DELETE = EventDefinition(
        "CHANNEL_DELETE", "Channel deleted", summary="Channel deleted: {name}"
    )
    GUILD_BAN_ADD = EventDefinition(
        "GUILD_BAN_ADD", "User banned", partial=True, summary="User banned: {user}"
    )
    GUILD_BAN_REMOVE = EventDefinition(
        "GUILD_BAN_REMOVE",
        "User unbanned",
        partial=True,
        summary="User unbanned: {user}",
    )
    GUILD_MEMBER_ADD = EventDefinition(
        "GUILD_MEMBER_ADD", "Member joined", summary="Member joined: {user}"
    )
    GUILD_MEMBER_UPDATE = EventDefinition("GUILD_MEMBER_UPDATE", "Member updated")
    GUILD_MEMBER_REMOVE = EventDefinition(
        "GUILD_MEMBER_REMOVE",
        "Member left",
        partial=True,
        summary="Member left: {user}",
    )
    GUILD_ROLE_CREATE = EventDefinition(
        "GUILD_ROLE_CREATE", "Role created", record_key="role"
    )
    GUILD_ROLE_UPDATE = EventDefinition(
        "GUILD_ROLE_UPDATE", "Role updated", record_key="role"
    )
    GUILD_ROLE_DELETE = EventDefinition(
        "GUILD_ROLE_DELETE",
        "Role deleted",
        partial=True,
        summary="Role deleted: {role_id}",
    )
    MESSAGE_DELETE = EventDefinition(
        "MESSAGE_DELETE",
        "Message deleted",
        partial=True,
        summary="Message deleted: {id} in <#{channel_id}>",
    )


def event_summaries() -> dict[str, str]:
    """Return summary templates keyed by event name."""
    return {
        entry.value.name: entry.value.summary
        for entry in DiscordEvent
        if entry.value.summary is not None
    }


def parse_event_names(raw: str | None) -> list[EventDefinition]:
    """Parse the configured event subset, defaulting to every known event."""
    known = {entry.value.name: entry.value for entry in DiscordEvent}
    if raw is None or raw.strip() in {"", "*"}:
        return list(known.values())
    selected: list[EventDefinition] = []
    for chunk in raw.split(","):
        name = chunk.strip().upper()
        if not name:
            continue
        if name not in known:
            raise ValidationError(f"Unknown event name: {name}")
        if known[name] not in selected:
            selected.append(known[name])
    return selected
