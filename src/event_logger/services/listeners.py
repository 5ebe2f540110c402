"""Static table of gateway event listeners."""

from collections.abc import Awaitable, Callable, Iterable, Mapping
from types import MappingProxyType

from event_logger.discord_events import EventDefinition
from event_logger.domain.records import FullRecord, PartialRecord, Snapshot
from event_logger.services.dispatcher import (
    DispatchResult,
    DispatchStatus,
    Dispatcher,
)

Listener = Callable[
    [Mapping[str, object], Mapping[str, object] | None], Awaitable[DispatchResult]
]


def build_listeners(
    dispatcher: Dispatcher, events: Iterable[EventDefinition]
) -> Mapping[str, Listener]:
    """Build the read-only event name to listener table."""
    return MappingProxyType(
        {event.name: _make_listener(dispatcher, event) for event in events}
    )


def _make_listener(dispatcher: Dispatcher, event: EventDefinition) -> Listener:
    async def listener(
        data: Mapping[str, object], old: Mapping[str, object] | None = None
    ) -> DispatchResult:
        guild_id = data.get("guild_id")
        if guild_id is None:
            return DispatchResult(
                status=DispatchStatus.NOT_CONFIGURED,
                event_name=event.name,
                tenant_id="",
                detail="Event has no guild_id",
            )
        content = extract_record(event, data)
        previous: Snapshot | None = None
        if old is not None:
            previous = extract_record(event, old)
        return await dispatcher.handle(event.name, str(guild_id), content, previous)

    return listener


def extract_record(
    event: EventDefinition, data: Mapping[str, object]
) -> FullRecord | PartialRecord:
    """Pull the entity snapshot out of a gateway payload.

    Payloads that nest the entity (role events carry ``{"guild_id", "role"}``)
    are unwrapped; a bare entity is used as is.
    """
    record: object = data
    if event.record_key is not None and event.record_key in data:
        record = data[event.record_key]
    fields = (
        {name: value for name, value in record.items() if name != "guild_id"}
        if isinstance(record, Mapping)
        else {}
    )
    if event.partial:
        return PartialRecord(fields)
    return FullRecord(fields)
