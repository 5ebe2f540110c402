"""Event dispatch pipeline: resolve, render, shape, send."""

import logging
from dataclasses import dataclass
from enum import Enum

from event_logger.adapters.discord_client import DiscordClient
from event_logger.domain.audit import DeliveryPayload
from event_logger.domain.errors import (
    DestinationUnavailableError,
    NotConfiguredError,
    SendFailureError,
)
from event_logger.domain.records import Snapshot
from event_logger.services.delivery import DeliveryStrategy
from event_logger.services.destinations import DestinationRegistry
from event_logger.services.renderer import AuditRenderer

_logger = logging.getLogger(__name__)

DEFAULT_EMBED_COLOR = 0xE1452D


class DispatchStatus(Enum):
    """Terminal state of a single dispatch."""

    DELIVERED = "delivered"
    NOTHING_TO_LOG = "nothing_to_log"
    NOT_CONFIGURED = "not_configured"
    DESTINATION_UNAVAILABLE = "destination_unavailable"
    SEND_FAILED = "send_failed"


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of handling one event."""

    status: DispatchStatus
    event_name: str
    tenant_id: str
    destination_id: str | None = None
    payload: DeliveryPayload | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        """Return True for delivered events and expected no-ops."""
        return self.status in {DispatchStatus.DELIVERED, DispatchStatus.NOTHING_TO_LOG}


@dataclass
class Dispatcher:
    """Deliver audit messages for events to each guild's log channel."""

    registry: DestinationRegistry
    discord_client: DiscordClient
    renderer: AuditRenderer
    strategy: DeliveryStrategy
    color: int = DEFAULT_EMBED_COLOR
    footer: str = ""

    async def handle(
        self,
        event_name: str,
        tenant_id: str,
        content: str | Snapshot,
        previous: Snapshot | None = None,
    ) -> DispatchResult:
        """Log one event and return how far it got.

        Every failure is terminal for this call and is returned rather than
        raised. Nothing is retried.
        """
        try:
            destination_id = self.registry.resolve(tenant_id)
        except NotConfiguredError as exc:
            _logger.warning("Event %s dropped: %s", event_name, exc)
            return DispatchResult(
                status=DispatchStatus.NOT_CONFIGURED,
                event_name=event_name,
                tenant_id=tenant_id,
                detail=str(exc),
            )

        message = self.renderer.render(event_name, tenant_id, content, previous)
        if not message.body:
            _logger.debug("Nothing to log: event=%s guild=%s", event_name, tenant_id)
            return DispatchResult(
                status=DispatchStatus.NOTHING_TO_LOG,
                event_name=event_name,
                tenant_id=tenant_id,
                destination_id=destination_id,
            )

        payload = self.strategy.shape(message, self.color, self.footer)
        try:
            await self.discord_client.send_message(destination_id, payload)
        except DestinationUnavailableError as exc:
            _logger.warning("Event %s not delivered: %s", event_name, exc)
            return DispatchResult(
                status=DispatchStatus.DESTINATION_UNAVAILABLE,
                event_name=event_name,
                tenant_id=tenant_id,
                destination_id=destination_id,
                payload=payload,
                detail=str(exc),
            )
        except SendFailureError as exc:
            _logger.warning("Event %s not delivered: %s", event_name, exc)
            return DispatchResult(
                status=DispatchStatus.SEND_FAILED,
                event_name=event_name,
                tenant_id=tenant_id,
                destination_id=destination_id,
                payload=payload,
                detail=str(exc),
            )

        _logger.info(
            "Event logged: event=%s guild=%s channel=%s payload=%s",
            event_name,
            tenant_id,
            destination_id,
            type(payload).__name__,
        )
        return DispatchResult(
            status=DispatchStatus.DELIVERED,
            event_name=event_name,
            tenant_id=tenant_id,
            destination_id=destination_id,
            payload=payload,
        )
