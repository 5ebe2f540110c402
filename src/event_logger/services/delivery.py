"""Size-tiered delivery payload selection."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from event_logger.domain.audit import (
    AuditMessage,
    DeliveryPayload,
    FileAttachment,
    PlainText,
    RichBlock,
)

MAX_MESSAGE_LENGTH = 2000
MAX_EMBED_DESCRIPTION_LENGTH = 4096


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class DeliveryStrategy:
    """Pick inline text, an embed, or a file attachment by body length."""

    clock: Callable[[], datetime] = field(default=_utc_now)

    def shape(self, message: AuditMessage, color: int, footer: str) -> DeliveryPayload:
        """Return the payload variant that fits the message body."""
        length = len(message.body)
        if length <= MAX_MESSAGE_LENGTH:
            return PlainText(content=message.body)
        if length <= MAX_EMBED_DESCRIPTION_LENGTH:
            return RichBlock(
                title=message.event_name,
                body=message.body,
                color=color,
                footer=footer,
                timestamp=self.clock(),
            )
        return FileAttachment(
            filename=f"{message.event_name}.txt", content=message.body
        )
