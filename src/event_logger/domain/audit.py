"""Domain models for rendered audit messages and delivery payloads."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AuditMessage:
    """Rendered audit record for a single event."""

    event_name: str
    tenant_id: str
    title: str
    body: str


@dataclass(frozen=True)
class PlainText:
    """Inline message content."""

    content: str


@dataclass(frozen=True)
class RichBlock:
    """Embed with a title, description and footer."""

    title: str
    body: str
    color: int
    footer: str
    timestamp: datetime


@dataclass(frozen=True)
class FileAttachment:
    """Text file uploaded alongside an empty message."""

    filename: str
    content: str


DeliveryPayload = PlainText | RichBlock | FileAttachment
