"""Pydantic models for relayed gateway events and admin requests."""

from typing import Any

from pydantic import BaseModel, Field


class GatewayEvent(BaseModel):
    """Gateway dispatch forwarded by the relay."""

    t: str
    d: dict[str, Any] = Field(default_factory=dict)
    old: dict[str, Any] | None = None


class LogChannelRequest(BaseModel):
    """Admin request body for registering a log channel."""

    channel_id: str
