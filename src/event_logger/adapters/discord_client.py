"""Discord REST API client adapter."""

import json
from dataclasses import dataclass
from typing import Protocol

import httpx

from event_logger.domain.audit import (
    DeliveryPayload,
    FileAttachment,
    PlainText,
    RichBlock,
)
from event_logger.domain.errors import DestinationUnavailableError, SendFailureError

DISCORD_API_BASE = "https://discord.com/api/v10"


class DiscordClient(Protocol):
    """Interface for Discord API interactions."""

    async def send_message(self, channel_id: str, payload: DeliveryPayload) -> None:
        """Send a payload to a Discord channel."""


@dataclass
class HttpxDiscordClient:
    """Discord client implemented with httpx."""

    bot_token: str
    http_client: httpx.AsyncClient
    api_base: str = DISCORD_API_BASE

    @classmethod
    def create(
        cls, bot_token: str, api_base: str = DISCORD_API_BASE
    ) -> "HttpxDiscordClient":
        """Create a Discord client with a managed httpx session."""
        return cls(
            bot_token=bot_token, http_client=httpx.AsyncClient(), api_base=api_base
        )

    async def send_message(self, channel_id: str, payload: DeliveryPayload) -> None:
        """Send a message using Discord's create-message endpoint."""
        url = f"{self.api_base}/channels/{channel_id}/messages"
        headers = {"Authorization": f"Bot {self.bot_token}"}
        try:
            if isinstance(payload, FileAttachment):
                response = await self.http_client.post(
                    url,
                    headers=headers,
                    data={"payload_json": json.dumps(_attachment_json(payload))},
                    files={
                        "files[0]": (
                            payload.filename,
                            payload.content.encode(),
                            "text/plain",
                        )
                    },
                    timeout=20,
                )
            else:
                response = await self.http_client.post(
                    url, headers=headers, json=message_json(payload), timeout=10
                )
        except httpx.HTTPError as exc:
            raise SendFailureError(f"Discord request failed: {exc}") from exc
        if response.status_code == httpx.codes.NOT_FOUND:
            raise DestinationUnavailableError(channel_id)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SendFailureError(
                f"Discord rejected message: {response.status_code} {response.text}"
            ) from exc

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()


def message_json(payload: PlainText | RichBlock) -> dict[str, object]:
    """Build the JSON body for an inline or embed message."""
    if isinstance(payload, PlainText):
        return {"content": payload.content, "allowed_mentions": {"parse": []}}
    embed: dict[str, object] = {
        "title": payload.title,
        "description": payload.body,
        "color": payload.color,
        "timestamp": payload.timestamp.isoformat(),
    }
    if payload.footer:
        embed["footer"] = {"text": payload.footer}
    return {"embeds": [embed], "allowed_mentions": {"parse": []}}


def _attachment_json(payload: FileAttachment) -> dict[str, object]:
    return {
        "attachments": [{"id": 0, "filename": payload.filename}],
        "allowed_mentions": {"parse": []},
    }
