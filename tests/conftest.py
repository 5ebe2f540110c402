"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from event_logger.adapters.discord_client import DiscordClient
from event_logger.config import Settings
from event_logger.containers import AppContainer, build_dispatcher
from event_logger.discord_events import parse_event_names
from event_logger.domain.audit import DeliveryPayload
from event_logger.domain.errors import DestinationUnavailableError, SendFailureError
from event_logger.services.destinations import DestinationRegistry
from event_logger.services.listeners import build_listeners


@dataclass
class FakeDiscordClient(DiscordClient):
    """Fake Discord client that records sent payloads."""

    messages: list[tuple[str, DeliveryPayload]] = field(default_factory=list)
    missing_channels: set[str] = field(default_factory=set)
    fail_with: str | None = None

    async def send_message(self, channel_id: str, payload: DeliveryPayload) -> None:
        if channel_id in self.missing_channels:
            raise DestinationUnavailableError(channel_id)
        if self.fail_with is not None:
            raise SendFailureError(self.fail_with)
        self.messages.append((channel_id, payload))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        discord_bot_token="test-token",
        admin_token="admin-token",
        guild_channels="111-5001,222-5002",
    )


@pytest.fixture
def discord_client() -> FakeDiscordClient:
    return FakeDiscordClient()


@pytest.fixture
def registry() -> DestinationRegistry:
    registry = DestinationRegistry()
    registry.load([("111", "5001"), ("222", "5002")])
    return registry


@pytest.fixture
def container(
    settings: Settings,
    discord_client: FakeDiscordClient,
    registry: DestinationRegistry,
) -> AppContainer:
    dispatcher = build_dispatcher(settings, discord_client, registry)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        discord_client=discord_client,
        registry=registry,
        dispatcher=dispatcher,
        listeners=build_listeners(dispatcher, parse_event_names(settings.events)),
        close_resources=close_resources,
    )
