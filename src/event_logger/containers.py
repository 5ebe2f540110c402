"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass

from event_logger.adapters.discord_client import DiscordClient, HttpxDiscordClient
from event_logger.config import Settings, parse_guild_channels
from event_logger.discord_events import parse_event_names
from event_logger.services.delivery import DeliveryStrategy
from event_logger.services.destinations import DestinationRegistry
from event_logger.services.differ import RecordDiffer
from event_logger.services.dispatcher import Dispatcher
from event_logger.services.listeners import Listener, build_listeners
from event_logger.services.renderer import AuditRenderer


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    discord_client: DiscordClient
    registry: DestinationRegistry
    dispatcher: Dispatcher
    listeners: Mapping[str, Listener]
    close_resources: Callable[[], Awaitable[None]]


def build_dispatcher(
    settings: Settings,
    discord_client: DiscordClient,
    registry: DestinationRegistry,
) -> Dispatcher:
    """Create the event dispatcher from settings."""
    return Dispatcher(
        registry=registry,
        discord_client=discord_client,
        renderer=AuditRenderer(differ=RecordDiffer()),
        strategy=DeliveryStrategy(),
        color=settings.embed_color,
        footer=settings.embed_footer,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    Malformed ``guild_channels`` or ``events`` values abort startup.
    """
    resolved_settings = settings or Settings()
    registry = DestinationRegistry()
    registry.load(parse_guild_channels(resolved_settings.guild_channels))
    events = parse_event_names(resolved_settings.events)
    discord_client = HttpxDiscordClient.create(
        resolved_settings.discord_bot_token,
        api_base=resolved_settings.discord_api_base,
    )
    dispatcher = build_dispatcher(resolved_settings, discord_client, registry)

    async def close_resources() -> None:
        await discord_client.close()

    return AppContainer(
        settings=resolved_settings,
        discord_client=discord_client,
        registry=registry,
        dispatcher=dispatcher,
        listeners=build_listeners(dispatcher, events),
        close_resources=close_resources,
    )
