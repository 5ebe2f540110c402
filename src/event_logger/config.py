"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from event_logger.adapters.discord_client import DISCORD_API_BASE
from event_logger.domain.errors import ValidationError
from event_logger.services.dispatcher import DEFAULT_EMBED_COLOR

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_EMBED_FOOTER = "Discord Event Logger"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    discord_bot_token: str
    admin_token: str
    guild_channels: str | None = None
    events: str | None = None
    embed_color: int = DEFAULT_EMBED_COLOR
    embed_footer: str = DEFAULT_EMBED_FOOTER
    discord_api_base: str = DISCORD_API_BASE
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_guild_channels(raw: str | None) -> list[tuple[str, str]]:
    """Parse ``guild-channel`` pairs from a comma-separated env value.

    Example: ``"1077144430588469349-1077144432463314998,125345996-125348068"``.
    Blank entries are skipped; an entry that is not exactly two ids joined by a
    hyphen raises ValidationError. Id format is checked by the registry.
    """
    if raw is None:
        return []
    pairs: list[tuple[str, str]] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if not value:
            continue
        parts = [part.strip() for part in value.split("-")]
        if len(parts) != 2:  # noqa: PLR2004
            raise ValidationError(f"Malformed guild-channel pair: {value!r}")
        pairs.append((parts[0], parts[1]))
    return pairs
