"""Guild to log channel routing."""

import logging
import re
import threading
from collections.abc import Iterable

from event_logger.domain.errors import NotConfiguredError, ValidationError

_logger = logging.getLogger(__name__)

_SNOWFLAKE = re.compile(r"[0-9]+")


def is_snowflake(value: str) -> bool:
    """Return True when the value is a numeric Discord id."""
    return isinstance(value, str) and _SNOWFLAKE.fullmatch(value) is not None


class DestinationRegistry:
    """Thread-safe mapping of guild ids to log channel ids."""

    def __init__(self) -> None:
        self._channels: dict[str, str] = {}
        self._lock = threading.Lock()

    def register(self, tenant_id: str, destination_id: str) -> None:
        """Route a guild's events to a log channel, replacing any previous one."""
        _validate_pair(tenant_id, destination_id)
        with self._lock:
            self._channels[tenant_id] = destination_id
        _logger.info(
            "Log channel registered: guild=%s channel=%s", tenant_id, destination_id
        )

    def unregister(self, tenant_id: str) -> None:
        """Stop logging a guild's events. Unknown guilds are ignored."""
        with self._lock:
            removed = self._channels.pop(tenant_id, None)
        if removed is not None:
            _logger.info("Log channel removed: guild=%s", tenant_id)

    def resolve(self, tenant_id: str) -> str:
        """Return the log channel for a guild or raise NotConfiguredError."""
        with self._lock:
            destination_id = self._channels.get(tenant_id)
        if destination_id is None:
            raise NotConfiguredError(tenant_id)
        return destination_id

    def load(self, pairs: Iterable[tuple[str, str]]) -> None:
        """Register every pair, or none of them if any pair is malformed."""
        validated = list(pairs)
        for tenant_id, destination_id in validated:
            _validate_pair(tenant_id, destination_id)
        with self._lock:
            self._channels.update(validated)
        _logger.info("Loaded %s log channels", len(validated))

    def entries(self) -> dict[str, str]:
        """Return a copy of the current routing table."""
        with self._lock:
            return dict(self._channels)


def _validate_pair(tenant_id: str, destination_id: str) -> None:
    if not is_snowflake(tenant_id) or not is_snowflake(destination_id):
        raise ValidationError(
            f"Guild ID and Channel ID must be numeric: {tenant_id!r}-{destination_id!r}"
        )
