"""Error types raised by the event logger."""


class EventLoggerError(Exception):
    """Base class for event logger errors."""


class ValidationError(EventLoggerError):
    """Raised when a guild or channel id is malformed."""


class NotConfiguredError(EventLoggerError):
    """Raised when a guild has no log channel registered."""

    def __init__(self, tenant_id: str) -> None:
        super().__init__(f"No log channel configured for guild {tenant_id}")
        self.tenant_id = tenant_id


class DestinationUnavailableError(EventLoggerError):
    """Raised when the log channel no longer exists on Discord."""

    def __init__(self, destination_id: str) -> None:
        super().__init__(f"Log channel {destination_id} not found")
        self.destination_id = destination_id


class SendFailureError(EventLoggerError):
    """Raised when Discord rejects or fails a message send."""
