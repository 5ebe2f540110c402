"""ASGI entrypoint for the event logger API."""

from event_logger.api.app import create_app
from event_logger.containers import build_container

app = create_app(build_container())
