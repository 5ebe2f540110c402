"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from event_logger.api.admin import router as admin_router
from event_logger.api.discord_models import GatewayEvent
from event_logger.app_logging import configure_logging
from event_logger.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        logger.info(
            "Listening for %s events across %s guilds",
            len(state_container.listeners),
            len(state_container.registry.entries()),
        )
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/events")
    async def gateway_event(event: GatewayEvent, request: Request) -> dict[str, str]:
        """Handle a gateway event forwarded by the relay."""
        state_container: AppContainer = request.app.state.container
        listener = state_container.listeners.get(event.t)
        if listener is None:
            return {"status": "ignored"}
        result = await listener(event.d, event.old)
        return {"status": result.status.value}

    return app
