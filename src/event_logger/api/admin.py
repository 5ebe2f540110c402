"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from event_logger.api.discord_models import LogChannelRequest
from event_logger.domain.errors import ValidationError

if TYPE_CHECKING:
    from event_logger.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/log-channels", dependencies=[Depends(require_admin)])
async def list_log_channels(request: Request) -> dict[str, object]:
    """Return the guild to log channel routing table."""
    container: AppContainer = request.app.state.container
    return {"log_channels": container.registry.entries()}


@router.put("/log-channels/{guild_id}", dependencies=[Depends(require_admin)])
async def register_log_channel(
    guild_id: str, body: LogChannelRequest, request: Request
) -> dict[str, str]:
    """Route a guild's events to a log channel."""
    container: AppContainer = request.app.state.container
    try:
        container.registry.register(guild_id, body.channel_id)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return {"guild_id": guild_id, "channel_id": body.channel_id}


@router.delete("/log-channels/{guild_id}", dependencies=[Depends(require_admin)])
async def unregister_log_channel(guild_id: str, request: Request) -> dict[str, str]:
    """Stop logging a guild's events."""
    container: AppContainer = request.app.state.container
    container.registry.unregister(guild_id)
    return {"status": "ok"}
