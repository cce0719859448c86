"""Dashboard endpoints for browsing past sessions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse

from foundation_mirror.services.sessions import serialize_session

if TYPE_CHECKING:
    from foundation_mirror.containers import AppContainer

logger = logging.getLogger(__name__)


class DashboardUnauthorized(Exception):
    """Raised when the dashboard token header is missing or wrong."""


async def dashboard_unauthorized(
    request: Request, exc: DashboardUnauthorized
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED, content={"error": "Unauthorized"}
    )


def _get_dashboard_token(request: Request) -> str | None:
    container: AppContainer = request.app.state.container
    return container.settings.dashboard_token


async def require_dashboard_token(
    x_dashboard_token: str | None = Header(default=None),
    dashboard_token: str | None = Depends(_get_dashboard_token),
) -> None:
    """Ensure requests carry the dashboard token when one is configured."""
    if not dashboard_token:
        return
    if not x_dashboard_token or x_dashboard_token != dashboard_token:
        raise DashboardUnauthorized


router = APIRouter(
    prefix="/sessions",
    tags=["sessions"],
    dependencies=[Depends(require_dashboard_token)],
)


@router.get("", response_model=None)
async def list_sessions(request: Request) -> dict[str, object] | JSONResponse:
    """Return all sessions, newest first."""
    container: AppContainer = request.app.state.container
    try:
        sessions = container.session_query_service.list_sessions()
    except Exception as exc:
        logger.exception("Failed to fetch sessions")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch sessions", "details": str(exc)},
        )
    return {"sessions": [serialize_session(session) for session in sessions]}


@router.get("/{session_id}", response_model=None)
async def session_detail(
    session_id: str, request: Request
) -> dict[str, object] | JSONResponse:
    """Return one session by id."""
    container: AppContainer = request.app.state.container
    try:
        session = container.session_query_service.get_session(session_id)
    except Exception as exc:
        logger.exception("Failed to fetch session", extra={"session_id": session_id})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch session", "details": str(exc)},
        )
    if session is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Session not found"},
        )
    return {"session": serialize_session(session)}
