"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from foundation_mirror.api.kiosk import kiosk_validation_error
from foundation_mirror.api.kiosk import router as kiosk_router
from foundation_mirror.api.pages import router as pages_router
from foundation_mirror.api.sessions import (
    DashboardUnauthorized,
    dashboard_unauthorized,
)
from foundation_mirror.api.sessions import router as sessions_router
from foundation_mirror.app_logging import configure_logging
from foundation_mirror.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Foundation Mirror", lifespan=lifespan)
    app.state.container = container
    app.add_exception_handler(RequestValidationError, kiosk_validation_error)
    app.add_exception_handler(DashboardUnauthorized, dashboard_unauthorized)

    app.include_router(pages_router)
    app.include_router(kiosk_router)
    app.include_router(sessions_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
