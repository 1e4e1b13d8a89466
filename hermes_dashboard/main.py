"""
FastAPI application entry point for the HERMES insights dashboard.

This module configures logging and CORS, registers the API routers, and owns
the dashboard session lifecycle: one session is activated on startup and torn
down on shutdown.

The application can be created with custom sources for tests or for a real
backend:

    app = create_app(sources=DashboardSources(...))
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hermes_dashboard import __version__
from hermes_dashboard.api import api_router
from hermes_dashboard.core.config import Settings, get_settings
from hermes_dashboard.services.session import DashboardSession
from hermes_dashboard.services.sources import DashboardSources

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    sources: Optional[DashboardSources] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; defaults to the cached environment settings.
        sources: Data sources; defaults to the synthetic sources.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Lifespan context manager for startup and shutdown.

        On startup:
            - Create and activate the dashboard session

        On shutdown:
            - Tear down the current session (outstanding loads finish first)
        """
        logger.info(f"{settings.app_name} starting")
        session = DashboardSession.from_settings(settings, sources=sources)
        await session.activate()
        app.state.dashboard_session = session

        yield

        logger.info(f"{settings.app_name} shutting down")
        # The refresh endpoint may have replaced the session
        async with app.state.refresh_lock:
            current = app.state.dashboard_session
            app.state.dashboard_session = None
        await current.teardown()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description=(
            "Aggregates time-series analytics, customer segments, campaigns and "
            "generated insights into a single dashboard view model."
        ),
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.refresh_lock = asyncio.Lock()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        """
        Health check endpoint for monitoring and load balancer probes.

        Returns:
            Dict with status 'healthy'
        """
        return {"status": "healthy"}

    @app.get("/")
    async def root():
        """
        Root endpoint providing API information.

        Returns:
            Dict with API name and version
        """
        return {
            "name": settings.app_name,
            "version": __version__,
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    return app


app = create_app()


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hermes_dashboard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
