"""FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.trips import router as trips_router
from backend.app.api.routes.visa import router as visa_router
from backend.app.config import Settings, get_settings
from backend.app.db.engine import create_async_engine_from_settings, create_schema, create_session_factory
from backend.app.llm.client import LLMClient
from backend.app.services import build_services

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    llm: LLMClient | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings override (defaults to environment)
        http_client: Shared outbound client; tests inject a MockTransport client
        llm: Model client override
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        engine = create_async_engine_from_settings(settings)
        if settings.auto_create_schema:
            await create_schema(engine)

        services = build_services(
            settings, create_session_factory(engine), http_client=http_client, llm=llm
        )
        app.state.services = services
        logger.info("Travel planner API started")
        try:
            yield
        finally:
            await services.worker.shutdown()
            await engine.dispose()
            logger.info("Travel planner API stopped")

    app = FastAPI(title="Travel Planner API", version="0.1.0", lifespan=lifespan)

    # Register routes
    app.include_router(health_router, tags=["health"])
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(trips_router)
    app.include_router(visa_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "Travel Planner API", "version": "0.1.0"}

    return app


app = create_app()
