"""Health check endpoints.

- /health is a liveness probe and always answers ok
- /healthz checks DB and (when configured) Redis connectivity
"""

from typing import Annotated, Any

import redis.asyncio as redis
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from backend.app.api.deps import get_services
from backend.app.config import Settings
from backend.app.services import AppServices

router = APIRouter()


async def check_db(services: AppServices) -> tuple[bool, str]:
    """Check database connectivity.

    Returns:
        (is_ok, status_message)
    """
    try:
        async with services.session_factory() as session:
            await session.execute(text("SELECT 1"))
        return (True, "ok")
    except (SQLAlchemyError, OSError) as e:
        return (False, f"error: {type(e).__name__}")


async def check_redis(settings: Settings) -> tuple[bool, str]:
    """Check Redis connectivity.

    Returns:
        (is_ok, status_message)
    """
    if not settings.redis_url:
        return (True, "not_configured")

    client = redis.from_url(settings.redis_url, decode_responses=True)
    try:
        await client.ping()
        return (True, "ok")
    except (redis.RedisError, OSError) as e:
        return (False, f"error: {type(e).__name__}")
    finally:
        await client.aclose()


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz(services: Annotated[AppServices, Depends(get_services)]) -> dict[str, Any] | JSONResponse:
    """Component health check.

    Returns:
        200 with component status if core systems ok
        503 if a critical component fails
    """
    db_ok, db_status = await check_db(services)
    redis_ok, redis_status = await check_redis(services.settings)

    core_ok = db_ok and redis_ok
    response_body = {
        "status": "ok" if core_ok else "degraded",
        "components": {
            "db": db_status,
            "redis": redis_status,
            "llm": type(services.llm).__name__,
        },
        "caches": {
            "feasibility": services.feasibility_cache.stats().size,
            "itinerary_templates": len(services.template_cache),
        },
        "background_jobs": services.worker.pending,
    }

    if not core_ok:
        return JSONResponse(content=response_body, status_code=503)
    return response_body
