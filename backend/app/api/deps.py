"""Request dependencies."""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.services import AppServices


def get_services(request: Request) -> AppServices:
    """Service container attached to the app at startup."""
    services: AppServices = request.app.state.services
    return services


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for the duration of one request."""
    async with get_services(request).session_factory() as session:
        yield session
