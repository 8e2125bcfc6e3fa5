"""Integration tests for the paid visa API tier and its database cache."""

from datetime import datetime, timedelta
from typing import Any

import httpx
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.app.db.models import VisaKnowledge
from backend.app.visa.corridors import CorridorStore
from backend.app.visa.passport_index import PassportIndex
from backend.app.visa.service import VisaLookupService

API_PAYLOAD: dict[str, Any] = {
    "data": {
        "passport": {"code": "US", "name": "United States"},
        "destination": {"code": "JP", "name": "Japan", "passport_validity": "Valid for stay"},
        "visa_rules": {"primary_rule": {"name": "Visa-free", "duration": "90 days"}},
    }
}


class Recorder:
    def __init__(self, status_code: int = 200) -> None:
        self.calls = 0
        self.status_code = status_code

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        assert request.headers["x-rapidapi-key"] == "test-key"
        return httpx.Response(self.status_code, json=API_PAYLOAD)


def _service(
    session_factory: async_sessionmaker[AsyncSession],
    client: httpx.AsyncClient,
    now_fn: Any = None,
) -> VisaLookupService:
    kwargs: dict[str, Any] = {"api_key": "test-key", "client": client}
    if now_fn is not None:
        kwargs["now_fn"] = now_fn
    # Empty local tiers force every lookup to the API
    return VisaLookupService(CorridorStore(), PassportIndex(), session_factory, **kwargs)


@pytest.mark.asyncio
async def test_api_result_is_cached(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Test that the second lookup for a corridor is served from the database."""
    recorder = Recorder()
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
        service = _service(session_factory, client)

        first = await service.lookup("United States", "Tokyo")
        second = await service.lookup("USA", "Japan")

    assert first is not None
    assert first.source == "api"
    assert first.status == "visa_free"
    assert first.days == 90
    assert "Passport validity: Valid for stay" in first.notes
    assert second == first
    assert recorder.calls == 1

    async with session_factory() as session:
        rows = await session.scalar(select(func.count()).select_from(VisaKnowledge))
    assert rows == 1


@pytest.mark.asyncio
async def test_expired_entry_is_refetched(
    session_factory: async_sessionmaker[AsyncSession], frozen_clock: Any
) -> None:
    recorder = Recorder()
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
        service = _service(session_factory, client, now_fn=frozen_clock)

        await service.lookup("United States", "Japan")
        frozen_clock.now += timedelta(days=31)
        await service.lookup("United States", "Japan")

    assert recorder.calls == 2
    async with session_factory() as session:
        fetched_at = await session.scalar(select(VisaKnowledge.fetched_at))
    assert fetched_at == frozen_clock.now


@pytest.mark.asyncio
async def test_api_failure_serves_stale_copy(
    session_factory: async_sessionmaker[AsyncSession], frozen_clock: Any
) -> None:
    """Test that a failing API falls back to an expired cached document."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(Recorder())) as client:
        await _service(session_factory, client, now_fn=frozen_clock).lookup("United States", "Japan")

    frozen_clock.now = datetime(2027, 1, 1)
    async with httpx.AsyncClient(transport=httpx.MockTransport(Recorder(status_code=502))) as client:
        stale = await _service(session_factory, client, now_fn=frozen_clock).lookup("United States", "Japan")

    assert stale is not None
    assert stale.status == "visa_free"


@pytest.mark.asyncio
async def test_api_failure_without_cache_is_none(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with httpx.AsyncClient(transport=httpx.MockTransport(Recorder(status_code=500))) as client:
        result = await _service(session_factory, client).lookup("United States", "Japan")

    assert result is None
