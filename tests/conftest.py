"""Shared pytest fixtures for all test suites."""

import os
from collections.abc import AsyncGenerator, Callable, Iterator
from datetime import date, datetime
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from backend.app.config import Settings
from backend.app.db.engine import create_schema, create_session_factory
from backend.app.db.models import Base
from backend.app.llm.client import DeterministicStubClient
from backend.app.main import create_app
from backend.app.models.trip import TripCreate, TripResponse

# Rates served by the mocked Frankfurter endpoint (units per USD)
TEST_RATES = {"EUR": 0.9, "GBP": 0.8, "INR": 80.0, "JPY": 150.0}


def rates_handler(request: httpx.Request) -> httpx.Response:
    """Answer Frankfurter requests; every other host is unreachable."""
    if request.url.host == "api.frankfurter.app":
        return httpx.Response(200, json={"amount": 1.0, "base": "USD", "rates": TEST_RATES})
    return httpx.Response(503, json={"error": "unavailable in tests"})


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings with a file-backed SQLite DB and no provider keys."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        database_url=f"sqlite:///{tmp_path / 'trips.db'}",
        auto_create_schema=True,
        redis_url=None,
        openai_api_key=None,
        deepseek_api_key=None,
        serpapi_key="",
        rapidapi_key="",
        progress_grace_s=0.0,
    )


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """File-backed SQLite engine so concurrent sessions share one database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'lock.db'}", poolclass=NullPool)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(sqlite_engine)


@pytest_asyncio.fixture
async def mock_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(rates_handler))
    yield client
    await client.aclose()


@pytest.fixture
def future_dates() -> Callable[[int, int], str]:
    """Build a 'YYYY-MM-DD - YYYY-MM-DD' range relative to today."""

    def build(offset_days: int = 30, length_days: int = 7) -> str:
        start = date.fromordinal(date.today().toordinal() + offset_days)
        end = date.fromordinal(start.toordinal() + length_days - 1)
        return f"{start.isoformat()} - {end.isoformat()}"

    return build


@pytest.fixture
def make_trip_request(future_dates: Callable[[int, int], str]) -> Callable[..., TripCreate]:
    """TripCreate factory with a valid US -> Paris default."""

    def build(**overrides: Any) -> TripCreate:
        payload: dict[str, Any] = {
            "passport": "United States",
            "origin": "New York",
            "destination": "Paris, France",
            "dates": future_dates(30, 7),
            "currency": "USD",
            "budget": 5000,
            "adults": 2,
            "travel_style": "standard",
        }
        payload.update(overrides)
        return TripCreate.model_validate(payload)

    return build


def _cost_breakdown(costs: dict[str, int], currency_symbol: str) -> dict[str, Any]:
    category = {"total": 0}
    breakdown = {
        "currency": "USD",
        "currencySymbol": currency_symbol,
        "budgetTier": "standard",
        "travelers": {"total": 2, "adults": 2},
        "flights": {"total": costs.get("flights", 0), "perPerson": costs.get("flights", 0) // 2},
        "accommodation": {"total": costs.get("stay", 0), "perNight": 0, "nights": 6},
        "food": {**category, "total": costs.get("food", 0)},
        "activities": {**category, "total": costs.get("activities", 0)},
        "localTransport": {**category, "total": costs.get("transport", 0)},
        "intercityTransport": category,
        "misc": category,
        "perPerson": 0,
        "budgetStatus": "within_budget",
    }
    breakdown["grandTotal"] = sum(
        costs.get(name, 0) for name in ("flights", "stay", "food", "activities", "transport")
    )
    return breakdown


@pytest.fixture
def make_trip_response() -> Callable[..., TripResponse]:
    """TripResponse factory for comparison tests.

    `score=None` leaves the trip without a feasibility report and `costs=None`
    without an itinerary.
    """

    def build(
        *,
        trip_id: int = 1,
        destination: str = "Paris, France",
        passport: str = "United States",
        dates: str = "2026-11-01 - 2026-11-10",
        group_size: int = 2,
        score: int | None = 80,
        visa_status: str = "ok",
        costs: dict[str, int] | None = None,
        highlights: tuple[str, ...] = ("Louvre", "Eiffel Tower"),
        currency_symbol: str = "$",
    ) -> TripResponse:
        report = None
        if score is not None:
            report = {
                "overall": "yes" if score >= 70 else "warning",
                "score": score,
                "breakdown": {
                    "visa": {"status": visa_status, "reason": "", "visaType": "visa_free"},
                    "budget": {"status": "ok"},
                    "safety": {"status": "safe"},
                },
            }
        itinerary = None
        if costs is not None:
            itinerary = {
                "days": [
                    {
                        "dayNumber": 1,
                        "date": "2026-11-01",
                        "title": "Day 1",
                        "activities": [{"time": "10:00", "description": h, "type": "activity"} for h in highlights],
                    }
                ],
                "costBreakdown": _cost_breakdown(costs, currency_symbol),
            }
        return TripResponse.model_validate(
            {
                "id": trip_id,
                "voyageUid": None,
                "passport": passport,
                "residence": None,
                "origin": "New York",
                "destination": destination,
                "dates": dates,
                "currency": "USD",
                "budget": 5000,
                "adults": group_size,
                "children": 0,
                "infants": 0,
                "groupSize": group_size,
                "travelStyle": "standard",
                "feasibilityStatus": report["overall"] if report else "pending",
                "feasibilityReport": report,
                "feasibilityError": None,
                "itinerary": itinerary,
                "itineraryStatus": "complete" if itinerary else "idle",
                "imageUrl": None,
            }
        )

    return build


class FrozenClock:
    """Settable clock for TTL and lock staleness tests."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def frozen_clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 3, 1, 12, 0, 0))


@pytest_asyncio.fixture
async def postgres_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create async engine for PostgreSQL integration tests.

    Requires DATABASE_URL to be set to a real PostgreSQL connection string.
    Tests using this fixture should be marked with @pytest.mark.postgres.
    """
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set - skipping postgres test")

    if not database_url.startswith(("postgresql://", "postgresql+asyncpg://")):
        pytest.skip(f"DATABASE_URL is not PostgreSQL: {database_url}")

    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    engine = create_async_engine(database_url, poolclass=NullPool, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def api_client(test_settings: Settings) -> Iterator[TestClient]:
    """App client with the stub LLM and mocked outbound HTTP.

    Entering the client runs the lifespan, so background jobs execute on the
    client's event loop between requests.
    """
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(rates_handler))
    app = create_app(test_settings, http_client=http_client, llm=DeterministicStubClient())
    with TestClient(app) as client:
        yield client
