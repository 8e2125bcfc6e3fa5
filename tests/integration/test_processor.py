"""End-to-end tests for the background trip pipeline (stub LLM, mocked HTTP)."""

import json
from collections.abc import Callable
from datetime import date
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.app.config import Settings
from backend.app.db import trips as trip_store
from backend.app.db.models import Trip
from backend.app.llm.client import DeterministicStubClient, LLMCallError, LLMClient
from backend.app.models.trip import Itinerary, TripCreate
from backend.app.models.visa import VisaRequirement
from backend.app.services import AppServices, build_services


class FailingLLM:
    """Every provider call fails."""

    async def assess_feasibility(self, request: TripCreate, visa: VisaRequirement | None = None) -> str:
        raise LLMCallError("provider unavailable")

    async def generate_itinerary(
        self, request: TripCreate, *, num_days: int, start_date: date, budget_tier: str
    ) -> str:
        raise LLMCallError("provider unavailable")


class RejectingLLM(DeterministicStubClient):
    """Rules every trip out."""

    async def assess_feasibility(self, request: TripCreate, visa: VisaRequirement | None = None) -> str:
        return json.dumps(
            {
                "overall": "no",
                "score": 10,
                "breakdown": {
                    "visa": {"status": "issue", "reason": "Entry not permitted"},
                    "budget": {"status": "impossible", "reason": "n/a"},
                    "safety": {"status": "danger", "reason": "Active conflict"},
                },
                "summary": "Not possible right now",
            }
        )


@pytest.fixture
def build(
    test_settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
    mock_http_client: httpx.AsyncClient,
) -> Callable[[LLMClient], AppServices]:
    def _build(llm: LLMClient) -> AppServices:
        # Keep completed progress records around long enough to assert on them
        settings = test_settings.model_copy(update={"progress_grace_s": 30.0})
        return build_services(settings, session_factory, http_client=mock_http_client, llm=llm)

    return _build


async def _create(services: AppServices, request: TripCreate) -> int:
    async with services.session_factory() as session:
        trip = await trip_store.create_trip(session, request)
        return trip.id


async def _load(services: AppServices, trip_id: int) -> Trip:
    async with services.session_factory() as session:
        trip = await trip_store.get_trip(session, trip_id)
    assert trip is not None
    return trip


@pytest.mark.asyncio
async def test_paris_trip_end_to_end(
    build: Callable[[LLMClient], AppServices],
    make_trip_request: Callable[..., TripCreate],
) -> None:
    """Test that a 7-day Paris trip ends with a priced, complete itinerary."""
    services = build(DeterministicStubClient())
    request = make_trip_request(budget=10000)
    trip_id = await _create(services, request)

    await services.processor.process(trip_id, request)

    trip = await _load(services, trip_id)
    assert trip.feasibility_status == "yes"
    assert trip.feasibility_report is not None
    assert trip.itinerary_status == "complete"
    assert trip.itinerary_lock_owner is None

    itinerary = Itinerary.model_validate(trip.itinerary)
    assert len(itinerary.days) == 7
    assert [d.day_number for d in itinerary.days] == list(range(1, 8))
    costs = itinerary.cost_breakdown
    assert costs is not None
    assert costs.grand_total > 0
    assert costs.currency == "USD"

    progress = services.progress.get(trip_id)
    assert progress is not None
    assert progress.percent_complete == 100
    # Verdict is cached per corridor
    assert services.feasibility_cache.get("United States", "Paris, France") is not None


@pytest.mark.asyncio
async def test_provider_outage_falls_back(
    build: Callable[[LLMClient], AppServices],
    make_trip_request: Callable[..., TripCreate],
    future_dates: Callable[[int, int], str],
) -> None:
    """Test that a failing model still yields a warning verdict and a placeholder plan."""
    services = build(FailingLLM())
    request = make_trip_request(destination="Lisbon, Portugal", dates=future_dates(40, 4))
    trip_id = await _create(services, request)

    await services.processor.process(trip_id, request)

    trip = await _load(services, trip_id)
    assert trip.feasibility_status == "warning"
    assert trip.itinerary_status == "complete"
    itinerary = Itinerary.model_validate(trip.itinerary)
    assert len(itinerary.days) == 4
    assert itinerary.days[0].title == "Arrival Day"
    assert itinerary.days[-1].title == "Departure Day"
    # Fallback verdicts are never cached
    assert len(services.feasibility_cache) == 0


@pytest.mark.asyncio
async def test_held_lock_skips_generation(
    build: Callable[[LLMClient], AppServices],
    make_trip_request: Callable[..., TripCreate],
) -> None:
    """Test that a second processor neither writes to nor generates for a trip another run holds."""
    services = build(DeterministicStubClient())
    request = make_trip_request(budget=10000)
    trip_id = await _create(services, request)
    holder = await services.lock.acquire(trip_id)
    assert holder.acquired

    await services.processor.process(trip_id, request)

    trip = await _load(services, trip_id)
    assert trip.feasibility_status == "pending"
    assert trip.itinerary is None
    assert trip.itinerary_status == "generating"
    assert trip.itinerary_lock_owner == holder.lock_owner
    assert trip_id not in services.progress


@pytest.mark.asyncio
async def test_retry_uses_pre_acquired_lock(
    build: Callable[[LLMClient], AppServices],
    make_trip_request: Callable[..., TripCreate],
) -> None:
    """Test that the retry path generates under the lock it was handed and releases it."""
    services = build(DeterministicStubClient())
    request = make_trip_request(budget=10000)
    trip_id = await _create(services, request)
    held = await services.lock.acquire(trip_id)

    await services.processor.process(trip_id, request, lock_owner=held.lock_owner)

    trip = await _load(services, trip_id)
    assert trip.itinerary is not None
    assert trip.itinerary_status == "complete"
    assert trip.itinerary_lock_owner is None


@pytest.mark.asyncio
async def test_infeasible_trip_gets_no_itinerary(
    build: Callable[[LLMClient], AppServices],
    make_trip_request: Callable[..., TripCreate],
) -> None:
    """Test that a "no" verdict stops the pipeline and frees a pre-held lock."""
    services = build(RejectingLLM())
    request = make_trip_request(budget=10000)
    trip_id = await _create(services, request)
    held = await services.lock.acquire(trip_id)

    await services.processor.process(trip_id, request, lock_owner=held.lock_owner)

    trip = await _load(services, trip_id)
    assert trip.feasibility_status == "no"
    assert trip.itinerary is None
    assert trip.itinerary_status == "idle"
    assert trip.itinerary_lock_owner is None
    progress = services.progress.get(trip_id)
    assert progress is not None
    assert progress.details == "Trip is not feasible"


@pytest.mark.asyncio
async def test_failure_before_generation_releases_handed_in_lock(
    build: Callable[[LLMClient], AppServices],
    make_trip_request: Callable[..., TripCreate],
) -> None:
    """Test that a crash in the feasibility stage frees the lock the caller handed in."""
    services = build(DeterministicStubClient())
    request = make_trip_request(budget=10000)
    trip_id = await _create(services, request)
    held = await services.lock.acquire(trip_id)

    with patch.object(services.processor.visa_service, "lookup", AsyncMock(side_effect=RuntimeError("boom"))):
        await services.processor.process(trip_id, request, lock_owner=held.lock_owner)

    trip = await _load(services, trip_id)
    assert trip.itinerary_status == "error"
    assert trip.itinerary_lock_owner is None
    progress = services.progress.get(trip_id)
    assert progress is not None
    assert progress.step == -1
    assert (await services.lock.acquire(trip_id)).acquired


@pytest.mark.asyncio
async def test_unparseable_dates_release_handed_in_lock(
    build: Callable[[LLMClient], AppServices],
    make_trip_request: Callable[..., TripCreate],
) -> None:
    """Test that a run failing on its dates does not leave the trip locked."""
    services = build(DeterministicStubClient())
    request = make_trip_request(dates="whenever works")
    trip_id = await _create(services, request)
    held = await services.lock.acquire(trip_id)

    await services.processor.process(trip_id, request, lock_owner=held.lock_owner)

    trip = await _load(services, trip_id)
    assert trip.itinerary is None
    assert trip.itinerary_lock_owner is None
    status = await services.lock.get_status(trip_id)
    assert status is not None
    assert status.status == "error"
    assert not status.is_locked
    progress = services.progress.get(trip_id)
    assert progress is not None
    assert progress.step == -1
