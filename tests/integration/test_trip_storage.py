"""Integration tests for trip storage against SQLite."""

from collections.abc import Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.app.db import trips as trip_store
from backend.app.models.trip import TripCreate, TripUpdate


@pytest.mark.asyncio
async def test_create_trip_starts_pending(
    session_factory: async_sessionmaker[AsyncSession],
    make_trip_request: Callable[..., TripCreate],
) -> None:
    """Test that a new trip has derived group size and no results."""
    async with session_factory() as session:
        trip = await trip_store.create_trip(
            session, make_trip_request(adults=2, children=1), voyage_uid="voyager-1"
        )

    assert trip.id is not None
    assert trip.group_size == 3
    assert trip.feasibility_status == "pending"
    assert trip.itinerary_status == "idle"
    assert trip.itinerary is None
    assert trip.travel_style == "standard"
    assert trip.voyage_uid == "voyager-1"


@pytest.mark.asyncio
async def test_update_resets_processed_results(
    session_factory: async_sessionmaker[AsyncSession],
    make_trip_request: Callable[..., TripCreate],
) -> None:
    """Test that editing the request clears feasibility and itinerary."""
    async with session_factory() as session:
        trip = await trip_store.create_trip(session, make_trip_request())
        await trip_store.update_trip_feasibility(session, trip.id, "yes", {"overall": "yes", "score": 90})
        await trip_store.update_trip_itinerary(session, trip.id, {"days": [{"dayNumber": 1}]})

        updated = await trip_store.update_trip(session, trip.id, TripUpdate(budget=8000, children=2))

    assert updated is not None
    assert updated.budget == 8000
    assert updated.group_size == 4
    assert updated.destination == "Paris, France"
    assert updated.feasibility_status == "pending"
    assert updated.feasibility_report is None
    assert updated.itinerary is None
    assert updated.itinerary_status == "idle"


@pytest.mark.asyncio
async def test_update_missing_trip(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with session_factory() as session:
        assert await trip_store.update_trip(session, 404, TripUpdate(budget=1)) is None


@pytest.mark.asyncio
async def test_image_update_keeps_results(
    session_factory: async_sessionmaker[AsyncSession],
    make_trip_request: Callable[..., TripCreate],
) -> None:
    """Test that setting the image does not touch feasibility or itinerary."""
    async with session_factory() as session:
        trip = await trip_store.create_trip(session, make_trip_request())
        await trip_store.update_trip_feasibility(session, trip.id, "warning", {"overall": "warning"})
        await trip_store.update_trip_itinerary(session, trip.id, {"days": []})

        updated = await trip_store.update_trip_image(session, trip.id, "https://img.example/paris.jpg")
        missing = await trip_store.update_trip_image(session, 404, "https://img.example/x.jpg")

    assert updated is not None
    assert updated.image_url == "https://img.example/paris.jpg"
    assert updated.feasibility_status == "warning"
    assert updated.itinerary == {"days": []}
    assert missing is None


@pytest.mark.asyncio
async def test_infeasible_verdict_clears_itinerary(
    session_factory: async_sessionmaker[AsyncSession],
    make_trip_request: Callable[..., TripCreate],
) -> None:
    """Test that a "no" verdict never leaves an itinerary behind."""
    async with session_factory() as session:
        trip = await trip_store.create_trip(session, make_trip_request())
        await trip_store.update_trip_itinerary(session, trip.id, {"days": [{"dayNumber": 1}]})
        await trip_store.update_trip_feasibility(session, trip.id, "no", {"overall": "no"}, "Entry banned")

    async with session_factory() as session:
        stored = await trip_store.get_trip(session, trip.id)

    assert stored is not None
    assert stored.feasibility_status == "no"
    assert stored.feasibility_error == "Entry banned"
    assert stored.itinerary is None


@pytest.mark.asyncio
async def test_claim_orphaned_trip(
    session_factory: async_sessionmaker[AsyncSession],
    make_trip_request: Callable[..., TripCreate],
) -> None:
    """Test that only ownerless trips can be claimed."""
    async with session_factory() as session:
        orphan = await trip_store.create_trip(session, make_trip_request())
        owned = await trip_store.create_trip(session, make_trip_request(), voyage_uid="first")

        claimed = await trip_store.claim_trip(session, orphan.id, "second")
        stolen = await trip_store.claim_trip(session, owned.id, "second")
        missing = await trip_store.claim_trip(session, 404, "second")

    assert claimed is not None and claimed.voyage_uid == "second"
    assert stolen is None
    assert missing is None


@pytest.mark.asyncio
async def test_retry_marks_feasibility_pending(
    session_factory: async_sessionmaker[AsyncSession],
    make_trip_request: Callable[..., TripCreate],
) -> None:
    """Test that re-queuing a failed trip clears its error but keeps the old itinerary until replaced."""
    async with session_factory() as session:
        trip = await trip_store.create_trip(session, make_trip_request())
        await trip_store.update_trip_itinerary(session, trip.id, {"days": [{"dayNumber": 1}]})
        await trip_store.update_trip_feasibility(session, trip.id, "warning", None, "AI unavailable")

        await trip_store.set_trip_feasibility_pending(session, trip.id)

    async with session_factory() as session:
        stored = await trip_store.get_trip(session, trip.id)

    assert stored is not None
    assert stored.feasibility_status == "pending"
    assert stored.feasibility_error is None
    assert stored.itinerary is not None
