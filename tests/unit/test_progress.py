"""Tests for in-memory progress tracking."""

import asyncio

import pytest

from backend.app.db.models import Trip
from backend.app.orchestration.progress import (
    ProgressStep,
    ProgressTracker,
    derive_progress,
    percent_complete,
)


class Ticker:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.mark.parametrize(
    ("step", "expected"),
    [(-1, 0), (0, 0), (1, 17), (3, 50), (5, 83), (6, 100)],
)
def test_percent_complete(step: int, expected: int) -> None:
    assert percent_complete(step) == expected


def test_update_keeps_start_time() -> None:
    """Test that elapsed time is measured from start across updates."""
    clock = Ticker()
    tracker = ProgressTracker(clock=clock)

    tracker.start(7)
    clock.now += 12
    tracker.update(7, ProgressStep.HOTELS, "Searching Paris")
    progress = tracker.get(7)

    assert progress is not None
    assert progress.step == 3
    assert progress.message == "Finding accommodation..."
    assert progress.details == "Searching Paris"
    assert progress.elapsed == 12
    assert progress.percent_complete == 50


def test_fail_reports_error_step() -> None:
    tracker = ProgressTracker()
    tracker.start(1)

    tracker.fail(1, "provider down")
    progress = tracker.get(1)

    assert progress is not None
    assert progress.step == -1
    assert progress.percent_complete == 0
    assert progress.message == "Error processing trip"


def test_unknown_trip_has_no_record() -> None:
    assert ProgressTracker().get(404) is None


@pytest.mark.asyncio
async def test_complete_record_expires_after_grace_period() -> None:
    """Test that completed records are removed once the grace period elapses."""
    tracker = ProgressTracker(grace_period_s=0.01)
    tracker.start(5)

    tracker.complete(5)
    assert tracker.get(5) is not None
    assert tracker.get(5).percent_complete == 100  # type: ignore[union-attr]

    await asyncio.sleep(0.05)
    assert 5 not in tracker


@pytest.mark.asyncio
async def test_restart_cancels_pending_expiry() -> None:
    """Test that restarting a trip keeps its new record alive."""
    tracker = ProgressTracker(grace_period_s=0.01)
    tracker.start(5)
    tracker.complete(5)

    tracker.start(5)
    await asyncio.sleep(0.05)

    assert 5 in tracker
    assert tracker.get(5).step == 0  # type: ignore[union-attr]


def test_discard_removes_record() -> None:
    tracker = ProgressTracker()
    tracker.start(2)
    tracker.discard(2)
    assert 2 not in tracker


def _trip(**fields: object) -> Trip:
    defaults: dict[str, object] = {"feasibility_status": "pending", "itinerary": None}
    defaults.update(fields)
    return Trip(**defaults)


def test_derive_progress_from_stored_trip() -> None:
    """Test the fallback progress derived from persisted state."""
    assert derive_progress(_trip()).message == "Waiting to start..."

    done = derive_progress(_trip(feasibility_status="yes", itinerary={"days": []}))
    assert done.percent_complete == 100

    in_flight = derive_progress(_trip(feasibility_status="warning"))
    assert in_flight.step == ProgressStep.ITINERARY

    rejected = derive_progress(_trip(feasibility_status="no"))
    assert rejected.details == "Trip is not feasible; no itinerary will be generated"
