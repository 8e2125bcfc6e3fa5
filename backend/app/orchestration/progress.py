"""In-memory progress records for trips being processed.

Clients poll these by trip id. When no record exists (never started, or
deleted after the grace period) progress is derived from the stored trip.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum

from pydantic import Field

from backend.app.db.models import Trip
from backend.app.models.common import CamelModel

logger = logging.getLogger(__name__)


class ProgressStep(IntEnum):
    """Fixed pipeline steps; ERROR is reported as -1."""

    ERROR = -1
    STARTING = 0
    FEASIBILITY = 1
    FLIGHTS = 2
    HOTELS = 3
    ITINERARY = 4
    FINALIZING = 5
    COMPLETE = 6


TOTAL_STEPS = 6

STEP_MESSAGES: dict[ProgressStep, str] = {
    ProgressStep.ERROR: "Error processing trip",
    ProgressStep.STARTING: "Starting trip analysis...",
    ProgressStep.FEASIBILITY: "Checking visa requirements and feasibility...",
    ProgressStep.FLIGHTS: "Searching for flights...",
    ProgressStep.HOTELS: "Finding accommodation...",
    ProgressStep.ITINERARY: "Building your itinerary...",
    ProgressStep.FINALIZING: "Calculating costs and finalizing...",
    ProgressStep.COMPLETE: "Trip ready!",
}


@dataclass
class ProgressRecord:
    step: int
    message: str
    details: str | None
    started_at: float
    updated_at: float


class TripProgress(CamelModel):
    """Progress payload returned to polling clients."""

    step: int
    message: str
    details: str | None = None
    elapsed: int = Field(0, description="Seconds since processing started")
    total_steps: int = TOTAL_STEPS
    percent_complete: int = 0


def percent_complete(step: int) -> int:
    if step < 0:
        return 0
    return min(100, round(step / TOTAL_STEPS * 100))


@dataclass
class ProgressTracker:
    """Process-wide map of trip id to progress record.

    Access is serialized by the event loop; no locking is needed between awaits.
    """

    grace_period_s: float = 30.0
    clock: Callable[[], float] = time.monotonic
    _records: dict[int, ProgressRecord] = field(default_factory=dict)
    _cleanups: dict[int, asyncio.TimerHandle] = field(default_factory=dict)

    def start(self, trip_id: int) -> None:
        self._cancel_cleanup(trip_id)
        now = self.clock()
        self._records[trip_id] = ProgressRecord(
            step=ProgressStep.STARTING,
            message=STEP_MESSAGES[ProgressStep.STARTING],
            details=None,
            started_at=now,
            updated_at=now,
        )

    def update(self, trip_id: int, step: ProgressStep, details: str | None = None) -> None:
        """Move a trip to `step`, keeping its original start time."""
        now = self.clock()
        existing = self._records.get(trip_id)
        self._records[trip_id] = ProgressRecord(
            step=int(step),
            message=STEP_MESSAGES[step],
            details=details,
            started_at=existing.started_at if existing else now,
            updated_at=now,
        )

    def fail(self, trip_id: int, details: str | None = None) -> None:
        self.update(trip_id, ProgressStep.ERROR, details)

    def complete(self, trip_id: int, details: str | None = None) -> None:
        """Mark complete and schedule the record's removal after the grace period."""
        self.update(trip_id, ProgressStep.COMPLETE, details)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._cancel_cleanup(trip_id)
        self._cleanups[trip_id] = loop.call_later(self.grace_period_s, self._expire, trip_id)

    def get(self, trip_id: int) -> TripProgress | None:
        record = self._records.get(trip_id)
        if record is None:
            return None
        return TripProgress(
            step=record.step,
            message=record.message,
            details=record.details,
            elapsed=int(self.clock() - record.started_at),
            percent_complete=percent_complete(record.step),
        )

    def discard(self, trip_id: int) -> None:
        self._cancel_cleanup(trip_id)
        self._records.pop(trip_id, None)

    def __contains__(self, trip_id: object) -> bool:
        return trip_id in self._records

    def _expire(self, trip_id: int) -> None:
        self._cleanups.pop(trip_id, None)
        self._records.pop(trip_id, None)
        logger.debug(f"Progress record for trip {trip_id} expired")

    def _cancel_cleanup(self, trip_id: int) -> None:
        handle = self._cleanups.pop(trip_id, None)
        if handle is not None:
            handle.cancel()


def derive_progress(trip: Trip) -> TripProgress:
    """Best-effort progress from persisted state when no live record exists."""
    if trip.itinerary is not None:
        step: int = ProgressStep.COMPLETE
        message = STEP_MESSAGES[ProgressStep.COMPLETE]
        percent = 100
    elif trip.feasibility_status == "pending":
        step = ProgressStep.STARTING
        message = "Waiting to start..."
        percent = 0
    else:
        step = ProgressStep.ITINERARY
        message = STEP_MESSAGES[ProgressStep.ITINERARY]
        percent = percent_complete(step)

    details = None
    if trip.feasibility_status == "no":
        details = "Trip is not feasible; no itinerary will be generated"
    return TripProgress(step=int(step), message=message, details=details, percent_complete=percent)
