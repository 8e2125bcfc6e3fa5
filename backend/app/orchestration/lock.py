"""DB-backed lease guarding itinerary generation for a trip.

The lock lives on the trip row (itinerary_status, itinerary_locked_at,
itinerary_lock_owner). Every state change is a single conditional UPDATE
whose WHERE clause re-checks what was read, so two concurrent acquirers
cannot both win: the loser's UPDATE matches zero rows.
"""

import asyncio
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.app.db.models import Trip
from backend.app.models.common import ItineraryStatus
from backend.app.utils.dates import utcnow
from backend.app.utils.metrics import record_lock_attempt

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = timedelta(minutes=10)

FINAL_STATUSES = (ItineraryStatus.complete, ItineraryStatus.error, ItineraryStatus.idle)


@dataclass(frozen=True)
class LockResult:
    """Outcome of an acquire attempt."""

    acquired: bool
    lock_owner: str | None = None
    is_stale: bool = False
    existing_owner: str | None = None


@dataclass(frozen=True)
class LockStatus:
    """Read-only view of a trip's generation lock."""

    status: str
    is_locked: bool
    locked_at: datetime | None
    is_fresh: bool


class ItineraryGenerationLock:
    """Lease with heartbeat over the trips table."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        timeout: timedelta = DEFAULT_LOCK_TIMEOUT,
        refresh_interval_s: float | None = None,
        now_fn: Callable[[], datetime] = utcnow,
    ) -> None:
        self.session_factory = session_factory
        self.timeout = timeout
        # Default heartbeat is a tenth of the timeout (60s for 10 minutes)
        self.refresh_interval_s = (
            refresh_interval_s if refresh_interval_s is not None else timeout.total_seconds() / 10
        )
        self.now_fn = now_fn

    def _is_stale(self, locked_at: datetime | None, now: datetime) -> bool:
        return locked_at is None or now - locked_at > self.timeout

    async def acquire(self, trip_id: int) -> LockResult:
        """Try to take the lock for trip_id.

        Returns:
            LockResult with acquired=True and a fresh owner token on success
            (is_stale=True when an abandoned lock was taken over), or
            acquired=False carrying the current owner when a fresh lock is held
            or the trip does not exist.
        """
        async with self.session_factory() as session:
            result = await session.execute(
                select(
                    Trip.itinerary_status, Trip.itinerary_locked_at, Trip.itinerary_lock_owner
                ).where(Trip.id == trip_id)
            )
            row = result.one_or_none()
            if row is None:
                record_lock_attempt("missing")
                return LockResult(acquired=False)

            current_status, locked_at, current_owner = row
            now = self.now_fn()
            new_owner = uuid.uuid4().hex

            if current_status != ItineraryStatus.generating.value:
                is_stale = False
                condition = [
                    Trip.itinerary_status != ItineraryStatus.generating.value,
                ]
            elif self._is_stale(locked_at, now):
                is_stale = True
                condition = [
                    Trip.itinerary_status == ItineraryStatus.generating.value,
                    or_(
                        Trip.itinerary_locked_at.is_(None),
                        Trip.itinerary_locked_at < now - self.timeout,
                    ),
                ]
            else:
                record_lock_attempt("denied")
                return LockResult(acquired=False, existing_owner=current_owner)

            # Owner must still be what we read (NULL-safe)
            if current_owner is None:
                condition.append(Trip.itinerary_lock_owner.is_(None))
            else:
                condition.append(Trip.itinerary_lock_owner == current_owner)

            updated = await session.execute(
                update(Trip)
                .where(Trip.id == trip_id, *condition)
                .values(
                    itinerary_status=ItineraryStatus.generating.value,
                    itinerary_locked_at=now,
                    itinerary_lock_owner=new_owner,
                )
            )
            await session.commit()

            if updated.rowcount == 0:
                # Lost the race; report whoever holds it now
                winner = await session.execute(
                    select(Trip.itinerary_lock_owner).where(Trip.id == trip_id)
                )
                record_lock_attempt("denied")
                return LockResult(acquired=False, existing_owner=winner.scalar_one_or_none())

        if is_stale:
            logger.warning(
                f"Took over stale itinerary lock for trip {trip_id} (previous owner {current_owner})"
            )
            record_lock_attempt("stale_takeover")
        else:
            record_lock_attempt("acquired")
        return LockResult(acquired=True, lock_owner=new_owner, is_stale=is_stale, existing_owner=current_owner)

    async def release(
        self,
        trip_id: int,
        lock_owner: str,
        final_status: ItineraryStatus = ItineraryStatus.complete,
    ) -> bool:
        """Clear the lock and set the final status, only if lock_owner still holds it.

        Returns:
            True if released, False if another owner holds the lock (no-op)
        """
        if final_status not in FINAL_STATUSES:
            raise ValueError(f"Invalid final status: {final_status}")

        async with self.session_factory() as session:
            result = await session.execute(
                update(Trip)
                .where(Trip.id == trip_id, Trip.itinerary_lock_owner == lock_owner)
                .values(
                    itinerary_status=final_status.value,
                    itinerary_locked_at=None,
                    itinerary_lock_owner=None,
                )
            )
            await session.commit()

        released = result.rowcount > 0
        if not released:
            logger.warning(f"Ignored itinerary lock release for trip {trip_id}: owner mismatch")
        return released

    async def refresh(self, trip_id: int, lock_owner: str) -> bool:
        """Bump locked_at while the holder is still working."""
        async with self.session_factory() as session:
            result = await session.execute(
                update(Trip)
                .where(
                    Trip.id == trip_id,
                    Trip.itinerary_lock_owner == lock_owner,
                    Trip.itinerary_status == ItineraryStatus.generating.value,
                )
                .values(itinerary_locked_at=self.now_fn())
            )
            await session.commit()
        return result.rowcount > 0

    async def get_status(self, trip_id: int) -> LockStatus | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Trip.itinerary_status, Trip.itinerary_locked_at).where(Trip.id == trip_id)
            )
            row = result.one_or_none()
        if row is None:
            return None

        current_status, locked_at = row
        is_locked = current_status == ItineraryStatus.generating.value
        return LockStatus(
            status=current_status,
            is_locked=is_locked,
            locked_at=locked_at,
            is_fresh=is_locked and not self._is_stale(locked_at, self.now_fn()),
        )

    def start_heartbeat(self, trip_id: int, lock_owner: str) -> asyncio.Task[None]:
        """Refresh the lease periodically until the returned task is cancelled."""
        return asyncio.create_task(self._heartbeat(trip_id, lock_owner))

    async def _heartbeat(self, trip_id: int, lock_owner: str) -> None:
        while True:
            await asyncio.sleep(self.refresh_interval_s)
            if not await self.refresh(trip_id, lock_owner):
                logger.warning(f"Lost itinerary lock for trip {trip_id}; stopping heartbeat")
                return
