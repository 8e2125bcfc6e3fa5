"""Storage functions for the trips table.

Each function commits its own change. Result columns are owned by the
background processor; `update_trip` is the only path that edits request
attributes and it invalidates every processed result.
"""

from typing import Any

from sqlalchemy import ColumnElement, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.models import Trip
from backend.app.models.common import FeasibilityStatus, ItineraryStatus
from backend.app.models.trip import TripCreate, TripUpdate

REQUEST_FIELDS = (
    "passport",
    "residence",
    "origin",
    "destination",
    "dates",
    "currency",
    "budget",
    "adults",
    "children",
    "infants",
    "travel_style",
)

# Columns cleared whenever the request changes. The generation lock columns are
# left alone: only the lock itself may hand a lease over.
RESET_VALUES: dict[str, Any] = {
    "feasibility_status": FeasibilityStatus.pending.value,
    "feasibility_report": None,
    "feasibility_error": None,
    "itinerary": None,
}


def trip_to_request(trip: Trip) -> TripCreate:
    """Rebuild the create payload from a stored trip (used when reprocessing)."""
    return TripCreate(
        passport=trip.passport,
        residence=trip.residence,
        origin=trip.origin,
        destination=trip.destination,
        dates=trip.dates,
        currency=trip.currency,
        budget=trip.budget,
        adults=trip.adults,
        children=trip.children,
        infants=trip.infants,
        group_size=trip.group_size,
        travel_style=trip.travel_style,
    )


async def create_trip(
    session: AsyncSession, data: TripCreate, *, voyage_uid: str | None = None
) -> Trip:
    """Insert a new trip in the pending state.

    Args:
        session: Database session
        data: Validated create payload (group size already derived)
        voyage_uid: Anonymous owner id, if known

    Returns:
        The persisted Trip row
    """
    trip = Trip(
        voyage_uid=voyage_uid,
        group_size=data.travelers,
        feasibility_status=FeasibilityStatus.pending.value,
        itinerary_status=ItineraryStatus.idle.value,
        **{field: getattr(data, field) for field in REQUEST_FIELDS},
    )
    trip.travel_style = data.travel_style.value
    session.add(trip)
    await session.commit()
    await session.refresh(trip)
    return trip


async def get_trip(session: AsyncSession, trip_id: int) -> Trip | None:
    result = await session.execute(select(Trip).where(Trip.id == trip_id))
    return result.scalar_one_or_none()


async def update_trip(session: AsyncSession, trip_id: int, changes: TripUpdate) -> Trip | None:
    """Apply request edits and reset feasibility and itinerary for reprocessing.

    Group size is re-derived from the merged party composition.

    Returns:
        Updated Trip, or None if the trip does not exist
    """
    trip = await get_trip(session, trip_id)
    if trip is None:
        return None

    supplied = changes.model_dump(exclude_unset=True)
    merged = trip_to_request(trip).model_dump()
    merged.update(supplied)
    if "group_size" not in supplied and {"adults", "children", "infants"} & supplied.keys():
        merged["group_size"] = None
    request = TripCreate.model_validate(merged)

    for field in REQUEST_FIELDS:
        setattr(trip, field, getattr(request, field))
    trip.travel_style = request.travel_style.value
    trip.group_size = request.travelers
    for column, value in RESET_VALUES.items():
        setattr(trip, column, value)

    await session.commit()
    await session.refresh(trip)
    return trip


def _lease_matches(lock_owner: str | None) -> ColumnElement[bool]:
    """Row filter for result writes.

    A writer holding the generation lease may write while it still owns it;
    a writer without one may only write while nobody holds the lease.
    """
    if lock_owner is None:
        return Trip.itinerary_lock_owner.is_(None)
    return Trip.itinerary_lock_owner == lock_owner


async def update_trip_feasibility(
    session: AsyncSession,
    trip_id: int,
    status: FeasibilityStatus | str,
    report: dict[str, Any] | None,
    error: str | None = None,
    *,
    lock_owner: str | None = None,
) -> bool:
    """Persist a feasibility verdict.

    A verdict that rules the trip out also clears any stale itinerary.

    Returns:
        False when the write was rejected because another run holds the lease
    """
    status_value = FeasibilityStatus(status).value
    values: dict[str, Any] = {
        "feasibility_status": status_value,
        "feasibility_report": report,
        "feasibility_error": error,
    }
    if status_value not in (FeasibilityStatus.yes.value, FeasibilityStatus.warning.value):
        values["itinerary"] = None
    result = await session.execute(
        update(Trip).where(Trip.id == trip_id, _lease_matches(lock_owner)).values(**values)
    )
    await session.commit()
    return result.rowcount > 0


async def set_trip_feasibility_pending(session: AsyncSession, trip_id: int) -> None:
    await session.execute(
        update(Trip)
        .where(Trip.id == trip_id)
        .values(feasibility_status=FeasibilityStatus.pending.value, feasibility_error=None)
    )
    await session.commit()


async def update_trip_itinerary(
    session: AsyncSession,
    trip_id: int,
    itinerary: dict[str, Any],
    *,
    lock_owner: str | None = None,
) -> bool:
    """Persist a generated itinerary, subject to the same lease rule as feasibility."""
    result = await session.execute(
        update(Trip).where(Trip.id == trip_id, _lease_matches(lock_owner)).values(itinerary=itinerary)
    )
    await session.commit()
    return result.rowcount > 0


async def update_trip_image(session: AsyncSession, trip_id: int, image_url: str) -> Trip | None:
    """Set the destination image only; feasibility and itinerary are untouched."""
    result = await session.execute(
        update(Trip).where(Trip.id == trip_id).values(image_url=image_url)
    )
    await session.commit()
    if result.rowcount == 0:
        return None
    trip = await get_trip(session, trip_id)
    if trip is not None:
        await session.refresh(trip)
    return trip


async def claim_trip(session: AsyncSession, trip_id: int, voyage_uid: str) -> Trip | None:
    """Adopt an orphaned trip (no owner) for voyage_uid.

    Returns:
        The trip if it is now owned by voyage_uid, None if missing or owned by someone else
    """
    await session.execute(
        update(Trip)
        .where(Trip.id == trip_id, Trip.voyage_uid.is_(None))
        .values(voyage_uid=voyage_uid)
    )
    await session.commit()
    trip = await get_trip(session, trip_id)
    if trip is None:
        return None
    await session.refresh(trip)
    return trip if trip.voyage_uid == voyage_uid else None
