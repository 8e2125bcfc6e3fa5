"""Trip endpoints: create, read, update, progress polling, retry and comparison."""

import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.deps import get_services, get_session
from backend.app.comparison.compare_plans import compare_plans
from backend.app.comparison.next_fix import suggest_next_fix
from backend.app.db import trips as trip_store
from backend.app.db.models import Trip
from backend.app.models.comparison import CompareRequest, CompareResponse
from backend.app.models.common import ItineraryStatus, TravelStyle
from backend.app.models.trip import (
    ImageUpdate,
    ItineraryStatusResponse,
    RetryResponse,
    TripCreate,
    TripResponse,
    TripUpdate,
)
from backend.app.orchestration.costs import minimum_budget
from backend.app.orchestration.progress import TripProgress, derive_progress
from backend.app.services import AppServices
from backend.app.utils.dates import parse_date_range, trip_length_days

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trips", tags=["trips"])

Services = Annotated[AppServices, Depends(get_services)]
Session = Annotated[AsyncSession, Depends(get_session)]
# Anonymous owner id kept by the client
VoyageUid = Annotated[str | None, Header(alias="X-Voyage-Uid", max_length=64)]


def validate_trip_request(data: TripCreate, *, today: date, min_daily_budget: int) -> tuple[str, str] | None:
    """Synchronous checks that run before any row is written.

    Returns:
        (message, field) for the first failing check, or None when valid
    """
    date_range = parse_date_range(data.dates)
    if date_range is None:
        return ("Could not understand the travel dates. Use a range like 2026-11-01 - 2026-11-07.", "dates")
    start_date, end_date = date_range
    if start_date < today:
        return ("Travel dates must be in the future. Please select upcoming dates.", "dates")

    # Only custom budgets are held to the absolute floor
    if data.travel_style == TravelStyle.custom:
        num_days = trip_length_days(start_date, end_date)
        floor = minimum_budget(data.currency, num_days, data.travelers, min_daily_budget)
        if data.budget < floor:
            return (
                f"Budget too low. Minimum budget for {data.travelers} traveler(s) for {num_days} days "
                f"is approximately {data.currency} {floor:,}",
                "budget",
            )
    return None


def _raise_if_invalid(data: TripCreate, services: AppServices) -> None:
    error = validate_trip_request(
        data,
        today=services.processor.today_fn(),
        min_daily_budget=services.settings.min_daily_budget_per_person,
    )
    if error is not None:
        message, field = error
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": message, "field": field},
        )


async def _get_trip_or_404(session: AsyncSession, trip_id: int) -> Trip:
    trip = await trip_store.get_trip(session, trip_id)
    if trip is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
    return trip


def _merged_request(existing: Trip, changes: TripUpdate) -> TripCreate:
    """Stored inputs with the edits applied, validated like a create payload."""
    merged = trip_store.trip_to_request(existing).model_dump(exclude={"group_size"})
    merged.update(changes.model_dump(exclude_unset=True))
    try:
        return TripCreate.model_validate(merged)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e


def _schedule(services: AppServices, trip_id: int, request: TripCreate, lock_owner: str | None = None) -> None:
    # Pollers see a fresh run immediately instead of the previous run's result
    services.progress.start(trip_id)
    services.worker.submit(
        services.processor.process(trip_id, request, lock_owner=lock_owner),
        name=f"process-trip-{trip_id}",
    )


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    data: TripCreate, services: Services, session: Session, voyage_uid: VoyageUid = None
) -> TripResponse:
    """Create a pending trip and start background processing.

    The response returns immediately; clients poll /progress for the pipeline.
    """
    _raise_if_invalid(data, services)

    trip = await trip_store.create_trip(session, data, voyage_uid=voyage_uid)
    logger.info(f"Created trip {trip.id}: {data.passport} -> {data.destination} ({data.dates})")
    _schedule(services, trip.id, data)
    return TripResponse.model_validate(trip)


@router.post("/compare", response_model=CompareResponse)
async def compare_trips(body: CompareRequest, session: Session) -> CompareResponse:
    """Diff two trips and propose the single most useful next change."""
    original = TripResponse.model_validate(await _get_trip_or_404(session, body.original_trip_id))
    updated = TripResponse.model_validate(await _get_trip_or_404(session, body.updated_trip_id))

    comparison = compare_plans(original, updated)
    return CompareResponse(comparison=comparison, next_fix=suggest_next_fix(comparison))


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(trip_id: int, session: Session, voyage_uid: VoyageUid = None) -> TripResponse:
    """Fetch a trip. A caller sending its voyage uid adopts a trip that has no owner yet."""
    trip = await _get_trip_or_404(session, trip_id)
    if voyage_uid and trip.voyage_uid is None:
        claimed = await trip_store.claim_trip(session, trip_id, voyage_uid)
        if claimed is not None:
            logger.info(f"Trip {trip_id} claimed by {voyage_uid}")
            trip = claimed
    return TripResponse.model_validate(trip)


@router.patch("/{trip_id}", response_model=TripResponse)
async def update_trip(trip_id: int, changes: TripUpdate, services: Services, session: Session) -> TripResponse:
    """Edit trip inputs. Processed results are discarded and the trip is reprocessed.

    The edit takes the generation lease first, so it is refused with 409 while
    another run is still generating; that run's results would belong to the old inputs.
    """
    existing = await _get_trip_or_404(session, trip_id)
    _raise_if_invalid(_merged_request(existing, changes), services)

    lease = await services.lock.acquire(trip_id)
    if not lease.acquired or lease.lock_owner is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": "Itinerary generation in progress. Try again when it finishes.",
                "existingOwner": lease.existing_owner,
            },
        )

    try:
        trip = await trip_store.update_trip(session, trip_id, changes)
    except Exception:
        await services.lock.release(trip_id, lease.lock_owner, ItineraryStatus.idle)
        raise
    if trip is None:
        await services.lock.release(trip_id, lease.lock_owner, ItineraryStatus.idle)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")

    _schedule(services, trip_id, trip_store.trip_to_request(trip), lock_owner=lease.lock_owner)
    return TripResponse.model_validate(trip)


@router.put("/{trip_id}/image", response_model=TripResponse)
async def update_trip_image(trip_id: int, body: ImageUpdate, session: Session) -> TripResponse:
    """Set the cover image. Feasibility and itinerary are left untouched."""
    trip = await trip_store.update_trip_image(session, trip_id, body.image_url)
    if trip is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
    return TripResponse.model_validate(trip)


@router.get("/{trip_id}/progress", response_model=TripProgress)
async def get_trip_progress(trip_id: int, services: Services, session: Session) -> TripProgress:
    """Live progress, or a best-effort status derived from the stored trip."""
    live = services.progress.get(trip_id)
    if live is not None:
        return live
    return derive_progress(await _get_trip_or_404(session, trip_id))


@router.get("/{trip_id}/itinerary-status", response_model=ItineraryStatusResponse)
async def get_itinerary_status(trip_id: int, services: Services) -> ItineraryStatusResponse:
    lock_status = await services.lock.get_status(trip_id)
    if lock_status is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
    return ItineraryStatusResponse(
        status=lock_status.status,
        is_locked=lock_status.is_locked,
        locked_at=lock_status.locked_at,
        is_fresh=lock_status.is_fresh,
    )


@router.post("/{trip_id}/retry", response_model=RetryResponse)
async def retry_trip(trip_id: int, services: Services, session: Session) -> RetryResponse:
    """Re-run processing under the generation lock.

    When another session already holds a fresh lock nothing is started and the
    caller should keep polling.
    """
    trip = await _get_trip_or_404(session, trip_id)

    result = await services.lock.acquire(trip_id)
    if not result.acquired:
        logger.info(f"Retry for trip {trip_id} skipped: generation in progress by {result.existing_owner}")
        return RetryResponse(started=False, existing_owner=result.existing_owner)

    request = trip_store.trip_to_request(trip)
    await trip_store.set_trip_feasibility_pending(session, trip_id)
    _schedule(services, trip_id, request, lock_owner=result.lock_owner)
    return RetryResponse(
        started=True,
        lock_owner=result.lock_owner,
        existing_owner=result.existing_owner,
        is_stale=result.is_stale,
    )
