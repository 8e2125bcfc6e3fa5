"""Turn model output into validated days, with a curated placeholder as last resort."""

import logging
from datetime import date, timedelta
from typing import Any

from pydantic import ValidationError

from backend.app.data.destinations import lookup_destination
from backend.app.models.common import ActivityType, Geo
from backend.app.models.trip import Activity, Day

logger = logging.getLogger(__name__)


def _activity_from_payload(raw: dict[str, Any]) -> Activity | None:
    try:
        return Activity.model_validate(raw)
    except ValidationError:
        pass
    # Retry without coordinates (out-of-range lat/lng)
    try:
        return Activity.model_validate({**raw, "coordinates": None})
    except ValidationError as e:
        logger.warning(f"Dropping malformed activity: {e.error_count()} errors")
        return None


def days_from_payload(payload: Any, start_date: date, num_days: int) -> list[Day]:
    """Validate each day independently and keep those that survive.

    Days without a usable activity are dropped; activities with no description
    are dropped. Days are renumbered and re-dated from start_date, and anything
    beyond num_days is discarded.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("days"), list):
        return []

    days: list[Day] = []
    for raw in payload["days"]:
        if not isinstance(raw, dict):
            continue
        activities = [
            activity
            for activity in (
                _activity_from_payload(a)
                for a in raw.get("activities") or []
                if isinstance(a, dict) and str(a.get("description") or "").strip()
            )
            if activity is not None
        ]
        if not activities:
            continue
        index = len(days)
        days.append(
            Day(
                day_number=index + 1,
                date=(start_date + timedelta(days=index)).isoformat(),
                title=str(raw.get("title") or f"Day {index + 1}"),
                activities=activities,
            )
        )
        if len(days) == num_days:
            break
    return days


def placeholder_days(destination: str, num_days: int, start_date: date) -> list[Day]:
    """Simple plan from curated attractions when no other source produced days.

    Costs are USD per person and get repriced during cost synthesis.
    """
    info = lookup_destination(destination)
    center = info.center if info else None
    attractions = info.attractions if info else ()

    def sight(index: int) -> tuple[str, Geo | None]:
        if attractions:
            attraction = attractions[index % len(attractions)]
            return attraction.name, attraction.geo
        return destination, center

    days = []
    for i in range(num_days):
        first = i == 0
        last = i == num_days - 1
        morning_name, morning_geo = sight(i * 2)
        afternoon_name, afternoon_geo = sight(i * 2 + 1)

        activities = [
            Activity(time="14:00", description="Arrive and check in", type=ActivityType.transport,
                     location=f"{destination} Airport", coordinates=center, estimated_cost=30)
            if first
            else Activity(time="09:00", description=f"Visit {morning_name}", type=ActivityType.activity,
                          location=morning_name, coordinates=morning_geo, estimated_cost=40),
            Activity(time="13:00", description="Lunch at local restaurant", type=ActivityType.meal,
                     location="Local restaurant", coordinates=afternoon_geo, estimated_cost=25),
            Activity(time="15:00", description="Depart from airport", type=ActivityType.transport,
                     location=f"{destination} Airport", coordinates=center, estimated_cost=30)
            if last
            else Activity(time="15:00", description=f"Explore {afternoon_name}", type=ActivityType.activity,
                          location=afternoon_name, coordinates=afternoon_geo, estimated_cost=35),
        ]
        if not last:
            activities.append(
                Activity(time="19:00", description="Dinner", type=ActivityType.meal,
                         location="Local restaurant", coordinates=center, estimated_cost=35)
            )

        title = "Arrival Day" if first else "Departure Day" if last else f"Day {i + 1} in {destination}"
        days.append(
            Day(
                day_number=i + 1,
                date=(start_date + timedelta(days=i)).isoformat(),
                title=title,
                activities=activities,
            )
        )
    return days
