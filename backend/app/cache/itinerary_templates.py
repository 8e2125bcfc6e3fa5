"""Itinerary template cache keyed by normalized destination.

Templates hold day titles and activities only. Dates are re-derived from the
requesting trip's start date and costs are assigned later by cost synthesis,
so one template serves trips with different dates and party sizes.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, timedelta

from backend.app.data.itinerary_seeds import SEED_TEMPLATES, SeedDay
from backend.app.models.common import Geo
from backend.app.models.trip import Activity, Day
from backend.app.utils.metrics import record_cache_event

logger = logging.getLogger(__name__)

# Only itineraries at least this long are worth caching
MIN_CACHEABLE_DAYS = 5


def normalize_destination(destination: str) -> str:
    """'Paris, France' -> 'paris'; 'New York' -> 'new_york'."""
    name = re.sub(r",.*$", "", destination.lower()).strip()
    return re.sub(r"\s+", "_", name)


@dataclass
class DayTemplate:
    """A day without its date or costs."""

    title: str
    activities: list[Activity]


@dataclass
class ItineraryTemplateCache:
    """Process-local store of reusable day templates."""

    _templates: dict[str, list[DayTemplate]] = field(default_factory=dict)

    def get(self, destination: str, num_days: int, start_date: date) -> list[Day] | None:
        """Return `num_days` re-dated days, or None if no long-enough template exists."""
        key = normalize_destination(destination)
        template = self._templates.get(key)

        if template is None or len(template) < num_days:
            record_cache_event("itinerary_template", "miss")
            return None

        record_cache_event("itinerary_template", "hit")
        days = []
        for index, day_template in enumerate(template[:num_days]):
            days.append(
                Day(
                    day_number=index + 1,
                    date=(start_date + timedelta(days=index)).isoformat(),
                    title=day_template.title,
                    activities=[
                        activity.model_copy(update={"estimated_cost": 0})
                        for activity in day_template.activities
                    ],
                )
            )
        return days

    def put(self, destination: str, days: list[Day]) -> bool:
        """Store an itinerary as a template if it is long enough.

        Returns:
            True when the template was stored
        """
        if len(days) < MIN_CACHEABLE_DAYS:
            return False

        key = normalize_destination(destination)
        existing = self._templates.get(key)
        if existing is not None and len(existing) > len(days):
            # Keep the longer template so more trip lengths can be served
            return False

        self._templates[key] = [
            DayTemplate(
                title=day.title,
                activities=[a.model_copy(update={"estimated_cost": 0}) for a in day.activities],
            )
            for day in sorted(days, key=lambda d: d.day_number)
        ]
        logger.info(f"Cached {len(days)}-day itinerary template for {key}")
        return True

    def seed(self, seeds: dict[str, list[SeedDay]] | None = None) -> int:
        """Load curated templates. Returns the number of destinations loaded."""
        seeds = SEED_TEMPLATES if seeds is None else seeds
        for destination, seed_days in seeds.items():
            self._templates[normalize_destination(destination)] = [
                DayTemplate(
                    title=title,
                    activities=[
                        Activity(
                            time=time,
                            description=description,
                            type=kind,
                            location=location,
                            coordinates=Geo(lat=lat, lng=lng),
                        )
                        for time, description, kind, location, lat, lng in activities
                    ],
                )
                for title, activities in seed_days
            ]
        logger.info(f"Seeded itinerary template cache with {len(seeds)} destinations")
        return len(seeds)

    def destinations(self) -> list[str]:
        return sorted(self._templates)

    def __len__(self) -> int:
        return len(self._templates)
