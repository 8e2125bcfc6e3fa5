"""Hand-curated corridor data (verified visa details for well-known passport/destination pairs).

Curated files take precedence over the passport index and the paid API.
"""

import json
import logging
from pathlib import Path
from typing import Any

from backend.app.models.visa import VisaRequirement, status_label
from backend.app.visa.countries import country_code, display_name

logger = logging.getLogger(__name__)

# Corridor visa types -> normalized statuses
CORRIDOR_TYPE_STATUS: dict[str, str] = {
    "visa_free": "visa_free",
    "visa_on_arrival": "visa_on_arrival",
    "e_visa": "e_visa",
    "embassy_visa": "visa_required",
    "not_allowed": "no_admission",
}


def corridor_to_requirement(data: dict[str, Any]) -> VisaRequirement:
    """Convert a corridor document into a VisaRequirement."""
    corridor = data["corridor"]
    visa = data["visa"]
    status = CORRIDOR_TYPE_STATUS.get(visa.get("type", ""), "unknown")
    max_stay = (data.get("stayLimits") or {}).get("maxStay")
    processing = visa.get("processingDays") or {}
    cost = visa.get("cost") or {}
    days = max_stay if status == "visa_free" else None

    return VisaRequirement(
        passport=corridor["passport"],
        passport_code=corridor.get("passportCode") or country_code(corridor["passport"]),
        destination=corridor["destination"],
        destination_code=corridor.get("destinationCode") or country_code(corridor["destination"]),
        status=status,  # type: ignore[arg-type]
        status_label=visa.get("name") or status_label(status, days),
        days=days,
        source="corridor",
        processing_days_min=processing.get("minimum"),
        processing_days_max=processing.get("maximum"),
        cost=cost.get("government"),
        cost_currency=cost.get("currency"),
        application_url=visa.get("applicationUrl"),
        documents_required=list(visa.get("documentsRequired") or []),
        notes=list(visa.get("notes") or []) + list(data.get("tips") or []),
    )


class CorridorStore:
    """Corridor JSON documents keyed by (passport code, destination code)."""

    def __init__(self) -> None:
        self._corridors: dict[tuple[str, str], VisaRequirement] = {}

    def load_dir(self, directory: Path) -> int:
        """Load every *.json file in a directory. Invalid files are skipped.

        Returns:
            Number of corridors loaded
        """
        if not directory.is_dir():
            logger.warning(f"Corridor data directory not found: {directory}")
            return 0

        for path in sorted(directory.glob("*.json")):
            try:
                requirement = corridor_to_requirement(json.loads(path.read_text(encoding="utf-8")))
            except (OSError, ValueError, KeyError) as e:
                logger.warning(f"Skipping corridor file {path.name}: {e}")
                continue
            self._corridors[(requirement.passport_code, requirement.destination_code)] = requirement

        logger.info(f"Loaded {len(self._corridors)} curated visa corridors")
        return len(self._corridors)

    def get(self, passport: str, destination_country: str) -> VisaRequirement | None:
        key = (country_code(passport), country_code(destination_country))
        return self._corridors.get(key)

    def corridors(self) -> list[str]:
        return sorted(f"{display_name(p)} -> {display_name(d)}" for p, d in self._corridors)
