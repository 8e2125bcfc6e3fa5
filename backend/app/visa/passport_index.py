"""Passport Index dataset: bulk-loaded passport -> destination requirement matrix.

CSV columns: Passport,Destination,Requirement. Requirement is either a
number of visa-free days or a keyword ("visa required", "e-visa", ...).
The full dataset (~39,000 routes) is published at
https://github.com/ilyankou/passport-index-dataset.
"""

import csv
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from backend.app.models.visa import VisaRequirement, status_label
from backend.app.utils.dates import utcnow
from backend.app.visa.countries import country_code, display_name, normalize_country

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PassportIndexEntry:
    passport: str
    destination: str
    requirement: str
    status: str
    days: int | None = None


def parse_requirement(requirement: str) -> tuple[str, int | None]:
    """Normalize a raw requirement value into (status, days)."""
    req = requirement.strip().lower()

    if re.fullmatch(r"\d+", req):
        return "visa_free", int(req)
    if req in ("visa free", "free"):
        return "visa_free", None
    if req in ("e-visa", "evisa", "e visa"):
        return "e_visa", None
    if req == "eta" or "electronic travel" in req:
        return "eta", None
    if req in ("visa on arrival", "voa"):
        return "visa_on_arrival", None
    if req in ("visa required", "visa"):
        return "visa_required", None
    if "ban" in req:
        return "covid_ban", None
    if req in ("no admission", "-1"):
        return "no_admission", None

    logger.warning(f"Unknown passport index requirement: {requirement!r}")
    return "visa_required", None


class PassportIndex:
    """In-memory nested map passport -> destination -> entry."""

    def __init__(self) -> None:
        self._matrix: dict[str, dict[str, PassportIndexEntry]] = {}
        self.loaded_at: datetime | None = None

    def load(self, path: Path) -> int:
        """Load the CSV. A missing file leaves the index empty.

        Returns:
            Number of routes loaded
        """
        if not path.exists():
            logger.error(f"Passport index CSV not found at {path}")
            return 0

        matrix: dict[str, dict[str, PassportIndexEntry]] = {}
        count = 0
        with path.open(newline="", encoding="utf-8") as f:
            reader = csv.reader(f)
            next(reader, None)  # header
            for row in reader:
                if len(row) < 3:
                    continue
                passport, destination, requirement = (cell.strip() for cell in row[:3])
                if not passport or not destination or not requirement:
                    continue
                status, days = parse_requirement(requirement)
                matrix.setdefault(passport.lower(), {})[destination.lower()] = PassportIndexEntry(
                    passport=passport,
                    destination=destination,
                    requirement=requirement,
                    status=status,
                    days=days,
                )
                count += 1

        self._matrix = matrix
        self.loaded_at = utcnow()
        logger.info(f"Loaded {count} visa routes from passport index")
        return count

    def _entry(self, passport: str, destination: str) -> PassportIndexEntry | None:
        routes = self._matrix.get(normalize_country(passport))
        if routes is None:
            return None
        return routes.get(normalize_country(destination))

    def lookup(self, passport: str, destination: str) -> VisaRequirement | None:
        """Look up a corridor by country name, alias or ISO code."""
        entry = self._entry(passport, destination)
        if entry is None:
            return None
        return VisaRequirement(
            passport=display_name(entry.passport),
            passport_code=country_code(entry.passport),
            destination=display_name(entry.destination),
            destination_code=country_code(entry.destination),
            status=entry.status,  # type: ignore[arg-type]
            status_label=status_label(entry.status, entry.days),
            days=entry.days,
            source="passport_index",
        )

    def has_route(self, passport: str, destination: str) -> bool:
        return self._entry(passport, destination) is not None

    def destinations_for(self, passport: str) -> list[PassportIndexEntry]:
        return list(self._matrix.get(normalize_country(passport), {}).values())

    def stats(self) -> dict[str, object]:
        return {
            "total_routes": sum(len(routes) for routes in self._matrix.values()),
            "passports": len(self._matrix),
            "loaded_at": self.loaded_at.isoformat() if self.loaded_at else None,
        }
