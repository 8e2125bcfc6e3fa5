"""Trip aggregate models: request payloads, feasibility verdict, itinerary, costs."""

from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, ConfigDict, Field, field_validator, model_validator

from backend.app.models.common import (
    ActivityType,
    BudgetStatus,
    BudgetTier,
    CamelModel,
    FeasibilityStatus,
    Geo,
    ItineraryStatus,
    PriceSource,
    TravelStyle,
)

Verdict = Literal["yes", "warning", "no"]


class TripCreate(CamelModel):
    """Request body for POST /api/trips."""

    passport: str = Field(..., min_length=1)
    residence: str | None = None
    origin: str | None = None
    destination: str = Field(..., min_length=1)
    dates: str = Field(..., min_length=1, description="Date range, e.g. '2026-11-01 - 2026-11-07'")
    currency: str = Field("USD", min_length=3, max_length=3)
    budget: int = Field(0, ge=0)
    adults: int = Field(1, ge=1)
    children: int = Field(0, ge=0)
    infants: int = Field(0, ge=0)
    group_size: int | None = Field(None, ge=1)
    travel_style: TravelStyle = TravelStyle.standard

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _derive_group_size(self) -> "TripCreate":
        party = self.adults + self.children + self.infants
        if self.group_size is None:
            self.group_size = party
        elif self.group_size < party:
            raise ValueError(
                f"groupSize ({self.group_size}) is smaller than adults + children + infants ({party})"
            )
        elif self.group_size > party:
            # Only a head count was supplied; treat the remainder as adults
            self.adults = self.group_size - self.children - self.infants
        return self

    @property
    def travelers(self) -> int:
        """Party size (always set after validation)."""
        return self.group_size or (self.adults + self.children + self.infants)


class TripUpdate(CamelModel):
    """Request body for PATCH /api/trips/{id}; only supplied fields change."""

    passport: str | None = None
    residence: str | None = None
    origin: str | None = None
    destination: str | None = None
    dates: str | None = None
    currency: str | None = None
    budget: int | None = Field(None, ge=0)
    adults: int | None = Field(None, ge=1)
    children: int | None = Field(None, ge=0)
    infants: int | None = Field(None, ge=0)
    group_size: int | None = Field(None, ge=1)
    travel_style: TravelStyle | None = None


class DimensionAssessment(CamelModel):
    """One scored dimension of a feasibility verdict."""

    status: str
    reason: str = ""
    estimated_cost: int | None = None
    visa_type: str | None = None


class FeasibilityBreakdown(CamelModel):
    """Per-dimension verdicts."""

    visa: DimensionAssessment
    budget: DimensionAssessment
    safety: DimensionAssessment
    accessibility: DimensionAssessment | None = None


class FeasibilityReport(CamelModel):
    """Structured yes/warning/no verdict for a trip."""

    overall: Verdict
    score: int = Field(..., ge=0, le=100)
    breakdown: FeasibilityBreakdown
    summary: str = ""

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            return max(0, min(100, round(value)))
        return value


class Activity(CamelModel):
    """A single scheduled item within a day."""

    time: str = ""
    description: str = ""
    type: ActivityType = ActivityType.activity
    location: str = ""
    coordinates: Geo | None = None
    estimated_cost: int = Field(0, ge=0)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> Any:
        if isinstance(value, str) and value.lower() in ActivityType.__members__:
            return value.lower()
        return ActivityType.activity

    @field_validator("estimated_cost", mode="before")
    @classmethod
    def _coerce_cost(cls, value: Any) -> int:
        if isinstance(value, (int, float)) and value > 0:
            return round(value)
        return 0


class Day(CamelModel):
    """One day of the itinerary."""

    day_number: int = Field(..., ge=1, validation_alias=AliasChoices("dayNumber", "day_number", "day"))
    date: str = ""
    title: str = ""
    activities: list[Activity] = Field(default_factory=list)


class TravelerSummary(CamelModel):
    """Party composition shown in the cost breakdown."""

    total: int
    adults: int
    children: int = 0
    infants: int = 0
    note: str = ""


class FlightCost(CamelModel):
    """Round-trip transport line with live-data annotations."""

    total: int = Field(..., ge=0)
    per_person: int = Field(..., ge=0)
    airline: str = "Multiple Airlines"
    duration: str = "Varies"
    stops: int = 0
    booking_url: str | None = None
    note: str = ""
    source: PriceSource = "estimate"


class AccommodationCost(CamelModel):
    """Accommodation line with live-data annotations."""

    total: int = Field(..., ge=0)
    per_night: int = Field(..., ge=0)
    nights: int = Field(..., ge=0)
    hotel_name: str = ""
    rating: float | None = None
    booking_url: str | None = None
    type: str = ""
    source: PriceSource = "estimate"


class CategoryCost(CamelModel):
    """Generic category total."""

    total: int = Field(..., ge=0)
    per_day: int | None = None
    note: str = ""


class CostBreakdown(CamelModel):
    """Costs in the trip's currency; grand_total is the sum of the category totals."""

    currency: str
    currency_symbol: str
    budget_tier: BudgetTier
    travelers: TravelerSummary
    flights: FlightCost
    accommodation: AccommodationCost
    food: CategoryCost
    activities: CategoryCost
    local_transport: CategoryCost
    intercity_transport: CategoryCost
    misc: CategoryCost
    grand_total: int = Field(..., ge=0)
    per_person: int = Field(..., ge=0)
    budget_status: BudgetStatus
    savings_tips: list[str] = Field(default_factory=list)


class Itinerary(CamelModel):
    """Day-by-day plan plus the embedded cost breakdown."""

    days: list[Day] = Field(default_factory=list)
    cost_breakdown: CostBreakdown | None = None


class TripResponse(CamelModel):
    """Trip as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    voyage_uid: str | None
    passport: str
    residence: str | None
    origin: str | None
    destination: str
    dates: str
    currency: str
    budget: int
    adults: int
    children: int
    infants: int
    group_size: int
    travel_style: TravelStyle
    feasibility_status: FeasibilityStatus
    feasibility_report: FeasibilityReport | None
    feasibility_error: str | None
    itinerary: Itinerary | None
    itinerary_status: ItineraryStatus
    image_url: str | None
    created_at: datetime | None = None


class ImageUpdate(CamelModel):
    """Request body for PUT /api/trips/{id}/image."""

    image_url: str = Field(..., min_length=1)


class ItineraryStatusResponse(CamelModel):
    """Generation lock state for a trip."""

    status: ItineraryStatus
    is_locked: bool
    locked_at: datetime | None = None
    is_fresh: bool = False


class RetryResponse(CamelModel):
    """Outcome of POST /api/trips/{id}/retry.

    A denied lock is a normal outcome: `started` is false and `existing_owner`
    names the holder the client should wait for.
    """

    started: bool
    lock_owner: str | None = None
    existing_owner: str | None = None
    is_stale: bool = False
