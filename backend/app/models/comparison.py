"""Plan comparison and next-fix suggestion models.

Money fields are `int | None`: None means the value is unknown, never zero.
"""

from typing import Literal

from pydantic import Field

from backend.app.models.common import CamelModel

VisaRisk = Literal["low", "medium", "high"]
Confidence = Literal["high", "medium", "low"]
CostDirection = Literal["up", "down", "same", "unavailable"]
CertaintyDirection = Literal["improved", "worsened", "same", "unavailable"]
Preferred = Literal["A", "B", "neutral"]

FixId = Literal[
    "ADD_BUFFER_DAYS",
    "REDUCE_COST",
    "LOWER_VISA_RISK",
    "SIMPLIFY_ITINERARY",
    "IMPROVE_CERTAINTY",
    "REFRESH_PRICING",
    "SAVE_VERSION",
    "REVERT_CHANGE",
]
ActionType = Literal["OPEN_EDITOR", "APPLY_PATCH", "TRIGGER_FLOW"]
EditorTarget = Literal["dates", "budget", "hotels", "flights", "itinerary", "visa_docs", "save"]


class PlanInputs(CamelModel):
    passport: str
    destination: str
    dates: str
    budget: int
    travelers: int
    travel_style: str | None = None


class CertaintySnapshot(CamelModel):
    score: int | None
    visa_risk: VisaRisk
    visa_type: str = "unknown"
    buffer_days: int = 0
    accessibility_status: str | None = None
    safety_status: str | None = None


class CostSnapshot(CamelModel):
    currency_symbol: str = "$"
    flights: int | None = None
    stay: int | None = None
    activities: int | None = None
    visa: int | None = None
    insurance: int | None = None
    food: int | None = None
    transport: int | None = None
    misc: int | None = None
    total: int | None = None


class ItinerarySummary(CamelModel):
    day_count: int = 0
    highlights: list[str] = Field(default_factory=list)
    activities: int = 0


class PlanSnapshot(CamelModel):
    """A trip normalized into comparable fields."""

    label: Literal["original", "updated"]
    inputs: PlanInputs
    certainty: CertaintySnapshot
    costs: CostSnapshot
    itinerary: ItinerarySummary


class CostDelta(CamelModel):
    category: str
    before: int | None
    after: int | None
    delta: int | None
    direction: CostDirection


class CertaintyDelta(CamelModel):
    score_before: int | None
    score_after: int | None
    delta: int | None
    direction: CertaintyDirection
    visa_risk_before: VisaRisk
    visa_risk_after: VisaRisk
    buffer_days_before: int
    buffer_days_after: int
    buffer_delta: int


class TotalCostDelta(CamelModel):
    before: int | None
    after: int | None
    delta: int | None
    percent_change: int | None
    direction: CostDirection


class ItineraryChanges(CamelModel):
    day_count_before: int
    day_count_after: int
    added_highlights: list[str] = Field(default_factory=list)
    removed_highlights: list[str] = Field(default_factory=list)


class Recommendation(CamelModel):
    preferred: Preferred
    confidence: Confidence
    reason: str
    tradeoff_summary: str


class PlanComparison(CamelModel):
    """Null-safe diff between an original (A) and an updated (B) plan."""

    plan_a: PlanSnapshot
    plan_b: PlanSnapshot
    is_comparable: bool
    incomparable_reason: str | None = None
    certainty_delta: CertaintyDelta
    cost_deltas: list[CostDelta]
    total_cost_delta: TotalCostDelta
    itinerary_changes: ItineraryChanges
    recommendation: Recommendation


class FixImpact(CamelModel):
    certainty_points: int | None = None
    cost_delta: int | None = None
    buffer_days: int | None = None


class FixActionPayload(CamelModel):
    editor: EditorTarget | None = None
    flow: str | None = None


class FixAction(CamelModel):
    type: ActionType
    payload: FixActionPayload


class NextFixSuggestion(CamelModel):
    """A single prioritized remediation."""

    id: FixId
    title: str
    reason: str
    impact: FixImpact = Field(default_factory=FixImpact)
    cta_label: str
    action: FixAction
    confidence: Confidence


class CompareRequest(CamelModel):
    """Request body for POST /api/trips/compare."""

    original_trip_id: int
    updated_trip_id: int


class CompareResponse(CamelModel):
    comparison: PlanComparison
    next_fix: NextFixSuggestion | None = None
