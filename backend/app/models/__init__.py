"""Models package - re-exports for convenience."""

from backend.app.models.common import (
    ActivityType,
    BudgetStatus,
    BudgetTier,
    CamelModel,
    FeasibilityStatus,
    Geo,
    ItineraryStatus,
    TravelStyle,
)
from backend.app.models.comparison import (
    CompareRequest,
    CompareResponse,
    NextFixSuggestion,
    PlanComparison,
    PlanSnapshot,
)
from backend.app.models.search import FlightQuote, HotelQuote
from backend.app.models.trip import (
    Activity,
    CostBreakdown,
    Day,
    FeasibilityReport,
    Itinerary,
    TripCreate,
    TripResponse,
    TripUpdate,
)
from backend.app.models.visa import VisaRequirement

__all__ = [
    "Activity",
    "ActivityType",
    "BudgetStatus",
    "BudgetTier",
    "CamelModel",
    "CompareRequest",
    "CompareResponse",
    "CostBreakdown",
    "Day",
    "FeasibilityReport",
    "FeasibilityStatus",
    "FlightQuote",
    "Geo",
    "HotelQuote",
    "Itinerary",
    "ItineraryStatus",
    "NextFixSuggestion",
    "PlanComparison",
    "PlanSnapshot",
    "TravelStyle",
    "TripCreate",
    "TripResponse",
    "TripUpdate",
    "VisaRequirement",
]
