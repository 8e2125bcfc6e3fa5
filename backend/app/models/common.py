"""Common types and enums shared across all models."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys on the wire and in JSON columns."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Geo(CamelModel):
    """Geographic coordinates (WGS84)."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class TravelStyle(str, Enum):
    """Requested travel style."""

    budget = "budget"
    standard = "standard"
    luxury = "luxury"
    custom = "custom"


class FeasibilityStatus(str, Enum):
    """Feasibility state stored on a trip."""

    pending = "pending"
    yes = "yes"
    warning = "warning"
    no = "no"


class ItineraryStatus(str, Enum):
    """Itinerary generation state (also the lock state)."""

    idle = "idle"
    generating = "generating"
    complete = "complete"
    error = "error"


class BudgetStatus(str, Enum):
    """Outcome of comparing the computed total against the stated budget."""

    within_budget = "within_budget"
    tight = "tight"
    over_budget = "over_budget"


class ActivityType(str, Enum):
    """Kind of itinerary activity."""

    activity = "activity"
    meal = "meal"
    transport = "transport"
    lodging = "lodging"


BudgetTier = Literal["budget", "standard", "luxury"]
PriceSource = Literal["api", "estimate"]
