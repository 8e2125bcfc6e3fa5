"""Cost synthesis: turn search quotes and itinerary activities into a CostBreakdown.

All provider prices arrive in USD and are converted into the trip currency
here. Every amount in the resulting breakdown is a non-negative whole number
and grand_total is the exact sum of the category totals.
"""

import math

from backend.app.adapters.exchange_rates import FALLBACK_RATES, convert_from_usd, symbol_for
from backend.app.models.common import ActivityType, BudgetStatus, BudgetTier, TravelStyle
from backend.app.models.search import FlightQuote, HotelQuote
from backend.app.models.trip import (
    AccommodationCost,
    CategoryCost,
    CostBreakdown,
    Day,
    FlightCost,
    TravelerSummary,
    TripCreate,
)

# A total at least this fraction under budget counts as within budget;
# exactly 10% under is within_budget, anything less (but still under) is tight.
WITHIN_BUDGET_MARGIN = 0.10

# USD per person per day thresholds for custom budgets
BUDGET_TIER_MAX_USD = 80
LUXURY_TIER_MIN_USD = 250

CHILD_FARE_RATIO = 0.75
INFANT_FARE_RATIO = 0.10

# Destination keyword lists -> price multiplier applied to activity base rates
DESTINATION_COST_TIERS: tuple[tuple[float, tuple[str, ...]], ...] = (
    (1.6, ("zurich", "geneva", "switzerland", "reykjavik", "iceland", "oslo", "norway", "maldives", "monaco")),
    (1.3, ("tokyo", "paris", "london", "new york", "sydney", "singapore", "hong kong", "dubai", "copenhagen")),
    (0.5, ("bangkok", "bali", "hanoi", "vietnam", "india", "delhi", "mumbai", "mexico", "cairo",
           "marrakech", "lima", "kathmandu", "cambodia", "philippines")),
)

# USD per person, per activity, before the destination multiplier
ACTIVITY_BASE_RATES_USD: dict[str, dict[ActivityType, float]] = {
    "budget": {ActivityType.activity: 5, ActivityType.meal: 6, ActivityType.transport: 3},
    "standard": {ActivityType.activity: 20, ActivityType.meal: 18, ActivityType.transport: 8},
    "luxury": {ActivityType.activity: 60, ActivityType.meal: 50, ActivityType.transport: 30},
}

# Per-room nightly rates in USD
ACCOMMODATION_MAX_PER_NIGHT_USD: dict[str, int] = {"budget": 35, "standard": 120, "luxury": 400}
ACCOMMODATION_ESTIMATE_PER_NIGHT_USD: dict[str, int] = {"budget": 20, "standard": 70, "luxury": 200}

ACCOMMODATION_LABELS: dict[str, tuple[str, float]] = {
    "budget": ("Budget guesthouse/hostel", 3.5),
    "standard": ("Mid-range hotel", 4.0),
    "luxury": ("Luxury hotel", 4.5),
}

FOOD_NOTES: dict[str, str] = {
    "budget": "Street food and local eateries",
    "standard": "Local restaurants and cafes",
    "luxury": "Fine dining and cafes",
}

MAX_SAVINGS_TIPS = 5


def detect_budget_tier(
    travel_style: TravelStyle, budget: int, currency: str, days: int, travelers: int
) -> BudgetTier:
    """Tier from the explicit style, or from USD per person per day for custom budgets."""
    if travel_style != TravelStyle.custom:
        return travel_style.value  # type: ignore[return-value]
    if budget <= 0:
        return "standard"

    rate = FALLBACK_RATES.get(currency.upper(), 1)
    per_person_per_day_usd = budget / max(days, 1) / max(travelers, 1) / rate
    if per_person_per_day_usd < BUDGET_TIER_MAX_USD:
        return "budget"
    if per_person_per_day_usd > LUXURY_TIER_MIN_USD:
        return "luxury"
    return "standard"


def minimum_budget(currency: str, days: int, travelers: int, per_person_per_day_usd: int = 50) -> int:
    """Absolute budget floor in the trip currency."""
    return convert_from_usd(per_person_per_day_usd * travelers * days, currency, FALLBACK_RATES)


def destination_cost_multiplier(destination: str) -> float:
    dest_lower = destination.lower()
    for multiplier, keywords in DESTINATION_COST_TIERS:
        if any(keyword in dest_lower for keyword in keywords):
            return multiplier
    return 1.0


def price_activities(
    days: list[Day],
    *,
    destination: str,
    budget_tier: BudgetTier,
    travelers: int,
    currency: str,
    rates: dict[str, float],
) -> tuple[int, int, int]:
    """Set each activity's estimated_cost to a group total in the trip currency.

    The model's per-person USD estimate wins when present; otherwise the tier
    base rate scaled by the destination multiplier is used. Lodging is priced
    by the accommodation line, so lodging activities cost 0.

    Returns:
        (activities total, food total, local transport total)
    """
    multiplier = destination_cost_multiplier(destination)
    base_rates = ACTIVITY_BASE_RATES_USD[budget_tier]
    totals = {ActivityType.activity: 0, ActivityType.meal: 0, ActivityType.transport: 0}

    for day in days:
        for activity in day.activities:
            if activity.type == ActivityType.lodging:
                activity.estimated_cost = 0
                continue
            per_person_usd = activity.estimated_cost or base_rates[activity.type] * multiplier
            group_cost = convert_from_usd(per_person_usd * travelers, currency, rates)
            activity.estimated_cost = group_cost
            totals[activity.type] += group_cost

    return totals[ActivityType.activity], totals[ActivityType.meal], totals[ActivityType.transport]


def party_fare_usd(per_person_usd: float, request: TripCreate) -> int:
    """Round-trip fare for the party: adults full price, children 75%, infants 10%."""
    child_fare = round(per_person_usd * CHILD_FARE_RATIO)
    infant_fare = round(per_person_usd * INFANT_FARE_RATIO)
    return round(
        per_person_usd * request.adults + child_fare * request.children + infant_fare * request.infants
    )


def flight_cost(
    quote: FlightQuote, request: TripCreate, currency: str, rates: dict[str, float]
) -> FlightCost:
    total = convert_from_usd(party_fare_usd(quote.price_per_person, request), currency, rates)
    origin = request.origin or "Your city"
    label = "Live prices" if quote.source == "api" else "Estimated"
    return FlightCost(
        total=total,
        per_person=round(total / max(request.travelers, 1)),
        airline=quote.airline,
        duration=quote.duration,
        stops=quote.stops,
        booking_url=quote.booking_url,
        note=f"Round-trip from {origin} ({label})",
        source=quote.source,
    )


def accommodation_cost(
    quote: HotelQuote | None,
    *,
    budget_tier: BudgetTier,
    nights: int,
    travelers: int,
    currency: str,
    rates: dict[str, float],
) -> AccommodationCost:
    """Use the quote when its per-room rate fits the tier cap, else a tier estimate."""
    rooms = max(1, math.ceil(travelers / 2))
    nights = max(nights, 1)

    if quote is not None and quote.source == "api" and quote.price_per_night > 0:
        per_room_usd = quote.price_per_night / rooms
        if per_room_usd <= ACCOMMODATION_MAX_PER_NIGHT_USD[budget_tier]:
            return AccommodationCost(
                total=convert_from_usd(quote.total_price, currency, rates),
                per_night=convert_from_usd(quote.price_per_night, currency, rates),
                nights=nights,
                hotel_name=quote.hotel_name,
                rating=quote.rating,
                booking_url=quote.booking_url,
                type=f"{quote.type} (Live prices)",
                source="api",
            )

    total = convert_from_usd(
        ACCOMMODATION_ESTIMATE_PER_NIGHT_USD[budget_tier] * nights * rooms, currency, rates
    )
    name, rating = ACCOMMODATION_LABELS[budget_tier]
    return AccommodationCost(
        total=total,
        per_night=round(total / nights),
        nights=nights,
        hotel_name=name,
        rating=rating,
        type=f"{budget_tier.capitalize()} accommodation (Estimated for {budget_tier} travel)",
        source="estimate",
    )


def budget_status(grand_total: int, budget: int) -> BudgetStatus:
    """Classify the total against the stated budget.

    A trip without a stated budget (0) is never over budget.
    """
    if budget <= 0:
        return BudgetStatus.within_budget
    margin = budget - grand_total
    if margin >= budget * WITHIN_BUDGET_MARGIN:
        return BudgetStatus.within_budget
    if margin > 0:
        return BudgetStatus.tight
    return BudgetStatus.over_budget


def traveler_summary(request: TripCreate) -> TravelerSummary:
    parts = [f"{request.adults} adult{'s' if request.adults > 1 else ''}"]
    if request.children:
        parts.append(f"{request.children} child{'ren' if request.children > 1 else ''}")
    if request.infants:
        parts.append(f"{request.infants} infant{'s' if request.infants > 1 else ''}")
    return TravelerSummary(
        total=request.travelers,
        adults=request.adults,
        children=request.children,
        infants=request.infants,
        note=", ".join(parts),
    )


def savings_tips(
    budget_tier: BudgetTier, flights: FlightCost, accommodation: AccommodationCost, status: BudgetStatus
) -> list[str]:
    tips = ["Book flights 2-3 months in advance for best prices"]
    if flights.source == "estimate":
        tips.append("Use Google Flights or Skyscanner to compare prices")
    if accommodation.nights >= 7:
        tips.append("Ask for weekly rates on longer stays")
    tips.append("Book attractions online for discounts")
    if budget_tier == "budget" or status == BudgetStatus.over_budget:
        tips.append("Use public transport instead of taxis to save more")
    if status != BudgetStatus.within_budget:
        tips.append("Swap one paid attraction per day for a free walking tour")
    return tips[:MAX_SAVINGS_TIPS]


def build_cost_breakdown(
    request: TripCreate,
    days: list[Day],
    *,
    flight_quote: FlightQuote,
    hotel_quote: HotelQuote | None,
    budget_tier: BudgetTier,
    num_days: int,
    nights: int,
    rates: dict[str, float],
) -> CostBreakdown:
    """Price the itinerary in place and assemble the breakdown."""
    currency = request.currency
    travelers = request.travelers

    activities_total, food_total, transport_total = price_activities(
        days,
        destination=request.destination,
        budget_tier=budget_tier,
        travelers=travelers,
        currency=currency,
        rates=rates,
    )
    flights = flight_cost(flight_quote, request, currency, rates)
    accommodation = accommodation_cost(
        hotel_quote,
        budget_tier=budget_tier,
        nights=nights,
        travelers=travelers,
        currency=currency,
        rates=rates,
    )
    # Model output already includes intercity legs and incidentals as activities
    intercity = CategoryCost(total=0, note="Day trip transportation" if num_days > 4 else "Not applicable")
    misc = CategoryCost(total=0, note="Souvenirs, tips, unexpected expenses")

    grand_total = (
        flights.total
        + accommodation.total
        + food_total
        + activities_total
        + transport_total
        + intercity.total
        + misc.total
    )
    status = budget_status(grand_total, request.budget)

    return CostBreakdown(
        currency=currency,
        currency_symbol=symbol_for(currency),
        budget_tier=budget_tier,
        travelers=traveler_summary(request),
        flights=flights,
        accommodation=accommodation,
        food=CategoryCost(
            total=food_total,
            per_day=round(food_total / max(num_days, 1)),
            note=FOOD_NOTES[budget_tier],
        ),
        activities=CategoryCost(total=activities_total, note="Museums, attractions, tours"),
        local_transport=CategoryCost(total=transport_total, note="Metro, buses and taxis"),
        intercity_transport=intercity,
        misc=misc,
        grand_total=grand_total,
        per_person=round(grand_total / max(travelers, 1)),
        budget_status=status,
        savings_tips=savings_tips(budget_tier, flights, accommodation, status),
    )
