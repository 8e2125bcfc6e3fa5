"""Hotel search adapter using SerpAPI Google Hotels, with a destination-tier estimate fallback."""

import logging
import math
import re
from datetime import date
from typing import Any

import httpx

from backend.app.models.search import HotelQuote
from backend.app.utils.metrics import record_fallback

logger = logging.getLogger(__name__)

# Google Hotels accepts at most 6 guests per search
MAX_SEARCH_GUESTS = 6
# Pick from the lower-middle of the price-sorted results
PRICE_PERCENTILE = 0.3

EXPENSIVE_DESTINATIONS = ("tokyo", "paris", "london", "new york", "sydney", "zurich",
                          "singapore", "hong kong", "dubai")
MID_RANGE_DESTINATIONS = ("rome", "barcelona", "amsterdam", "berlin", "prague", "vienna",
                          "seoul", "taipei")
BUDGET_DESTINATIONS = ("bangkok", "bali", "vietnam", "india", "mexico", "portugal", "turkey",
                       "morocco", "egypt")

EXPENSIVE_BASE_RATE = 180
DEFAULT_BASE_RATE = 120
BUDGET_BASE_RATE = 60


def rooms_needed(guests: int) -> int:
    """Two guests per room."""
    return max(1, math.ceil(guests / 2))


def estimate_hotel_price(
    destination: str, nights: int, guests: int, budget: int | None = None
) -> HotelQuote:
    """Estimate a stay from destination price tiers, fitted to an optional budget (USD)."""
    dest_lower = destination.lower()
    nights = max(nights, 1)

    base_rate = DEFAULT_BASE_RATE
    hotel_type = "Mid-range hotel"
    if any(d in dest_lower for d in EXPENSIVE_DESTINATIONS):
        base_rate = EXPENSIVE_BASE_RATE
    elif any(d in dest_lower for d in BUDGET_DESTINATIONS):
        base_rate = BUDGET_BASE_RATE
        hotel_type = "Budget hotel"

    per_night: float = base_rate * rooms_needed(guests)

    if budget:
        max_per_night = budget // nights
        if per_night > max_per_night:
            per_night = max_per_night
            hotel_type = "Budget hostel/hotel" if per_night < 80 else "Budget hotel"
        elif per_night < max_per_night * 0.5:
            per_night = min(per_night * 1.5, max_per_night * 0.7)
            hotel_type = "Upscale hotel" if per_night > 150 else "Mid-range hotel"

    rating = 4.5 if base_rate > 150 else 4.0 if base_rate > 80 else 3.5
    return HotelQuote(
        hotel_name=f"{hotel_type} in {destination}",
        price_per_night=round(per_night),
        total_price=round(per_night * nights),
        rating=rating,
        type=hotel_type,
        source="estimate",
    )


def _parse_price(value: Any) -> float:
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        digits = re.sub(r"[^\d.]", "", value)
        return float(digits) if digits else 0.0
    return 0.0


def _nightly_price(hotel: dict[str, Any]) -> float:
    rate = hotel.get("rate_per_night")
    if not isinstance(rate, dict):
        rate = {}
    return _parse_price(rate.get("extracted_lowest") or rate.get("lowest") or hotel.get("price"))


async def search_hotels(
    destination: str,
    check_in: date,
    check_out: date,
    guests: int,
    *,
    budget: int | None = None,
    api_key: str = "",
    currency: str = "USD",
    base_url: str = "https://serpapi.com/search",
    timeout_s: float = 20.0,
    client: httpx.AsyncClient | None = None,
) -> HotelQuote:
    """Search hotels, falling back to an estimate on any failure.

    Args:
        destination: Destination city
        check_in: Check-in date
        check_out: Check-out date
        guests: Number of guests
        budget: Optional total accommodation budget (USD)
        api_key: SerpAPI key; empty means estimate only
        currency: Currency for quoted prices
        base_url: SerpAPI endpoint
        timeout_s: Request timeout
        client: Optional httpx client (for testing with mocks)

    Returns:
        HotelQuote with source "api" or "estimate"
    """
    nights = max((check_out - check_in).days, 1)

    if not api_key:
        record_fallback("hotels", "no_api_key")
        return estimate_hotel_price(destination, nights, guests, budget)

    search_guests = max(1, min(guests, MAX_SEARCH_GUESTS))
    guest_multiplier = math.ceil(guests / search_guests)

    params: dict[str, str] = {
        "api_key": api_key,
        "engine": "google_hotels",
        "q": f"hotels in {destination}",
        "check_in_date": check_in.isoformat(),
        "check_out_date": check_out.isoformat(),
        "adults": str(search_guests),
        "currency": currency,
        "hl": "en",
    }
    if budget:
        params["max_price"] = str(budget // nights)

    close_client = False
    if client is None:
        client = httpx.AsyncClient(timeout=timeout_s)
        close_client = True

    try:
        response = await client.get(base_url, params=params, timeout=timeout_s)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected hotel search payload: {type(data).__name__}")

        properties = data.get("properties") or []
        priced = sorted(
            (h for h in properties if isinstance(h, dict) and _nightly_price(h) > 0),
            key=_nightly_price,
        )
        if not priced:
            logger.info("No priced hotels in search response, using estimate")
            record_fallback("hotels", "no_results")
            return estimate_hotel_price(destination, nights, guests, budget)

        index = min(int(len(priced) * PRICE_PERCENTILE), len(priced) - 1)
        hotel = priced[index]
        per_night = round(_nightly_price(hotel) * guest_multiplier)
        return HotelQuote(
            hotel_name=hotel.get("name") or f"Hotel in {destination}",
            price_per_night=per_night,
            total_price=per_night * nights,
            rating=hotel.get("overall_rating"),
            type=hotel.get("type") or "Hotel",
            booking_url=hotel.get("link"),
            source="api",
        )
    except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning(f"Hotel search failed ({type(e).__name__}), using estimate")
        record_fallback("hotels", type(e).__name__)
        return estimate_hotel_price(destination, nights, guests, budget)
    finally:
        if close_client:
            await client.aclose()
