"""Flight search adapter using SerpAPI Google Flights, with a route estimate fallback.

Every failure path (no key, HTTP error, timeout, empty results) resolves to
`estimate_flight_price`, so callers only branch on `source`.
"""

import logging
from datetime import date

import httpx

from backend.app.models.search import FlightQuote
from backend.app.utils.metrics import record_fallback

logger = logging.getLogger(__name__)

# Google Flights accepts at most 9 passengers per search
MAX_SEARCH_PASSENGERS = 9

CITY_TO_AIRPORT: dict[str, str] = {
    "new york": "JFK", "los angeles": "LAX", "chicago": "ORD", "san francisco": "SFO",
    "miami": "MIA", "seattle": "SEA", "boston": "BOS", "toronto": "YYZ",
    "vancouver": "YVR", "london": "LHR", "paris": "CDG", "rome": "FCO",
    "barcelona": "BCN", "madrid": "MAD", "amsterdam": "AMS", "berlin": "BER",
    "lisbon": "LIS", "prague": "PRG", "vienna": "VIE", "zurich": "ZRH",
    "dubai": "DXB", "doha": "DOH", "istanbul": "IST", "tokyo": "HND",
    "osaka": "KIX", "seoul": "ICN", "singapore": "SIN", "hong kong": "HKG",
    "bangkok": "BKK", "bali": "DPS", "kuala lumpur": "KUL", "sydney": "SYD",
    "melbourne": "MEL", "auckland": "AKL", "delhi": "DEL", "mumbai": "BOM",
    "bangalore": "BLR", "cairo": "CAI", "cape town": "CPT", "nairobi": "NBO",
    "reykjavik": "KEF", "male": "MLE", "maldives": "MLE",
}

REGIONS: dict[str, tuple[str, ...]] = {
    "north_america": ("new york", "los angeles", "chicago", "toronto", "vancouver",
                      "san francisco", "miami", "seattle", "usa", "canada"),
    "europe": ("london", "paris", "rome", "barcelona", "amsterdam", "berlin", "madrid",
               "lisbon", "prague", "vienna"),
    "asia": ("tokyo", "singapore", "hong kong", "seoul", "bangkok", "kuala lumpur",
             "osaka", "bali", "japan", "thailand"),
    "middle_east": ("dubai", "abu dhabi", "doha", "tel aviv", "istanbul", "uae", "qatar", "turkey"),
    "oceania": ("sydney", "melbourne", "auckland", "wellington", "australia", "new zealand"),
    "south_asia": ("delhi", "mumbai", "bangalore", "india", "sri lanka"),
    "africa": ("cape town", "johannesburg", "nairobi", "cairo", "marrakech",
               "south africa", "kenya", "egypt"),
    "south_america": ("rio", "sao paulo", "buenos aires", "lima", "bogota", "brazil", "argentina"),
}

# Round-trip USD per person between regions (order-insensitive)
REGION_PRICES: dict[str, int] = {
    "north_america_europe": 700, "north_america_asia": 1100, "north_america_oceania": 1400,
    "north_america_middle_east": 1000, "north_america_south_asia": 1200,
    "north_america_africa": 1100, "europe_asia": 800, "europe_oceania": 1300,
    "europe_middle_east": 500, "europe_south_asia": 700, "asia_oceania": 600,
    "asia_middle_east": 600, "asia_south_asia": 400, "oceania_middle_east": 1000,
    "oceania_south_asia": 800,
}
SAME_REGION_PRICE = 300
DEFAULT_PRICE = 800


def region_of(place: str) -> str:
    place_lower = place.lower()
    for region, names in REGIONS.items():
        if any(name in place_lower for name in names):
            return region
    return "unknown"


def airport_code(city: str) -> str:
    """Map a city to its main airport; falls back to the first three letters."""
    city_lower = city.lower()
    for name, code in CITY_TO_AIRPORT.items():
        if name in city_lower:
            return code
    return city.strip()[:3].upper()


def estimate_flight_price(origin: str, destination: str, passengers: int) -> FlightQuote:
    """Synthesize a route-based price estimate."""
    origin_region = region_of(origin)
    dest_region = region_of(destination)

    if origin_region == dest_region and origin_region != "unknown":
        per_person = SAME_REGION_PRICE
    else:
        per_person = REGION_PRICES.get(
            f"{origin_region}_{dest_region}",
            REGION_PRICES.get(f"{dest_region}_{origin_region}", DEFAULT_PRICE),
        )

    return FlightQuote(
        price=per_person * passengers,
        price_per_person=per_person,
        airline="Multiple Airlines",
        departure=origin,
        arrival=destination,
        duration="Varies",
        stops=0,
        source="estimate",
    )


def _format_duration(minutes: int | None) -> str:
    if not minutes:
        return "N/A"
    return f"{minutes // 60}h {minutes % 60}m"


async def search_flights(
    origin: str,
    destination: str,
    departure_date: date,
    return_date: date,
    passengers: int,
    *,
    api_key: str = "",
    currency: str = "USD",
    base_url: str = "https://serpapi.com/search",
    timeout_s: float = 20.0,
    client: httpx.AsyncClient | None = None,
) -> FlightQuote:
    """Search round-trip flights, falling back to an estimate on any failure.

    Args:
        origin: Origin city
        destination: Destination city
        departure_date: Outbound date
        return_date: Return date
        passengers: Total seated passengers
        api_key: SerpAPI key; empty means estimate only
        currency: Currency for quoted prices
        base_url: SerpAPI endpoint
        timeout_s: Request timeout
        client: Optional httpx client (for testing with mocks)

    Returns:
        FlightQuote with source "api" or "estimate"
    """
    if not api_key:
        record_fallback("flights", "no_api_key")
        return estimate_flight_price(origin, destination, passengers)

    origin_code = airport_code(origin)
    dest_code = airport_code(destination)
    search_passengers = max(1, min(passengers, MAX_SEARCH_PASSENGERS))
    multiplier = passengers / search_passengers

    params: dict[str, str] = {
        "api_key": api_key,
        "engine": "google_flights",
        "departure_id": origin_code,
        "arrival_id": dest_code,
        "outbound_date": departure_date.isoformat(),
        "return_date": return_date.isoformat(),
        "adults": str(search_passengers),
        "currency": currency,
        "hl": "en",
        "type": "1",
    }

    close_client = False
    if client is None:
        client = httpx.AsyncClient(timeout=timeout_s)
        close_client = True

    try:
        response = await client.get(base_url, params=params, timeout=timeout_s)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected flight search payload: {type(data).__name__}")

        options = [
            o for o in (data.get("best_flights") or data.get("other_flights") or []) if isinstance(o, dict)
        ]
        if not options:
            logger.info("No flights in search response, using estimate")
            record_fallback("flights", "no_results")
            return estimate_flight_price(origin, destination, passengers)

        best = options[0]
        api_price = int(best.get("price") or 0)
        legs = [leg for leg in (best.get("flights") or []) if isinstance(leg, dict)]
        return FlightQuote(
            price=round(api_price * multiplier),
            price_per_person=round(api_price / search_passengers),
            airline=(legs[0].get("airline") if legs else None) or "Multiple Airlines",
            departure=origin_code,
            arrival=dest_code,
            duration=_format_duration(best.get("total_duration")),
            stops=max(len(legs) - 1, 0),
            booking_url=(data.get("search_metadata") or {}).get("google_flights_url"),
            source="api",
        )
    except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning(f"Flight search failed ({type(e).__name__}), using estimate")
        record_fallback("flights", type(e).__name__)
        return estimate_flight_price(origin, destination, passengers)
    finally:
        if close_client:
            await client.aclose()
