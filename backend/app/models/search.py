"""Search provider result shapes - identical for live and estimated results."""

from pydantic import BaseModel

from backend.app.models.common import PriceSource


class FlightQuote(BaseModel):
    """Round-trip flight price (USD) for the whole party."""

    price: int
    price_per_person: int
    airline: str
    departure: str
    arrival: str
    duration: str
    stops: int
    booking_url: str | None = None
    source: PriceSource


class HotelQuote(BaseModel):
    """Hotel stay price (USD) for the whole stay."""

    hotel_name: str
    price_per_night: int
    total_price: int
    rating: float | None = None
    type: str = "Hotel"
    booking_url: str | None = None
    source: PriceSource
