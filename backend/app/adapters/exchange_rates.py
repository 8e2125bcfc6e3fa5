"""Exchange rates from the Frankfurter API (base USD), cached in-process.

A failed or slow fetch never blocks trip processing: the provider degrades
to a static fallback table instead of retrying.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

import httpx

from backend.app.utils.dates import utcnow
from backend.app.utils.metrics import record_cache_event, record_fallback

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥", "CNY": "¥", "INR": "₹",
    "AUD": "A$", "CAD": "C$", "CHF": "CHF ", "KRW": "₩", "SGD": "S$", "HKD": "HK$",
    "NZD": "NZ$", "SEK": "kr ", "NOK": "kr ", "DKK": "kr ", "MXN": "MX$", "BRL": "R$",
    "AED": "د.إ", "SAR": "﷼", "THB": "฿", "MYR": "RM", "IDR": "Rp ", "PHP": "₱",
    "ZAR": "R ", "TRY": "₺", "RUB": "₽", "PLN": "zł ", "CZK": "Kč ", "HUF": "Ft ",
}

# Units of each currency per 1 USD
FALLBACK_RATES: dict[str, float] = {
    "USD": 1, "EUR": 0.92, "GBP": 0.79, "JPY": 149.5, "CNY": 7.24, "INR": 83.5,
    "AUD": 1.53, "CAD": 1.36, "CHF": 0.88, "KRW": 1320, "SGD": 1.34, "HKD": 7.82,
    "NZD": 1.64, "SEK": 10.5, "NOK": 10.8, "DKK": 6.9, "MXN": 17.2, "BRL": 4.95,
    "AED": 3.67, "SAR": 3.75, "THB": 35.5, "MYR": 4.72, "IDR": 15600, "PHP": 55.8,
    "ZAR": 18.5, "TRY": 32.5, "RUB": 92, "PLN": 4.0, "CZK": 23.5, "HUF": 360,
}


def symbol_for(currency: str) -> str:
    """Display symbol for a currency code (falls back to 'XXX ')."""
    return CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")


def convert_from_usd(amount_usd: float, currency: str, rates: dict[str, float]) -> int:
    """Convert a USD amount into `currency`, rounded to whole units."""
    rate = rates.get(currency.upper(), FALLBACK_RATES.get(currency.upper(), 1))
    return round(amount_usd * rate)


def convert_to_usd(amount: float, currency: str, rates: dict[str, float]) -> float:
    """Convert an amount in `currency` back to USD (unrounded)."""
    rate = rates.get(currency.upper(), FALLBACK_RATES.get(currency.upper(), 1)) or 1
    return amount / rate


class ExchangeRateProvider:
    """Hourly cached USD-based rates with a static fallback."""

    def __init__(
        self,
        base_url: str = "https://api.frankfurter.app/latest",
        *,
        ttl: timedelta = timedelta(hours=1),
        timeout_s: float = 5.0,
        client: httpx.AsyncClient | None = None,
        now_fn: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize provider.

        Args:
            base_url: Frankfurter `latest` endpoint
            ttl: How long fetched rates stay fresh
            timeout_s: Request timeout; a timeout resolves to the fallback table
            client: Optional shared httpx client (for testing with mocks)
            now_fn: Clock, injectable for tests
        """
        self.base_url = base_url
        self.ttl = ttl
        self.timeout_s = timeout_s
        self.client = client
        self.now_fn = now_fn
        self._rates: dict[str, float] | None = None
        self._fetched_at: datetime | None = None

    async def get_rates(self) -> dict[str, float]:
        """Return cached rates, refreshing them when stale."""
        now = self.now_fn()
        if self._rates is not None and self._fetched_at is not None:
            if now - self._fetched_at < self.ttl:
                record_cache_event("exchange_rates", "hit")
                return self._rates

        record_cache_event("exchange_rates", "miss")
        try:
            fetched = await self._fetch()
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Exchange rate fetch failed ({type(e).__name__}), using fallback rates")
            record_fallback("exchange_rates", type(e).__name__)
            # Serve stale live rates over the static table when we have them
            return self._rates if self._rates is not None else dict(FALLBACK_RATES)

        self._rates = {**FALLBACK_RATES, **fetched, "USD": 1.0}
        self._fetched_at = now
        return self._rates

    async def _fetch(self) -> dict[str, float]:
        close_client = False
        client = self.client
        if client is None:
            client = httpx.AsyncClient(timeout=self.timeout_s)
            close_client = True

        try:
            response = await client.get(
                self.base_url, params={"from": "USD"}, timeout=self.timeout_s
            )
            response.raise_for_status()
            data = response.json()
            rates = data["rates"]
            if not isinstance(rates, dict):
                raise ValueError("rates payload is not an object")
            return {str(code).upper(): float(value) for code, value in rates.items()}
        finally:
            if close_client:
                await client.aclose()
