"""Tests for the exchange rate provider."""

from datetime import datetime, timedelta

import httpx
import pytest

from backend.app.adapters.exchange_rates import (
    FALLBACK_RATES,
    ExchangeRateProvider,
    convert_from_usd,
    convert_to_usd,
    symbol_for,
)


class Clock:
    def __init__(self) -> None:
        self.now = datetime(2026, 3, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now


def _client(
    transport: httpx.MockTransport | None = None, calls: list[httpx.Request] | None = None
) -> httpx.AsyncClient:
    def respond(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return httpx.Response(200, json={"amount": 1.0, "base": "USD", "rates": {"EUR": 0.95, "INR": 84.0}})

    return httpx.AsyncClient(transport=transport or httpx.MockTransport(respond))


@pytest.mark.asyncio
async def test_rates_are_fetched_and_cached_for_ttl() -> None:
    """Test that live rates are cached until the TTL passes."""
    calls: list[httpx.Request] = []
    clock = Clock()
    async with _client(calls=calls) as client:
        provider = ExchangeRateProvider(client=client, now_fn=clock)

        rates = await provider.get_rates()
        assert rates["EUR"] == 0.95
        assert rates["USD"] == 1.0
        # Currencies missing from the live payload come from the fallback table
        assert rates["JPY"] == FALLBACK_RATES["JPY"]

        clock.now += timedelta(minutes=59)
        await provider.get_rates()
        assert len(calls) == 1

        clock.now += timedelta(minutes=2)
        await provider.get_rates()
        assert len(calls) == 2
        assert calls[0].url.params["from"] == "USD"


@pytest.mark.asyncio
async def test_fetch_failure_uses_fallback_table() -> None:
    """Test that an HTTP error degrades to the static table."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    async with _client(httpx.MockTransport(handler)) as client:
        provider = ExchangeRateProvider(client=client)
        rates = await provider.get_rates()

    assert rates == FALLBACK_RATES


@pytest.mark.asyncio
async def test_timeout_uses_fallback_table() -> None:
    """Test that a timeout resolves to the fallback table instead of raising."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    async with _client(httpx.MockTransport(handler)) as client:
        provider = ExchangeRateProvider(client=client)
        assert await provider.get_rates() == FALLBACK_RATES


@pytest.mark.asyncio
async def test_stale_live_rates_served_when_refresh_fails() -> None:
    """Test that previously fetched rates win over the static table."""
    clock = Clock()
    responses = iter([httpx.Response(200, json={"rates": {"EUR": 0.5}}), httpx.Response(503)])

    def handler(request: httpx.Request) -> httpx.Response:
        return next(responses)

    async with _client(httpx.MockTransport(handler)) as client:
        provider = ExchangeRateProvider(client=client, now_fn=clock)
        await provider.get_rates()
        clock.now += timedelta(hours=2)
        rates = await provider.get_rates()

    assert rates["EUR"] == 0.5


def test_conversion_helpers() -> None:
    """Test USD conversions and symbol lookup."""
    rates = {"USD": 1.0, "EUR": 0.9}

    assert convert_from_usd(100, "eur", rates) == 90
    assert convert_to_usd(90, "EUR", rates) == pytest.approx(100)
    # Unknown to the live table: fall back to the static rate
    assert convert_from_usd(10, "INR", rates) == round(10 * FALLBACK_RATES["INR"])
    assert symbol_for("gbp") == "£"
    assert symbol_for("XYZ") == "XYZ "
