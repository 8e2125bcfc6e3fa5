"""Tiered visa lookup: curated corridors, then the passport index, then the paid API.

Paid API results are cached in the `visa_knowledge` table for 30 days.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.app.adapters.visa_api import fetch_visa_requirement, parse_visa_response
from backend.app.db.models import VisaKnowledge
from backend.app.models.visa import VisaRequirement
from backend.app.utils.dates import utcnow
from backend.app.utils.metrics import record_cache_event, record_fallback
from backend.app.visa.corridors import CorridorStore
from backend.app.visa.countries import country_code, destination_country
from backend.app.visa.passport_index import PassportIndex

logger = logging.getLogger(__name__)


class VisaLookupService:
    """Resolve visa requirements for a passport and a destination (city or country)."""

    def __init__(
        self,
        corridors: CorridorStore,
        passport_index: PassportIndex,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        *,
        api_key: str = "",
        api_url: str = "https://visa-requirement.p.rapidapi.com/v2/visa/check",
        api_timeout_s: float = 10.0,
        api_cache_ttl: timedelta = timedelta(days=30),
        client: httpx.AsyncClient | None = None,
        now_fn: Callable[[], datetime] = utcnow,
    ) -> None:
        self.corridors = corridors
        self.passport_index = passport_index
        self.session_factory = session_factory
        self.api_key = api_key
        self.api_url = api_url
        self.api_timeout_s = api_timeout_s
        self.api_cache_ttl = api_cache_ttl
        self.client = client
        self.now_fn = now_fn

    async def lookup(self, passport: str, destination: str) -> VisaRequirement | None:
        """Return the best available requirement, or None when no tier knows the corridor."""
        country = destination_country(destination)

        curated = self.corridors.get(passport, country)
        if curated is not None:
            return curated

        indexed = self.passport_index.lookup(passport, country)
        if indexed is not None:
            return indexed

        if not self.api_key or self.session_factory is None:
            return None
        return await self._lookup_api(country_code(passport), country_code(country))

    async def _lookup_api(self, passport_code: str, destination_code: str) -> VisaRequirement | None:
        assert self.session_factory is not None
        async with self.session_factory() as session:
            result = await session.execute(
                select(VisaKnowledge).where(
                    VisaKnowledge.passport_code == passport_code,
                    VisaKnowledge.destination_code == destination_code,
                )
            )
            cached = result.scalar_one_or_none()
            if cached is not None and self.now_fn() - cached.fetched_at <= self.api_cache_ttl:
                record_cache_event("visa_api", "hit")
                return parse_visa_response(cached.content)

            record_cache_event("visa_api", "miss")
            try:
                payload = await fetch_visa_requirement(
                    passport_code,
                    destination_code,
                    api_key=self.api_key,
                    url=self.api_url,
                    timeout_s=self.api_timeout_s,
                    client=self.client,
                )
                requirement = parse_visa_response(payload)
            except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
                logger.warning(
                    f"Visa API lookup failed for {passport_code}->{destination_code}: {type(e).__name__}"
                )
                record_fallback("visa_api", type(e).__name__)
                # A stale document is better than nothing
                return parse_visa_response(cached.content) if cached is not None else None

            if cached is None:
                session.add(
                    VisaKnowledge(
                        passport_code=passport_code,
                        destination_code=destination_code,
                        content=payload,
                        fetched_at=self.now_fn(),
                    )
                )
            else:
                cached.content = payload
                cached.fetched_at = self.now_fn()
            await session.commit()
            return requirement
