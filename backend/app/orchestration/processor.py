"""Background trip processing pipeline.

feasibility -> (lock) -> itinerary | flights | hotels in parallel -> costs -> persist

Runs detached from the request that created the trip. Provider failures are
absorbed at each call site by estimates or fallbacks; anything else is caught
at the top level, logged, and reported as progress step -1 while the trip
keeps whatever state it reached.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.app.adapters.exchange_rates import ExchangeRateProvider, convert_to_usd
from backend.app.adapters.flights import estimate_flight_price, search_flights
from backend.app.adapters.hotels import estimate_hotel_price, search_hotels
from backend.app.cache.feasibility import FeasibilityCache
from backend.app.cache.itinerary_templates import MIN_CACHEABLE_DAYS, ItineraryTemplateCache
from backend.app.config import Settings
from backend.app.db import trips as trip_store
from backend.app.llm.client import LLMCallError, LLMClient
from backend.app.models.common import BudgetTier, ItineraryStatus
from backend.app.models.search import FlightQuote, HotelQuote
from backend.app.models.trip import Day, FeasibilityReport, Itinerary, TripCreate
from backend.app.models.visa import VisaRequirement
from backend.app.orchestration.costs import build_cost_breakdown, detect_budget_tier
from backend.app.orchestration.feasibility import (
    FALLBACK_SUMMARY,
    fallback_feasibility_report,
    report_from_payload,
    sync_feasibility_report,
)
from backend.app.orchestration.itinerary import days_from_payload, placeholder_days
from backend.app.orchestration.lock import ItineraryGenerationLock
from backend.app.orchestration.progress import ProgressStep, ProgressTracker
from backend.app.parsing.json_repair import OBJECT_STRATEGIES, safe_json_parse
from backend.app.utils.dates import parse_date_range, trip_length_days
from backend.app.utils.logging import StructuredPipelineLogger
from backend.app.utils.metrics import record_fallback, record_pipeline_run, record_stage_latency
from backend.app.visa.service import VisaLookupService

logger = logging.getLogger(__name__)

# Share of a custom budget offered to the hotel search
HOTEL_BUDGET_SHARE = 0.35


def _has_days(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("days"), list) and bool(value["days"])


@dataclass
class _Lease:
    """A generation lease held by one run, kept alive by its heartbeat."""

    owner: str
    heartbeat: asyncio.Task[None]


class TripProcessor:
    """Turns a pending trip into a processed one."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        settings: Settings,
        llm: LLMClient,
        feasibility_cache: FeasibilityCache,
        template_cache: ItineraryTemplateCache,
        exchange_rates: ExchangeRateProvider,
        visa_service: VisaLookupService,
        progress: ProgressTracker,
        lock: ItineraryGenerationLock,
        http_client: httpx.AsyncClient | None = None,
        today_fn: Callable[[], date] = date.today,
    ) -> None:
        self.session_factory = session_factory
        self.settings = settings
        self.llm = llm
        self.feasibility_cache = feasibility_cache
        self.template_cache = template_cache
        self.exchange_rates = exchange_rates
        self.visa_service = visa_service
        self.progress = progress
        self.lock = lock
        self.http_client = http_client
        self.today_fn = today_fn
        self.stage_logger = StructuredPipelineLogger()

    async def process(self, trip_id: int, request: TripCreate, *, lock_owner: str | None = None) -> None:
        """Run the whole pipeline for one trip. Never raises.

        Any lease held by this run, whether handed in or acquired here, is
        released on every exit path so a failed run never blocks the next retry.

        Args:
            trip_id: Trip to process
            request: The create payload
            lock_owner: Generation lock already held by the caller (retry and edit paths)
        """
        started = time.perf_counter()
        self.progress.start(trip_id)
        lease = self._hold(trip_id, lock_owner) if lock_owner is not None else None
        try:
            report = await self._run_feasibility(trip_id, request, lease)
            if report.overall == "no":
                logger.info(f"Trip {trip_id} not feasible, skipping itinerary")
                await self._release(trip_id, lease, ItineraryStatus.idle)
                lease = None
                self.progress.complete(trip_id, "Trip is not feasible")
                record_pipeline_run("not_feasible")
                return

            date_range = parse_date_range(request.dates)
            if date_range is None:
                raise ValueError(f"Unparseable dates: {request.dates!r}")
            start_date, end_date = date_range

            if lease is None:
                result = await self.lock.acquire(trip_id)
                if not result.acquired or result.lock_owner is None:
                    logger.info(
                        f"Itinerary for trip {trip_id} already being generated by {result.existing_owner}, skipping"
                    )
                    # Pollers fall back to persisted state until the holder finishes
                    self.progress.discard(trip_id)
                    record_pipeline_run("lock_denied")
                    return
                lease = self._hold(trip_id, result.lock_owner)

            self.progress.update(trip_id, ProgressStep.FLIGHTS)
            if not await self._generate(trip_id, request, report, start_date, end_date, lease.owner):
                logger.warning(f"Trip {trip_id} lost its generation lease; discarding results")
                lease.heartbeat.cancel()
                lease = None
                self.progress.discard(trip_id)
                record_pipeline_run("superseded")
                return

            await self._release(trip_id, lease, ItineraryStatus.complete)
            lease = None
            self.progress.complete(trip_id)
            record_pipeline_run("success")
            logger.info(f"Trip {trip_id} completed in {(time.perf_counter() - started) * 1000:.0f}ms")
        except Exception as e:
            logger.exception(f"Error processing trip {trip_id}: {e}")
            await self._release(trip_id, lease, ItineraryStatus.error)
            lease = None
            self.progress.fail(trip_id, str(e))
            record_pipeline_run("error")
        finally:
            # Cancellation skips the handlers above
            if lease is not None:
                lease.heartbeat.cancel()
                await self._release(trip_id, lease, ItineraryStatus.error)

    def _hold(self, trip_id: int, lock_owner: str) -> _Lease:
        return _Lease(owner=lock_owner, heartbeat=self.lock.start_heartbeat(trip_id, lock_owner))

    async def _release(self, trip_id: int, lease: _Lease | None, final_status: ItineraryStatus) -> None:
        if lease is None:
            return
        lease.heartbeat.cancel()
        try:
            await self.lock.release(trip_id, lease.owner, final_status)
        except SQLAlchemyError as e:
            # The lease expires on its own after the lock timeout
            logger.error(f"Failed to release itinerary lock for trip {trip_id}: {e}")

    async def _run_feasibility(self, trip_id: int, request: TripCreate, lease: _Lease | None) -> FeasibilityReport:
        self.progress.update(trip_id, ProgressStep.FEASIBILITY)
        started = time.perf_counter()

        visa = await self.visa_service.lookup(request.passport, request.destination)

        outcome = "success"
        error: str | None = None
        report = self.feasibility_cache.get(request.passport, request.destination)
        if report is not None:
            outcome = "cache_hit"
        else:
            report = await self._assess(request, visa)
            if report is None:
                outcome = "fallback"
                error = FALLBACK_SUMMARY
                report = fallback_feasibility_report(visa)
            else:
                self.feasibility_cache.set(request.passport, request.destination, report)

        async with self.session_factory() as session:
            written = await trip_store.update_trip_feasibility(
                session,
                trip_id,
                report.overall,
                report.model_dump(mode="json", by_alias=True),
                error,
                lock_owner=lease.owner if lease else None,
            )
        if not written:
            logger.info(f"Feasibility for trip {trip_id} not stored: another run holds the lease")

        latency_ms = (time.perf_counter() - started) * 1000
        record_stage_latency("feasibility", latency_ms)
        self.stage_logger.log_stage(
            trip_id,
            "feasibility",
            outcome,
            latency_ms,
            overall=report.overall,
            score=report.score,
            visa_source=visa.source if visa else None,
        )
        return report

    async def _assess(self, request: TripCreate, visa: VisaRequirement | None) -> FeasibilityReport | None:
        """Single model call, no retry: a degraded answer beats a blocked user."""
        try:
            text = await self.llm.assess_feasibility(request, visa)
        except LLMCallError as e:
            logger.warning(f"Feasibility call failed: {e}")
            record_fallback("llm", "feasibility_call")
            return None

        report = report_from_payload(safe_json_parse(text, strategies=OBJECT_STRATEGIES))
        if report is None:
            record_fallback("llm", "feasibility_parse")
        return report

    async def _generate(
        self,
        trip_id: int,
        request: TripCreate,
        report: FeasibilityReport,
        start_date: date,
        end_date: date,
        lock_owner: str,
    ) -> bool:
        """Fan out, price and persist under the lease.

        Returns:
            False if the lease was lost before the results could be stored
        """
        num_days = trip_length_days(start_date, end_date)
        nights = max(num_days - 1, 1)
        in_past = start_date < self.today_fn()
        budget_tier = detect_budget_tier(
            request.travel_style, request.budget, request.currency, num_days, request.travelers
        )
        rates = await self.exchange_rates.get_rates()

        started = time.perf_counter()
        (days, days_source), flight_quote, hotel_quote = await asyncio.gather(
            self._obtain_days(trip_id, request, num_days, start_date, budget_tier),
            self._flights(trip_id, request, start_date, end_date, in_past),
            self._hotels(trip_id, request, start_date, end_date, nights, in_past, rates),
        )
        latency_ms = (time.perf_counter() - started) * 1000
        record_stage_latency("fan_out", latency_ms)
        self.stage_logger.log_stage(
            trip_id,
            "fan_out",
            "success",
            latency_ms,
            days=len(days),
            days_source=days_source,
            flight_source=flight_quote.source,
            hotel_source=hotel_quote.source,
        )

        self.progress.update(trip_id, ProgressStep.FINALIZING)
        cost_breakdown = build_cost_breakdown(
            request,
            days,
            flight_quote=flight_quote,
            hotel_quote=hotel_quote,
            budget_tier=budget_tier,
            num_days=num_days,
            nights=nights,
            rates=rates,
        )
        itinerary = Itinerary(days=days, cost_breakdown=cost_breakdown)
        synced = sync_feasibility_report(report, cost_breakdown, request.budget)

        async with self.session_factory() as session:
            if not await trip_store.update_trip_itinerary(
                session, trip_id, itinerary.model_dump(mode="json", by_alias=True), lock_owner=lock_owner
            ):
                return False
            await trip_store.update_trip_feasibility(
                session,
                trip_id,
                synced.overall,
                synced.model_dump(mode="json", by_alias=True),
                lock_owner=lock_owner,
            )
        logger.info(
            f"Trip {trip_id}: {len(days)} days, {cost_breakdown.currency_symbol}{cost_breakdown.grand_total:,} "
            f"({cost_breakdown.budget_status.value})"
        )
        return True

    def _advance(self, trip_id: int, step: ProgressStep) -> None:
        """Move progress forward only; parallel branches finish in any order."""
        current = self.progress.get(trip_id)
        if current is not None and 0 <= current.step < step:
            self.progress.update(trip_id, step)

    async def _obtain_days(
        self,
        trip_id: int,
        request: TripCreate,
        num_days: int,
        start_date: date,
        budget_tier: BudgetTier,
    ) -> tuple[list[Day], str]:
        """Template cache first, then the model, then the curated placeholder.

        Returns:
            (days, source) where source is "cache", "ai", "partial" or "placeholder"
        """
        cached = self.template_cache.get(request.destination, num_days, start_date)
        if cached is not None:
            return cached, "cache"

        days: list[Day] = []
        try:
            text = await self.llm.generate_itinerary(
                request, num_days=num_days, start_date=start_date, budget_tier=budget_tier
            )
            days = days_from_payload(
                safe_json_parse(text, {"days": []}, accept=_has_days), start_date, num_days
            )
        except LLMCallError as e:
            logger.warning(f"Itinerary call failed for trip {trip_id}: {e}")
            record_fallback("llm", "itinerary_call")

        self._advance(trip_id, ProgressStep.ITINERARY)

        if not days:
            record_fallback("llm", "itinerary_placeholder")
            return placeholder_days(request.destination, num_days, start_date), "placeholder"

        if len(days) < num_days:
            # Truncated output: fill the missing tail from the placeholder plan
            filler = placeholder_days(request.destination, num_days, start_date)[len(days):]
            return days + filler, "partial"

        if num_days >= MIN_CACHEABLE_DAYS:
            self.template_cache.put(request.destination, days)
        return days, "ai"

    async def _flights(
        self, trip_id: int, request: TripCreate, start_date: date, end_date: date, in_past: bool
    ) -> FlightQuote:
        seated = max(request.adults + request.children, 1)
        origin = request.origin or request.residence or request.passport
        if in_past:
            # Providers cannot quote historical fares
            quote = estimate_flight_price(origin, request.destination, seated)
        else:
            quote = await search_flights(
                origin,
                request.destination,
                start_date,
                end_date,
                seated,
                api_key=self.settings.serpapi_key,
                base_url=self.settings.serpapi_url,
                timeout_s=self.settings.search_timeout_s,
                client=self.http_client,
            )
        self._advance(trip_id, ProgressStep.HOTELS)
        return quote

    async def _hotels(
        self,
        trip_id: int,
        request: TripCreate,
        start_date: date,
        end_date: date,
        nights: int,
        in_past: bool,
        rates: dict[str, float],
    ) -> HotelQuote:
        hotel_budget_usd: int | None = None
        if request.budget > 0:
            hotel_budget_usd = round(
                convert_to_usd(request.budget * HOTEL_BUDGET_SHARE, request.currency, rates)
            )

        if in_past:
            quote = estimate_hotel_price(request.destination, nights, request.travelers, hotel_budget_usd)
        else:
            check_out = end_date if end_date > start_date else start_date + timedelta(days=1)
            quote = await search_hotels(
                request.destination,
                start_date,
                check_out,
                request.travelers,
                budget=hotel_budget_usd,
                api_key=self.settings.serpapi_key,
                base_url=self.settings.serpapi_url,
                timeout_s=self.settings.search_timeout_s,
                client=self.http_client,
            )
        self._advance(trip_id, ProgressStep.ITINERARY)
        return quote
