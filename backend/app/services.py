"""Process-wide service container built once at startup."""

import logging
from dataclasses import dataclass
from datetime import timedelta

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.app.adapters.exchange_rates import ExchangeRateProvider
from backend.app.cache.feasibility import FeasibilityCache
from backend.app.cache.itinerary_templates import ItineraryTemplateCache
from backend.app.config import Settings
from backend.app.llm.client import LLMClient, get_llm_client
from backend.app.orchestration.lock import ItineraryGenerationLock
from backend.app.orchestration.processor import TripProcessor
from backend.app.orchestration.progress import ProgressTracker
from backend.app.orchestration.worker import BackgroundWorker
from backend.app.visa.corridors import CorridorStore
from backend.app.visa.passport_index import PassportIndex
from backend.app.visa.service import VisaLookupService

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    settings: Settings
    session_factory: async_sessionmaker[AsyncSession]
    llm: LLMClient
    feasibility_cache: FeasibilityCache
    template_cache: ItineraryTemplateCache
    exchange_rates: ExchangeRateProvider
    visa_service: VisaLookupService
    progress: ProgressTracker
    lock: ItineraryGenerationLock
    worker: BackgroundWorker
    processor: TripProcessor


def build_services(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
    *,
    http_client: httpx.AsyncClient | None = None,
    llm: LLMClient | None = None,
) -> AppServices:
    """Wire caches, lookups, the lock and the processor.

    Args:
        settings: Application settings
        session_factory: Async session factory bound to the app engine
        http_client: Shared client for outbound providers (tests pass a mock transport)
        llm: Model client override; chosen from settings when omitted
    """
    llm = llm if llm is not None else get_llm_client(settings)

    feasibility_cache = FeasibilityCache(
        ttl=timedelta(hours=settings.feasibility_cache_ttl_hours),
        max_entries=settings.feasibility_cache_max_entries,
    )
    template_cache = ItineraryTemplateCache()
    template_cache.seed()

    exchange_rates = ExchangeRateProvider(
        settings.exchange_rate_url,
        ttl=timedelta(seconds=settings.exchange_rate_ttl_s),
        timeout_s=settings.exchange_rate_timeout_s,
        client=http_client,
    )

    passport_index = PassportIndex()
    if settings.passport_index_path.exists():
        passport_index.load(settings.passport_index_path)
    else:
        logger.warning(f"Passport index not found at {settings.passport_index_path}")

    corridors = CorridorStore()
    if settings.corridor_data_dir.is_dir():
        corridors.load_dir(settings.corridor_data_dir)

    visa_service = VisaLookupService(
        corridors,
        passport_index,
        session_factory,
        api_key=settings.rapidapi_key,
        api_url=settings.visa_api_url,
        api_timeout_s=settings.visa_api_timeout_s,
        api_cache_ttl=timedelta(days=settings.visa_api_cache_days),
        client=http_client,
    )

    progress = ProgressTracker(grace_period_s=settings.progress_grace_s)
    lock = ItineraryGenerationLock(
        session_factory,
        timeout=timedelta(minutes=settings.itinerary_lock_timeout_min),
        refresh_interval_s=settings.itinerary_lock_refresh_s,
    )
    processor = TripProcessor(
        session_factory,
        settings=settings,
        llm=llm,
        feasibility_cache=feasibility_cache,
        template_cache=template_cache,
        exchange_rates=exchange_rates,
        visa_service=visa_service,
        progress=progress,
        lock=lock,
        http_client=http_client,
    )

    return AppServices(
        settings=settings,
        session_factory=session_factory,
        llm=llm,
        feasibility_cache=feasibility_cache,
        template_cache=template_cache,
        exchange_rates=exchange_rates,
        visa_service=visa_service,
        progress=progress,
        lock=lock,
        worker=BackgroundWorker(),
        processor=processor,
    )
