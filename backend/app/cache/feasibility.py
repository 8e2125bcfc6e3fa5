"""In-memory feasibility cache keyed by (passport, destination country).

Visa rules are per country, so "Tokyo, Japan" and "Japan" share one bucket.
Entries expire after the TTL (an entry whose age equals the TTL is still
fresh) and are evicted on read once expired. At capacity the entry with the
oldest timestamp is evicted before a new key is inserted.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from backend.app.models.trip import FeasibilityReport
from backend.app.utils.dates import utcnow
from backend.app.utils.metrics import record_cache_event

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=24)
DEFAULT_MAX_ENTRIES = 1000


def cache_key(passport: str, destination: str) -> str:
    """Build the normalized cache key `passport:country`."""
    country = destination.split(",")[-1] if "," in destination else destination
    return f"{passport.strip().lower()}:{country.strip().lower()}"


@dataclass
class CacheEntry:
    """Cached report with its insertion time and hit count."""

    report: FeasibilityReport
    timestamp: datetime
    hit_count: int = 0


@dataclass
class CacheStats:
    """Counters exposed for diagnostics."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


@dataclass
class FeasibilityCache:
    """TTL and capacity bounded cache of feasibility reports."""

    ttl: timedelta = DEFAULT_TTL
    max_entries: int = DEFAULT_MAX_ENTRIES
    now_fn: Callable[[], datetime] = utcnow
    _entries: dict[str, CacheEntry] = field(default_factory=dict)
    _stats: CacheStats = field(default_factory=CacheStats)

    def get(self, passport: str, destination: str) -> FeasibilityReport | None:
        """Return the cached report, or None on miss/expiry."""
        key = cache_key(passport, destination)
        entry = self._entries.get(key)

        if entry is None:
            self._stats.misses += 1
            record_cache_event("feasibility", "miss")
            return None

        if self.now_fn() - entry.timestamp > self.ttl:
            del self._entries[key]
            self._stats.misses += 1
            record_cache_event("feasibility", "expired")
            return None

        entry.hit_count += 1
        self._stats.hits += 1
        record_cache_event("feasibility", "hit")
        return entry.report

    def set(self, passport: str, destination: str, report: FeasibilityReport) -> None:
        """Store a report, evicting the oldest entry when full."""
        key = cache_key(passport, destination)

        if key not in self._entries and len(self._entries) >= self.max_entries:
            self._evict_oldest()

        self._entries[key] = CacheEntry(report=report, timestamp=self.now_fn())

    def _evict_oldest(self) -> None:
        if not self._entries:
            return
        oldest_key = min(self._entries, key=lambda k: self._entries[k].timestamp)
        del self._entries[oldest_key]
        self._stats.evictions += 1
        record_cache_event("feasibility", "eviction")
        logger.debug(f"Evicted feasibility cache entry {oldest_key}")

    def stats(self) -> CacheStats:
        """Snapshot of hit/miss/eviction counters."""
        return CacheStats(
            hits=self._stats.hits,
            misses=self._stats.misses,
            evictions=self._stats.evictions,
            size=len(self._entries),
        )

    def __len__(self) -> int:
        return len(self._entries)
