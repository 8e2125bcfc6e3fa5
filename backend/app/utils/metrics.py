"""Prometheus metrics for trip processing, providers, caches and the generation lock."""

from prometheus_client import Counter, Histogram

# Pipeline metrics
pipeline_runs_total = Counter(
    "trip_pipeline_runs_total",
    "Background trip processing runs by outcome",
    ["outcome"],
)

pipeline_stage_latency_ms = Histogram(
    "trip_pipeline_stage_latency_ms",
    "Latency of each processing stage in milliseconds",
    ["stage"],
    buckets=[10, 50, 100, 250, 500, 1000, 2500, 5000, 10000, 20000, 60000],
)

# Provider fallbacks (AI, flights, hotels, rates, visa)
provider_fallbacks_total = Counter(
    "provider_fallbacks_total",
    "Provider calls replaced by a fallback value",
    ["provider", "reason"],
)

# Caches
cache_events_total = Counter(
    "cache_events_total",
    "Cache lookups and evictions",
    ["cache", "event"],
)

# Generation lock
lock_acquisitions_total = Counter(
    "itinerary_lock_acquisitions_total",
    "Itinerary generation lock acquisition attempts by outcome",
    ["outcome"],
)


def record_stage_latency(stage: str, latency_ms: float) -> None:
    """Record latency for a pipeline stage."""
    pipeline_stage_latency_ms.labels(stage=stage).observe(latency_ms)


def record_pipeline_run(outcome: str) -> None:
    """Count a finished pipeline run (success, not_feasible, lock_denied or error)."""
    pipeline_runs_total.labels(outcome=outcome).inc()


def record_fallback(provider: str, reason: str) -> None:
    """Count a provider fallback."""
    provider_fallbacks_total.labels(provider=provider, reason=reason).inc()


def record_cache_event(cache: str, event: str) -> None:
    """Count a cache hit, miss, expiry or eviction."""
    cache_events_total.labels(cache=cache, event=event).inc()


def record_lock_attempt(outcome: str) -> None:
    """Count a lock acquisition attempt (acquired, stale_takeover, denied or missing)."""
    lock_acquisitions_total.labels(outcome=outcome).inc()
