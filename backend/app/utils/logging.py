"""Structured logging for pipeline stages."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredPipelineLogger:
    """Structured logger for background trip processing stages."""

    def log_stage(
        self,
        trip_id: int,
        stage: str,
        outcome: str,
        latency_ms: float,
        **fields: Any,
    ) -> None:
        """Log a stage result with structured data."""
        log_data: dict[str, Any] = {
            "trip_id": trip_id,
            "stage": stage,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }
        log_data.update({k: v for k, v in fields.items() if v is not None})

        log_msg = f"Trip {trip_id} stage {stage} - {outcome}"

        if outcome in ("success", "cache_hit", "skipped"):
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
