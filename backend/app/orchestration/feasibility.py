"""Feasibility verdict helpers: parse model output, fall back, reconcile with real costs."""

import logging
from typing import Any

from pydantic import ValidationError

from backend.app.models.common import BudgetStatus
from backend.app.models.trip import (
    CostBreakdown,
    DimensionAssessment,
    FeasibilityBreakdown,
    FeasibilityReport,
)
from backend.app.models.visa import VisaRequirement

logger = logging.getLogger(__name__)

# Score ceiling once a "yes" is downgraded for exceeding the budget
OVER_BUDGET_SCORE_CAP = 65

FALLBACK_SCORE = 50
FALLBACK_SUMMARY = "Analysis incomplete - please refresh"


def fallback_feasibility_report(visa: VisaRequirement | None = None) -> FeasibilityReport:
    """Degraded verdict used when the model output cannot be salvaged."""
    if visa is not None:
        visa_dimension = DimensionAssessment(
            status="ok" if visa.is_easy else "issue",
            reason=visa.status_label,
            visa_type=visa.status,
        )
    else:
        visa_dimension = DimensionAssessment(status="issue", reason="Unable to verify")
    return FeasibilityReport(
        overall="warning",
        score=FALLBACK_SCORE,
        breakdown=FeasibilityBreakdown(
            visa=visa_dimension,
            budget=DimensionAssessment(status="tight", reason="Unable to verify"),
            safety=DimensionAssessment(status="caution", reason="Unable to verify"),
        ),
        summary=FALLBACK_SUMMARY,
    )


def report_from_payload(payload: Any) -> FeasibilityReport | None:
    """Validate a repaired model payload; None if it does not describe a verdict."""
    if not isinstance(payload, dict):
        return None
    try:
        return FeasibilityReport.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Feasibility payload failed validation: {e.error_count()} errors")
        return None


def _money(symbol: str, amount: int) -> str:
    return f"{symbol}{amount:,}"


def sync_feasibility_report(
    report: FeasibilityReport, costs: CostBreakdown, budget: int
) -> FeasibilityReport:
    """Rewrite the budget dimension from computed costs.

    An over-budget trip downgrades a "yes" verdict to "warning" and caps the
    score. Returns a new report; the input is not modified.
    """
    total = costs.grand_total
    symbol = costs.currency_symbol
    status = costs.budget_status

    if budget <= 0:
        budget_dimension = DimensionAssessment(
            status="ok",
            estimated_cost=total,
            reason=f"Estimated trip cost {_money(symbol, total)}",
        )
    elif status == BudgetStatus.over_budget:
        budget_dimension = DimensionAssessment(
            status="impossible",
            estimated_cost=total,
            reason=f"Trip costs {_money(symbol, total)} exceed your {_money(symbol, budget)} budget",
        )
    elif status == BudgetStatus.tight:
        budget_dimension = DimensionAssessment(
            status="tight",
            estimated_cost=total,
            reason=f"Trip costs {_money(symbol, total)} - close to your {_money(symbol, budget)} budget",
        )
    else:
        budget_dimension = DimensionAssessment(
            status="ok",
            estimated_cost=total,
            reason=f"Trip costs {_money(symbol, total)} - within your {_money(symbol, budget)} budget",
        )

    summary = report.summary
    overall = report.overall
    score = report.score
    if budget > 0 and status == BudgetStatus.over_budget:
        visa_note = (
            "Visa requirements appear favorable."
            if report.breakdown.visa.status == "ok"
            else "Check visa requirements carefully."
        )
        summary = f"Trip exceeds budget by {_money(symbol, total - budget)}. {visa_note}"
        if overall == "yes":
            overall = "warning"
            score = min(score, OVER_BUDGET_SCORE_CAP)

    return report.model_copy(
        update={
            "overall": overall,
            "score": score,
            "summary": summary,
            "breakdown": report.breakdown.model_copy(update={"budget": budget_dimension}),
        }
    )
