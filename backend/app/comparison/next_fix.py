"""Deterministic next-fix suggestion from a plan comparison.

Rules run in fixed priority order and the first match wins:

1. plans not comparable -> revert the change
2. high visa risk or too few buffer days -> extend dates
3. material total-cost increase -> reduce the dominant category (or review budget)
4. material certainty drop -> visa, buffer, or simplify
5. cost data unavailable -> refresh pricing
6. otherwise -> save this version
"""

from backend.app.models.comparison import (
    CertaintyDelta,
    Confidence,
    CostDelta,
    EditorTarget,
    FixAction,
    FixActionPayload,
    FixImpact,
    NextFixSuggestion,
    PlanComparison,
    TotalCostDelta,
    VisaRisk,
)

MIN_SAFE_BUFFER_DAYS = 5
CRITICAL_BUFFER_DAYS = 3
MATERIAL_COST_INCREASE = 150
HIGH_COST_INCREASE = 300
MATERIAL_CERTAINTY_DROP = 5
HIGH_CERTAINTY_DROP = 10
DOMINANT_CATEGORY_RATIO = 0.4

CATEGORY_EDITORS: dict[str, EditorTarget] = {
    "Flights": "flights",
    "Accommodation": "hotels",
    "Activities": "itinerary",
    "Food & Dining": "budget",
    "Local Transport": "budget",
    "Visa": "visa_docs",
    "Insurance": "budget",
    "Miscellaneous": "budget",
}

_DOWNGRADE: dict[str, Confidence] = {"high": "medium", "medium": "low", "low": "low"}


def classify_confidence(
    visa_risk: VisaRisk,
    buffer_days: int,
    cost_delta: int | None = None,
    certainty_delta: int | None = None,
) -> Confidence:
    """Severity of the worst signal."""
    if (
        visa_risk == "high"
        or buffer_days < CRITICAL_BUFFER_DAYS
        or (cost_delta is not None and cost_delta > HIGH_COST_INCREASE)
        or (certainty_delta is not None and certainty_delta < -HIGH_CERTAINTY_DROP)
    ):
        return "high"
    if (
        visa_risk == "medium"
        or buffer_days < MIN_SAFE_BUFFER_DAYS
        or (cost_delta is not None and cost_delta > MATERIAL_COST_INCREASE)
        or (certainty_delta is not None and certainty_delta < -MATERIAL_CERTAINTY_DROP)
    ):
        return "medium"
    return "low"


def _open_editor(editor: EditorTarget) -> FixAction:
    return FixAction(type="OPEN_EDITOR", payload=FixActionPayload(editor=editor))


def _trigger_flow(flow: str) -> FixAction:
    return FixAction(type="TRIGGER_FLOW", payload=FixActionPayload(flow=flow))


def _revert(reason: str | None) -> NextFixSuggestion:
    return NextFixSuggestion(
        id="REVERT_CHANGE",
        title="Revert to compare accurately",
        reason=reason or "Plans cannot be compared due to fundamental differences.",
        cta_label="Undo change",
        action=_trigger_flow("undo_change"),
        confidence="medium",
    )


def _buffer_rule(certainty: CertaintyDelta) -> NextFixSuggestion | None:
    current = certainty.buffer_days_after
    risk = certainty.visa_risk_after

    if risk == "high":
        suggested = max(3, MIN_SAFE_BUFFER_DAYS - current)
        return NextFixSuggestion(
            id="ADD_BUFFER_DAYS",
            title=f"Add {suggested} buffer days to reduce visa risk",
            reason="High visa risk detected. Adding buffer days improves approval chances and reduces stress.",
            impact=FixImpact(buffer_days=suggested, certainty_points=5 + suggested),
            cta_label="Extend trip",
            action=_open_editor("dates"),
            confidence=classify_confidence(risk, current, None, certainty.delta),
        )

    if current < MIN_SAFE_BUFFER_DAYS:
        suggested = MIN_SAFE_BUFFER_DAYS - current
        return NextFixSuggestion(
            id="ADD_BUFFER_DAYS",
            title=f"Add {suggested} more days for safety buffer",
            reason=f"Only {current} buffer days. Adding more time reduces risk if plans change.",
            impact=FixImpact(buffer_days=suggested, certainty_points=suggested * 2),
            cta_label="Adjust dates",
            action=_open_editor("dates"),
            confidence="high" if current < CRITICAL_BUFFER_DAYS else "medium",
        )
    return None


def dominant_category(cost_deltas: list[CostDelta], total_delta: int) -> CostDelta | None:
    """First category whose increase is at least 40% of the total increase."""
    if total_delta == 0:
        return None
    for cost_delta in cost_deltas:
        if cost_delta.delta is not None and cost_delta.delta > 0:
            if cost_delta.delta / total_delta >= DOMINANT_CATEGORY_RATIO:
                return cost_delta
    return None


def _cost_rule(
    total: TotalCostDelta, cost_deltas: list[CostDelta], symbol: str
) -> NextFixSuggestion | None:
    delta = total.delta
    if delta is None or delta <= MATERIAL_COST_INCREASE:
        return None

    confidence = classify_confidence("low", MIN_SAFE_BUFFER_DAYS * 2, delta, None)
    dominant = dominant_category(cost_deltas, delta)
    if dominant is not None and dominant.delta is not None:
        name = dominant.category
        return NextFixSuggestion(
            id="REDUCE_COST",
            title=f"Reduce {name.lower()} cost",
            reason=f"{name} increased by {symbol}{dominant.delta:,}, driving up total cost.",
            impact=FixImpact(cost_delta=-dominant.delta),
            cta_label=f"Review {name.lower()}",
            action=_open_editor(CATEGORY_EDITORS.get(name, "budget")),
            confidence=confidence,
        )

    # Generic suggestions are less actionable
    return NextFixSuggestion(
        id="REDUCE_COST",
        title="Review budget to reduce costs",
        reason=f"Total cost increased by {symbol}{delta:,}. Review options to stay within budget.",
        impact=FixImpact(cost_delta=-delta),
        cta_label="Review budget",
        action=_open_editor("budget"),
        confidence=_DOWNGRADE[confidence],
    )


def _certainty_rule(certainty: CertaintyDelta) -> NextFixSuggestion | None:
    delta = certainty.delta
    if delta is None or delta >= -MATERIAL_CERTAINTY_DROP:
        return None

    drop = abs(delta)
    base = classify_confidence(certainty.visa_risk_after, certainty.buffer_days_after, None, delta)

    if certainty.visa_risk_after == "high" and certainty.visa_risk_before != "high":
        return NextFixSuggestion(
            id="LOWER_VISA_RISK",
            title="Address increased visa risk",
            reason=f"Certainty dropped {drop}% due to higher visa risk.",
            impact=FixImpact(certainty_points=drop),
            cta_label="Review visa",
            action=_open_editor("visa_docs"),
            confidence=base,
        )

    if certainty.buffer_delta < 0:
        return NextFixSuggestion(
            id="ADD_BUFFER_DAYS",
            title="Restore buffer days",
            reason=f"Certainty dropped {drop}% partly due to fewer buffer days.",
            impact=FixImpact(certainty_points=drop, buffer_days=abs(certainty.buffer_delta)),
            cta_label="Adjust dates",
            action=_open_editor("dates"),
            confidence="high" if base == "high" else "medium",
        )

    return NextFixSuggestion(
        id="IMPROVE_CERTAINTY",
        title="Simplify itinerary to improve certainty",
        reason=f"Certainty dropped {drop}%. A simpler plan may be more reliable.",
        impact=FixImpact(certainty_points=round(drop * 0.7)),
        cta_label="Review itinerary",
        action=_open_editor("itinerary"),
        confidence="low",
    )


def _missing_cost_rule(total: TotalCostDelta) -> NextFixSuggestion | None:
    if total.direction != "unavailable":
        return None
    return NextFixSuggestion(
        id="REFRESH_PRICING",
        title="Refresh pricing for accurate comparison",
        reason="Cost data is unavailable. Refresh to see accurate cost comparison.",
        cta_label="Refresh prices",
        action=_trigger_flow("refresh_pricing"),
        confidence="medium",
    )


def _save_version() -> NextFixSuggestion:
    return NextFixSuggestion(
        id="SAVE_VERSION",
        title="Looking good! Save this version",
        reason="No major issues detected. Save to preserve this plan.",
        cta_label="Save trip",
        action=_trigger_flow("save_trip"),
        confidence="low",
    )


def suggest_next_fix(comparison: PlanComparison | None) -> NextFixSuggestion | None:
    """Return the single highest-priority suggestion, or None without a comparison."""
    if comparison is None:
        return None
    if not comparison.is_comparable:
        return _revert(comparison.incomparable_reason)

    symbol = comparison.plan_b.costs.currency_symbol
    return (
        _buffer_rule(comparison.certainty_delta)
        or _cost_rule(comparison.total_cost_delta, comparison.cost_deltas, symbol)
        or _certainty_rule(comparison.certainty_delta)
        or _missing_cost_rule(comparison.total_cost_delta)
        or _save_version()
    )
