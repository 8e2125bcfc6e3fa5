"""Structured, null-safe comparison of two trip states.

Unknown money is None, and any delta involving None is None with direction
"unavailable". The recommendation score is a weighted sum over the signals
that are actually present; see `signal_weights`.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from backend.app.models.comparison import (
    CertaintyDelta,
    CertaintySnapshot,
    CostDelta,
    CostSnapshot,
    ItineraryChanges,
    ItinerarySummary,
    PlanComparison,
    PlanInputs,
    PlanSnapshot,
    Recommendation,
    TotalCostDelta,
    VisaRisk,
)
from backend.app.models.common import ActivityType
from backend.app.models.trip import FeasibilityReport, Itinerary, TripResponse
from backend.app.utils.dates import parse_date_range

# A trip this long has no slack; every day beyond it is a buffer day
MINIMUM_TRIP_DAYS = 3
MAX_HIGHLIGHTS = 10

PREFERENCE_THRESHOLD = 0.3
HIGH_CONFIDENCE_THRESHOLD = 0.6

# Score contribution units
CERTAINTY_POINTS_PER_UNIT = 5
COST_PERCENT_PER_UNIT = 10
VISA_IMPROVEMENT_SCORE = 0.5
BUFFER_IMPROVEMENT_SCORE = 0.3

BASE_WEIGHTS: dict[str, float] = {"certainty": 0.5, "cost": 0.3, "visa": 0.15, "buffer": 0.05}

COST_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("flights", "Flights"),
    ("stay", "Accommodation"),
    ("activities", "Activities"),
    ("visa", "Visa"),
    ("insurance", "Insurance"),
    ("food", "Food & Dining"),
    ("transport", "Local Transport"),
    ("misc", "Miscellaneous"),
)

VISA_RISK_RANK: dict[str, int] = {"low": 1, "medium": 2, "high": 3}


@dataclass(frozen=True)
class SignalWeights:
    certainty: float
    cost: float
    visa: float
    buffer: float


def signal_weights(*, has_certainty: bool, has_cost: bool) -> SignalWeights:
    """Weight vector for the available signals.

    Missing signals get weight 0 and the remaining base weights are rescaled
    to sum to 1, so absent data is never read as "no preference".
    """
    available = {"visa", "buffer"}
    if has_certainty:
        available.add("certainty")
    if has_cost:
        available.add("cost")
    total = sum(weight for name, weight in BASE_WEIGHTS.items() if name in available)
    scaled = {
        name: (weight / total if name in available else 0.0) for name, weight in BASE_WEIGHTS.items()
    }
    return SignalWeights(**scaled)


def _money(value: object) -> int | None:
    """Positive amount or None. Zero and garbage count as unknown."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return round(value) if value > 0 else None


def _delta(before: int | None, after: int | None) -> int | None:
    if before is None or after is None:
        return None
    return after - before


def _cost_direction(delta: int | None) -> str:
    if delta is None:
        return "unavailable"
    return "up" if delta > 0 else "down" if delta < 0 else "same"


def buffer_days(dates: str) -> int:
    date_range = parse_date_range(dates)
    if date_range is None:
        return 0
    start, end = date_range
    return max(0, (end - start).days - MINIMUM_TRIP_DAYS)


def visa_risk(report: FeasibilityReport | None) -> VisaRisk:
    if report is None:
        return "medium"
    if report.breakdown.visa.status == "issue" or report.score < 50:
        return "high"
    if report.score < 70:
        return "medium"
    return "low"


def _cost_snapshot(itinerary: Itinerary | None) -> CostSnapshot:
    costs = itinerary.cost_breakdown if itinerary else None
    if costs is None:
        return CostSnapshot()

    parts = {
        "flights": _money(costs.flights.total),
        "stay": _money(costs.accommodation.total),
        "activities": _money(costs.activities.total),
        "food": _money(costs.food.total),
        "transport": _money(costs.local_transport.total),
        "misc": _money(costs.misc.total),
    }
    known = [value for value in parts.values() if value is not None]
    total = _money(costs.grand_total)
    if total is None and known:
        total = sum(known)
    return CostSnapshot(currency_symbol=costs.currency_symbol, total=total, **parts)


def _highlights(itinerary: Itinerary | None) -> list[str]:
    if itinerary is None:
        return []
    highlights = [
        activity.description
        for day in itinerary.days
        for activity in day.activities
        if activity.type == ActivityType.activity and activity.description
    ]
    return highlights[:MAX_HIGHLIGHTS]


def extract_snapshot(trip: TripResponse, label: str) -> PlanSnapshot:
    """Normalize a trip into comparable fields."""
    report = trip.feasibility_report
    itinerary = trip.itinerary
    breakdown = report.breakdown if report else None

    return PlanSnapshot(
        label=label,  # type: ignore[arg-type]
        inputs=PlanInputs(
            passport=trip.passport,
            destination=trip.destination,
            dates=trip.dates,
            budget=trip.budget,
            travelers=trip.group_size,
            travel_style=trip.travel_style.value,
        ),
        certainty=CertaintySnapshot(
            score=report.score if report else None,
            visa_risk=visa_risk(report),
            visa_type=(breakdown.visa.visa_type if breakdown else None) or "unknown",
            buffer_days=buffer_days(trip.dates),
            accessibility_status=breakdown.accessibility.status if breakdown and breakdown.accessibility else None,
            safety_status=breakdown.safety.status if breakdown else None,
        ),
        costs=_cost_snapshot(itinerary),
        itinerary=ItinerarySummary(
            day_count=len(itinerary.days) if itinerary else 0,
            highlights=_highlights(itinerary),
            activities=sum(len(day.activities) for day in itinerary.days) if itinerary else 0,
        ),
    )


def _incomparable_reasons(a: PlanSnapshot, b: PlanSnapshot) -> list[str]:
    reasons = []
    if a.inputs.destination.strip().lower() != b.inputs.destination.strip().lower():
        reasons.append("destinations differ")
    if a.inputs.passport.strip().lower() != b.inputs.passport.strip().lower():
        reasons.append("passport countries differ")
    if a.inputs.travelers != b.inputs.travelers:
        reasons.append("traveler count differs")
    return reasons


def _certainty_delta(a: PlanSnapshot, b: PlanSnapshot) -> CertaintyDelta:
    delta = _delta(a.certainty.score, b.certainty.score)
    if delta is None:
        direction = "unavailable"
    else:
        direction = "improved" if delta > 0 else "worsened" if delta < 0 else "same"
    return CertaintyDelta(
        score_before=a.certainty.score,
        score_after=b.certainty.score,
        delta=delta,
        direction=direction,  # type: ignore[arg-type]
        visa_risk_before=a.certainty.visa_risk,
        visa_risk_after=b.certainty.visa_risk,
        buffer_days_before=a.certainty.buffer_days,
        buffer_days_after=b.certainty.buffer_days,
        buffer_delta=b.certainty.buffer_days - a.certainty.buffer_days,
    )


def _cost_deltas(a: PlanSnapshot, b: PlanSnapshot) -> list[CostDelta]:
    deltas = []
    for field_name, category in COST_CATEGORIES:
        before = getattr(a.costs, field_name)
        after = getattr(b.costs, field_name)
        if before is None and after is None:
            continue
        delta = _delta(before, after)
        deltas.append(
            CostDelta(
                category=category,
                before=before,
                after=after,
                delta=delta,
                direction=_cost_direction(delta),  # type: ignore[arg-type]
            )
        )
    return deltas


def _total_cost_delta(a: PlanSnapshot, b: PlanSnapshot) -> TotalCostDelta:
    before, after = a.costs.total, b.costs.total
    delta = _delta(before, after)
    percent = round(delta / before * 100) if delta is not None and before else None
    return TotalCostDelta(
        before=before,
        after=after,
        delta=delta,
        percent_change=percent,
        direction=_cost_direction(delta),  # type: ignore[arg-type]
    )


def _new_items(items: Iterable[str], reference: list[str]) -> list[str]:
    return [item for item in items if item not in reference]


def _format_money(symbol: str, amount: int) -> str:
    return f"{symbol}{abs(amount):,}"


def recommend(
    certainty: CertaintyDelta, cost: TotalCostDelta, currency_symbol: str = "$"
) -> Recommendation:
    """Weighted preference between A (original) and B (updated)."""
    has_certainty = certainty.delta is not None
    has_cost = cost.delta is not None
    weights = signal_weights(has_certainty=has_certainty, has_cost=has_cost)

    visa_improved = VISA_RISK_RANK[certainty.visa_risk_after] < VISA_RISK_RANK[certainty.visa_risk_before]
    buffer_improved = certainty.buffer_delta > 0

    score = 0.0
    if certainty.delta is not None:
        score += certainty.delta / CERTAINTY_POINTS_PER_UNIT * weights.certainty
    if cost.percent_change is not None:
        score += -cost.percent_change / COST_PERCENT_PER_UNIT * weights.cost
    if visa_improved:
        score += VISA_IMPROVEMENT_SCORE * weights.visa
    if buffer_improved:
        score += BUFFER_IMPROVEMENT_SCORE * weights.buffer

    full_data = has_certainty and has_cost
    if score > PREFERENCE_THRESHOLD:
        preferred = "B"
        confidence = ("high" if score > HIGH_CONFIDENCE_THRESHOLD else "medium") if full_data else "low"
    elif score < -PREFERENCE_THRESHOLD:
        preferred = "A"
        confidence = ("high" if score < -HIGH_CONFIDENCE_THRESHOLD else "medium") if full_data else "low"
    else:
        preferred = "neutral"
        confidence = "low"

    missing = [name for name, present in (("certainty", has_certainty), ("cost", has_cost)) if not present]
    data_warning = f" ({' and '.join(missing)} data unavailable)" if missing else ""

    if preferred == "B":
        improvements = []
        if certainty.delta is not None and certainty.delta > 0:
            improvements.append(f"+{certainty.delta}% certainty")
        if visa_improved:
            improvements.append("lower visa risk")
        if buffer_improved:
            improvements.append("more buffer days")
        if improvements:
            cost_note = ""
            if cost.delta:
                verb = "costs" if cost.delta > 0 else "saves"
                suffix = " more" if cost.delta > 0 else ""
                cost_note = f" ({verb} {_format_money(currency_symbol, cost.delta)}{suffix})"
            reason = f"Updated plan offers {', '.join(improvements)}{cost_note}{data_warning}."
        else:
            reason = f"Updated plan is recommended based on overall improvements{data_warning}."
    elif preferred == "A":
        reasons = []
        if certainty.delta is not None and certainty.delta < 0:
            reasons.append(f"maintains {abs(certainty.delta)}% higher certainty")
        if cost.delta is not None and cost.delta > 0:
            reasons.append(f"saves {_format_money(currency_symbol, cost.delta)}")
        reason = f"Original plan {' and '.join(reasons) or 'is recommended'}{data_warning}."
    else:
        reason = f"Both plans are comparable. Choose based on your priorities{data_warning}."

    tradeoffs = []
    if certainty.delta:
        tradeoffs.append(f"{'improves' if certainty.delta > 0 else 'reduces'} certainty by {abs(certainty.delta)}%")
    elif not has_certainty:
        tradeoffs.append("certainty data unavailable")
    if cost.delta:
        tradeoffs.append(f"{'costs' if cost.delta > 0 else 'saves'} {_format_money(currency_symbol, cost.delta)}")
    elif not has_cost:
        tradeoffs.append("cost data unavailable")
    if visa_improved:
        tradeoffs.append("lowers visa risk")
    tradeoff_summary = f"Updated plan {', '.join(tradeoffs)}." if tradeoffs else "No significant tradeoffs."

    return Recommendation(
        preferred=preferred,  # type: ignore[arg-type]
        confidence=confidence,  # type: ignore[arg-type]
        reason=reason,
        tradeoff_summary=tradeoff_summary,
    )


def compare_plans(trip_a: TripResponse, trip_b: TripResponse) -> PlanComparison:
    """Diff the original plan (A) against the updated plan (B)."""
    plan_a = extract_snapshot(trip_a, "original")
    plan_b = extract_snapshot(trip_b, "updated")

    reasons = _incomparable_reasons(plan_a, plan_b)
    incomparable_reason = f"Plans not comparable: {', '.join(reasons)}" if reasons else None

    certainty = _certainty_delta(plan_a, plan_b)
    total_cost = _total_cost_delta(plan_a, plan_b)

    if incomparable_reason is None:
        recommendation = recommend(certainty, total_cost, plan_b.costs.currency_symbol)
    else:
        recommendation = Recommendation(
            preferred="neutral",
            confidence="low",
            reason=incomparable_reason,
            tradeoff_summary="N/A",
        )

    return PlanComparison(
        plan_a=plan_a,
        plan_b=plan_b,
        is_comparable=incomparable_reason is None,
        incomparable_reason=incomparable_reason,
        certainty_delta=certainty,
        cost_deltas=_cost_deltas(plan_a, plan_b),
        total_cost_delta=total_cost,
        itinerary_changes=ItineraryChanges(
            day_count_before=plan_a.itinerary.day_count,
            day_count_after=plan_b.itinerary.day_count,
            added_highlights=_new_items(plan_b.itinerary.highlights, plan_a.itinerary.highlights),
            removed_highlights=_new_items(plan_a.itinerary.highlights, plan_b.itinerary.highlights),
        ),
        recommendation=recommendation,
    )
