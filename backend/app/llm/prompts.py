"""Prompt builders for feasibility and itinerary generation."""

from datetime import date, timedelta

from backend.app.models.trip import TripCreate
from backend.app.models.visa import VisaRequirement

FEASIBILITY_TEMPERATURE = 0.2
FEASIBILITY_MAX_TOKENS = 350

ITINERARY_TEMPERATURE = 0.4
ITINERARY_TOKENS_PER_DAY = 280
ITINERARY_MIN_TOKENS = 3000
ITINERARY_MAX_TOKENS = 8000

FEASIBILITY_SYSTEM_PROMPT = (
    "You are a travel feasibility analyst. Respond with a single JSON object only."
)

ITINERARY_SYSTEM_PROMPT = (
    "You are an expert travel planner. Respond with a single JSON object only. "
    "Use realistic local prices in USD per person."
)


def itinerary_token_budget(num_days: int) -> int:
    """Token budget scaled by trip length, clamped to [3000, 8000]."""
    return max(ITINERARY_MIN_TOKENS, min(ITINERARY_MAX_TOKENS, num_days * ITINERARY_TOKENS_PER_DAY))


def _visa_line(visa: VisaRequirement | None) -> str:
    if visa is None:
        return "Known visa data: none (use your own knowledge)"
    line = f"Known visa data ({visa.source}): {visa.status_label}"
    if visa.processing_days_max:
        line += f", processing up to {visa.processing_days_max} days"
    return line


def build_feasibility_prompt(request: TripCreate, visa: VisaRequirement | None) -> str:
    """Compact prompt combining the trip request with any known visa data."""
    return "\n".join(
        [
            f"Passport: {request.passport}",
            f"Residence: {request.residence or request.passport}",
            f"From: {request.origin or 'unspecified'} To: {request.destination}",
            f"Dates: {request.dates}",
            f"Travelers: {request.travelers}",
            f"Budget: {request.budget} {request.currency} ({request.travel_style.value})",
            _visa_line(visa),
            "",
            "Return JSON: {"
            '"overall": "yes"|"warning"|"no", "score": 0-100, '
            '"breakdown": {'
            '"accessibility": {"status": "accessible"|"restricted"|"inaccessible", "reason": ""}, '
            '"visa": {"status": "ok"|"issue", "reason": "", "visaType": ""}, '
            '"budget": {"status": "ok"|"tight"|"impossible", "estimatedCost": 0, "reason": ""}, '
            '"safety": {"status": "safe"|"caution"|"danger", "reason": ""}}, '
            '"summary": ""}',
        ]
    )


def build_itinerary_prompt(
    request: TripCreate, num_days: int, start_date: date, budget_tier: str
) -> str:
    """Structural prompt for a day-by-day plan."""
    end_date = start_date + timedelta(days=num_days - 1)
    return "\n".join(
        [
            f"Create a {num_days}-day {budget_tier} itinerary for {request.destination}.",
            f"Dates: {start_date.isoformat()} to {end_date.isoformat()}. "
            f"Travelers: {request.travelers}.",
            "Rules:",
            "- Day 1: arrival at 14:00, then light activities.",
            f"- Day {num_days}: departure around 15:00.",
            "- 4-5 activities per day with realistic time gaps.",
            "- type is one of activity, meal, transport.",
            "- estimatedCost is USD per person.",
            "",
            'Return JSON: {"days": [{"day": 1, "date": "YYYY-MM-DD", "title": "", '
            '"activities": [{"time": "HH:MM", "description": "", "type": "activity", '
            '"location": "", "coordinates": {"lat": 0, "lng": 0}, "estimatedCost": 0}]}]}',
        ]
    )
