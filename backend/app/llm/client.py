"""LLM client for feasibility and itinerary generation.

Security: Reads API keys from settings only, never hardcoded.
Provides deterministic fallback when no key present for testing.
"""

import json
import logging
from datetime import date, timedelta
from typing import Protocol

from openai import AsyncOpenAI, OpenAIError

from backend.app.config import Settings
from backend.app.data.destinations import lookup_destination
from backend.app.llm.prompts import (
    FEASIBILITY_MAX_TOKENS,
    FEASIBILITY_SYSTEM_PROMPT,
    FEASIBILITY_TEMPERATURE,
    ITINERARY_SYSTEM_PROMPT,
    ITINERARY_TEMPERATURE,
    build_feasibility_prompt,
    build_itinerary_prompt,
    itinerary_token_budget,
)
from backend.app.models.trip import TripCreate
from backend.app.models.visa import VisaRequirement

logger = logging.getLogger(__name__)


class LLMCallError(Exception):
    """Raised when the AI provider call fails or returns nothing."""


class LLMClient(Protocol):
    """Protocol for LLM client implementations.

    Both methods return raw model text; callers run it through the JSON repair
    cascade because output may be truncated.
    """

    async def assess_feasibility(
        self, request: TripCreate, visa: VisaRequirement | None = None
    ) -> str:
        """Return a feasibility verdict as JSON text."""
        ...

    async def generate_itinerary(
        self, request: TripCreate, *, num_days: int, start_date: date, budget_tier: str
    ) -> str:
        """Return a day-by-day plan as JSON text."""
        ...


class DeterministicStubClient:
    """Deterministic stub client for testing (no API key required)."""

    async def assess_feasibility(
        self, request: TripCreate, visa: VisaRequirement | None = None
    ) -> str:
        """Generate a deterministic positive verdict."""
        visa_ok = visa is None or visa.status not in ("visa_required", "no_admission", "covid_ban")
        visa_reason = visa.status_label if visa is not None else "No visa data available"
        return json.dumps(
            {
                "overall": "yes" if visa_ok else "warning",
                "score": 82 if visa_ok else 60,
                "breakdown": {
                    "accessibility": {"status": "accessible", "reason": "Regular flights available"},
                    "visa": {
                        "status": "ok" if visa_ok else "issue",
                        "reason": visa_reason,
                        "visaType": visa.status if visa is not None else None,
                    },
                    "budget": {"status": "ok", "estimatedCost": 0, "reason": "Budget looks workable"},
                    "safety": {"status": "safe", "reason": "No current advisories"},
                },
                "summary": f"{request.destination} looks feasible for this trip (stub assessment).",
            }
        )

    async def generate_itinerary(
        self, request: TripCreate, *, num_days: int, start_date: date, budget_tier: str
    ) -> str:
        """Generate a deterministic plan from the curated destination table."""
        info = lookup_destination(request.destination)
        place = request.destination.split(",")[0].strip()
        sights = [a.name for a in info.attractions] if info else [f"{place} Old Town", f"{place} Museum"]
        center = info.center if info else None

        def coords() -> dict[str, float] | None:
            return {"lat": center.lat, "lng": center.lng} if center else None

        days = []
        for index in range(num_days):
            sight = sights[index % len(sights)]
            day_date = (start_date + timedelta(days=index)).isoformat()
            if index == 0:
                activities = [
                    {"time": "14:00", "description": f"Arrive in {place}", "type": "transport",
                     "location": place, "coordinates": coords(), "estimatedCost": 0},
                    {"time": "16:00", "description": f"Visit {sight}", "type": "activity",
                     "location": sight, "coordinates": coords(), "estimatedCost": 0},
                    {"time": "19:00", "description": "Welcome dinner", "type": "meal",
                     "location": place, "coordinates": coords(), "estimatedCost": 0},
                ]
            elif index == num_days - 1:
                activities = [
                    {"time": "09:00", "description": "Breakfast", "type": "meal",
                     "location": place, "coordinates": coords(), "estimatedCost": 0},
                    {"time": "11:00", "description": f"Last look at {sight}", "type": "activity",
                     "location": sight, "coordinates": coords(), "estimatedCost": 0},
                    {"time": "15:00", "description": f"Depart {place}", "type": "transport",
                     "location": place, "coordinates": coords(), "estimatedCost": 0},
                ]
            else:
                activities = [
                    {"time": "09:00", "description": "Breakfast", "type": "meal",
                     "location": place, "coordinates": coords(), "estimatedCost": 0},
                    {"time": "10:30", "description": f"Explore {sight}", "type": "activity",
                     "location": sight, "coordinates": coords(), "estimatedCost": 0},
                    {"time": "13:00", "description": "Lunch", "type": "meal",
                     "location": place, "coordinates": coords(), "estimatedCost": 0},
                    {"time": "15:00", "description": f"Walking tour of {place}", "type": "activity",
                     "location": place, "coordinates": coords(), "estimatedCost": 0},
                    {"time": "19:30", "description": "Dinner", "type": "meal",
                     "location": place, "coordinates": coords(), "estimatedCost": 0},
                ]
            days.append(
                {"day": index + 1, "date": day_date, "title": f"Day {index + 1}: {sight}",
                 "activities": activities}
            )
        return json.dumps({"days": days})


class OpenAIClient:
    """OpenAI-compatible client (OpenAI or DeepSeek)."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        *,
        base_url: str | None = None,
        timeout_s: float = 60.0,
    ):
        """Initialize client.

        Args:
            api_key: Provider API key (read from settings)
            model: Model name to use
            base_url: Alternate OpenAI-compatible endpoint (e.g. DeepSeek)
            timeout_s: Per-request timeout
        """
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout_s)
        self.model = model

    async def _complete(self, system_prompt: str, user_prompt: str, *, temperature: float, max_tokens: int) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"LLM API call failed: {e}")
            raise LLMCallError(str(e)) from e

        if not response.choices or response.choices[0].message is None:
            raise LLMCallError("LLM returned no choices")
        choice = response.choices[0]
        content = choice.message.content or ""
        if not content.strip():
            raise LLMCallError("LLM returned empty response")
        if choice.finish_reason == "length":
            logger.warning(f"LLM response truncated at {max_tokens} tokens")
        return content

    async def assess_feasibility(
        self, request: TripCreate, visa: VisaRequirement | None = None
    ) -> str:
        """Ask the model for a feasibility verdict."""
        return await self._complete(
            FEASIBILITY_SYSTEM_PROMPT,
            build_feasibility_prompt(request, visa),
            temperature=FEASIBILITY_TEMPERATURE,
            max_tokens=FEASIBILITY_MAX_TOKENS,
        )

    async def generate_itinerary(
        self, request: TripCreate, *, num_days: int, start_date: date, budget_tier: str
    ) -> str:
        """Ask the model for a day-by-day plan with a length-scaled token budget."""
        return await self._complete(
            ITINERARY_SYSTEM_PROMPT,
            build_itinerary_prompt(request, num_days, start_date, budget_tier),
            temperature=ITINERARY_TEMPERATURE,
            max_tokens=itinerary_token_budget(num_days),
        )


def get_llm_client(settings: Settings) -> LLMClient:
    """Factory function to get appropriate LLM client based on config.

    Returns:
        OpenAIClient for OpenAI or DeepSeek if a key is configured,
        DeterministicStubClient otherwise
    """
    if settings.openai_api_key and settings.openai_api_key.get_secret_value():
        logger.info(f"Using OpenAI client ({settings.openai_model})")
        return OpenAIClient(
            api_key=settings.openai_api_key.get_secret_value(),
            model=settings.openai_model,
            timeout_s=settings.llm_timeout_s,
        )
    if settings.deepseek_api_key and settings.deepseek_api_key.get_secret_value():
        logger.info(f"Using DeepSeek client ({settings.deepseek_model})")
        return OpenAIClient(
            api_key=settings.deepseek_api_key.get_secret_value(),
            model=settings.deepseek_model,
            base_url=settings.deepseek_base_url,
            timeout_s=settings.llm_timeout_s,
        )
    logger.warning("No AI API key configured, using deterministic stub client")
    return DeterministicStubClient()
