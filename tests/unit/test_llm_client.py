"""Tests for LLM client.

All tests are deterministic and do not make real network calls.
"""

import json
from collections.abc import Callable
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from backend.app.config import Settings
from backend.app.llm.client import (
    DeterministicStubClient,
    LLMCallError,
    OpenAIClient,
    get_llm_client,
)
from backend.app.models.trip import TripCreate
from backend.app.models.visa import VisaRequirement

START = date(2026, 11, 1)


def _response(content: str | None, finish_reason: str = "stop") -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    response.choices[0].finish_reason = finish_reason
    return response


def _client_with(create: AsyncMock) -> OpenAIClient:
    client = OpenAIClient(api_key="test_key")
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = create
    client.client = mock_openai_client
    return client


@pytest.mark.asyncio
async def test_stub_feasibility_is_valid_json(make_trip_request: Callable[..., TripCreate]) -> None:
    """Test that the stub verdict parses and reflects the destination."""
    raw = await DeterministicStubClient().assess_feasibility(make_trip_request())

    payload = json.loads(raw)
    assert payload["overall"] == "yes"
    assert payload["score"] == 82
    assert "Paris, France" in payload["summary"]


@pytest.mark.asyncio
async def test_stub_feasibility_flags_visa_required(make_trip_request: Callable[..., TripCreate]) -> None:
    """Test that the stub downgrades to a warning when an embassy visa is needed."""
    visa = VisaRequirement(
        passport="India",
        passport_code="IN",
        destination="France",
        destination_code="FR",
        status="visa_required",
        status_label="Visa Required",
        source="passport_index",
    )

    payload = json.loads(await DeterministicStubClient().assess_feasibility(make_trip_request(), visa))

    assert payload["overall"] == "warning"
    assert payload["breakdown"]["visa"]["status"] == "issue"
    assert payload["breakdown"]["visa"]["visaType"] == "visa_required"


@pytest.mark.asyncio
async def test_stub_itinerary_is_deterministic(make_trip_request: Callable[..., TripCreate]) -> None:
    """Test that the stub produces the same plan every time with one entry per day."""
    client = DeterministicStubClient()
    request = make_trip_request()

    first = await client.generate_itinerary(request, num_days=5, start_date=START, budget_tier="standard")
    second = await client.generate_itinerary(request, num_days=5, start_date=START, budget_tier="standard")

    assert first == second
    days = json.loads(first)["days"]
    assert [d["day"] for d in days] == [1, 2, 3, 4, 5]
    assert days[0]["date"] == "2026-11-01"
    assert days[-1]["activities"][-1]["description"] == "Depart Paris"


@pytest.mark.asyncio
async def test_openai_client_returns_content(make_trip_request: Callable[..., TripCreate]) -> None:
    """Test that OpenAIClient requests JSON output and returns the raw text (mocked)."""
    create = AsyncMock(return_value=_response('{"overall": "yes"}'))
    client = _client_with(create)

    raw = await client.assess_feasibility(make_trip_request())

    assert raw == '{"overall": "yes"}'
    create.assert_called_once()
    kwargs = create.call_args.kwargs
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["model"] == "gpt-4o"
    assert kwargs["messages"][0]["role"] == "system"


@pytest.mark.asyncio
async def test_itinerary_token_budget_scales_with_length(make_trip_request: Callable[..., TripCreate]) -> None:
    """Test that longer trips get a larger completion budget."""
    create = AsyncMock(return_value=_response('{"days": []}'))
    client = _client_with(create)
    request = make_trip_request()

    await client.generate_itinerary(request, num_days=3, start_date=START, budget_tier="standard")
    await client.generate_itinerary(request, num_days=14, start_date=START, budget_tier="standard")

    short, long = (call.kwargs["max_tokens"] for call in create.call_args_list)
    assert long > short


@pytest.mark.asyncio
async def test_truncated_response_is_still_returned(make_trip_request: Callable[..., TripCreate]) -> None:
    """Test that a length-truncated reply is handed to the repair cascade."""
    client = _client_with(AsyncMock(return_value=_response('{"days": [{"day": 1', finish_reason="length")))

    raw = await client.generate_itinerary(make_trip_request(), num_days=2, start_date=START, budget_tier="budget")

    assert raw.startswith('{"days"')


@pytest.mark.asyncio
async def test_provider_error_raises_llm_call_error(make_trip_request: Callable[..., TripCreate]) -> None:
    """Test that provider failures surface as LLMCallError."""
    error = openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
    client = _client_with(AsyncMock(side_effect=error))

    with pytest.raises(LLMCallError):
        await client.assess_feasibility(make_trip_request())


@pytest.mark.asyncio
async def test_empty_response_raises_llm_call_error(make_trip_request: Callable[..., TripCreate]) -> None:
    client = _client_with(AsyncMock(return_value=_response("   ")))

    with pytest.raises(LLMCallError, match="empty response"):
        await client.assess_feasibility(make_trip_request())


@pytest.mark.asyncio
async def test_no_choices_raises_llm_call_error(make_trip_request: Callable[..., TripCreate]) -> None:
    """Test that a completion without choices is a provider failure, not an IndexError."""
    response = MagicMock()
    response.choices = []
    client = _client_with(AsyncMock(return_value=response))

    with pytest.raises(LLMCallError, match="no choices"):
        await client.generate_itinerary(make_trip_request(), num_days=3, start_date=START, budget_tier="standard")


def test_factory_prefers_openai() -> None:
    """Test that an OpenAI key wins over a DeepSeek key."""
    settings = Settings(_env_file=None, openai_api_key="sk-openai", deepseek_api_key="sk-deepseek")  # type: ignore[call-arg]

    client = get_llm_client(settings)

    assert isinstance(client, OpenAIClient)
    assert client.model == settings.openai_model


def test_factory_falls_back_to_deepseek() -> None:
    settings = Settings(_env_file=None, openai_api_key=None, deepseek_api_key="sk-deepseek")  # type: ignore[call-arg]

    client = get_llm_client(settings)

    assert isinstance(client, OpenAIClient)
    assert client.model == settings.deepseek_model


def test_factory_without_keys_uses_stub() -> None:
    """Test that the stub is used when no provider key is configured."""
    settings = Settings(_env_file=None, openai_api_key=None, deepseek_api_key=None)  # type: ignore[call-arg]

    assert isinstance(get_llm_client(settings), DeterministicStubClient)
