"""Tests for the model-output JSON repair cascade."""

import json

from backend.app.parsing.json_repair import (
    OBJECT_STRATEGIES,
    parse_activity_objects,
    parse_day_objects,
    repair_truncated,
    safe_json_parse,
)


def _has_days(value: object) -> bool:
    return isinstance(value, dict) and bool(value.get("days"))


def test_direct_parse() -> None:
    """Test that valid JSON is returned unchanged."""
    assert safe_json_parse('{"overall": "yes", "score": 90}') == {"overall": "yes", "score": 90}


def test_fenced_block_is_extracted() -> None:
    """Test that JSON inside a markdown fence is recovered."""
    text = 'Here is the plan:\n```json\n{"overall": "warning", "score": 60}\n```\nEnjoy!'
    assert safe_json_parse(text, strategies=OBJECT_STRATEGIES) == {"overall": "warning", "score": 60}


def test_largest_object_span_is_extracted() -> None:
    """Test that prose around a JSON object is ignored."""
    text = 'Sure! {"overall": "no", "score": 10} Hope that helps.'
    assert safe_json_parse(text) == {"overall": "no", "score": 10}


def test_truncated_document_is_closed() -> None:
    """Test that a document cut mid-value is trimmed and balanced."""
    text = '{"days": [{"day": 1, "title": "Arrival", "activities": [{"time": "09:00", "descr'
    repaired = repair_truncated(text)

    assert repaired is not None
    parsed = json.loads(repaired)
    assert parsed["days"][0]["title"] == "Arrival"
    assert parsed["days"][0]["activities"] == [{"time": "09:00"}]


def test_truncated_day_array_keeps_complete_days() -> None:
    """Test that a truncated day array keeps every complete day."""
    day_one = {"day": 1, "title": "Louvre", "activities": [{"time": "09:00", "description": "Louvre"}]}
    day_two = {"day": 2, "title": "Montmartre", "activities": [{"time": "10:00", "description": "Sacre-Coeur"}]}
    text = json.dumps({"days": [day_one, day_two]})[:-30]

    result = safe_json_parse(text, {"days": []}, accept=_has_days)

    assert result["days"][0] == day_one
    assert result["days"][1]["title"] == "Montmartre"


def test_day_objects_salvaged_from_garbage() -> None:
    """Test that complete day objects are pulled out of otherwise broken text."""
    text = 'garbage [[ {"day": 1, "title": "A", "activities": []} ,,, {"day": 2, "title": "B", "activities": []} {"day": 3'
    result = parse_day_objects(text)

    assert result is not None
    assert [d["title"] for d in result["days"]] == ["A", "B"]


def test_activity_objects_grouped_into_days() -> None:
    """Test that loose activities are grouped four per day."""
    activities = ", ".join(f'{{"time": "{9 + i}:00", "description": "Stop {i}"}}' for i in range(6))
    result = parse_activity_objects(f"broken {activities} [[")

    assert result is not None
    assert len(result["days"]) == 2
    assert len(result["days"][0]["activities"]) == 4
    assert result["days"][1]["day"] == 2


def test_too_few_activities_are_not_salvaged() -> None:
    """Test that fewer than three loose activities are not treated as a plan."""
    assert parse_activity_objects('{"time": "09:00"} {"time": "10:00"}') is None


def test_fallback_returned_when_nothing_parses() -> None:
    """Test that the fallback is returned for unusable text."""
    assert safe_json_parse("no json here", {"days": []}) == {"days": []}
    assert safe_json_parse("", "empty") == "empty"
    assert safe_json_parse(None) is None


def test_accept_predicate_rejects_wrong_shape() -> None:
    """Test that a parse without days falls through to the fallback."""
    assert safe_json_parse('{"days": []}', "fallback", accept=_has_days) == "fallback"
