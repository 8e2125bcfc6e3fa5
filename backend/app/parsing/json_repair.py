"""Defensive JSON parsing for model output.

The cascade is an ordered chain of pure strategies, each returning the parsed
value or None. Later strategies only run when earlier ones fail:

1. direct parse
2. fenced ```json block
3. largest {...} span
4. structural repair of a truncated document (drop dangling keys/values,
   collapse stray commas, close open brackets)
5. reconstruct complete "day" objects
6. reconstruct complete "activity" objects (at least 3), grouped 4 per day

Callers supply an `accept` predicate so a strategy that parses but yields the
wrong shape does not stop the cascade, and a fallback used when all fail.
"""

import json
import logging
import re
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Strategy = Callable[[str], Any | None]

MIN_SALVAGED_ACTIVITIES = 3
ACTIVITIES_PER_SALVAGED_DAY = 4

_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_DAY_START = re.compile(r'\{\s*"day(?:Number)?"\s*:\s*\d+')
_ACTIVITY_START = re.compile(r'\{\s*"time"\s*:')
_PARTIAL_LITERAL = re.compile(r":\s*(?:-?\d+\.|-|t|tr|tru|f|fa|fal|fals|n|nu|nul)$")
_DANGLING_KEY_VALUE = re.compile(r'"(?:[^"\\]|\\.)*"\s*:\s*$')
_DANGLING_KEY = re.compile(r'(?<=[{,])\s*"(?:[^"\\]|\\.)*"\s*$')


def _loads(text: str) -> Any | None:
    try:
        return json.loads(text)
    except (ValueError, TypeError):
        return None


def _scan(text: str) -> tuple[list[str], bool, int]:
    """Walk text tracking strings and brackets.

    Returns:
        (open bracket stack, ended inside a string, index of last string start)
    """
    stack: list[str] = []
    in_string = False
    escaped = False
    string_start = -1
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
            string_start = i
        elif ch in "{[":
            stack.append(ch)
        elif ch in "}]" and stack:
            stack.pop()
    return stack, in_string, string_start


def _balanced_from(text: str, start: int) -> str | None:
    """Return the complete object beginning at `start`, or None if truncated."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def _complete_objects(text: str, start_pattern: re.Pattern[str]) -> list[dict[str, Any]]:
    objects: list[dict[str, Any]] = []
    position = 0
    while True:
        match = start_pattern.search(text, position)
        if match is None:
            return objects
        candidate = _balanced_from(text, match.start())
        if candidate is None:
            return objects
        parsed = _loads(candidate)
        if isinstance(parsed, dict):
            objects.append(parsed)
            position = match.start() + len(candidate)
        else:
            position = match.end()


def parse_direct(text: str) -> Any | None:
    return _loads(text.strip())


def parse_fenced_block(text: str) -> Any | None:
    match = _FENCE.search(text)
    return _loads(match.group(1).strip()) if match else None


def parse_largest_object(text: str) -> Any | None:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return _loads(text[start : end + 1])


def repair_truncated(text: str) -> str | None:
    """Close a truncated JSON document. Returns repaired text, not parsed."""
    start = text.find("{")
    if start == -1:
        return None
    fenced_end = text.rfind("```")
    body = text[start:fenced_end] if fenced_end > start else text[start:]

    _, in_string, string_start = _scan(body)
    if in_string:
        body = body[:string_start]

    previous = None
    while body != previous:
        previous = body
        body = body.rstrip()
        body = body.rstrip(",")
        body = _PARTIAL_LITERAL.sub(":", body)
        body = _DANGLING_KEY_VALUE.sub("", body)
        stack, _, _ = _scan(body)
        if stack and stack[-1] == "{":
            body = _DANGLING_KEY.sub("", body)

    body = re.sub(r",\s*,", ",", body)
    body = re.sub(r",\s*([\]}])", r"\1", body)

    stack, _, _ = _scan(body)
    closers = "".join("}" if opener == "{" else "]" for opener in reversed(stack))
    return body + closers


def parse_structural_repair(text: str) -> Any | None:
    repaired = repair_truncated(text)
    return _loads(repaired) if repaired is not None else None


def parse_day_objects(text: str) -> Any | None:
    days = _complete_objects(text, _DAY_START)
    return {"days": days} if days else None


def parse_activity_objects(text: str) -> Any | None:
    activities = _complete_objects(text, _ACTIVITY_START)
    if len(activities) < MIN_SALVAGED_ACTIVITIES:
        return None
    days = []
    for index in range(0, len(activities), ACTIVITIES_PER_SALVAGED_DAY):
        day_number = index // ACTIVITIES_PER_SALVAGED_DAY + 1
        days.append(
            {
                "day": day_number,
                "title": f"Day {day_number}",
                "activities": activities[index : index + ACTIVITIES_PER_SALVAGED_DAY],
            }
        )
    return {"days": days}


OBJECT_STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("direct", parse_direct),
    ("fenced_block", parse_fenced_block),
    ("largest_object", parse_largest_object),
    ("structural_repair", parse_structural_repair),
)

ITINERARY_STRATEGIES: tuple[tuple[str, Strategy], ...] = OBJECT_STRATEGIES + (
    ("day_objects", parse_day_objects),
    ("activity_objects", parse_activity_objects),
)


def safe_json_parse(
    text: str | None,
    fallback: Any = None,
    *,
    accept: Callable[[Any], bool] = lambda value: isinstance(value, dict),
    strategies: tuple[tuple[str, Strategy], ...] = ITINERARY_STRATEGIES,
) -> Any:
    """Run the strategy chain and return the first accepted value, else `fallback`."""
    if not text or not text.strip():
        return fallback

    for name, strategy in strategies:
        value = strategy(text)
        if value is not None and accept(value):
            if name != "direct":
                logger.info(f"Recovered model JSON with strategy {name}")
            return value

    logger.warning("All JSON parse strategies failed, using fallback")
    return fallback
