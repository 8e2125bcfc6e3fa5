"""RapidAPI visa-requirement client (optional, paid)."""

import re
from typing import Any

import httpx

from backend.app.models.visa import VisaRequirement, status_label

RAPIDAPI_HOST = "visa-requirement.p.rapidapi.com"


def _status_from_rule(rule_name: str) -> str:
    name = rule_name.lower()
    if "visa-free" in name or "visa free" in name:
        return "visa_free"
    if "on arrival" in name:
        return "visa_on_arrival"
    if "evisa" in name or "e-visa" in name:
        return "e_visa"
    if "eta" in name.split() or "electronic travel" in name:
        return "eta"
    return "visa_required"


def parse_visa_response(payload: dict[str, Any]) -> VisaRequirement:
    """Convert an API payload into a VisaRequirement.

    Raises:
        KeyError: If required fields are missing
    """
    data = payload["data"]
    passport = data["passport"]
    destination = data["destination"]
    rule = data["visa_rules"]["primary_rule"]

    status = _status_from_rule(rule["name"])
    duration = rule.get("duration") or ""
    days_match = re.search(r"(\d+)", duration)
    days = int(days_match.group(1)) if days_match and status == "visa_free" else None

    notes = []
    registration = data.get("mandatory_registration")
    if registration:
        notes.append(f"Mandatory registration: {registration.get('name')}")
    if destination.get("passport_validity"):
        notes.append(f"Passport validity: {destination['passport_validity']}")

    return VisaRequirement(
        passport=passport["name"],
        passport_code=passport["code"],
        destination=destination["name"],
        destination_code=destination["code"],
        status=status,  # type: ignore[arg-type]
        status_label=status_label(status, days),
        days=days,
        source="api",
        application_url=rule.get("link"),
        notes=notes,
    )


async def fetch_visa_requirement(
    passport_code: str,
    destination_code: str,
    *,
    api_key: str,
    url: str = "https://visa-requirement.p.rapidapi.com/v2/visa/check",
    timeout_s: float = 10.0,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Fetch the raw visa payload for a corridor.

    Args:
        passport_code: ISO alpha-2 passport country
        destination_code: ISO alpha-2 destination country
        api_key: RapidAPI key
        url: Endpoint URL
        timeout_s: Request timeout
        client: Optional httpx client (for testing with mocks)

    Returns:
        Raw JSON payload

    Raises:
        httpx.HTTPError: On network or HTTP errors
    """
    close_client = False
    if client is None:
        client = httpx.AsyncClient(timeout=timeout_s)
        close_client = True

    try:
        response = await client.post(
            url,
            data={"passport": passport_code, "destination": destination_code},
            headers={"x-rapidapi-key": api_key, "x-rapidapi-host": RAPIDAPI_HOST},
            timeout=timeout_s,
        )
        response.raise_for_status()
        payload: dict[str, Any] = response.json()
        return payload
    finally:
        if close_client:
            await client.aclose()
