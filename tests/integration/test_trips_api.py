"""Integration tests for the trip and visa HTTP endpoints."""

import time
from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient


def _payload(future_dates: Callable[[int, int], str], **overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "passport": "United States",
        "origin": "New York",
        "destination": "Paris, France",
        "dates": future_dates(30, 7),
        "currency": "USD",
        "budget": 10000,
        "adults": 2,
        "travelStyle": "standard",
    }
    body.update(overrides)
    return body


def _wait_until_done(client: TestClient, trip_id: int, timeout_s: float = 10.0) -> dict[str, Any]:
    """Poll progress until processing finishes."""
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        progress = client.get(f"/api/trips/{trip_id}/progress").json()
        if progress["percentComplete"] == 100 or progress["step"] == -1:
            return progress
        time.sleep(0.05)
    raise AssertionError(f"Trip {trip_id} did not finish within {timeout_s}s")


def _create(client: TestClient, body: dict[str, Any]) -> int:
    response = client.post("/api/trips", json=body)
    assert response.status_code == 201, response.text
    trip_id: int = response.json()["id"]
    return trip_id


def test_create_trip_processes_in_background(
    api_client: TestClient, future_dates: Callable[[int, int], str]
) -> None:
    """Test that creation returns a pending trip and polling reaches a complete plan."""
    response = api_client.post("/api/trips", json=_payload(future_dates, children=1))

    assert response.status_code == 201
    created = response.json()
    assert created["feasibilityStatus"] == "pending"
    assert created["groupSize"] == 3
    assert created["itinerary"] is None

    progress = _wait_until_done(api_client, created["id"])
    assert progress["step"] == 6

    trip = api_client.get(f"/api/trips/{created['id']}").json()
    assert trip["feasibilityStatus"] == "yes"
    assert trip["itineraryStatus"] == "complete"
    assert len(trip["itinerary"]["days"]) == 7
    assert trip["itinerary"]["costBreakdown"]["grandTotal"] > 0


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"dates": "2020-01-01 - 2020-01-05"}, "dates"),
        ({"dates": "whenever works"}, "dates"),
        ({"travelStyle": "custom", "budget": 100}, "budget"),
    ],
)
def test_create_rejects_invalid_input(
    api_client: TestClient,
    future_dates: Callable[[int, int], str],
    overrides: dict[str, Any],
    field: str,
) -> None:
    """Test that invalid dates and too-small custom budgets are 400s naming the field."""
    response = api_client.post("/api/trips", json=_payload(future_dates, **overrides))

    assert response.status_code == 400
    assert response.json()["detail"]["field"] == field


def test_low_budget_allowed_for_fixed_styles(
    api_client: TestClient, future_dates: Callable[[int, int], str]
) -> None:
    """Test that the budget floor only applies to custom budgets."""
    response = api_client.post("/api/trips", json=_payload(future_dates, budget=100))
    assert response.status_code == 201
    _wait_until_done(api_client, response.json()["id"])


def test_create_rejects_malformed_body(api_client: TestClient) -> None:
    response = api_client.post("/api/trips", json={"destination": "Paris"})
    assert response.status_code == 422


def test_unknown_trip_is_404(api_client: TestClient) -> None:
    """Test every trip-scoped endpoint for a missing trip."""
    assert api_client.get("/api/trips/999").status_code == 404
    assert api_client.get("/api/trips/999/progress").status_code == 404
    assert api_client.get("/api/trips/999/itinerary-status").status_code == 404
    assert api_client.post("/api/trips/999/retry").status_code == 404
    assert api_client.patch("/api/trips/999", json={"budget": 1}).status_code == 404
    assert api_client.put("/api/trips/999/image", json={"imageUrl": "https://x"}).status_code == 404


def test_update_resets_and_reprocesses(
    api_client: TestClient, future_dates: Callable[[int, int], str]
) -> None:
    """Test that editing inputs clears results and triggers a fresh run."""
    trip_id = _create(api_client, _payload(future_dates))
    _wait_until_done(api_client, trip_id)

    response = api_client.patch(f"/api/trips/{trip_id}", json={"budget": 12000, "dates": future_dates(60, 5)})

    assert response.status_code == 200
    updated = response.json()
    assert updated["budget"] == 12000
    assert updated["feasibilityStatus"] == "pending"
    assert updated["itinerary"] is None

    _wait_until_done(api_client, trip_id)
    trip = api_client.get(f"/api/trips/{trip_id}").json()
    assert len(trip["itinerary"]["days"]) == 5


def test_update_validates_merged_request(
    api_client: TestClient, future_dates: Callable[[int, int], str]
) -> None:
    trip_id = _create(api_client, _payload(future_dates))
    _wait_until_done(api_client, trip_id)

    response = api_client.patch(f"/api/trips/{trip_id}", json={"dates": "2020-02-01 - 2020-02-03"})

    assert response.status_code == 400
    assert response.json()["detail"]["field"] == "dates"


def test_image_update_keeps_itinerary(
    api_client: TestClient, future_dates: Callable[[int, int], str]
) -> None:
    """Test that the cover image can change without reprocessing."""
    trip_id = _create(api_client, _payload(future_dates))
    _wait_until_done(api_client, trip_id)

    response = api_client.put(f"/api/trips/{trip_id}/image", json={"imageUrl": "https://img.example/paris.jpg"})

    assert response.status_code == 200
    trip = response.json()
    assert trip["imageUrl"] == "https://img.example/paris.jpg"
    assert trip["feasibilityStatus"] == "yes"
    assert trip["itinerary"] is not None


def test_itinerary_status_after_completion(
    api_client: TestClient, future_dates: Callable[[int, int], str]
) -> None:
    trip_id = _create(api_client, _payload(future_dates))
    _wait_until_done(api_client, trip_id)

    status = api_client.get(f"/api/trips/{trip_id}/itinerary-status").json()

    assert status == {"status": "complete", "isLocked": False, "lockedAt": None, "isFresh": False}


def test_retry_regenerates(api_client: TestClient, future_dates: Callable[[int, int], str]) -> None:
    """Test that retry takes the lock and reprocesses the trip."""
    trip_id = _create(api_client, _payload(future_dates))
    _wait_until_done(api_client, trip_id)

    response = api_client.post(f"/api/trips/{trip_id}/retry")

    assert response.status_code == 200
    body = response.json()
    assert body["started"] is True
    assert body["lockOwner"]
    assert body["isStale"] is False

    _wait_until_done(api_client, trip_id)
    status = api_client.get(f"/api/trips/{trip_id}/itinerary-status").json()
    assert status["status"] == "complete"


def test_retry_while_locked_is_not_started(
    api_client: TestClient, future_dates: Callable[[int, int], str]
) -> None:
    """Test that a fresh lock held elsewhere makes retry a no-op reporting the holder."""
    trip_id = _create(api_client, _payload(future_dates))
    _wait_until_done(api_client, trip_id)
    services = api_client.app.state.services  # type: ignore[attr-defined]
    holder = api_client.portal.call(services.lock.acquire, trip_id)  # type: ignore[union-attr]

    response = api_client.post(f"/api/trips/{trip_id}/retry")

    assert response.json() == {
        "started": False,
        "lockOwner": None,
        "existingOwner": holder.lock_owner,
        "isStale": False,
    }
    status = api_client.get(f"/api/trips/{trip_id}/itinerary-status").json()
    assert status["isLocked"] is True
    assert status["isFresh"] is True


def test_update_while_generating_is_conflict(
    api_client: TestClient, future_dates: Callable[[int, int], str]
) -> None:
    """Test that an edit is refused while another run holds a fresh lease, leaving the trip untouched."""
    trip_id = _create(api_client, _payload(future_dates))
    _wait_until_done(api_client, trip_id)
    services = api_client.app.state.services  # type: ignore[attr-defined]
    holder = api_client.portal.call(services.lock.acquire, trip_id)  # type: ignore[union-attr]

    response = api_client.patch(f"/api/trips/{trip_id}", json={"budget": 6000})

    assert response.status_code == 409
    assert response.json()["detail"]["existingOwner"] == holder.lock_owner
    trip = api_client.get(f"/api/trips/{trip_id}").json()
    assert trip["budget"] == 10000
    assert trip["feasibilityStatus"] == "yes"
    assert trip["itinerary"] is not None
    status = api_client.get(f"/api/trips/{trip_id}/itinerary-status").json()
    assert status["isLocked"] is True


def test_group_size_below_party_is_rejected(
    api_client: TestClient, future_dates: Callable[[int, int], str]
) -> None:
    """Test that groupSize smaller than the listed travellers is a 422 on create and on edit."""
    created = api_client.post("/api/trips", json=_payload(future_dates, adults=3, groupSize=1))
    assert created.status_code == 422

    trip_id = _create(api_client, _payload(future_dates))
    _wait_until_done(api_client, trip_id)

    response = api_client.patch(f"/api/trips/{trip_id}", json={"groupSize": 1})

    assert response.status_code == 422
    assert api_client.get(f"/api/trips/{trip_id}").json()["groupSize"] == 2


def test_create_records_voyage_uid(api_client: TestClient, future_dates: Callable[[int, int], str]) -> None:
    response = api_client.post("/api/trips", json=_payload(future_dates), headers={"X-Voyage-Uid": "uid-owner"})

    assert response.status_code == 201
    assert response.json()["voyageUid"] == "uid-owner"
    _wait_until_done(api_client, response.json()["id"])


def test_get_with_voyage_uid_claims_orphan_trip(
    api_client: TestClient, future_dates: Callable[[int, int], str]
) -> None:
    """Test that the first caller sending a uid adopts an ownerless trip and a later one cannot take it."""
    trip_id = _create(api_client, _payload(future_dates))
    _wait_until_done(api_client, trip_id)
    assert api_client.get(f"/api/trips/{trip_id}").json()["voyageUid"] is None

    first = api_client.get(f"/api/trips/{trip_id}", headers={"X-Voyage-Uid": "uid-a"})
    second = api_client.get(f"/api/trips/{trip_id}", headers={"X-Voyage-Uid": "uid-b"})

    assert first.json()["voyageUid"] == "uid-a"
    assert second.json()["voyageUid"] == "uid-a"


def test_compare_trips(api_client: TestClient, future_dates: Callable[[int, int], str]) -> None:
    """Test the comparison endpoint on two processed versions of a trip."""
    original = _create(api_client, _payload(future_dates))
    updated = _create(api_client, _payload(future_dates, dates=future_dates(30, 10)))
    _wait_until_done(api_client, original)
    _wait_until_done(api_client, updated)

    response = api_client.post(
        "/api/trips/compare", json={"originalTripId": original, "updatedTripId": updated}
    )

    assert response.status_code == 200
    body = response.json()
    comparison = body["comparison"]
    assert comparison["isComparable"] is True
    assert comparison["certaintyDelta"]["bufferDaysBefore"] == 3
    assert comparison["certaintyDelta"]["bufferDaysAfter"] == 6
    assert comparison["totalCostDelta"]["direction"] in ("up", "down", "same")
    assert body["nextFix"]["id"] in {
        "ADD_BUFFER_DAYS",
        "REDUCE_COST",
        "IMPROVE_CERTAINTY",
        "SAVE_VERSION",
    }


def test_compare_missing_trip(api_client: TestClient, future_dates: Callable[[int, int], str]) -> None:
    trip_id = _create(api_client, _payload(future_dates))

    response = api_client.post("/api/trips/compare", json={"originalTripId": trip_id, "updatedTripId": 999})

    assert response.status_code == 404


def test_visa_lookup(api_client: TestClient) -> None:
    """Test the visa endpoint for a known and an unknown corridor."""
    known = api_client.get("/api/visa", params={"passport": "United States", "destination": "Paris"})
    unknown = api_client.get("/api/visa", params={"passport": "Atlantis", "destination": "Lemuria"})

    assert known.status_code == 200
    assert known.json()["status"] == "visa_free"
    assert known.json()["destinationCode"] == "FR"
    assert unknown.status_code == 404
