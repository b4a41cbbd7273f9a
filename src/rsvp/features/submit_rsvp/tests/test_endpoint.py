"""Tests for the RSVP submit endpoint."""

from datetime import timedelta

import pytest

from src.rsvp.features.submit_rsvp.router import (
    get_rsvp_duplicate_read_model,
    get_rsvp_permission_gate,
    get_rsvp_rate_limiter,
    get_rsvp_write_model,
)
from src.rsvp.features.submit_rsvp.tests.inmemory_models import (
    InMemoryPermissionGate,
    InMemoryRSVPStore,
    make_rsvp_payload,
)
from src.rsvp.urls import SUBMIT_RSVP_URL
from src.submissions.rate_limit import InMemoryRateLimitStore, RateLimiter


def make_overrides(gate=None, store=None, capacity=5):
    store = store or InMemoryRSVPStore()
    gate = gate or InMemoryPermissionGate()
    limiter = RateLimiter(
        store=InMemoryRateLimitStore(), capacity=capacity, window=timedelta(minutes=15)
    )
    return {
        get_rsvp_rate_limiter: lambda: limiter,
        get_rsvp_permission_gate: lambda: gate,
        get_rsvp_duplicate_read_model: lambda: store,
        get_rsvp_write_model: lambda: store,
    }


@pytest.mark.asyncio
async def test_liveness_message(client):
    response = await client.get(SUBMIT_RSVP_URL)

    assert response.status_code == 200
    assert response.json() == {"message": "RSVP API route is working!"}


@pytest.mark.asyncio
async def test_submit_rsvp_success(client_factory):
    store = InMemoryRSVPStore()

    async with client_factory(make_overrides(store=store)) as client:
        response = await client.post(
            SUBMIT_RSVP_URL,
            json=make_rsvp_payload(),
            headers={"x-forwarded-for": "203.0.113.7, 10.0.0.1"},
        )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "RSVP response submitted successfully"
    assert body["data"]["guestName"] == "Ana Torres"
    assert body["data"]["attendanceStatus"] == "attending"
    assert set(body["data"]) == {"id", "guestName", "attendanceStatus", "submittedAt"}
    assert store.responses[0].ip_address == "203.0.113.7"


@pytest.mark.asyncio
async def test_duplicate_name_is_rejected(client_factory):
    async with client_factory(make_overrides()) as client:
        first = await client.post(SUBMIT_RSVP_URL, json=make_rsvp_payload(guestEmail=""))
        second = await client.post(SUBMIT_RSVP_URL, json=make_rsvp_payload(guestEmail=""))

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["success"] is False


@pytest.mark.asyncio
async def test_invalid_payload(client_factory):
    async with client_factory(make_overrides()) as client:
        response = await client.post(
            SUBMIT_RSVP_URL, json=make_rsvp_payload(attendanceStatus="perhaps")
        )

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "message": "Invalid submission data",
        "error": "Valid attendance status is required",
    }


@pytest.mark.asyncio
async def test_malformed_json_body(client_factory):
    async with client_factory(make_overrides()) as client:
        response = await client.post(
            SUBMIT_RSVP_URL,
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request data"


@pytest.mark.asyncio
async def test_closed_rsvp_is_forbidden(client_factory):
    gate = InMemoryPermissionGate(allowed=False, message="RSVP is closed for this event")

    async with client_factory(make_overrides(gate=gate)) as client:
        response = await client.post(SUBMIT_RSVP_URL, json=make_rsvp_payload())

    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "RSVP is closed for this event"}


@pytest.mark.asyncio
async def test_too_many_submissions(client_factory):
    async with client_factory(make_overrides(capacity=1)) as client:
        await client.post(SUBMIT_RSVP_URL, json=make_rsvp_payload())
        response = await client.post(
            SUBMIT_RSVP_URL, json=make_rsvp_payload(guestName="Someone Else")
        )

    assert response.status_code == 429
    assert response.json()["message"] == "Too many RSVP submissions. Please try again later."


@pytest.mark.asyncio
async def test_store_failure_hides_details(client_factory):
    store = InMemoryRSVPStore(fail_writes=True)

    async with client_factory(make_overrides(store=store)) as client:
        response = await client.post(SUBMIT_RSVP_URL, json=make_rsvp_payload())

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Failed to save RSVP response"}


class ExplodingPermissionGate(InMemoryPermissionGate):
    async def check(self, project_id: str):
        raise RuntimeError("connection string postgres://secret@db")


@pytest.mark.asyncio
async def test_unexpected_error_is_generic(client_factory):
    async with client_factory(make_overrides(gate=ExplodingPermissionGate())) as client:
        response = await client.post(SUBMIT_RSVP_URL, json=make_rsvp_payload())

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Internal server error"
    assert "secret" not in response.text
