"""Tests for the wishes rate limit check endpoint."""

import pytest

from src.submissions.rate_limit import InMemoryRateLimitStore, RateLimitStore
from src.wishes.features.check_rate_limit.router import get_wishes_rate_limit_store
from src.wishes.urls import CHECK_RATE_LIMIT_URL

PROJECT_ID = "0f3a6d3e-8c1b-4e2a-b1d4-7c9e2f5a6b80"


class UnavailableRateLimitStore(RateLimitStore):
    async def increment(self, key, window, now):
        raise ConnectionError("database is down")


@pytest.mark.asyncio
async def test_counts_down_then_denies(client_factory):
    store = InMemoryRateLimitStore()

    async with client_factory({get_wishes_rate_limit_store: lambda: store}) as client:
        results = [
            (await client.post(CHECK_RATE_LIMIT_URL, json={"projectId": PROJECT_ID})).json()
            for _ in range(4)
        ]

    assert [r["allowed"] for r in results] == [True, True, True, False]
    assert [r["remaining"] for r in results] == [2, 1, 0, 0]
    assert results[-1]["message"] == (
        "Rate limit exceeded. Please wait before submitting another wish."
    )
    assert results[-1]["resetTime"] == results[0]["resetTime"]


@pytest.mark.asyncio
async def test_addresses_are_limited_separately(client_factory):
    store = InMemoryRateLimitStore()

    async with client_factory({get_wishes_rate_limit_store: lambda: store}) as client:
        for _ in range(3):
            await client.post(
                CHECK_RATE_LIMIT_URL,
                json={"projectId": PROJECT_ID},
                headers={"x-forwarded-for": "203.0.113.7"},
            )
        response = await client.post(
            CHECK_RATE_LIMIT_URL,
            json={"projectId": PROJECT_ID},
            headers={"x-forwarded-for": "198.51.100.2"},
        )

    assert response.json()["allowed"] is True


@pytest.mark.asyncio
async def test_project_id_is_required(client_factory):
    async with client_factory({get_wishes_rate_limit_store: InMemoryRateLimitStore}) as client:
        response = await client.post(CHECK_RATE_LIMIT_URL, json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Project ID is required"}


@pytest.mark.asyncio
async def test_store_failure_allows(client_factory):
    overrides = {get_wishes_rate_limit_store: UnavailableRateLimitStore}

    async with client_factory(overrides) as client:
        response = await client.post(CHECK_RATE_LIMIT_URL, json={"projectId": PROJECT_ID})

    assert response.status_code == 200
    body = response.json()
    assert body["allowed"] is True
    assert body["remaining"] == 3
    assert body["message"] == "Rate limit check failed, allowing submission"
