"""Tests for SqlRateLimitStore against an in-memory database."""

from datetime import UTC, datetime, timedelta

import pytest

from src.projects.repository.orm_models import WeddingProject
from src.submissions.rate_limit import RateLimiter, RateLimitKey
from src.wishes.repository.rate_limit_store import SqlRateLimitStore

START = datetime(2026, 6, 1, 12, 0, tzinfo=UTC)
WINDOW = timedelta(hours=1)


async def create_project(async_session) -> str:
    project = WeddingProject(title="Ana & Ben", is_published=True)
    async_session.add(project)
    await async_session.flush()
    return str(project.uuid)


@pytest.mark.asyncio
async def test_first_attempt_creates_counter(async_session):
    project_id = await create_project(async_session)
    store = SqlRateLimitStore(session_overwrite=async_session)
    key = RateLimitKey(client_address="203.0.113.7", project_id=project_id)

    count, window_start = await store.increment(key, WINDOW, START)

    assert (count, window_start) == (1, START)
    record = await store.get(key)
    assert record.count == 1
    assert record.last_submission == START


@pytest.mark.asyncio
async def test_attempts_within_window_increment(async_session):
    project_id = await create_project(async_session)
    store = SqlRateLimitStore(session_overwrite=async_session)
    key = RateLimitKey(client_address="203.0.113.7", project_id=project_id)

    await store.increment(key, WINDOW, START)
    count, window_start = await store.increment(key, WINDOW, START + timedelta(minutes=30))

    assert (count, window_start) == (2, START)
    record = await store.get(key)
    assert record.last_submission == START + timedelta(minutes=30)


@pytest.mark.asyncio
async def test_elapsed_window_restarts_counter(async_session):
    project_id = await create_project(async_session)
    store = SqlRateLimitStore(session_overwrite=async_session)
    key = RateLimitKey(client_address="203.0.113.7", project_id=project_id)
    await store.increment(key, WINDOW, START)
    await store.increment(key, WINDOW, START + timedelta(minutes=5))

    later = START + WINDOW
    count, window_start = await store.increment(key, WINDOW, later)

    assert (count, window_start) == (1, later)


@pytest.mark.asyncio
async def test_fourth_wish_in_an_hour_is_rejected(async_session):
    project_id = await create_project(async_session)
    clock_values = iter([START + timedelta(minutes=m) for m in (0, 10, 20, 30)])
    limiter = RateLimiter(
        store=SqlRateLimitStore(session_overwrite=async_session),
        capacity=3,
        window=WINDOW,
        fail_open=True,
        clock=lambda: next(clock_values),
    )
    key = RateLimitKey(client_address="203.0.113.7", project_id=project_id)

    decisions = [await limiter.check(key) for _ in range(4)]

    assert [d.allowed for d in decisions] == [True, True, True, False]
    assert [d.remaining for d in decisions] == [2, 1, 0, 0]
    assert decisions[-1].reset_time == START + WINDOW


@pytest.mark.asyncio
async def test_unusable_project_id_fails_open(async_session):
    limiter = RateLimiter(
        store=SqlRateLimitStore(session_overwrite=async_session),
        capacity=3,
        window=WINDOW,
        fail_open=True,
    )

    decision = await limiter.check(
        RateLimitKey(client_address="203.0.113.7", project_id="not-a-uuid")
    )

    assert decision.allowed is True
    assert decision.remaining == 3
    assert decision.message == "Rate limit check failed, allowing submission"
