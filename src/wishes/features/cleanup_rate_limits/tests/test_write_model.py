"""Tests for SqlRateLimitCleanupWriteModel."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import select

from src.projects.repository.orm_models import WeddingProject
from src.wishes.features.cleanup_rate_limits.write_model import SqlRateLimitCleanupWriteModel
from src.wishes.repository.orm_models import WishRateLimit

NOW = datetime(2026, 6, 20, 12, 0, tzinfo=UTC)


async def add_counter(async_session, project, address, count, idle_for):
    last = NOW - idle_for
    async_session.add(
        WishRateLimit(
            project_id=project.uuid,
            ip_address=address,
            submission_count=count,
            window_started_at=last,
            last_submission=last,
        )
    )
    await async_session.flush()


@pytest.mark.asyncio
async def test_cleanup_removes_idle_and_expired_counters(async_session):
    project = WeddingProject(title="Ana & Ben", is_published=True)
    async_session.add(project)
    await async_session.flush()
    await add_counter(async_session, project, "10.0.0.1", 1, timedelta(hours=30))
    await add_counter(async_session, project, "10.0.0.2", 3, timedelta(hours=30))
    await add_counter(async_session, project, "10.0.0.3", 5, timedelta(days=8))
    await add_counter(async_session, project, "10.0.0.4", 1, timedelta(hours=2))

    removed = await SqlRateLimitCleanupWriteModel(session_overwrite=async_session).cleanup(
        now=NOW
    )

    assert removed == 2
    result = await async_session.execute(select(WishRateLimit.ip_address))
    assert sorted(result.scalars().all()) == ["10.0.0.2", "10.0.0.4"]


@pytest.mark.asyncio
async def test_cleanup_with_nothing_to_do(async_session):
    removed = await SqlRateLimitCleanupWriteModel(session_overwrite=async_session).cleanup(
        now=NOW
    )

    assert removed == 0
