"""Rate limit counters persisted in ``wish_rate_limits``.

Counters survive restarts and are shared by every instance serving the
wishes board.
"""

from datetime import UTC, datetime, timedelta
from functools import partial

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.submissions.rate_limit import RateLimitKey, RateLimitRecord, RateLimitStore
from src.wishes.repository.orm_models import WishRateLimit


def as_utc(value: datetime) -> datetime:
    # sqlite hands timestamps back without a zone
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SqlRateLimitStore(RateLimitStore):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def increment(
        self, key: RateLimitKey, window: timedelta, now: datetime
    ) -> tuple[int, datetime]:
        async with self.async_session_manager(
            session_overwrite=self.session_overwrite
        ) as session:
            stmt = (
                select(WishRateLimit)
                .where(WishRateLimit.project_id == key.project_id)
                .where(WishRateLimit.ip_address == key.client_address)
                .with_for_update()
            )
            result = await session.execute(stmt)
            record = result.scalar_one_or_none()

            if record is None:
                record = WishRateLimit(
                    project_id=key.project_id,
                    ip_address=key.client_address,
                    submission_count=1,
                    window_started_at=now,
                    last_submission=now,
                )
                session.add(record)
            elif now - as_utc(record.window_started_at) >= window:
                record.submission_count = 1
                record.window_started_at = now
                record.last_submission = now
            else:
                record.submission_count += 1
                record.last_submission = now

            await session.flush()
            return record.submission_count, as_utc(record.window_started_at)

    async def get(self, key: RateLimitKey) -> RateLimitRecord | None:
        async with self.async_session_manager(
            auto_commit=False, session_overwrite=self.session_overwrite
        ) as session:
            stmt = (
                select(WishRateLimit)
                .where(WishRateLimit.project_id == key.project_id)
                .where(WishRateLimit.ip_address == key.client_address)
            )
            result = await session.execute(stmt)
            record = result.scalar_one_or_none()

        if record is None:
            return None
        return RateLimitRecord(
            count=record.submission_count,
            window_start=as_utc(record.window_started_at),
            last_submission=as_utc(record.last_submission),
        )
