"""Pruning of stale wishes rate limit counters.

Meant to run periodically, from the cleanup endpoint or the CLI.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from functools import partial

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.submissions.errors import StoreError
from src.wishes.repository.orm_models import WishRateLimit

logger = logging.getLogger(__name__)

IDLE_AFTER = timedelta(hours=24)
IDLE_MAX_COUNT = 3
EXPIRE_AFTER = timedelta(days=7)


class RateLimitCleanupWriteModel(ABC):
    @abstractmethod
    async def cleanup(self, now: datetime) -> int:
        """
        Delete counters idle for a day with fewer than three submissions,
        then every counter idle for a week. Returns the number of rows removed.
        Raises StoreError only when the first delete fails.
        """
        raise NotImplementedError


class SqlRateLimitCleanupWriteModel(RateLimitCleanupWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def cleanup(self, now: datetime) -> int:
        try:
            removed = await self._delete(
                WishRateLimit.last_submission < now - IDLE_AFTER,
                WishRateLimit.submission_count < IDLE_MAX_COUNT,
            )
        except SQLAlchemyError as e:
            logger.exception("Rate limit cleanup failed")
            raise StoreError("Cleanup failed") from e

        try:
            removed += await self._delete(WishRateLimit.last_submission < now - EXPIRE_AFTER)
        except SQLAlchemyError:
            logger.exception("Expired rate limit cleanup failed")

        logger.info("Removed %s wishes rate limit records", removed)
        return removed

    async def _delete(self, *criteria) -> int:
        async with self.async_session_manager(
            session_overwrite=self.session_overwrite
        ) as session:
            result = await session.execute(delete(WishRateLimit).where(*criteria))
            return result.rowcount
