"""Fixed-window rate limiting for guest submissions.

The limiter owns the counting policy; a ``RateLimitStore`` owns where the
counters live. The RSVP endpoint keeps them in process memory, the wishes
endpoint persists them so every instance sees the same counts.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta

logger = logging.getLogger(__name__)

RATE_LIMIT_EXCEEDED_MESSAGE = "Rate limit exceeded. Please wait before submitting again."
RATE_LIMIT_CHECK_FAILED_MESSAGE = "Rate limit check failed, allowing submission"


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class RateLimitKey:
    client_address: str
    project_id: str | None = None


@dataclass(frozen=True)
class RateLimitRecord:
    count: int
    window_start: datetime
    last_submission: datetime


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    reset_time: datetime
    message: str | None = None


class RateLimitStore(ABC):
    @abstractmethod
    async def increment(
        self, key: RateLimitKey, window: timedelta, now: datetime
    ) -> tuple[int, datetime]:
        """
        Count one attempt for ``key``.
        Starts a fresh window at ``now`` when the key is unknown or its window
        is over. Returns (attempts in the current window, window start).
        """
        raise NotImplementedError


class InMemoryRateLimitStore(RateLimitStore):
    """Process-local counters. Lost on restart and not shared between instances."""

    def __init__(self) -> None:
        self._records: dict[RateLimitKey, RateLimitRecord] = {}
        self._lock = asyncio.Lock()
        self._swept_at: datetime | None = None

    async def increment(
        self, key: RateLimitKey, window: timedelta, now: datetime
    ) -> tuple[int, datetime]:
        async with self._lock:
            self._evict_expired(window, now)
            record = self._records.get(key)
            if record is None or now - record.window_start >= window:
                record = RateLimitRecord(count=1, window_start=now, last_submission=now)
            else:
                record = replace(record, count=record.count + 1, last_submission=now)
            self._records[key] = record
            return record.count, record.window_start

    def _evict_expired(self, window: timedelta, now: datetime) -> None:
        # at most one sweep per window; an expired key restarts at 1 anyway
        if self._swept_at is not None and now - self._swept_at < window:
            return
        self._swept_at = now
        expired = [
            key
            for key, record in self._records.items()
            if now - record.window_start >= window
        ]
        for key in expired:
            del self._records[key]
        if expired:
            logger.debug("Evicted %s expired rate limit keys", len(expired))

    def get(self, key: RateLimitKey) -> RateLimitRecord | None:
        return self._records.get(key)


class RateLimiter:
    def __init__(
        self,
        store: RateLimitStore,
        capacity: int,
        window: timedelta,
        fail_open: bool = False,
        clock: Callable[[], datetime] = utcnow,
        exceeded_message: str = RATE_LIMIT_EXCEEDED_MESSAGE,
    ) -> None:
        self._store = store
        self.capacity = capacity
        self.window = window
        self.fail_open = fail_open
        self._clock = clock
        self._exceeded_message = exceeded_message

    async def check(self, key: RateLimitKey) -> RateLimitDecision:
        """Record an attempt for ``key`` and decide whether it may proceed."""
        now = self._clock()
        try:
            count, window_start = await self._store.increment(key, self.window, now)
        except Exception:
            logger.exception("Rate limit check failed for %s", key)
            if self.fail_open:
                return RateLimitDecision(
                    allowed=True,
                    remaining=self.capacity,
                    reset_time=now + self.window,
                    message=RATE_LIMIT_CHECK_FAILED_MESSAGE,
                )
            return RateLimitDecision(
                allowed=False,
                remaining=0,
                reset_time=now + self.window,
                message="Unable to verify rate limit",
            )

        reset_time = window_start + self.window
        if count > self.capacity:
            logger.info("Rate limit exceeded for %s (%s attempts)", key, count)
            return RateLimitDecision(
                allowed=False,
                remaining=0,
                reset_time=reset_time,
                message=self._exceeded_message,
            )
        return RateLimitDecision(
            allowed=True,
            remaining=self.capacity - count,
            reset_time=reset_time,
        )
