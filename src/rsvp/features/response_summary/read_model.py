"""Aggregate RSVP statistics for a project's dashboard."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.rsvp.dtos import AttendanceStatus, StoredRSVPDTO
from src.rsvp.repository.orm_models import RSVPResponse

RECENT_ACTIVITY_WINDOW = timedelta(days=7)


@dataclass(frozen=True)
class RSVPSummaryDTO:
    total: int
    attending: int
    not_attending: int
    maybe: int
    total_guests: int
    recent_activity: int
    average_party_size: float
    response_rate: float
    with_dietary_restrictions: int
    with_contact_info: int


def summarize_responses(responses: list[StoredRSVPDTO], now: datetime) -> RSVPSummaryDTO:
    total = len(responses)
    attending = [r for r in responses if r.attendance_status == AttendanceStatus.ATTENDING]
    not_attending = sum(
        1 for r in responses if r.attendance_status == AttendanceStatus.NOT_ATTENDING
    )
    maybe = sum(1 for r in responses if r.attendance_status == AttendanceStatus.MAYBE)
    total_guests = sum(r.guest_count for r in attending)

    recent_since = now - RECENT_ACTIVITY_WINDOW
    recent_activity = sum(1 for r in responses if _as_aware(r.submitted_at, now) > recent_since)

    return RSVPSummaryDTO(
        total=total,
        attending=len(attending),
        not_attending=not_attending,
        maybe=maybe,
        total_guests=total_guests,
        recent_activity=recent_activity,
        average_party_size=total_guests / len(attending) if attending else 0.0,
        response_rate=len(attending) / total * 100 if total else 0.0,
        with_dietary_restrictions=sum(
            1 for r in responses if r.dietary_restrictions and r.dietary_restrictions.strip()
        ),
        with_contact_info=sum(1 for r in responses if r.guest_email or r.guest_phone),
    )


def _as_aware(value: datetime, reference: datetime) -> datetime:
    # sqlite hands back naive timestamps
    if value.tzinfo is None and reference.tzinfo is not None:
        return value.replace(tzinfo=reference.tzinfo)
    return value


class RSVPSummaryReadModel(ABC):
    @abstractmethod
    async def list_responses(self, project_id: UUID) -> list[StoredRSVPDTO]:
        """All responses of a project, newest first."""
        raise NotImplementedError


class SqlRSVPSummaryReadModel(RSVPSummaryReadModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def list_responses(self, project_id: UUID) -> list[StoredRSVPDTO]:
        async with self.async_session_manager(
            auto_commit=False, session_overwrite=self.session_overwrite
        ) as session:
            stmt = (
                select(RSVPResponse)
                .where(RSVPResponse.project_id == project_id)
                .order_by(RSVPResponse.submitted_at.desc())
            )
            result = await session.execute(stmt)
            return [response.to_dto() for response in result.scalars().all()]
