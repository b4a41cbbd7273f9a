"""RSVP write model. Returns DTOs, never ORM models."""

import logging
from abc import ABC, abstractmethod
from functools import partial

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.rsvp.dtos import RSVPSubmissionDTO, StoredRSVPDTO
from src.rsvp.repository.orm_models import RSVPResponse
from src.submissions.errors import StoreError

logger = logging.getLogger(__name__)


class RSVPWriteModel(ABC):
    @abstractmethod
    async def create_response(
        self, submission: RSVPSubmissionDTO, ip_address: str
    ) -> StoredRSVPDTO:
        """
        Persist one accepted RSVP.
        Raises StoreError when the row cannot be written.
        """
        raise NotImplementedError


class SqlRSVPWriteModel(RSVPWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def create_response(
        self, submission: RSVPSubmissionDTO, ip_address: str
    ) -> StoredRSVPDTO:
        try:
            async with self.async_session_manager(
                session_overwrite=self.session_overwrite
            ) as session:
                response = RSVPResponse(
                    project_id=submission.project_id,
                    guest_name=submission.guest_name,
                    guest_email=submission.guest_email,
                    guest_phone=submission.guest_phone,
                    attendance_status=submission.attendance_status,
                    guest_count=submission.guest_count,
                    dietary_restrictions=submission.dietary_restrictions,
                    dance_song=submission.dance_song,
                    advice_newlyweds=submission.advice_newlyweds,
                    favorite_memory=submission.favorite_memory,
                    ip_address=ip_address,
                )
                session.add(response)
                await session.flush()
                # submitted_at is assigned by the database
                await session.refresh(response)
                stored = response.to_dto()
        except (SQLAlchemyError, ValueError) as e:
            logger.exception("Failed to save RSVP for project %s", submission.project_id)
            raise StoreError("Failed to save RSVP response") from e

        logger.info("RSVP %s saved for project %s", stored.id, stored.project_id)
        return stored
