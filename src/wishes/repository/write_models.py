"""Guest wish write model. Returns DTOs, never ORM models."""

import logging
from abc import ABC, abstractmethod
from functools import partial

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.submissions.errors import StoreError
from src.wishes.dtos import StoredWishDTO, WishStatus, WishSubmissionDTO
from src.wishes.repository.orm_models import GuestWish

logger = logging.getLogger(__name__)


class WishWriteModel(ABC):
    @abstractmethod
    async def create_wish(
        self,
        submission: WishSubmissionDTO,
        status: WishStatus,
        spam_score: int,
        ip_address: str,
    ) -> StoredWishDTO:
        """
        Persist one guest wish with its moderation status.
        Raises StoreError when the row cannot be written.
        """
        raise NotImplementedError


class SqlWishWriteModel(WishWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def create_wish(
        self,
        submission: WishSubmissionDTO,
        status: WishStatus,
        spam_score: int,
        ip_address: str,
    ) -> StoredWishDTO:
        try:
            async with self.async_session_manager(
                session_overwrite=self.session_overwrite
            ) as session:
                wish = GuestWish(
                    project_id=submission.project_id,
                    guest_name=submission.guest_name,
                    message=submission.message,
                    guest_email=submission.guest_email,
                    status=status,
                    spam_score=spam_score,
                    ip_address=ip_address,
                    is_featured=False,
                )
                session.add(wish)
                await session.flush()
                await session.refresh(wish)
                stored = wish.to_dto()
        except (SQLAlchemyError, ValueError) as e:
            logger.exception("Failed to save wish for project %s", submission.project_id)
            raise StoreError("Failed to submit wish") from e

        logger.info("Wish %s saved for project %s as %s", stored.id, stored.project_id, status.value)
        return stored
