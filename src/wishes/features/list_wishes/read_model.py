import logging
from abc import ABC, abstractmethod
from functools import partial

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.submissions.errors import StoreError
from src.wishes.dtos import WishesPageDTO, WishStatus
from src.wishes.repository.orm_models import GuestWish

logger = logging.getLogger(__name__)


class ApprovedWishesReadModel(ABC):
    @abstractmethod
    async def get_page(self, project_id: str, page: int, per_page: int) -> WishesPageDTO:
        """Approved wishes for a project, featured first, then newest first."""
        raise NotImplementedError


class SqlApprovedWishesReadModel(ApprovedWishesReadModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def get_page(self, project_id: str, page: int, per_page: int) -> WishesPageDTO:
        approved = (
            GuestWish.project_id == project_id,
            GuestWish.status == WishStatus.APPROVED,
        )
        try:
            async with self.async_session_manager(
                auto_commit=False, session_overwrite=self.session_overwrite
            ) as session:
                total = await session.scalar(
                    select(func.count()).select_from(GuestWish).where(*approved)
                )
                stmt = (
                    select(GuestWish)
                    .where(*approved)
                    .order_by(GuestWish.is_featured.desc(), GuestWish.submitted_at.desc())
                    .offset((page - 1) * per_page)
                    .limit(per_page)
                )
                result = await session.execute(stmt)
                wishes = [wish.to_dto() for wish in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.exception("Failed to load wishes for project %s", project_id)
            raise StoreError("Failed to load wishes") from e

        return WishesPageDTO(wishes=wishes, total=total or 0, page=page, per_page=per_page)
