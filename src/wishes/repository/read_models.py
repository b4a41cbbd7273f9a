import logging
from abc import ABC, abstractmethod
from functools import partial

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.projects.dtos import ProjectDTO, WishesConfigDTO
from src.projects.repository.orm_models import WeddingProject, WishesConfig

logger = logging.getLogger(__name__)


class WishesProjectReadModel(ABC):
    @abstractmethod
    async def get_published_project(self, project_id: str) -> ProjectDTO | None:
        """Return the project when it exists and is published, otherwise None."""
        raise NotImplementedError

    @abstractmethod
    async def get_wishes_config(self, project_id: str) -> WishesConfigDTO | None:
        """Return the project's wishes settings, or None when it has none."""
        raise NotImplementedError


class SqlWishesProjectReadModel(WishesProjectReadModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def get_published_project(self, project_id: str) -> ProjectDTO | None:
        try:
            async with self.async_session_manager(
                auto_commit=False, session_overwrite=self.session_overwrite
            ) as session:
                stmt = (
                    select(WeddingProject)
                    .where(WeddingProject.uuid == project_id)
                    .where(WeddingProject.is_published.is_(True))
                )
                result = await session.execute(stmt)
                project = result.scalar_one_or_none()
        except Exception:
            # an unreadable project is never treated as published
            logger.exception("Project lookup failed for %s", project_id)
            return None

        if project is None:
            return None
        return ProjectDTO(id=project.uuid, is_published=project.is_published)

    async def get_wishes_config(self, project_id: str) -> WishesConfigDTO | None:
        try:
            async with self.async_session_manager(
                auto_commit=False, session_overwrite=self.session_overwrite
            ) as session:
                stmt = select(WishesConfig).where(WishesConfig.project_id == project_id)
                result = await session.execute(stmt)
                config = result.scalar_one_or_none()
        except Exception:
            logger.exception("Wishes config lookup failed for %s", project_id)
            return None

        if config is None:
            return None
        return WishesConfigDTO(
            is_enabled=config.is_enabled,
            display_layout=config.display_layout,
            welcome_message=config.welcome_message,
            max_message_length=config.max_message_length,
            require_email=config.require_email,
        )
