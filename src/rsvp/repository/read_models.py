import json
import logging
from abc import ABC, abstractmethod
from functools import partial

import sqlalchemy as sa
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.projects.dtos import RSVPConfigDTO
from src.rsvp.dtos import PermissionResultDTO
from src.rsvp.repository.orm_models import RSVPResponse

logger = logging.getLogger(__name__)

UNABLE_TO_VERIFY_MESSAGE = "Unable to verify RSVP permissions"
NOT_ALLOWED_MESSAGE = "RSVP not allowed"

CHECK_RSVP_ALLOWED = sa.text(
    "SELECT is_allowed, config_data, error_message FROM check_rsvp_allowed(:project_uuid)"
).columns(
    sa.column("is_allowed", sa.Boolean),
    sa.column("config_data", sa.JSON),
    sa.column("error_message", sa.Text),
)


class RSVPPermissionGate(ABC):
    @abstractmethod
    async def check(self, project_id: str) -> PermissionResultDTO:
        """
        Decide whether a project currently accepts RSVPs.
        Never raises; any failure to decide is a denial.
        """
        raise NotImplementedError


class SqlRSVPPermissionGate(RSVPPermissionGate):
    """Delegates the decision to the ``check_rsvp_allowed`` database function."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def check(self, project_id: str) -> PermissionResultDTO:
        try:
            async with self.async_session_manager(
                auto_commit=False, session_overwrite=self.session_overwrite
            ) as session:
                result = await session.execute(
                    CHECK_RSVP_ALLOWED, {"project_uuid": project_id}
                )
                row = result.first()
        except Exception:
            logger.exception("check_rsvp_allowed failed for project %s", project_id)
            return PermissionResultDTO(allowed=False, message=UNABLE_TO_VERIFY_MESSAGE)

        if row is None:
            logger.warning("check_rsvp_allowed returned nothing for project %s", project_id)
            return PermissionResultDTO(allowed=False, message=UNABLE_TO_VERIFY_MESSAGE)

        config_data = row.config_data
        if isinstance(config_data, str):
            config_data = json.loads(config_data)
        try:
            config = RSVPConfigDTO.from_mapping(config_data)
        except (TypeError, ValueError):
            logger.exception("Unreadable RSVP config for project %s", project_id)
            return PermissionResultDTO(allowed=False, message=UNABLE_TO_VERIFY_MESSAGE)

        if row.is_allowed:
            return PermissionResultDTO(allowed=True, config=config)
        return PermissionResultDTO(
            allowed=False,
            message=row.error_message or NOT_ALLOWED_MESSAGE,
            config=config,
        )


class RSVPDuplicateReadModel(ABC):
    @abstractmethod
    async def exists(
        self, project_id: str, guest_name: str, guest_email: str | None = None
    ) -> bool:
        """
        Whether the project already has a response from this guest,
        matched by email (trimmed, lower-cased) or by name (trimmed).
        """
        raise NotImplementedError


class SqlRSVPDuplicateReadModel(RSVPDuplicateReadModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        fail_open: bool = True,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.fail_open = fail_open

    async def exists(
        self, project_id: str, guest_name: str, guest_email: str | None = None
    ) -> bool:
        try:
            async with self.async_session_manager(
                auto_commit=False, session_overwrite=self.session_overwrite
            ) as session:
                email = (guest_email or "").strip().lower()
                if email and await self._has_response(
                    session, project_id, RSVPResponse.guest_email == email
                ):
                    return True
                return await self._has_response(
                    session, project_id, RSVPResponse.guest_name == guest_name.strip()
                )
        except Exception:
            logger.exception("Duplicate check failed for project %s", project_id)
            return not self.fail_open

    async def _has_response(self, session, project_id: str, criterion) -> bool:
        stmt = (
            select(RSVPResponse.uuid)
            .where(RSVPResponse.project_id == project_id)
            .where(criterion)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
