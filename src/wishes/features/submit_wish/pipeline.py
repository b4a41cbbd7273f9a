"""Guest wish submission pipeline.

The cheap local checks run first so a rejected wish never takes a rate
limit slot: required fields, published project, wishes enabled, the
project's length and email rules. Only then is the slot taken, the message
scored and the wish stored.
"""

import logging
from typing import Any

from src.config.submissions import SubmissionConfig
from src.submissions.errors import (
    PermissionDeniedError,
    ProjectNotFoundError,
    RateLimitedError,
)
from src.submissions.rate_limit import RateLimitKey, RateLimiter
from src.wishes.dtos import WishAcceptedDTO, WishStatus, WishSubmissionDTO
from src.wishes.repository.read_models import WishesProjectReadModel
from src.wishes.repository.write_models import WishWriteModel
from src.wishes.spam import detect_spam
from src.wishes.validation import check_wish_against_config, require_wish_fields

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND_MESSAGE = "Project not found or not published"
WISHES_DISABLED_MESSAGE = "Guest wishes are disabled for this wedding"
RATE_LIMITED_MESSAGE = "Rate limit exceeded"
WISH_EXCEEDED_MESSAGE = "Rate limit exceeded. Please wait before submitting another wish."
APPROVED_MESSAGE = "Your wish has been posted successfully!"
PENDING_MESSAGE = "Thank you! Your wish is being reviewed and will appear shortly."


class WishSubmissionPipeline:
    def __init__(
        self,
        project_read_model: WishesProjectReadModel,
        rate_limiter: RateLimiter,
        write_model: WishWriteModel,
        config: SubmissionConfig,
    ) -> None:
        self.project_read_model = project_read_model
        self.rate_limiter = rate_limiter
        self.write_model = write_model
        self.config = config

    async def submit(self, payload: Any, client_address: str) -> WishAcceptedDTO:
        require_wish_fields(payload)
        submission = WishSubmissionDTO.from_payload(payload)

        project = await self.project_read_model.get_published_project(submission.project_id)
        if project is None:
            raise ProjectNotFoundError(PROJECT_NOT_FOUND_MESSAGE)

        wishes_config = await self.project_read_model.get_wishes_config(submission.project_id)
        if wishes_config is not None and not wishes_config.is_enabled:
            raise PermissionDeniedError(WISHES_DISABLED_MESSAGE)

        # both rules apply to the values as sent
        check_wish_against_config(
            message=payload["message"],
            guest_email=payload.get("guestEmail"),
            config=wishes_config,
            default_max_length=self.config.wish_default_max_length,
        )

        decision = await self.rate_limiter.check(
            RateLimitKey(client_address=client_address, project_id=submission.project_id)
        )
        if not decision.allowed:
            raise RateLimitedError(
                RATE_LIMITED_MESSAGE,
                reset_time=decision.reset_time,
                detail=decision.message,
            )

        verdict = detect_spam(
            submission.message,
            submission.guest_name,
            threshold=self.config.spam_score_threshold,
        )
        status = WishStatus.PENDING if verdict.is_spam else WishStatus.APPROVED

        stored = await self.write_model.create_wish(
            submission,
            status=status,
            spam_score=verdict.spam_score,
            ip_address=client_address,
        )

        if verdict.is_spam:
            logger.warning(
                "Suspicious wish submitted for project %s: score=%s reasons=%s ip=%s "
                "guest=%s message=%s...",
                submission.project_id,
                verdict.spam_score,
                verdict.reasons,
                client_address,
                submission.guest_name,
                submission.message[:100],
            )

        return WishAcceptedDTO(
            message=APPROVED_MESSAGE if status is WishStatus.APPROVED else PENDING_MESSAGE,
            wish=stored,
            spam_score=verdict.spam_score,
            remaining=decision.remaining,
        )
