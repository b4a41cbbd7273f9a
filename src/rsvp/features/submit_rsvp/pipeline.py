"""RSVP submission pipeline.

Stages run in a fixed order and the first rejection ends the request:
rate limit, validation, permission, duplicate check, insert. The rate limit
slot is taken before anything else, so rejected attempts count too.
"""

import logging
from typing import Any

from src.rsvp.dtos import RSVPAcceptedDTO, RSVPSubmissionDTO
from src.rsvp.repository.read_models import (
    NOT_ALLOWED_MESSAGE,
    RSVPDuplicateReadModel,
    RSVPPermissionGate,
)
from src.rsvp.repository.write_models import RSVPWriteModel
from src.rsvp.validation import validate_rsvp_submission
from src.submissions.errors import (
    DuplicateSubmissionError,
    PermissionDeniedError,
    RateLimitedError,
    SubmissionValidationError,
)
from src.submissions.rate_limit import RateLimitKey, RateLimiter

logger = logging.getLogger(__name__)

DEFAULT_CONFIRMATION_MESSAGE = "RSVP response submitted successfully"
RATE_LIMITED_MESSAGE = "Too many RSVP submissions. Please try again later."
DUPLICATE_MESSAGE = (
    "An RSVP response has already been submitted with this name or email address."
)


class RSVPSubmissionPipeline:
    def __init__(
        self,
        rate_limiter: RateLimiter,
        permission_gate: RSVPPermissionGate,
        duplicate_read_model: RSVPDuplicateReadModel,
        write_model: RSVPWriteModel,
    ) -> None:
        self.rate_limiter = rate_limiter
        self.permission_gate = permission_gate
        self.duplicate_read_model = duplicate_read_model
        self.write_model = write_model

    async def submit(self, payload: Any, client_address: str) -> RSVPAcceptedDTO:
        """
        Run one RSVP through every stage and persist it.
        Raises a SubmissionError subclass for the stage that rejected it.
        """
        decision = await self.rate_limiter.check(RateLimitKey(client_address=client_address))
        if not decision.allowed:
            logger.info("RSVP rate limit exceeded for %s", client_address)
            raise RateLimitedError(RATE_LIMITED_MESSAGE, reset_time=decision.reset_time)

        validation = validate_rsvp_submission(payload)
        if not validation.valid:
            logger.info("RSVP validation failed: %s", validation.errors)
            raise SubmissionValidationError("Invalid submission data", validation.errors)

        submission = RSVPSubmissionDTO.from_payload(payload)

        permission = await self.permission_gate.check(submission.project_id)
        if not permission.allowed:
            logger.info(
                "RSVP denied for project %s: %s", submission.project_id, permission.message
            )
            raise PermissionDeniedError(permission.message or NOT_ALLOWED_MESSAGE)

        if await self.duplicate_read_model.exists(
            project_id=submission.project_id,
            guest_name=submission.guest_name,
            guest_email=submission.guest_email,
        ):
            logger.info("Duplicate RSVP for project %s", submission.project_id)
            raise DuplicateSubmissionError(DUPLICATE_MESSAGE)

        stored = await self.write_model.create_response(submission, ip_address=client_address)

        return RSVPAcceptedDTO(
            message=permission.config.confirmation_message or DEFAULT_CONFIRMATION_MESSAGE,
            response=stored,
        )
