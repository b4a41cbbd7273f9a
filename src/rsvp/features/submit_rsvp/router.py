from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.config.submissions import SubmissionConfig, get_submission_config
from src.rsvp.dtos import AttendanceStatus
from src.rsvp.features.submit_rsvp.pipeline import RATE_LIMITED_MESSAGE, RSVPSubmissionPipeline
from src.rsvp.repository.read_models import (
    RSVPDuplicateReadModel,
    RSVPPermissionGate,
    SqlRSVPDuplicateReadModel,
    SqlRSVPPermissionGate,
)
from src.rsvp.repository.write_models import RSVPWriteModel, SqlRSVPWriteModel
from src.rsvp.urls import SUBMIT_RSVP_URL
from src.submissions.client_address import get_client_address
from src.submissions.errors import SubmissionError
from src.submissions.rate_limit import InMemoryRateLimitStore, RateLimiter
from src.submissions.schemas import CamelModel

router = APIRouter()

# One store per process; counts are not shared between instances
rsvp_rate_limit_store = InMemoryRateLimitStore()


class SubmittedRSVP(CamelModel):
    id: UUID
    guest_name: str
    attendance_status: AttendanceStatus
    submitted_at: datetime


class RSVPSubmitResponse(CamelModel):
    success: bool = True
    message: str
    data: SubmittedRSVP


class RSVPErrorResponse(CamelModel):
    success: bool = False
    message: str
    error: str | None = None


def get_rsvp_rate_limiter(
    config: SubmissionConfig = Depends(get_submission_config),
) -> RateLimiter:
    """Dependency to get the RSVP rate limiter."""
    return RateLimiter(
        store=rsvp_rate_limit_store,
        capacity=config.rsvp_rate_limit_max,
        window=config.rsvp_rate_limit_window,
        fail_open=False,
        exceeded_message=RATE_LIMITED_MESSAGE,
    )


def get_rsvp_permission_gate() -> RSVPPermissionGate:
    """Dependency to get the RSVP permission gate."""
    return SqlRSVPPermissionGate()


def get_rsvp_duplicate_read_model(
    config: SubmissionConfig = Depends(get_submission_config),
) -> RSVPDuplicateReadModel:
    """Dependency to get the duplicate RSVP read model."""
    return SqlRSVPDuplicateReadModel(fail_open=config.duplicate_check_fail_open)


def get_rsvp_write_model() -> RSVPWriteModel:
    """Dependency to get the RSVP write model."""
    return SqlRSVPWriteModel()


def get_rsvp_submission_pipeline(
    rate_limiter: RateLimiter = Depends(get_rsvp_rate_limiter),
    permission_gate: RSVPPermissionGate = Depends(get_rsvp_permission_gate),
    duplicate_read_model: RSVPDuplicateReadModel = Depends(get_rsvp_duplicate_read_model),
    write_model: RSVPWriteModel = Depends(get_rsvp_write_model),
) -> RSVPSubmissionPipeline:
    return RSVPSubmissionPipeline(
        rate_limiter=rate_limiter,
        permission_gate=permission_gate,
        duplicate_read_model=duplicate_read_model,
        write_model=write_model,
    )


@router.get(SUBMIT_RSVP_URL)
async def rsvp_route_status() -> dict[str, str]:
    return {"message": "RSVP API route is working!"}


@router.post(
    SUBMIT_RSVP_URL,
    status_code=201,
    response_model=RSVPSubmitResponse,
    responses={
        400: {"model": RSVPErrorResponse},
        403: {"model": RSVPErrorResponse},
        409: {"model": RSVPErrorResponse},
        429: {"model": RSVPErrorResponse},
        500: {"model": RSVPErrorResponse},
    },
)
async def submit_rsvp(
    request: Request,
    pipeline: RSVPSubmissionPipeline = Depends(get_rsvp_submission_pipeline),
):
    """
    Submit a guest's RSVP for a published wedding site.
    The body is validated by the pipeline so every field error is reported at once.
    """
    client_address = get_client_address(request.headers)
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    try:
        accepted = await pipeline.submit(payload, client_address=client_address)
    except SubmissionError as e:
        body = RSVPErrorResponse(message=e.message, error=e.detail)
        return JSONResponse(
            status_code=e.status_code,
            content=body.model_dump(by_alias=True, exclude_none=True),
        )

    return RSVPSubmitResponse(
        message=accepted.message,
        data=SubmittedRSVP(
            id=accepted.response.id,
            guest_name=accepted.response.guest_name,
            attendance_status=accepted.response.attendance_status,
            submitted_at=accepted.response.submitted_at,
        ),
    )
