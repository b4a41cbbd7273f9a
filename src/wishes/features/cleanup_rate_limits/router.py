import secrets

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse

from src.config.settings import Settings, get_settings
from src.submissions.errors import SubmissionError
from src.submissions.rate_limit import utcnow
from src.submissions.schemas import CamelModel
from src.wishes.features.cleanup_rate_limits.write_model import (
    RateLimitCleanupWriteModel,
    SqlRateLimitCleanupWriteModel,
)
from src.wishes.schemas import WishErrorResponse
from src.wishes.urls import CLEANUP_RATE_LIMITS_URL

router = APIRouter()


class CleanupResponse(CamelModel):
    success: bool = True
    message: str = "Rate limit records cleaned up successfully"


def get_cron_secret(config: Settings = Depends(get_settings)) -> str:
    return config.CRON_SECRET


def get_rate_limit_cleanup_write_model() -> RateLimitCleanupWriteModel:
    """Dependency to get the rate limit cleanup write model."""
    return SqlRateLimitCleanupWriteModel()


def is_authorized(authorization: str | None, cron_secret: str) -> bool:
    # without a configured secret nobody may trigger the job
    if not cron_secret or not authorization:
        return False
    return secrets.compare_digest(authorization, f"Bearer {cron_secret}")


@router.post(
    CLEANUP_RATE_LIMITS_URL,
    response_model=CleanupResponse,
    responses={401: {"model": WishErrorResponse}, 500: {"model": WishErrorResponse}},
)
async def cleanup_rate_limits(
    authorization: str | None = Header(default=None),
    cron_secret: str = Depends(get_cron_secret),
    write_model: RateLimitCleanupWriteModel = Depends(get_rate_limit_cleanup_write_model),
):
    if not is_authorized(authorization, cron_secret):
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    try:
        await write_model.cleanup(now=utcnow())
    except SubmissionError as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.message})

    return CleanupResponse()
