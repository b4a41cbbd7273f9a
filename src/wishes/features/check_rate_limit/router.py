from datetime import datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.config.submissions import SubmissionConfig, get_submission_config
from src.submissions.client_address import get_client_address
from src.submissions.rate_limit import RateLimiter, RateLimitKey, RateLimitStore
from src.submissions.schemas import CamelModel
from src.wishes.features.submit_wish.pipeline import WISH_EXCEEDED_MESSAGE
from src.wishes.repository.rate_limit_store import SqlRateLimitStore
from src.wishes.schemas import WishErrorResponse
from src.wishes.urls import CHECK_RATE_LIMIT_URL

router = APIRouter()


class RateLimitCheckResponse(CamelModel):
    allowed: bool
    remaining: int
    reset_time: datetime
    message: str | None = None


def get_wishes_rate_limit_store() -> RateLimitStore:
    """Dependency to get the persisted wishes rate limit store."""
    return SqlRateLimitStore()


def get_wishes_rate_limiter(
    store: RateLimitStore = Depends(get_wishes_rate_limit_store),
    config: SubmissionConfig = Depends(get_submission_config),
) -> RateLimiter:
    """Dependency to get the wishes rate limiter, shared with the submit endpoint."""
    return RateLimiter(
        store=store,
        capacity=config.wishes_rate_limit_max,
        window=config.wishes_rate_limit_window,
        fail_open=config.wishes_rate_limit_fail_open,
        exceeded_message=WISH_EXCEEDED_MESSAGE,
    )


@router.post(
    CHECK_RATE_LIMIT_URL,
    response_model=RateLimitCheckResponse,
    responses={400: {"model": WishErrorResponse}},
)
async def check_rate_limit(
    request: Request,
    rate_limiter: RateLimiter = Depends(get_wishes_rate_limiter),
):
    """
    Take one wishes rate limit slot for the caller on a project.
    A denial is still a 200; the body says whether the slot was granted.
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    if not isinstance(payload, dict) or not payload.get("projectId"):
        body = WishErrorResponse(error="Project ID is required")
        return JSONResponse(
            status_code=400, content=body.model_dump(by_alias=True, exclude_none=True)
        )

    decision = await rate_limiter.check(
        RateLimitKey(
            client_address=get_client_address(request.headers),
            project_id=str(payload["projectId"]).strip(),
        )
    )
    return RateLimitCheckResponse(
        allowed=decision.allowed,
        remaining=decision.remaining,
        reset_time=decision.reset_time,
        message=decision.message,
    )
