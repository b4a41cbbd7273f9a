from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.config.submissions import SubmissionConfig, get_submission_config
from src.submissions.client_address import get_client_address
from src.submissions.errors import RateLimitedError, SubmissionError
from src.submissions.rate_limit import RateLimiter
from src.submissions.schemas import CamelModel
from src.wishes.dtos import WishStatus
from src.wishes.features.check_rate_limit.router import get_wishes_rate_limiter
from src.wishes.features.submit_wish.pipeline import WishSubmissionPipeline
from src.wishes.repository.read_models import (
    SqlWishesProjectReadModel,
    WishesProjectReadModel,
)
from src.wishes.repository.write_models import SqlWishWriteModel, WishWriteModel
from src.wishes.schemas import SubmittedWish, WishErrorResponse
from src.wishes.urls import SUBMIT_WISH_URL

router = APIRouter()


class WishSubmitResponse(CamelModel):
    success: bool = True
    status: WishStatus
    message: str
    wish: SubmittedWish
    spam_score: int
    remaining: int


def get_wishes_project_read_model() -> WishesProjectReadModel:
    """Dependency to get the wishes project read model."""
    return SqlWishesProjectReadModel()


def get_wish_write_model() -> WishWriteModel:
    """Dependency to get the wish write model."""
    return SqlWishWriteModel()


def get_wish_submission_pipeline(
    project_read_model: WishesProjectReadModel = Depends(get_wishes_project_read_model),
    rate_limiter: RateLimiter = Depends(get_wishes_rate_limiter),
    write_model: WishWriteModel = Depends(get_wish_write_model),
    config: SubmissionConfig = Depends(get_submission_config),
) -> WishSubmissionPipeline:
    return WishSubmissionPipeline(
        project_read_model=project_read_model,
        rate_limiter=rate_limiter,
        write_model=write_model,
        config=config,
    )


@router.post(
    SUBMIT_WISH_URL,
    response_model=WishSubmitResponse,
    responses={
        400: {"model": WishErrorResponse},
        403: {"model": WishErrorResponse},
        404: {"model": WishErrorResponse},
        429: {"model": WishErrorResponse},
        500: {"model": WishErrorResponse},
    },
)
async def submit_wish(
    request: Request,
    pipeline: WishSubmissionPipeline = Depends(get_wish_submission_pipeline),
):
    """
    Post a guest's wish to a published wedding site.
    Wishes that look like spam are stored as pending for the couple to review.
    """
    client_address = get_client_address(request.headers)
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    try:
        accepted = await pipeline.submit(payload, client_address=client_address)
    except SubmissionError as e:
        body = WishErrorResponse(
            error=e.message,
            message=e.detail,
            reset_time=e.reset_time if isinstance(e, RateLimitedError) else None,
        )
        return JSONResponse(
            status_code=e.status_code,
            content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        )

    return WishSubmitResponse(
        status=accepted.wish.status,
        message=accepted.message,
        wish=SubmittedWish.from_dto(accepted.wish),
        spam_score=accepted.spam_score,
        remaining=accepted.remaining,
    )
