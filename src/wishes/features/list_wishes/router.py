from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from src.config.submissions import SubmissionConfig, get_submission_config
from src.submissions.errors import SubmissionError
from src.submissions.schemas import CamelModel
from src.wishes.features.list_wishes.read_model import (
    ApprovedWishesReadModel,
    SqlApprovedWishesReadModel,
)
from src.wishes.schemas import WishErrorResponse
from src.wishes.urls import LIST_WISHES_URL

router = APIRouter()


class PublicWish(CamelModel):
    """What every visitor of the wishes board may see."""

    id: UUID
    guest_name: str
    message: str
    is_featured: bool
    submitted_at: datetime


class WishesPageResponse(CamelModel):
    wishes: list[PublicWish]
    total: int
    page: int
    has_more: bool


def get_approved_wishes_read_model() -> ApprovedWishesReadModel:
    """Dependency to get the approved wishes read model."""
    return SqlApprovedWishesReadModel()


@router.get(
    LIST_WISHES_URL,
    response_model=WishesPageResponse,
    responses={500: {"model": WishErrorResponse}},
)
async def list_wishes(
    project_id: UUID,
    page: int = Query(default=1, ge=1),
    read_model: ApprovedWishesReadModel = Depends(get_approved_wishes_read_model),
    config: SubmissionConfig = Depends(get_submission_config),
):
    try:
        result = await read_model.get_page(
            str(project_id), page=page, per_page=config.wishes_per_page
        )
    except SubmissionError as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.message})

    return WishesPageResponse(
        wishes=[
            PublicWish(
                id=wish.id,
                guest_name=wish.guest_name,
                message=wish.message,
                is_featured=wish.is_featured,
                submitted_at=wish.submitted_at,
            )
            for wish in result.wishes
        ],
        total=result.total,
        page=result.page,
        has_more=result.has_more,
    )
