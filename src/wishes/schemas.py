from datetime import datetime
from uuid import UUID

from src.submissions.schemas import CamelModel
from src.wishes.dtos import StoredWishDTO, WishStatus


class WishErrorResponse(CamelModel):
    error: str
    message: str | None = None
    reset_time: datetime | None = None


class SubmittedWish(CamelModel):
    """A stored wish as echoed to the guest who wrote it."""

    id: UUID
    project_id: UUID
    guest_name: str
    message: str
    guest_email: str | None = None
    status: WishStatus
    spam_score: int
    is_featured: bool
    submitted_at: datetime

    @classmethod
    def from_dto(cls, wish: StoredWishDTO) -> "SubmittedWish":
        return cls(
            id=wish.id,
            project_id=wish.project_id,
            guest_name=wish.guest_name,
            message=wish.message,
            guest_email=wish.guest_email,
            status=wish.status,
            spam_score=wish.spam_score,
            is_featured=wish.is_featured,
            submitted_at=wish.submitted_at,
        )
