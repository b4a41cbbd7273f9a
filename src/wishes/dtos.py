from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from src.submissions.validation import clean_optional


class WishStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class WishSubmissionDTO:
    project_id: str
    guest_name: str
    message: str
    guest_email: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "WishSubmissionDTO":
        return cls(
            project_id=str(payload["projectId"]).strip(),
            guest_name=payload["guestName"].strip(),
            message=payload["message"].strip(),
            guest_email=clean_optional(payload.get("guestEmail")),
        )


@dataclass(frozen=True)
class StoredWishDTO:
    id: UUID
    project_id: UUID
    guest_name: str
    message: str
    status: WishStatus
    spam_score: int
    is_featured: bool
    submitted_at: datetime
    guest_email: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True)
class WishAcceptedDTO:
    message: str
    wish: StoredWishDTO
    spam_score: int
    remaining: int


@dataclass(frozen=True)
class WishesPageDTO:
    wishes: list[StoredWishDTO]
    total: int
    page: int
    per_page: int

    @property
    def has_more(self) -> bool:
        return self.page * self.per_page < self.total
