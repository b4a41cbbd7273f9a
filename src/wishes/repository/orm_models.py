from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.models.base import Base, Submitted, TimeStamp
from src.wishes.dtos import StoredWishDTO, WishStatus


class GuestWish(Base, Submitted):
    __tablename__ = TableNames.GUEST_WISHES.value

    project_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.WEDDING_PROJECTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    guest_name: Mapped[str] = mapped_column(String(100), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    guest_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[WishStatus] = mapped_column(
        Enum(
            WishStatus,
            name="wish_status_enum",
            values_callable=lambda x: [e.value for e in x],
        ),
        default=WishStatus.PENDING,
        nullable=False,
        index=True,
    )
    spam_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def to_dto(self) -> StoredWishDTO:
        return StoredWishDTO(
            id=self.uuid,
            project_id=self.project_id,
            guest_name=self.guest_name,
            message=self.message,
            guest_email=self.guest_email,
            status=WishStatus(self.status),
            spam_score=self.spam_score,
            is_featured=self.is_featured,
            ip_address=self.ip_address,
            submitted_at=self.submitted_at,
        )

    def __repr__(self) -> str:
        return f"<GuestWish {self.guest_name} - {self.status}>"


class WishRateLimit(Base, TimeStamp):
    """Submission counter for one address on one project's wishes board."""

    __tablename__ = TableNames.WISH_RATE_LIMITS.value
    __table_args__ = (
        UniqueConstraint("project_id", "ip_address", name="uq_wish_rate_limits_project_ip"),
    )

    project_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.WEDDING_PROJECTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
    )
    ip_address: Mapped[str] = mapped_column(String(64), nullable=False)
    submission_count: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    window_started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    last_submission: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<WishRateLimit {self.ip_address} on {self.project_id}: {self.submission_count}>"
