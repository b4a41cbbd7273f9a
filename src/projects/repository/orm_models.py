from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp


class WeddingProject(Base, TimeStamp):
    __tablename__ = TableNames.WEDDING_PROJECTS.value

    owner_id: Mapped[UUID | None] = mapped_column(nullable=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    subdomain: Mapped[str | None] = mapped_column(String(100), nullable=True, unique=True)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<WeddingProject {self.subdomain or self.uuid}>"


class RSVPConfig(Base, TimeStamp):
    __tablename__ = TableNames.RSVP_CONFIG.value

    project_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.WEDDING_PROJECTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    is_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    subtitle: Mapped[str | None] = mapped_column(String(255), nullable=True)
    deadline_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    confirmation_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    dance_song_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    dance_song_question: Mapped[str | None] = mapped_column(Text, nullable=True)
    advice_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    advice_question: Mapped[str | None] = mapped_column(Text, nullable=True)
    memory_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    memory_question: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<RSVPConfig for project {self.project_id}>"


class WishesConfig(Base, TimeStamp):
    __tablename__ = TableNames.WISHES_CONFIG.value

    project_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.WEDDING_PROJECTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    is_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    display_layout: Mapped[str | None] = mapped_column(String(50), nullable=True)
    welcome_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    max_message_length: Mapped[int | None] = mapped_column(Integer, nullable=True)
    require_email: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<WishesConfig for project {self.project_id}>"
