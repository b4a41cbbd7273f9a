from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.models.base import Base, Submitted
from src.rsvp.dtos import AttendanceStatus, StoredRSVPDTO


class RSVPResponse(Base, Submitted):
    __tablename__ = TableNames.RSVP_RESPONSES.value

    project_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.WEDDING_PROJECTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    guest_name: Mapped[str] = mapped_column(String(100), nullable=False)
    guest_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    guest_phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    attendance_status: Mapped[AttendanceStatus] = mapped_column(
        Enum(
            AttendanceStatus,
            name="attendance_status_enum",
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
    )
    guest_count: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    dietary_restrictions: Mapped[str | None] = mapped_column(Text, nullable=True)
    dance_song: Mapped[str | None] = mapped_column(String(200), nullable=True)
    advice_newlyweds: Mapped[str | None] = mapped_column(Text, nullable=True)
    favorite_memory: Mapped[str | None] = mapped_column(Text, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)

    def to_dto(self) -> StoredRSVPDTO:
        return StoredRSVPDTO(
            id=self.uuid,
            project_id=self.project_id,
            guest_name=self.guest_name,
            guest_email=self.guest_email,
            guest_phone=self.guest_phone,
            attendance_status=AttendanceStatus(self.attendance_status),
            guest_count=self.guest_count,
            dietary_restrictions=self.dietary_restrictions,
            dance_song=self.dance_song,
            advice_newlyweds=self.advice_newlyweds,
            favorite_memory=self.favorite_memory,
            ip_address=self.ip_address,
            submitted_at=self.submitted_at,
        )

    def __repr__(self) -> str:
        return f"<RSVPResponse {self.guest_name} - {self.attendance_status}>"
