from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from src.projects.dtos import RSVPConfigDTO
from src.submissions.validation import clean_optional


class AttendanceStatus(str, Enum):
    ATTENDING = "attending"
    NOT_ATTENDING = "not_attending"
    MAYBE = "maybe"


@dataclass(frozen=True)
class RSVPSubmissionDTO:
    """A validated RSVP, normalised the way it is stored."""

    project_id: str
    guest_name: str
    attendance_status: AttendanceStatus
    guest_count: int
    guest_email: str | None = None
    guest_phone: str | None = None
    dietary_restrictions: str | None = None
    dance_song: str | None = None
    advice_newlyweds: str | None = None
    favorite_memory: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "RSVPSubmissionDTO":
        """Build from a payload that already passed ``validate_rsvp_submission``."""
        email = clean_optional(payload.get("guestEmail"))
        return cls(
            project_id=payload["projectId"].strip(),
            guest_name=payload["guestName"].strip(),
            attendance_status=AttendanceStatus(payload["attendanceStatus"]),
            guest_count=int(payload["guestCount"]),
            guest_email=email.lower() if email else None,
            guest_phone=clean_optional(payload.get("guestPhone")),
            dietary_restrictions=clean_optional(payload.get("dietaryRestrictions")),
            dance_song=clean_optional(payload.get("danceSong")),
            advice_newlyweds=clean_optional(payload.get("adviceNewlyweds")),
            favorite_memory=clean_optional(payload.get("favoriteMemory")),
        )


@dataclass(frozen=True)
class PermissionResultDTO:
    allowed: bool
    message: str | None = None
    config: RSVPConfigDTO = field(default_factory=RSVPConfigDTO)


@dataclass(frozen=True)
class StoredRSVPDTO:
    """An RSVP row as persisted."""

    id: UUID
    project_id: UUID
    guest_name: str
    attendance_status: AttendanceStatus
    guest_count: int
    submitted_at: datetime
    guest_email: str | None = None
    guest_phone: str | None = None
    dietary_restrictions: str | None = None
    dance_song: str | None = None
    advice_newlyweds: str | None = None
    favorite_memory: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True)
class RSVPAcceptedDTO:
    message: str
    response: StoredRSVPDTO
