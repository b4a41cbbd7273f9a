"""Validation of raw RSVP payloads.

Every check runs so the guest sees all problems in one response.
"""

from dataclasses import dataclass, field
from typing import Any

from src.rsvp.dtos import AttendanceStatus
from src.submissions.validation import is_blank, is_valid_email

MIN_GUEST_COUNT = 1
MAX_GUEST_COUNT = 10

FIELD_MAX_LENGTHS = {
    "guestName": 100,
    "guestEmail": 255,
    "guestPhone": 20,
    "dietaryRestrictions": 500,
    "danceSong": 200,
    "adviceNewlyweds": 1000,
    "favoriteMemory": 1000,
}


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


def _is_guest_count(value: Any) -> bool:
    # bool is an int subclass; JSON true must not count as one guest
    if isinstance(value, bool):
        return False
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return isinstance(value, int) and MIN_GUEST_COUNT <= value <= MAX_GUEST_COUNT


def validate_rsvp_submission(payload: Any) -> ValidationResult:
    if not isinstance(payload, dict):
        return ValidationResult(valid=False, errors=["Invalid request data"])

    errors: list[str] = []

    if is_blank(payload.get("projectId")):
        errors.append("Project ID is required")

    if is_blank(payload.get("guestName")):
        errors.append("Guest name is required")

    status = payload.get("attendanceStatus")
    if not isinstance(status, str) or status not in {s.value for s in AttendanceStatus}:
        errors.append("Valid attendance status is required")

    if not _is_guest_count(payload.get("guestCount")):
        errors.append(
            f"Guest count must be between {MIN_GUEST_COUNT} and {MAX_GUEST_COUNT}"
        )

    email = payload.get("guestEmail")
    if email and not is_valid_email(email):
        errors.append("Invalid email format")

    phone = payload.get("guestPhone")
    if phone and not isinstance(phone, str):
        errors.append("Invalid phone number format")

    for name, limit in FIELD_MAX_LENGTHS.items():
        value = payload.get(name)
        if isinstance(value, str) and len(value) > limit:
            errors.append(f"{name} must be less than {limit} characters")

    return ValidationResult(valid=not errors, errors=errors)
