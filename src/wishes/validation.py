from typing import Any

from src.projects.dtos import WishesConfigDTO
from src.submissions.errors import SubmissionValidationError
from src.submissions.validation import is_blank, is_valid_email


def require_wish_fields(payload: Any) -> None:
    """Reject payloads missing the project, the guest's name or the message."""
    if (
        not isinstance(payload, dict)
        or not payload.get("projectId")
        or is_blank(payload.get("guestName"))
        or is_blank(payload.get("message"))
    ):
        raise SubmissionValidationError("Missing required fields")


def check_wish_against_config(
    message: str,
    guest_email: Any,
    config: WishesConfigDTO | None,
    default_max_length: int,
) -> None:
    """
    Apply the project's length and email rules to a wish.
    ``guest_email`` is the value as sent; anything present that is not a
    well-formed address is rejected rather than dropped.
    """
    max_length = (config.max_message_length if config else None) or default_max_length
    if len(message) > max_length:
        raise SubmissionValidationError(f"Message must be less than {max_length} characters")

    if config and config.require_email and not guest_email:
        raise SubmissionValidationError("Email is required")

    if guest_email and not is_valid_email(guest_email):
        raise SubmissionValidationError("Invalid email format")
