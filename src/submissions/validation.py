import re
from typing import Any

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.match(value.strip()) is not None


def is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def clean_optional(value: Any) -> str | None:
    """Trim an optional text answer, turning empty answers into None."""
    if not isinstance(value, str):
        return None
    return value.strip() or None
