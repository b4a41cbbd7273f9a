"""Per-project configuration as seen by the submission pipelines.

Projects and their configuration are owned by the site editor; the
submission endpoints only read them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class ProjectDTO:
    id: UUID
    is_published: bool


@dataclass(frozen=True)
class RSVPConfigDTO:
    """RSVP settings returned alongside the permission decision."""

    is_enabled: bool = True
    title: str | None = None
    subtitle: str | None = None
    deadline_date: datetime | None = None
    confirmation_message: str | None = None
    dance_song_enabled: bool = False
    dance_song_question: str | None = None
    advice_enabled: bool = False
    advice_question: str | None = None
    memory_enabled: bool = False
    memory_question: str | None = None

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> "RSVPConfigDTO":
        """Build from the loosely typed ``config_data`` payload, ignoring unknown keys."""
        if not data:
            return cls()
        known = {
            key: value
            for key, value in data.items()
            if key in cls.__dataclass_fields__ and value is not None
        }
        deadline = known.get("deadline_date")
        if isinstance(deadline, str):
            known["deadline_date"] = datetime.fromisoformat(deadline)
        return cls(**known)


@dataclass(frozen=True)
class WishesConfigDTO:
    is_enabled: bool = True
    display_layout: str | None = None
    welcome_message: str | None = None
    max_message_length: int | None = None
    require_email: bool = False
