"""Rejections a submission pipeline can end with.

Each stage converts failures of its own dependencies into a result; the
pipelines raise these errors to end a request, and the routers render them
in their endpoint's response shape.
"""

from datetime import datetime


class SubmissionError(Exception):
    """Base class for a terminal rejection of a guest submission."""

    status_code: int = 500

    def __init__(self, message: str, detail: str | None = None) -> None:
        self.message = message
        self.detail = detail
        super().__init__(message)


class SubmissionValidationError(SubmissionError):
    """User-fixable input problems, all reported together."""

    status_code = 400

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message, detail=", ".join(self.errors) or None)


class PermissionDeniedError(SubmissionError):
    status_code = 403


class ProjectNotFoundError(SubmissionError):
    status_code = 404


class RateLimitedError(SubmissionError):
    status_code = 429

    def __init__(
        self,
        message: str,
        reset_time: datetime,
        remaining: int = 0,
        detail: str | None = None,
    ) -> None:
        self.reset_time = reset_time
        self.remaining = remaining
        super().__init__(message, detail=detail)


class DuplicateSubmissionError(SubmissionError):
    status_code = 409


class StoreError(SubmissionError):
    """A write or lookup against the database failed."""

    status_code = 500
