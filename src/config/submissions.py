from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache

from src.config.settings import Settings, settings


@dataclass(frozen=True)
class SubmissionConfig:
    """Thresholds shared by the RSVP and wishes pipelines."""

    rsvp_rate_limit_window: timedelta
    rsvp_rate_limit_max: int
    wishes_rate_limit_window: timedelta
    wishes_rate_limit_max: int
    wishes_rate_limit_fail_open: bool
    wish_default_max_length: int
    wishes_per_page: int
    spam_score_threshold: int
    duplicate_check_fail_open: bool

    @classmethod
    def from_settings(cls, config: Settings) -> "SubmissionConfig":
        return cls(
            rsvp_rate_limit_window=timedelta(seconds=config.RSVP_RATE_LIMIT_WINDOW_SECONDS),
            rsvp_rate_limit_max=(
                config.RSVP_RATE_LIMIT_MAX_DEVELOPMENT
                if config.is_development
                else config.RSVP_RATE_LIMIT_MAX
            ),
            wishes_rate_limit_window=timedelta(
                seconds=config.WISHES_RATE_LIMIT_WINDOW_SECONDS
            ),
            wishes_rate_limit_max=config.WISHES_RATE_LIMIT_MAX,
            wishes_rate_limit_fail_open=config.WISHES_RATE_LIMIT_FAIL_OPEN,
            wish_default_max_length=config.WISH_DEFAULT_MAX_LENGTH,
            wishes_per_page=config.WISHES_PER_PAGE,
            spam_score_threshold=config.SPAM_SCORE_THRESHOLD,
            duplicate_check_fail_open=config.DUPLICATE_CHECK_FAIL_OPEN,
        )


@lru_cache
def get_submission_config() -> SubmissionConfig:
    return SubmissionConfig.from_settings(settings)
