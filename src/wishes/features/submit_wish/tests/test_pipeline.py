"""Tests for WishSubmissionPipeline."""

from datetime import timedelta

import pytest

from src.config.submissions import SubmissionConfig
from src.projects.dtos import WishesConfigDTO
from src.submissions.errors import (
    PermissionDeniedError,
    ProjectNotFoundError,
    RateLimitedError,
    StoreError,
    SubmissionValidationError,
)
from src.submissions.rate_limit import InMemoryRateLimitStore, RateLimiter, RateLimitKey
from src.wishes.dtos import WishStatus
from src.wishes.features.submit_wish.pipeline import (
    APPROVED_MESSAGE,
    PENDING_MESSAGE,
    WISH_EXCEEDED_MESSAGE,
    WishSubmissionPipeline,
)
from src.wishes.features.submit_wish.tests.inmemory_models import (
    PROJECT_ID,
    InMemoryWishesProjectReadModel,
    InMemoryWishWriteModel,
    make_wish_payload,
)

ADDRESS = "203.0.113.7"

CONFIG = SubmissionConfig(
    rsvp_rate_limit_window=timedelta(minutes=15),
    rsvp_rate_limit_max=5,
    wishes_rate_limit_window=timedelta(hours=1),
    wishes_rate_limit_max=3,
    wishes_rate_limit_fail_open=True,
    wish_default_max_length=500,
    wishes_per_page=15,
    spam_score_threshold=5,
    duplicate_check_fail_open=True,
)


def make_pipeline(read_model=None, write_model=None, rate_limit_store=None):
    limiter = RateLimiter(
        store=rate_limit_store or InMemoryRateLimitStore(),
        capacity=CONFIG.wishes_rate_limit_max,
        window=CONFIG.wishes_rate_limit_window,
        fail_open=True,
        exceeded_message=WISH_EXCEEDED_MESSAGE,
    )
    return WishSubmissionPipeline(
        project_read_model=read_model or InMemoryWishesProjectReadModel(),
        rate_limiter=limiter,
        write_model=write_model or InMemoryWishWriteModel(),
        config=CONFIG,
    )


@pytest.mark.asyncio
async def test_clean_wish_is_approved():
    write_model = InMemoryWishWriteModel()
    pipeline = make_pipeline(write_model=write_model)

    accepted = await pipeline.submit(make_wish_payload(), client_address=ADDRESS)

    assert accepted.message == APPROVED_MESSAGE
    assert accepted.wish.status == WishStatus.APPROVED
    assert accepted.spam_score == 0
    assert accepted.remaining == 2
    assert write_model.wishes[0].ip_address == ADDRESS


@pytest.mark.asyncio
async def test_spammy_wish_is_held_for_review():
    pipeline = make_pipeline()

    accepted = await pipeline.submit(
        make_wish_payload(message="FREE MONEY CLICK HERE http://spam.biz"),
        client_address=ADDRESS,
    )

    assert accepted.wish.status == WishStatus.PENDING
    assert accepted.message == PENDING_MESSAGE
    assert accepted.spam_score > 5


@pytest.mark.asyncio
async def test_missing_fields():
    with pytest.raises(SubmissionValidationError) as exc_info:
        await make_pipeline().submit(make_wish_payload(message="   "), client_address=ADDRESS)

    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_unpublished_project():
    pipeline = make_pipeline(read_model=InMemoryWishesProjectReadModel(published=False))

    with pytest.raises(ProjectNotFoundError) as exc_info:
        await pipeline.submit(make_wish_payload(), client_address=ADDRESS)

    assert exc_info.value.message == "Project not found or not published"


@pytest.mark.asyncio
async def test_disabled_wishes():
    read_model = InMemoryWishesProjectReadModel(config=WishesConfigDTO(is_enabled=False))

    with pytest.raises(PermissionDeniedError) as exc_info:
        await make_pipeline(read_model=read_model).submit(
            make_wish_payload(), client_address=ADDRESS
        )

    assert exc_info.value.message == "Guest wishes are disabled for this wedding"


@pytest.mark.asyncio
async def test_length_is_checked_on_the_message_as_typed():
    read_model = InMemoryWishesProjectReadModel(config=WishesConfigDTO(max_message_length=10))

    with pytest.raises(SubmissionValidationError) as exc_info:
        await make_pipeline(read_model=read_model).submit(
            make_wish_payload(message="Congrats!   "), client_address=ADDRESS
        )

    assert exc_info.value.message == "Message must be less than 10 characters"


@pytest.mark.asyncio
async def test_non_text_email_is_rejected_not_dropped():
    write_model = InMemoryWishWriteModel()
    pipeline = make_pipeline(write_model=write_model)

    with pytest.raises(SubmissionValidationError) as exc_info:
        await pipeline.submit(make_wish_payload(guestEmail=12345), client_address=ADDRESS)

    assert exc_info.value.message == "Invalid email format"
    assert write_model.wishes == []


@pytest.mark.asyncio
async def test_rejected_wishes_do_not_use_the_allowance():
    rate_limit_store = InMemoryRateLimitStore()
    read_model = InMemoryWishesProjectReadModel(config=WishesConfigDTO(require_email=True))
    pipeline = make_pipeline(read_model=read_model, rate_limit_store=rate_limit_store)

    with pytest.raises(SubmissionValidationError):
        await pipeline.submit(make_wish_payload(), client_address=ADDRESS)

    assert rate_limit_store.get(RateLimitKey(client_address=ADDRESS, project_id=PROJECT_ID)) is None


@pytest.mark.asyncio
async def test_fourth_wish_is_rate_limited():
    write_model = InMemoryWishWriteModel()
    pipeline = make_pipeline(write_model=write_model)
    for _ in range(3):
        await pipeline.submit(make_wish_payload(), client_address=ADDRESS)

    with pytest.raises(RateLimitedError) as exc_info:
        await pipeline.submit(make_wish_payload(), client_address=ADDRESS)

    assert exc_info.value.message == "Rate limit exceeded"
    assert exc_info.value.detail == WISH_EXCEEDED_MESSAGE
    assert exc_info.value.reset_time is not None
    assert len(write_model.wishes) == 3


@pytest.mark.asyncio
async def test_store_failure():
    pipeline = make_pipeline(write_model=InMemoryWishWriteModel(fail=True))

    with pytest.raises(StoreError) as exc_info:
        await pipeline.submit(make_wish_payload(), client_address=ADDRESS)

    assert exc_info.value.message == "Failed to submit wish"
