from uuid import UUID

from fastapi import APIRouter, Depends

from src.rsvp.features.response_summary.read_model import (
    RSVPSummaryReadModel,
    SqlRSVPSummaryReadModel,
    summarize_responses,
)
from src.rsvp.urls import RSVP_SUMMARY_URL
from src.submissions.rate_limit import utcnow
from src.submissions.schemas import CamelModel

router = APIRouter()


class RSVPSummaryResponse(CamelModel):
    project_id: UUID
    total: int
    attending: int
    not_attending: int
    maybe: int
    total_guests: int
    recent_activity: int
    average_party_size: float
    response_rate: float
    with_dietary_restrictions: int
    with_contact_info: int


def get_rsvp_summary_read_model() -> RSVPSummaryReadModel:
    """Dependency to get RSVP summary read model instance."""
    return SqlRSVPSummaryReadModel()


@router.get(RSVP_SUMMARY_URL, response_model=RSVPSummaryResponse)
async def get_rsvp_summary(
    project_id: UUID,
    read_model: RSVPSummaryReadModel = Depends(get_rsvp_summary_read_model),
) -> RSVPSummaryResponse:
    """
    Headline numbers for the couple's dashboard.
    Only counts are returned, never guest details. The project id is public
    on the published site, so access to this route is left to the hosting
    platform, which only exposes it to the site owner.
    """
    responses = await read_model.list_responses(project_id)
    summary = summarize_responses(responses, now=utcnow())
    return RSVPSummaryResponse(
        project_id=project_id,
        total=summary.total,
        attending=summary.attending,
        not_attending=summary.not_attending,
        maybe=summary.maybe,
        total_guests=summary.total_guests,
        recent_activity=summary.recent_activity,
        average_party_size=round(summary.average_party_size, 2),
        response_rate=round(summary.response_rate, 2),
        with_dietary_restrictions=summary.with_dietary_restrictions,
        with_contact_info=summary.with_contact_info,
    )
