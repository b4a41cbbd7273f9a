from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from src.rsvp.dtos import AttendanceStatus, StoredRSVPDTO
from src.rsvp.features.response_summary.read_model import RSVPSummaryReadModel
from src.rsvp.features.response_summary.router import get_rsvp_summary_read_model
from src.rsvp.urls import RSVP_SUMMARY_URL


class InMemoryRSVPSummaryReadModel(RSVPSummaryReadModel):
    def __init__(self, responses: list[StoredRSVPDTO]):
        self._responses = responses

    async def list_responses(self, project_id: UUID) -> list[StoredRSVPDTO]:
        return [r for r in self._responses if r.project_id == project_id]


@pytest.mark.asyncio
async def test_summary_endpoint(client_factory):
    project_id = uuid4()
    responses = [
        StoredRSVPDTO(
            id=uuid4(),
            project_id=project_id,
            guest_name=name,
            attendance_status=status,
            guest_count=count,
            submitted_at=datetime.now(UTC),
            guest_email="guest@example.com",
        )
        for name, status, count in [
            ("Ana", AttendanceStatus.ATTENDING, 2),
            ("Ben", AttendanceStatus.ATTENDING, 1),
            ("Cleo", AttendanceStatus.MAYBE, 1),
        ]
    ]
    overrides = {get_rsvp_summary_read_model: lambda: InMemoryRSVPSummaryReadModel(responses)}

    async with client_factory(overrides) as client:
        response = await client.get(RSVP_SUMMARY_URL.format(project_id=project_id))

    assert response.status_code == 200
    data = response.json()
    assert data["projectId"] == str(project_id)
    assert data["total"] == 3
    assert data["totalGuests"] == 3
    assert data["averagePartySize"] == 1.5
    assert data["responseRate"] == 66.67
    assert data["withContactInfo"] == 3
    assert "guestName" not in data


@pytest.mark.asyncio
async def test_summary_requires_a_project_uuid(client_factory):
    async with client_factory({}) as client:
        response = await client.get(RSVP_SUMMARY_URL.format(project_id="not-a-uuid"))

    assert response.status_code == 422
