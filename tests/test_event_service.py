"""Tests for events and company participation."""

from datetime import datetime, timezone

import pytest

from jobfair.exceptions import (
    AlreadyJoinedEventError,
    EventHasJobsError,
    NotFoundError,
    NotParticipatingError,
    StandNumberTakenError,
)
from jobfair.schemas.event import EventCreate, EventUpdate
from jobfair.services.event_service import EventService


@pytest.mark.asyncio
async def test_create_and_update_event(db_session):
    service = EventService(db_session)
    event = await service.create(
        EventCreate(
            title="Career Expo",
            description="Annual job fair",
            banner_url="https://example.com/banner.png",
            minimap_url="https://example.com/map.png",
            date=datetime(2026, 5, 2, 9, tzinfo=timezone.utc),
            location="Hall A",
        )
    )
    assert event.id is not None

    updated = await service.update(event, EventUpdate(location="Hall B"))

    assert updated.location == "Hall B"
    assert updated.title == "Career Expo"


@pytest.mark.asyncio
async def test_join_event(db_session, company, fair):
    participation = await EventService(db_session).join_event(company, fair.id, "A-1")

    assert participation.company_id == company.id
    assert participation.stand_number == "A-1"


@pytest.mark.asyncio
async def test_join_unknown_event(db_session, company):
    with pytest.raises(NotFoundError):
        await EventService(db_session).join_event(company, 404, "A-1")


@pytest.mark.asyncio
async def test_join_event_twice(db_session, company, fair):
    service = EventService(db_session)
    await service.join_event(company, fair.id, "A-1")

    with pytest.raises(AlreadyJoinedEventError):
        await service.join_event(company, fair.id, "B-2")


@pytest.mark.asyncio
async def test_stand_number_is_unique_per_event(db_session, company, make_company, fair, make_event):
    """Another company cannot take a booked stand, but the same number is free elsewhere."""
    service = EventService(db_session)
    other = await make_company("Globex", "GLBX01")
    await service.join_event(company, fair.id, "A-1")

    with pytest.raises(StandNumberTakenError, match="A-1"):
        await service.join_event(other, fair.id, "A-1")

    second_event = await make_event("Spring Fair", day=20)
    participation = await service.join_event(other, second_event.id, "A-1")
    assert participation.event_id == second_event.id


@pytest.mark.asyncio
async def test_stand_booked_concurrently(db_session, company, make_company, fair, monkeypatch):
    """A stand taken after the availability check still reports the stand conflict."""
    service = EventService(db_session)
    other = await make_company("Globex", "GLBX01")
    await service.join_event(other, fair.id, "A-1")

    async def stale_check(event_id, stand_number):
        return False

    monkeypatch.setattr(service, "is_stand_taken", stale_check)

    with pytest.raises(StandNumberTakenError, match="A-1"):
        await service.join_event(company, fair.id, "A-1")

    assert await service.get_participation(fair.id, company.id) is None
    participation = await service.join_event(company, fair.id, "B-2")
    assert participation.stand_number == "B-2"


@pytest.mark.asyncio
async def test_leave_event_blocked_while_jobs_posted(db_session, company, fair, make_job):
    service = EventService(db_session)
    await service.join_event(company, fair.id, "A-1")
    job = await make_job(company, fair)

    with pytest.raises(EventHasJobsError, match="1 job"):
        await service.leave_event(company, fair.id)

    await db_session.delete(job)
    await db_session.flush()

    await service.leave_event(company, fair.id)
    assert await service.get_participation(fair.id, company.id) is None


@pytest.mark.asyncio
async def test_leave_event_not_joined(db_session, company, fair):
    with pytest.raises(NotParticipatingError):
        await EventService(db_session).leave_event(company, fair.id)


@pytest.mark.asyncio
async def test_list_available_excludes_joined(db_session, company, fair, make_event, join):
    spring = await make_event("Spring Fair", day=20)
    await join(company, fair, "A-1")

    available = await EventService(db_session).list_available(company)

    assert [event.id for event in available] == [spring.id]


@pytest.mark.asyncio
async def test_event_details(db_session, company, make_company, fair, join, make_job):
    other = await make_company("Globex", "GLBX01")
    await join(company, fair, "A-1")
    await join(other, fair, "B-7")
    await make_job(company, fair, title="Backend Engineer")
    await make_job(company, fair, title="Data Analyst")

    details = await EventService(db_session).get_details(fair.id)

    assert details["participation_count"] == 2
    assert details["job_count"] == 2
    assert details["application_count"] == 0
    stands = {c["name"]: (c["stand_number"], c["job_count"]) for c in details["participating_companies"]}
    assert stands == {"Acme Corp": ("A-1", 2), "Globex": ("B-7", 0)}


@pytest.mark.asyncio
async def test_list_with_counts_latest_first(db_session, make_event, company, join):
    early = await make_event("Winter Fair", day=1)
    late = await make_event("Spring Fair", day=25)
    await join(company, late, "C-3")

    events = await EventService(db_session).list_with_counts(with_applications=True)

    assert [e["id"] for e in events] == [late.id, early.id]
    assert events[0]["participation_count"] == 1
    assert events[0]["application_count"] == 0
