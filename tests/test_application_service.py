"""Tests for applying to jobs."""

import pytest
from sqlalchemy import select

from jobfair.exceptions import (
    ApplicationLimitExceededError,
    DuplicateApplicationError,
    NotFoundError,
)
from jobfair.models import ApplicationProcessHistory, ApplicationStatus
from jobfair.services.application_service import ApplicationService


@pytest.mark.asyncio
async def test_create_application_starts_pending_with_history(
    db_session, job_seeker, company, fair, join, make_job
):
    """A new application is PENDING and logs its first status."""
    await join(company, fair, "A-1")
    job = await make_job(company, fair)

    application = await ApplicationService(db_session).create(job_seeker, job.id)

    assert application.status == ApplicationStatus.PENDING
    assert application.job_seeker_id == job_seeker.id

    result = await db_session.execute(
        select(ApplicationProcessHistory).where(
            ApplicationProcessHistory.application_id == application.id
        )
    )
    history = result.scalars().all()
    assert [entry.status for entry in history] == [ApplicationStatus.PENDING]


@pytest.mark.asyncio
async def test_apply_twice_to_same_job(db_session, job_seeker, company, fair, make_job):
    job = await make_job(company, fair)
    service = ApplicationService(db_session)
    await service.create(job_seeker, job.id)

    with pytest.raises(DuplicateApplicationError):
        await service.create(job_seeker, job.id)


@pytest.mark.asyncio
async def test_concurrent_duplicate_application(db_session, job_seeker, company, fair, make_job, monkeypatch):
    """An application inserted after the duplicate check still reports a duplicate."""
    job = await make_job(company, fair)
    service = ApplicationService(db_session)
    await service.create(job_seeker, job.id)

    async def stale_lookup(user, job_id):
        return None

    monkeypatch.setattr(service, "get_for_job", stale_lookup)

    with pytest.raises(DuplicateApplicationError):
        await service.create(job_seeker, job.id)

    history = await db_session.execute(select(ApplicationProcessHistory))
    assert len(history.scalars().all()) == 1
    assert await service.count_by_event(job_seeker, fair.id) == 1


@pytest.mark.asyncio
async def test_apply_to_missing_job(db_session, job_seeker):
    with pytest.raises(NotFoundError, match="Job not found"):
        await ApplicationService(db_session).create(job_seeker, 9999)


@pytest.mark.asyncio
async def test_application_limit_per_event(
    db_session, job_seeker, company, fair, make_event, make_job
):
    """The sixth application in one event is refused; other events are unaffected."""
    jobs = [await make_job(company, fair, title=f"Role {i}") for i in range(6)]
    other_event = await make_event("Spring Fair", day=20)
    other_job = await make_job(company, other_event)
    service = ApplicationService(db_session, max_per_event=5)

    for job in jobs[:5]:
        await service.create(job_seeker, job.id)

    with pytest.raises(ApplicationLimitExceededError) as exc_info:
        await service.create(job_seeker, jobs[5].id)
    assert "maximum of 5" in exc_info.value.message

    application = await service.create(job_seeker, other_job.id)
    assert application.job_id == other_job.id


@pytest.mark.asyncio
async def test_remaining_for_event(db_session, job_seeker, company, fair, make_job):
    service = ApplicationService(db_session, max_per_event=5)
    assert await service.remaining_for_event(job_seeker, fair.id) == (0, 5)

    for i in range(2):
        job = await make_job(company, fair, title=f"Role {i}")
        await service.create(job_seeker, job.id)

    assert await service.remaining_for_event(job_seeker, fair.id) == (2, 3)


@pytest.mark.asyncio
async def test_list_by_event_only_returns_that_event(
    db_session, job_seeker, company, fair, make_event, make_job
):
    other_event = await make_event("Spring Fair", day=20)
    job = await make_job(company, fair, title="Data Analyst")
    other_job = await make_job(company, other_event, title="Designer")
    service = ApplicationService(db_session)
    await service.create(job_seeker, job.id)
    await service.create(job_seeker, other_job.id)

    applications = await service.list_by_event(job_seeker, fair.id)

    assert [app.job.title for app in applications] == ["Data Analyst"]
    assert applications[0].job.company.name == "Acme Corp"
