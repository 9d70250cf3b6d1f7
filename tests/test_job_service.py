"""Tests for job service."""

import pytest

from jobfair.exceptions import ForbiddenError, NotParticipatingError, ValidationFailedError
from jobfair.schemas.job import JobCreate, JobUpdate
from jobfair.services.application_service import ApplicationService
from jobfair.services.job_service import JobService


@pytest.mark.asyncio
async def test_create_job_requires_participation(db_session, company, fair):
    """Test that a company must join an event before posting to it."""
    service = JobService(db_session)

    with pytest.raises(NotParticipatingError, match="must join this event"):
        await service.create(company, JobCreate(event_id=fair.id, title="Backend Engineer"))


@pytest.mark.asyncio
async def test_create_job(db_session, company, fair, join):
    """Test creating a job."""
    await join(company, fair, "A-1")

    job = await JobService(db_session).create(
        company,
        JobCreate(
            event_id=fair.id,
            title="Backend Engineer",
            location="Jakarta",
            tags=["python", "fastapi"],
            salary_min=8_000_000,
            salary_max=12_000_000,
            is_remote=True,
        ),
    )

    assert job.id is not None
    assert job.company_id == company.id
    assert job.tags == ["python", "fastapi"]
    assert job.is_remote is True


def test_salary_range_validated_on_create():
    with pytest.raises(ValueError, match="salary_min"):
        JobCreate(event_id=1, title="Backend Engineer", salary_min=10, salary_max=5)


@pytest.mark.asyncio
async def test_update_job_checks_owner(db_session, company, make_company, fair, make_job):
    """Test that only the owning company can edit a job."""
    other = await make_company("Globex", "GLBX01")
    job = await make_job(company, fair)

    with pytest.raises(ForbiddenError):
        await JobService(db_session).update(other, job, JobUpdate(title="Hijacked"))

    with pytest.raises(ForbiddenError):
        await JobService(db_session).delete(other, job)


@pytest.mark.asyncio
async def test_update_job_merges_salary(db_session, company, fair, make_job):
    """A partial update is checked against the stored salary bound."""
    job = await make_job(company, fair, salary_min=5_000_000, salary_max=9_000_000)
    service = JobService(db_session)

    with pytest.raises(ValidationFailedError):
        await service.update(company, job, JobUpdate(salary_min=10_000_000))

    updated = await service.update(company, job, JobUpdate(title="Senior Backend Engineer"))
    assert updated.title == "Senior Backend Engineer"
    assert updated.salary_min == 5_000_000


@pytest.mark.asyncio
async def test_list_by_event_includes_stand_and_counts(
    db_session, company, make_company, fair, join, make_job, job_seeker
):
    other = await make_company("Globex", "GLBX01")
    await join(company, fair, "A-1")
    applied = await make_job(company, fair, title="Backend Engineer")
    await make_job(other, fair, title="Designer")
    await ApplicationService(db_session).create(job_seeker, applied.id)

    jobs = await JobService(db_session).list_by_event(fair.id)

    by_title = {job["title"]: job for job in jobs}
    assert by_title["Backend Engineer"]["application_count"] == 1
    assert by_title["Backend Engineer"]["company"]["stand_number"] == "A-1"
    # Globex posted without a booth record
    assert by_title["Designer"]["company"]["stand_number"] == "N/A"
    assert by_title["Designer"]["application_count"] == 0


@pytest.mark.asyncio
async def test_get_detail(db_session, company, fair, make_job):
    job = await make_job(company, fair)

    detail = await JobService(db_session).get_detail(job.id)

    assert detail["company"]["name"] == "Acme Corp"
    assert detail["event"]["title"] == fair.title
    assert detail["application_count"] == 0
    assert await JobService(db_session).get_detail(9999) is None


@pytest.mark.asyncio
async def test_list_by_event_grouped(db_session, company, make_company, fair, join, make_job):
    zeta = await make_company("Zeta Labs", "ZETA01")
    await join(zeta, fair, "Z-9")
    await join(company, fair, "A-1")
    await make_job(company, fair, title="Backend Engineer")
    await make_job(company, fair, title="QA Engineer")

    groups = await JobService(db_session).list_by_event_grouped(fair.id)

    assert [g["name"] for g in groups] == ["Acme Corp", "Zeta Labs"]
    assert groups[0]["job_count"] == 2
    assert [j["title"] for j in groups[0]["jobs"]] == ["Backend Engineer", "QA Engineer"]
    assert groups[1]["stand_number"] == "Z-9"
    assert groups[1]["jobs"] == []
