"""Tests for company service."""

import pytest
from sqlalchemy import select

from jobfair.exceptions import ConflictError, ForbiddenError, NotFoundError
from jobfair.models import ApplicationProcessHistory, ApplicationStatus, Company
from jobfair.schemas.company import ApplicationStatusUpdate, CompanyCreate, CompanyUpdate
from jobfair.services.application_service import ApplicationService
from jobfair.services.company_service import CODE_ALPHABET, CompanyService


@pytest.mark.asyncio
async def test_create_company_uppercases_code(db_session):
    company = await CompanyService(db_session).create(
        CompanyCreate(
            name="Initech",
            code="init01",
            description="Software",
            location="Bandung",
        )
    )

    assert company.code == "INIT01"


@pytest.mark.asyncio
async def test_company_code_must_be_unique(db_session, company):
    service = CompanyService(db_session)

    with pytest.raises(ConflictError):
        await service.create(
            CompanyCreate(name="Copycat", code="acme01", description="x", location="y")
        )

    other = await service.create(
        CompanyCreate(name="Globex", code="GLBX01", description="x", location="y")
    )
    with pytest.raises(ConflictError):
        await service.update(other, CompanyUpdate(code="ACME01"))


@pytest.mark.asyncio
async def test_regenerate_code(db_session, company):
    old_code = company.code

    updated = await CompanyService(db_session).regenerate_code(company)

    assert updated.code != old_code
    assert len(updated.code) == 6
    assert all(ch in CODE_ALPHABET for ch in updated.code)


@pytest.mark.asyncio
async def test_get_for_admin(db_session, company_admin, company, job_seeker):
    service = CompanyService(db_session)

    assert (await service.get_for_admin(company_admin)).id == company.id
    with pytest.raises(NotFoundError):
        await service.get_for_admin(job_seeker)


@pytest.mark.asyncio
async def test_profile_status(db_session, company_admin, company, job_seeker):
    service = CompanyService(db_session)
    assert await service.profile_status(company_admin) == {"is_complete": True, "has_profile": True}

    company.location = "   "
    await db_session.flush()
    assert (await service.profile_status(company_admin))["is_complete"] is False

    assert await service.profile_status(job_seeker) == {"is_complete": False, "has_profile": False}


@pytest.mark.asyncio
async def test_update_application_status_appends_history(
    db_session, company_admin, company, fair, make_job, job_seeker
):
    job = await make_job(company, fair)
    application = await ApplicationService(db_session).create(job_seeker, job.id)
    service = CompanyService(db_session)

    await service.update_application_status(
        company_admin,
        ApplicationStatusUpdate(application_id=application.id, status="REVIEWED"),
    )
    updated = await service.update_application_status(
        company_admin,
        ApplicationStatusUpdate(
            application_id=application.id,
            status=ApplicationStatus.ACCEPTED,
            notes="Offer sent",
        ),
    )

    assert updated.status == ApplicationStatus.ACCEPTED
    result = await db_session.execute(
        select(ApplicationProcessHistory)
        .where(ApplicationProcessHistory.application_id == application.id)
        .order_by(ApplicationProcessHistory.id)
    )
    history = result.scalars().all()
    assert [entry.status for entry in history] == [
        ApplicationStatus.PENDING,
        ApplicationStatus.REVIEWED,
        ApplicationStatus.ACCEPTED,
    ]
    assert history[-1].notes == "Offer sent"


@pytest.mark.asyncio
async def test_cannot_review_other_company_application(
    db_session, company_admin, make_company, fair, make_job, job_seeker
):
    other = await make_company("Globex", "GLBX01")
    job = await make_job(other, fair)
    application = await ApplicationService(db_session).create(job_seeker, job.id)
    service = CompanyService(db_session)

    with pytest.raises(ForbiddenError):
        await service.update_application_status(
            company_admin,
            ApplicationStatusUpdate(application_id=application.id, status="REJECTED"),
        )
    with pytest.raises(ForbiddenError):
        await service.get_job_applications(company_admin, job.id)


@pytest.mark.asyncio
async def test_job_applications_include_profile(
    db_session, company_admin, company, fair, make_job, job_seeker
):
    job = await make_job(company, fair)
    await ApplicationService(db_session).create(job_seeker, job.id)

    data = await CompanyService(db_session).get_job_applications(company_admin, job.id)

    assert data["job_id"] == job.id
    (entry,) = data["applications"]
    assert entry["email"] == "seeker@example.com"
    assert entry["profile"]["full_name"] == "Siti Rahma"
    assert entry["profile"]["skills"] == ["Python", "SQL"]


@pytest.mark.asyncio
async def test_dashboard(db_session, company_admin, company, fair, join, make_job, job_seeker):
    await join(company, fair, "A-1")
    job = await make_job(company, fair)
    await make_job(company, fair, title="QA Engineer")
    await ApplicationService(db_session).create(job_seeker, job.id)

    dashboard = await CompanyService(db_session).get_dashboard(company_admin)

    assert dashboard["company"].id == company.id
    assert dashboard["events"][0]["stand_number"] == "A-1"
    assert dashboard["events"][0]["job_count"] == 2
    assert dashboard["total_applications"] == 1
    assert dashboard["status_counts"] == {
        "PENDING": 1,
        "REVIEWED": 0,
        "ACCEPTED": 0,
        "REJECTED": 0,
    }


@pytest.mark.asyncio
async def test_details_and_counts(db_session, company, fair, join, make_job, job_seeker):
    await join(company, fair, "A-1")
    job = await make_job(company, fair)
    await ApplicationService(db_session).create(job_seeker, job.id)
    service = CompanyService(db_session)

    details = await service.get_details(company.id)
    assert details["participating_events"][0]["stand_number"] == "A-1"
    assert details["participating_events"][0]["jobs"] == [
        {"id": job.id, "title": job.title, "applicants": 1}
    ]
    assert details["application_count"] == 1

    (listed,) = await service.list_with_counts(with_applications=True)
    assert listed["participation_count"] == 1
    assert listed["job_count"] == 1
    assert listed["application_count"] == 1


@pytest.mark.asyncio
async def test_delete_company_cascades(db_session, company, company_admin, fair, join, make_job):
    await join(company, fair, "A-1")
    await make_job(company, fair)

    await CompanyService(db_session).delete(company)

    result = await db_session.execute(select(Company))
    assert result.scalars().all() == []
