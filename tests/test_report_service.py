"""Tests for the admin dashboard and reports."""

import csv
import io

import pytest
import pytest_asyncio

from jobfair.exceptions import NotFoundError
from jobfair.models import ApplicationStatus
from jobfair.services.application_service import ApplicationService
from jobfair.services.dashboard_service import DashboardService
from jobfair.services.report_service import ReportService


@pytest_asyncio.fixture
async def fair_activity(db_session, company, make_company, fair, make_event, join, make_job, make_user):
    """Two companies at one event, three applicants, plus one application elsewhere."""
    globex = await make_company("Globex", "GLBX01")
    await join(company, fair, "A-1")
    await join(globex, fair, "B-2")

    backend = await make_job(company, fair, title="Backend Engineer", is_remote=True)
    designer = await make_job(company, fair, title="Designer")
    analyst = await make_job(globex, fair, title="Data Analyst")

    siti = await make_user("siti@example.com", full_name="Siti", education="Bachelor")
    budi = await make_user("budi@example.com", full_name="Budi", education="Bachelor")
    ani = await make_user("ani@example.com", full_name="Ani")

    spring = await make_event("Spring Fair", day=20)
    elsewhere = await make_job(globex, spring, title="Support")
    outsider = await make_user("dewi@example.com", full_name="Dewi", education="Diploma")

    service = ApplicationService(db_session)
    first = await service.create(siti, backend.id)
    await service.create(budi, backend.id)
    await service.create(ani, analyst.id)
    await service.create(outsider, elsewhere.id)

    first.status = ApplicationStatus.ACCEPTED
    await db_session.flush()

    return {"backend": backend, "designer": designer, "analyst": analyst, "spring": spring}


@pytest.mark.asyncio
async def test_report_for_event(db_session, fair, fair_activity):
    report = await ReportService(db_session).generate(fair.id)

    assert report["metrics"] == {
        "total_applications": 3,
        "unique_applicants": 3,
        "total_companies": 2,
        "total_jobs": 3,
        "average_applications_per_job": 1.0,
        "average_applications_per_company": 1.5,
    }
    assert report["status_stats"] == {"PENDING": 2, "ACCEPTED": 1}
    assert report["job_type_distribution"] == {"Remote": 1, "Onsite": 2}
    assert report["top_companies"] == [
        {"name": "Acme Corp", "count": 2},
        {"name": "Globex", "count": 1},
    ]
    assert report["top_jobs"][0] == {
        "title": "Backend Engineer",
        "company": "Acme Corp",
        "application_count": 2,
    }
    assert report["metadata"]["view_mode"] == "event"
    assert report["metadata"]["event_title"] == fair.title


@pytest.mark.asyncio
async def test_lifetime_report(db_session, fair_activity):
    report = await ReportService(db_session).generate()

    assert report["metrics"]["total_applications"] == 4
    assert report["metrics"]["total_jobs"] == 4
    assert report["metrics"]["average_applications_per_job"] == 1.0
    assert report["metadata"]["event_id"] is None
    assert report["metadata"]["event_title"] == "All Events"
    assert report["metadata"]["view_mode"] == "lifetime"


@pytest.mark.asyncio
async def test_report_averages_are_rounded(db_session, company, fair, make_job, job_seeker):
    job = await make_job(company, fair)
    await make_job(company, fair, title="Designer")
    await make_job(company, fair, title="QA")
    await ApplicationService(db_session).create(job_seeker, job.id)

    report = await ReportService(db_session).generate()

    assert report["metrics"]["average_applications_per_job"] == 0.33


@pytest.mark.asyncio
async def test_report_empty_database(db_session):
    report = await ReportService(db_session).generate()

    assert report["metrics"]["average_applications_per_job"] == 0.0
    assert report["metrics"]["average_applications_per_company"] == 0.0
    assert report["top_companies"] == []


@pytest.mark.asyncio
async def test_report_unknown_event(db_session):
    with pytest.raises(NotFoundError):
        await ReportService(db_session).generate(404)


@pytest.mark.asyncio
async def test_education_demographics_scoped_to_event(db_session, fair, fair_activity):
    dashboard = DashboardService(db_session)

    scoped = await dashboard.education_demographics(fair.id)
    assert {row["level"]: row["count"] for row in scoped} == {"Bachelor": 2, "Unknown": 1}

    lifetime = await dashboard.education_demographics()
    assert {row["level"]: row["count"] for row in lifetime}["Diploma"] == 1


@pytest.mark.asyncio
async def test_report_education_skips_profiles_without_level(db_session, fair, fair_activity):
    report = await ReportService(db_session).generate(fair.id)
    assert report["education_stats"] == [{"level": "Bachelor", "count": 2}]

    lifetime = await ReportService(db_session).generate()
    levels = {row["level"]: row["count"] for row in lifetime["education_stats"]}
    assert levels == {"Bachelor": 2, "Diploma": 1}


@pytest.mark.asyncio
async def test_dashboard_overview_scoped_to_event(db_session, fair, fair_activity):
    overview = await DashboardService(db_session).overview(fair.id)

    assert {c.name for c in overview["companies"]} == {"Acme Corp", "Globex"}
    assert len(overview["jobs"]) == 3
    assert len(overview["applications"]) == 3
    assert {u.email for u in overview["users"]} == {
        "siti@example.com",
        "budi@example.com",
        "ani@example.com",
    }
    assert len(overview["job_seeker_profiles"]) == 3
    assert len(overview["events"]) == 2


@pytest.mark.asyncio
async def test_top_jobs_and_breakdown(db_session, fair, fair_activity):
    dashboard = DashboardService(db_session)

    top = await dashboard.top_jobs(fair.id)
    assert [(job["name"], job["count"]) for job in top] == [
        ("Backend Engineer", 2),
        ("Data Analyst", 1),
        ("Designer", 0),
    ]

    breakdown = await dashboard.status_breakdown(fair.id)
    assert sorted(breakdown, key=lambda item: item["name"]) == [
        {"name": "ACCEPTED", "value": 1},
        {"name": "PENDING", "value": 2},
    ]

    recent = await dashboard.recent_applications(fair.id, limit=2)
    assert len(recent) == 2


@pytest.mark.asyncio
async def test_jobseeker_export(db_session, fair, company, fair_activity):
    service = ReportService(db_session)

    rows = await service.jobseeker_rows(event_id=fair.id, company_id=company.id)
    assert {row["email"] for row in rows} == {"siti@example.com", "budi@example.com"}
    assert rows[0]["skills"] == "Python; SQL"

    text = service.jobseekers_csv(rows)
    parsed = list(csv.reader(io.StringIO(text, newline="")))
    assert parsed[0][:3] == ["user_id", "email", "full_name"]
    assert len(parsed) == 3


@pytest.mark.asyncio
async def test_user_and_company_exports(db_session, admin, fair, fair_activity):
    service = ReportService(db_session)

    users = await service.user_rows()
    assert admin.email not in {row["email"] for row in users}
    assert all(row["role"] == "JOB_SEEKER" for row in users)
    assert "No" in service.users_csv(users)

    companies = await service.company_rows()
    acme = next(row for row in companies if row["company_name"] == "Acme Corp")
    assert acme["total_events_joined"] == 1
    assert acme["events_joined"][0]["stand_number"] == "A-1"

    text = service.companies_csv(companies)
    assert "Career Expo (2026-03-01, stand A-1)" in text
