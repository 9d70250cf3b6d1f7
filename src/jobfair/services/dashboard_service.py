"""Admin dashboard statistics."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobfair.models.application import Application
from jobfair.models.company import Company, EventCompanyParticipation
from jobfair.models.event import Event
from jobfair.models.job import Job
from jobfair.models.user import JobSeekerProfile, User

OVERVIEW_APPLICATION_LIMIT = 100
UNKNOWN_EDUCATION = "Unknown"


def applicant_ids(event_id: int):
    """Subquery of job seekers who applied to any job of an event."""
    return (
        select(Application.job_seeker_id)
        .join(Job, Application.job_id == Job.id)
        .where(Job.event_id == event_id)
        .distinct()
    )


def scoped_applications(event_id: int | None):
    """Applications, optionally limited to jobs of one event."""
    query = select(Application)
    if event_id is not None:
        query = query.join(Job, Application.job_id == Job.id).where(Job.event_id == event_id)
    return query


class DashboardService:
    """Aggregates for the admin dashboard, lifetime or scoped to one event."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _applications(self, event_id: int | None, limit: int | None) -> list[Application]:
        query = (
            scoped_applications(event_id)
            .options(
                selectinload(Application.job).selectinload(Job.company),
                selectinload(Application.job_seeker),
            )
            .order_by(Application.created_at.desc(), Application.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def overview(self, event_id: int | None = None) -> dict:
        """Collections backing the dashboard widgets.

        With an event, companies are those participating, jobs and
        applications belong to that event, and users and profiles are
        limited to the event's applicants.
        """
        companies_query = select(Company).order_by(Company.created_at.desc())
        jobs_query = select(Job).order_by(Job.created_at.desc())
        users_query = select(User).order_by(User.created_at.desc())
        profiles_query = select(JobSeekerProfile)
        if event_id is not None:
            companies_query = companies_query.where(
                Company.id.in_(
                    select(EventCompanyParticipation.company_id).where(
                        EventCompanyParticipation.event_id == event_id
                    )
                )
            )
            jobs_query = jobs_query.where(Job.event_id == event_id)
            users_query = users_query.where(User.id.in_(applicant_ids(event_id)))
            profiles_query = profiles_query.where(
                JobSeekerProfile.user_id.in_(applicant_ids(event_id))
            )

        companies = (await self.db.execute(companies_query)).scalars().all()
        jobs = (await self.db.execute(jobs_query)).scalars().all()
        users = (await self.db.execute(users_query)).scalars().all()
        profiles = (await self.db.execute(profiles_query)).scalars().all()
        events = (await self.db.execute(select(Event).order_by(Event.date.desc()))).scalars().all()
        applications = await self._applications(event_id, OVERVIEW_APPLICATION_LIMIT)

        return {
            "companies": list(companies),
            "jobs": list(jobs),
            "applications": [
                {
                    "id": app.id,
                    "status": app.status,
                    "created_at": app.created_at,
                    "job_seeker_id": app.job_seeker_id,
                    "job_id": app.job_id,
                    "job_title": app.job.title,
                    "event_id": app.job.event_id,
                    "company_id": app.job.company.id,
                    "company_name": app.job.company.name,
                    "applicant_email": app.job_seeker.email,
                }
                for app in applications
            ],
            "users": list(users),
            "job_seeker_profiles": list(profiles),
            "events": list(events),
        }

    async def recent_applications(self, event_id: int | None = None, limit: int = 10) -> list[dict]:
        applications = await self._applications(event_id, limit)
        return [
            {
                "id": app.id,
                "applicant_email": app.job_seeker.email,
                "job_title": app.job.title,
                "company_name": app.job.company.name,
                "status": app.status,
                "created_at": app.created_at,
                "updated_at": app.updated_at,
            }
            for app in applications
        ]

    async def status_counts(self, event_id: int | None = None) -> dict[str, int]:
        """Map application status to its count."""
        subquery = scoped_applications(event_id).subquery()
        result = await self.db.execute(
            select(subquery.c.status, func.count(subquery.c.id)).group_by(subquery.c.status)
        )
        return {_status_value(status): count for status, count in result.all()}

    async def status_breakdown(self, event_id: int | None = None) -> list[dict]:
        counts = await self.status_counts(event_id)
        return [{"name": name, "value": value} for name, value in counts.items()]

    async def top_jobs(self, event_id: int | None = None, limit: int = 10) -> list[dict]:
        """Jobs ordered by number of applications."""
        count = func.count(Application.id).label("count")
        query = (
            select(Job.id, Job.title, count)
            .outerjoin(Application, Application.job_id == Job.id)
            .group_by(Job.id, Job.title)
            .order_by(count.desc(), Job.id.asc())
            .limit(limit)
        )
        if event_id is not None:
            query = query.where(Job.event_id == event_id)

        result = await self.db.execute(query)
        return [{"job_id": job_id, "name": title, "count": n} for job_id, title, n in result.all()]

    async def education_demographics(
        self, event_id: int | None = None, known_only: bool = False
    ) -> list[dict]:
        """Profiles grouped by last education level.

        Profiles without a level count as "Unknown" unless ``known_only``.
        """
        query = (
            select(JobSeekerProfile.last_education_level, func.count(JobSeekerProfile.id))
            .group_by(JobSeekerProfile.last_education_level)
            .order_by(func.count(JobSeekerProfile.id).desc())
        )
        if event_id is not None:
            query = query.where(JobSeekerProfile.user_id.in_(applicant_ids(event_id)))
        if known_only:
            query = query.where(JobSeekerProfile.last_education_level.is_not(None))

        result = await self.db.execute(query)
        return [
            {"level": level or UNKNOWN_EDUCATION, "count": count}
            for level, count in result.all()
        ]


def _status_value(status) -> str:
    return getattr(status, "value", status)
