"""Admin reports and data exports."""

from datetime import datetime, timezone

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobfair.exceptions import NotFoundError
from jobfair.models.application import Application
from jobfair.models.company import Company, EventCompanyParticipation
from jobfair.models.event import Event
from jobfair.models.job import Job
from jobfair.models.user import Role, User
from jobfair.services.csv_export import to_csv
from jobfair.services.dashboard_service import DashboardService, scoped_applications

logger = structlog.get_logger()

ALL_EVENTS_TITLE = "All Events"
TOP_LIMIT = 10

JOBSEEKER_COLUMNS = (
    "user_id",
    "email",
    "full_name",
    "phone_numbers",
    "last_education_level",
    "bio",
    "resume_url",
    "skills",
)
USER_COLUMNS = ("user_id", "email", "role", "is_blocked", "created_at", "updated_at")
COMPANY_COLUMNS = (
    "company_id",
    "company_name",
    "company_code",
    "website",
    "location",
    "description",
    "logo_url",
    "events_joined",
    "total_events_joined",
    "created_at",
    "updated_at",
)


def _average(total: int, count: int) -> float:
    return round(total / count, 2) if count else 0.0


def _joined(values: list | None) -> str | None:
    return "; ".join(str(v) for v in values) if values else None


class ReportService:
    """Builds the admin report and its CSV exports."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.dashboard = DashboardService(db)

    async def _count(self, query) -> int:
        result = await self.db.execute(select(func.count()).select_from(query.subquery()))
        return result.scalar_one()

    async def generate(self, event_id: int | None = None) -> dict:
        """Totals, breakdowns and top lists, lifetime or for one event."""
        event = None
        if event_id is not None:
            event = await self.db.get(Event, event_id)
            if not event:
                raise NotFoundError("Event not found")

        applications = scoped_applications(event_id)
        total_applications = await self._count(applications)
        unique_applicants = await self._count(
            applications.with_only_columns(Application.job_seeker_id).distinct()
        )

        companies = select(Company.id)
        jobs = select(Job.id, Job.is_remote)
        if event_id is not None:
            companies = companies.join(
                EventCompanyParticipation,
                EventCompanyParticipation.company_id == Company.id,
            ).where(EventCompanyParticipation.event_id == event_id)
            jobs = jobs.where(Job.event_id == event_id)

        total_companies = await self._count(companies)
        job_rows = (await self.db.execute(jobs)).all()
        total_jobs = len(job_rows)

        job_type_distribution: dict[str, int] = {}
        for _, is_remote in job_rows:
            kind = "Remote" if is_remote else "Onsite"
            job_type_distribution[kind] = job_type_distribution.get(kind, 0) + 1

        logger.info("report_generated", event_id=event_id, applications=total_applications)

        return {
            "metrics": {
                "total_applications": total_applications,
                "unique_applicants": unique_applicants,
                "total_companies": total_companies,
                "total_jobs": total_jobs,
                "average_applications_per_job": _average(total_applications, total_jobs),
                "average_applications_per_company": _average(
                    total_applications, total_companies
                ),
            },
            "status_stats": await self.dashboard.status_counts(event_id),
            "education_stats": await self.dashboard.education_demographics(
                event_id, known_only=True
            ),
            "job_type_distribution": job_type_distribution,
            "top_companies": await self._top_companies(event_id),
            "top_jobs": await self._top_jobs(event_id),
            "metadata": {
                "generated_at": datetime.now(timezone.utc),
                "event_id": event_id,
                "event_title": event.title if event else ALL_EVENTS_TITLE,
                "view_mode": "event" if event_id is not None else "lifetime",
            },
        }

    async def _top_companies(self, event_id: int | None) -> list[dict]:
        count = func.count(Application.id).label("count")
        query = (
            select(Company.name, count)
            .join(Job, Job.company_id == Company.id)
            .join(Application, Application.job_id == Job.id)
            .group_by(Company.id, Company.name)
            .order_by(count.desc(), Company.name.asc())
            .limit(TOP_LIMIT)
        )
        if event_id is not None:
            query = query.where(Job.event_id == event_id)
        result = await self.db.execute(query)
        return [{"name": name, "count": n} for name, n in result.all()]

    async def _top_jobs(self, event_id: int | None) -> list[dict]:
        count = func.count(Application.id).label("count")
        query = (
            select(Job.title, Company.name, count)
            .join(Company, Job.company_id == Company.id)
            .outerjoin(Application, Application.job_id == Job.id)
            .group_by(Job.id, Job.title, Company.name)
            .order_by(count.desc(), Job.id.asc())
            .limit(TOP_LIMIT)
        )
        if event_id is not None:
            query = query.where(Job.event_id == event_id)
        result = await self.db.execute(query)
        return [
            {"title": title, "company": company, "application_count": n}
            for title, company, n in result.all()
        ]

    # Exports

    async def jobseeker_rows(
        self, event_id: int | None = None, company_id: int | None = None
    ) -> list[dict]:
        """One row per application with the applicant's account and profile."""
        query = (
            select(Application)
            .join(Job, Application.job_id == Job.id)
            .options(selectinload(Application.job_seeker).selectinload(User.job_seeker_profile))
            .order_by(Application.created_at.desc(), Application.id.desc())
        )
        if event_id is not None:
            query = query.where(Job.event_id == event_id)
        if company_id is not None:
            query = query.where(Job.company_id == company_id)

        rows = []
        for application in (await self.db.execute(query)).scalars().all():
            seeker = application.job_seeker
            profile = seeker.job_seeker_profile
            rows.append(
                {
                    "user_id": seeker.id,
                    "email": seeker.email,
                    "full_name": profile.full_name if profile else None,
                    "phone_numbers": _joined(profile.phone_numbers) if profile else None,
                    "last_education_level": profile.last_education_level if profile else None,
                    "bio": profile.bio if profile else None,
                    "resume_url": profile.resume_url if profile else None,
                    "skills": _joined(profile.skills) if profile else None,
                }
            )
        return rows

    async def user_rows(self) -> list[dict]:
        """Job seeker and company admin accounts, newest first."""
        result = await self.db.execute(
            select(User)
            .where(User.role.in_([Role.JOB_SEEKER, Role.ADMIN_COMPANY]))
            .order_by(User.created_at.desc(), User.id.desc())
        )
        return [
            {
                "user_id": user.id,
                "email": user.email,
                "role": user.role.value,
                "is_blocked": user.is_blocked,
                "created_at": user.created_at,
                "updated_at": user.updated_at,
            }
            for user in result.scalars().all()
        ]

    async def company_rows(self) -> list[dict]:
        """Companies by name with the events they joined."""
        result = await self.db.execute(
            select(Company)
            .options(
                selectinload(Company.participations).selectinload(
                    EventCompanyParticipation.event
                )
            )
            .order_by(Company.name.asc())
        )
        rows = []
        for company in result.scalars().all():
            events_joined = [
                {
                    "event_id": p.event.id,
                    "event_title": p.event.title,
                    "event_date": p.event.date,
                    "stand_number": p.stand_number,
                }
                for p in company.participations
            ]
            rows.append(
                {
                    "company_id": company.id,
                    "company_name": company.name,
                    "company_code": company.code,
                    "website": company.website,
                    "location": company.location,
                    "description": company.description,
                    "logo_url": company.logo_url,
                    "events_joined": events_joined,
                    "total_events_joined": len(events_joined),
                    "created_at": company.created_at,
                    "updated_at": company.updated_at,
                }
            )
        return rows

    @staticmethod
    def jobseekers_csv(rows: list[dict]) -> str:
        return to_csv(rows, JOBSEEKER_COLUMNS)

    @staticmethod
    def users_csv(rows: list[dict]) -> str:
        return to_csv(rows, USER_COLUMNS)

    @staticmethod
    def companies_csv(rows: list[dict]) -> str:
        flattened = [
            {
                **row,
                "events_joined": [
                    f"{e['event_title']} ({e['event_date']:%Y-%m-%d}, stand {e['stand_number']})"
                    for e in row["events_joined"]
                ],
            }
            for row in rows
        ]
        return to_csv(flattened, COMPANY_COLUMNS)
