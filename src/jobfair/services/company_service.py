"""Company management service."""

import secrets
import string

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobfair.exceptions import ConflictError, ForbiddenError, NotFoundError
from jobfair.models.application import (
    Application,
    ApplicationProcessHistory,
    ApplicationStatus,
)
from jobfair.models.company import Company, EventCompanyParticipation
from jobfair.models.job import Job
from jobfair.models.user import AdminCompanyProfile, User
from jobfair.schemas.company import (
    ApplicationStatusUpdate,
    CompanyCreate,
    CompanyResponse,
    CompanyUpdate,
)

logger = structlog.get_logger()

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 6


def generate_company_code() -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def _participation_count():
    return (
        select(func.count(EventCompanyParticipation.id))
        .where(EventCompanyParticipation.company_id == Company.id)
        .scalar_subquery()
    )


def _job_count():
    return select(func.count(Job.id)).where(Job.company_id == Company.id).scalar_subquery()


def _application_count():
    return (
        select(func.count(Application.id))
        .join(Job, Application.job_id == Job.id)
        .where(Job.company_id == Company.id)
        .scalar_subquery()
    )


class CompanyService:
    """Service for company-related operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, company_id: int) -> Company | None:
        """Get company by ID."""
        result = await self.db.execute(select(Company).where(Company.id == company_id))
        return result.scalar_one_or_none()

    async def get_by_code(self, code: str) -> Company | None:
        result = await self.db.execute(select(Company).where(Company.code == code.upper()))
        return result.scalar_one_or_none()

    async def list_with_counts(self, with_applications: bool = False) -> list[dict]:
        """List companies, newest first, with participation and job counts."""
        columns = [
            Company,
            _participation_count().label("participation_count"),
            _job_count().label("job_count"),
        ]
        if with_applications:
            columns.append(_application_count().label("application_count"))

        result = await self.db.execute(
            select(*columns).order_by(Company.created_at.desc(), Company.id.desc())
        )

        companies = []
        for row in result.all():
            data = CompanyResponse.model_validate(row.Company).model_dump()
            data["participation_count"] = row.participation_count
            data["job_count"] = row.job_count
            if with_applications:
                data["application_count"] = row.application_count
            companies.append(data)
        return companies

    async def list_for_picker(self) -> list[Company]:
        result = await self.db.execute(select(Company).order_by(Company.name.asc()))
        return list(result.scalars().all())

    async def get_details(self, company_id: int) -> dict | None:
        """Get a company with its events, stand numbers and per-event jobs."""
        result = await self.db.execute(
            select(Company)
            .options(
                selectinload(Company.participations).selectinload(
                    EventCompanyParticipation.event
                ),
                selectinload(Company.jobs),
            )
            .where(Company.id == company_id)
        )
        company = result.scalar_one_or_none()
        if not company:
            return None

        counts = await self._application_counts_by_job([job.id for job in company.jobs])

        participating_events = []
        for participation in company.participations:
            event = participation.event
            participating_events.append(
                {
                    "id": event.id,
                    "title": event.title,
                    "stand_number": participation.stand_number,
                    "date": event.date,
                    "jobs": [
                        {"id": job.id, "title": job.title, "applicants": counts.get(job.id, 0)}
                        for job in company.jobs
                        if job.event_id == event.id
                    ],
                }
            )

        data = CompanyResponse.model_validate(company).model_dump()
        data.update(
            participation_count=len(company.participations),
            job_count=len(company.jobs),
            application_count=sum(counts.values()),
            participating_events=participating_events,
        )
        return data

    async def _application_counts_by_job(self, job_ids: list[int]) -> dict[int, int]:
        if not job_ids:
            return {}
        result = await self.db.execute(
            select(Application.job_id, func.count(Application.id))
            .where(Application.job_id.in_(job_ids))
            .group_by(Application.job_id)
        )
        return {job_id: count for job_id, count in result.all()}

    async def _ensure_code_available(self, code: str, exclude_id: int | None = None) -> None:
        existing = await self.get_by_code(code)
        if existing and existing.id != exclude_id:
            raise ConflictError(f"Company code {code} is already in use")

    async def create(self, data: CompanyCreate) -> Company:
        """Create a new company."""
        await self._ensure_code_available(data.code)

        company = Company(**data.model_dump())
        self.db.add(company)
        await self.db.flush()

        logger.info("company_created", company_id=company.id, code=company.code)
        return company

    async def update(self, company: Company, data: CompanyUpdate) -> Company:
        """Update provided fields of a company."""
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("code"):
            await self._ensure_code_available(update_data["code"], exclude_id=company.id)

        for field, value in update_data.items():
            if value is None and field in ("name", "code"):
                continue
            setattr(company, field, value)

        await self.db.flush()
        logger.info("company_updated", company_id=company.id, fields=sorted(update_data))
        return company

    async def delete(self, company: Company) -> None:
        await self.db.delete(company)
        await self.db.flush()
        logger.info("company_deleted", company_id=company.id)

    async def regenerate_code(self, company: Company) -> Company:
        """Assign a fresh random sign-up code."""
        while True:
            code = generate_company_code()
            if code != company.code and not await self.get_by_code(code):
                break

        company.code = code
        await self.db.flush()
        logger.info("company_code_regenerated", company_id=company.id)
        return company

    # Company admin operations

    async def get_for_admin(self, user: User) -> Company:
        """Get the company managed by a company-admin account."""
        result = await self.db.execute(
            select(Company)
            .join(AdminCompanyProfile, AdminCompanyProfile.company_id == Company.id)
            .where(AdminCompanyProfile.user_id == user.id)
        )
        company = result.scalar_one_or_none()
        if not company:
            raise NotFoundError("Company profile not found for this account")
        return company

    async def profile_status(self, user: User) -> dict:
        """A company profile is complete when name, description and location are filled."""
        result = await self.db.execute(
            select(Company)
            .join(AdminCompanyProfile, AdminCompanyProfile.company_id == Company.id)
            .where(AdminCompanyProfile.user_id == user.id)
        )
        company = result.scalar_one_or_none()
        if not company:
            return {"is_complete": False, "has_profile": False}

        required = (company.name, company.description, company.location)
        return {
            "is_complete": all(value and value.strip() for value in required),
            "has_profile": True,
        }

    async def get_dashboard(self, user: User) -> dict:
        """Company admin's events, jobs with application counts and status totals."""
        company = await self.get_for_admin(user)

        result = await self.db.execute(
            select(EventCompanyParticipation)
            .options(selectinload(EventCompanyParticipation.event))
            .where(EventCompanyParticipation.company_id == company.id)
        )
        participations = list(result.scalars().all())

        result = await self.db.execute(
            select(Job)
            .options(selectinload(Job.event))
            .where(Job.company_id == company.id)
            .order_by(Job.created_at.desc(), Job.id.desc())
        )
        jobs = list(result.scalars().all())
        counts = await self._application_counts_by_job([job.id for job in jobs])

        result = await self.db.execute(
            select(Application.status, func.count(Application.id))
            .join(Job, Application.job_id == Job.id)
            .where(Job.company_id == company.id)
            .group_by(Application.status)
        )
        status_counts = {status.value: 0 for status in ApplicationStatus}
        for status, count in result.all():
            status_counts[ApplicationStatus(status).value] = count

        events = sorted(
            (
                {
                    "id": p.event.id,
                    "title": p.event.title,
                    "date": p.event.date,
                    "location": p.event.location,
                    "stand_number": p.stand_number,
                    "job_count": sum(1 for job in jobs if job.event_id == p.event_id),
                }
                for p in participations
            ),
            key=lambda item: item["date"],
            reverse=True,
        )

        return {
            "company": CompanyResponse.model_validate(company),
            "events": events,
            "jobs": [
                {
                    "id": job.id,
                    "title": job.title,
                    "event_id": job.event_id,
                    "event_title": job.event.title,
                    "is_remote": job.is_remote,
                    "salary_min": job.salary_min,
                    "salary_max": job.salary_max,
                    "application_count": counts.get(job.id, 0),
                    "created_at": job.created_at,
                }
                for job in jobs
            ],
            "total_applications": sum(counts.values()),
            "status_counts": status_counts,
        }

    async def get_job_applications(self, user: User, job_id: int) -> dict:
        """Applications to one of the admin's own jobs, with applicant profiles."""
        company = await self.get_for_admin(user)

        job = await self.db.get(Job, job_id)
        if not job:
            raise NotFoundError("Job not found")
        if job.company_id != company.id:
            raise ForbiddenError("You can only view applications for your own jobs")

        result = await self.db.execute(
            select(Application)
            .options(selectinload(Application.job_seeker).selectinload(User.job_seeker_profile))
            .where(Application.job_id == job.id)
            .order_by(Application.created_at.desc(), Application.id.desc())
        )

        applications = []
        for application in result.scalars().all():
            seeker = application.job_seeker
            profile = seeker.job_seeker_profile
            applications.append(
                {
                    "id": application.id,
                    "status": application.status,
                    "created_at": application.created_at,
                    "job_seeker_id": seeker.id,
                    "email": seeker.email,
                    "profile": (
                        {
                            "full_name": profile.full_name,
                            "phone_numbers": profile.phone_numbers or [],
                            "last_education_level": profile.last_education_level,
                            "institution_name": profile.institution_name,
                            "resume_url": profile.resume_url,
                            "skills": profile.skills or [],
                        }
                        if profile
                        else None
                    ),
                }
            )

        return {"job_id": job.id, "title": job.title, "applications": applications}

    async def update_application_status(
        self, user: User, data: ApplicationStatusUpdate
    ) -> Application:
        """Change an application's status and append it to the history log."""
        company = await self.get_for_admin(user)

        result = await self.db.execute(
            select(Application)
            .options(selectinload(Application.job))
            .where(Application.id == data.application_id)
        )
        application = result.scalar_one_or_none()
        if not application:
            raise NotFoundError("Application not found")
        if application.job.company_id != company.id:
            raise ForbiddenError("You can only review applications for your own jobs")

        previous = application.status
        application.status = data.status
        self.db.add(
            ApplicationProcessHistory(
                application_id=application.id,
                status=data.status,
                notes=data.notes,
            )
        )
        await self.db.flush()

        logger.info(
            "application_status_updated",
            application_id=application.id,
            previous=previous.value,
            status=data.status.value,
        )
        return application
