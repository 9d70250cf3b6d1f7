"""Job posting service."""

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobfair.exceptions import ForbiddenError, NotParticipatingError, ValidationFailedError
from jobfair.models.application import Application
from jobfair.models.company import Company, EventCompanyParticipation
from jobfair.models.job import Job
from jobfair.schemas.job import JobCreate, JobUpdate

logger = structlog.get_logger()

DEFAULT_STAND_NUMBER = "N/A"


def _company_info(company: Company) -> dict:
    return {
        "id": company.id,
        "name": company.name,
        "description": company.description,
        "website": company.website,
        "location": company.location,
        "logo_url": company.logo_url,
    }


class JobService:
    """Service for job-related operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, job_id: int) -> Job | None:
        """Get job by ID with its company and event."""
        result = await self.db.execute(
            select(Job)
            .options(selectinload(Job.company), selectinload(Job.event))
            .where(Job.id == job_id)
        )
        return result.scalar_one_or_none()

    async def application_counts(self, job_ids: list[int]) -> dict[int, int]:
        """Map job ID to its number of applications."""
        if not job_ids:
            return {}
        result = await self.db.execute(
            select(Application.job_id, func.count(Application.id))
            .where(Application.job_id.in_(job_ids))
            .group_by(Application.job_id)
        )
        return {job_id: count for job_id, count in result.all()}

    async def _stand_numbers(self, event_id: int) -> dict[int, str]:
        result = await self.db.execute(
            select(
                EventCompanyParticipation.company_id,
                EventCompanyParticipation.stand_number,
            ).where(EventCompanyParticipation.event_id == event_id)
        )
        return {company_id: stand for company_id, stand in result.all()}

    async def create(self, company: Company, data: JobCreate) -> Job:
        """Post a job for an event the company participates in."""
        result = await self.db.execute(
            select(EventCompanyParticipation.id).where(
                EventCompanyParticipation.event_id == data.event_id,
                EventCompanyParticipation.company_id == company.id,
            )
        )
        if result.scalar_one_or_none() is None:
            raise NotParticipatingError(
                "Your company must join this event before posting jobs"
            )

        job = Job(company_id=company.id, **data.model_dump())
        self.db.add(job)
        await self.db.flush()

        logger.info("job_created", job_id=job.id, company_id=company.id, event_id=job.event_id)
        return job

    def _check_owner(self, company: Company, job: Job) -> None:
        if job.company_id != company.id:
            raise ForbiddenError("You can only manage your own jobs")

    async def update(self, company: Company, job: Job, data: JobUpdate) -> Job:
        """Update provided fields of one of the company's jobs."""
        self._check_owner(company, job)

        update_data = data.model_dump(exclude_unset=True)
        salary_min = update_data.get("salary_min", job.salary_min)
        salary_max = update_data.get("salary_max", job.salary_max)
        if salary_min is not None and salary_max is not None and salary_min > salary_max:
            raise ValidationFailedError("salary_min cannot be greater than salary_max")

        for field, value in update_data.items():
            if value is None and field in ("title", "tags", "is_remote"):
                continue
            setattr(job, field, value)

        await self.db.flush()
        logger.info("job_updated", job_id=job.id, fields=sorted(update_data))
        return job

    async def delete(self, company: Company, job: Job) -> None:
        self._check_owner(company, job)
        await self.db.delete(job)
        await self.db.flush()
        logger.info("job_deleted", job_id=job.id, company_id=company.id)

    async def list_by_event(self, event_id: int) -> list[dict]:
        """Jobs of an event, newest first, with company booth and application count."""
        result = await self.db.execute(
            select(Job)
            .options(selectinload(Job.company))
            .where(Job.event_id == event_id)
            .order_by(Job.created_at.desc(), Job.id.desc())
        )
        jobs = list(result.scalars().all())
        counts = await self.application_counts([job.id for job in jobs])
        stands = await self._stand_numbers(event_id)

        return [
            {
                "id": job.id,
                "title": job.title,
                "description": job.description,
                "location": job.location,
                "tags": job.tags or [],
                "salary_min": job.salary_min,
                "salary_max": job.salary_max,
                "is_remote": job.is_remote,
                "application_count": counts.get(job.id, 0),
                "company": {
                    **_company_info(job.company),
                    "stand_number": stands.get(job.company_id) or DEFAULT_STAND_NUMBER,
                },
            }
            for job in jobs
        ]

    async def get_detail(self, job_id: int) -> dict | None:
        job = await self.get_by_id(job_id)
        if not job:
            return None

        counts = await self.application_counts([job.id])
        return {
            "id": job.id,
            "company_id": job.company_id,
            "event_id": job.event_id,
            "title": job.title,
            "description": job.description,
            "location": job.location,
            "tags": job.tags or [],
            "salary_min": job.salary_min,
            "salary_max": job.salary_max,
            "is_remote": job.is_remote,
            "created_at": job.created_at,
            "updated_at": job.updated_at,
            "application_count": counts.get(job.id, 0),
            "company": _company_info(job.company),
            "event": {
                "id": job.event.id,
                "title": job.event.title,
                "date": job.event.date,
                "location": job.event.location,
            },
        }

    async def list_by_event_grouped(self, event_id: int) -> list[dict]:
        """Participating companies, by name, each with its stand and jobs."""
        result = await self.db.execute(
            select(Company, EventCompanyParticipation.stand_number)
            .join(
                EventCompanyParticipation,
                EventCompanyParticipation.company_id == Company.id,
            )
            .where(EventCompanyParticipation.event_id == event_id)
            .order_by(Company.name.asc())
        )
        companies = result.all()

        result = await self.db.execute(
            select(Job).where(Job.event_id == event_id).order_by(Job.id)
        )
        jobs = list(result.scalars().all())
        counts = await self.application_counts([job.id for job in jobs])

        groups = []
        for company, stand_number in companies:
            company_jobs = [job for job in jobs if job.company_id == company.id]
            groups.append(
                {
                    "id": company.id,
                    "name": company.name,
                    "logo_url": company.logo_url,
                    "stand_number": stand_number or DEFAULT_STAND_NUMBER,
                    "job_count": len(company_jobs),
                    "jobs": [
                        {
                            "id": job.id,
                            "title": job.title,
                            "tags": job.tags or [],
                            "salary_min": job.salary_min,
                            "salary_max": job.salary_max,
                            "application_count": counts.get(job.id, 0),
                        }
                        for job in company_jobs
                    ],
                }
            )
        return groups
