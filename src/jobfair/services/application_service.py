"""Job application service."""

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobfair.config import get_settings
from jobfair.exceptions import (
    ApplicationLimitExceededError,
    DuplicateApplicationError,
    NotFoundError,
)
from jobfair.models.application import (
    Application,
    ApplicationProcessHistory,
    ApplicationStatus,
)
from jobfair.models.job import Job
from jobfair.models.user import User

logger = structlog.get_logger()


class ApplicationService:
    """Service for job seekers applying to jobs."""

    def __init__(self, db: AsyncSession, max_per_event: int | None = None):
        self.db = db
        self.max_per_event = max_per_event or get_settings().max_applications_per_event

    async def get_for_job(self, user: User, job_id: int) -> Application | None:
        result = await self.db.execute(
            select(Application).where(
                Application.job_seeker_id == user.id,
                Application.job_id == job_id,
            )
        )
        return result.scalar_one_or_none()

    async def count_by_event(self, user: User, event_id: int) -> int:
        """Count a job seeker's applications to jobs of one event."""
        result = await self.db.execute(
            select(func.count(Application.id))
            .join(Job, Application.job_id == Job.id)
            .where(
                Application.job_seeker_id == user.id,
                Job.event_id == event_id,
            )
        )
        return result.scalar_one()

    async def create(self, user: User, job_id: int) -> Application:
        """Apply to a job.

        A job seeker applies to a job once and to at most
        ``max_per_event`` jobs within the same event. The first history
        entry is written alongside the application.
        """
        if await self.get_for_job(user, job_id):
            raise DuplicateApplicationError()

        job = await self.db.get(Job, job_id)
        if not job:
            raise NotFoundError("Job not found")

        count = await self.count_by_event(user, job.event_id)
        if count >= self.max_per_event:
            logger.info(
                "application_limit_reached",
                user_id=user.id,
                event_id=job.event_id,
                count=count,
            )
            raise ApplicationLimitExceededError(self.max_per_event)

        user_id = user.id
        application = Application(
            job_seeker_id=user_id,
            job_id=job.id,
            status=ApplicationStatus.PENDING,
        )
        try:
            async with self.db.begin_nested():
                self.db.add(application)
                await self.db.flush()
                self.db.add(
                    ApplicationProcessHistory(
                        application_id=application.id,
                        status=ApplicationStatus.PENDING,
                    )
                )
        except IntegrityError:
            logger.info("duplicate_application", user_id=user_id, job_id=job_id)
            raise DuplicateApplicationError()

        logger.info(
            "application_created",
            application_id=application.id,
            user_id=user.id,
            job_id=job.id,
        )
        return application

    async def list_by_event(self, user: User, event_id: int) -> list[Application]:
        """A job seeker's applications within one event, with job and company."""
        result = await self.db.execute(
            select(Application)
            .join(Job, Application.job_id == Job.id)
            .options(
                selectinload(Application.job).selectinload(Job.company),
                selectinload(Application.job).selectinload(Job.event),
            )
            .where(
                Application.job_seeker_id == user.id,
                Job.event_id == event_id,
            )
            .order_by(Application.created_at.desc(), Application.id.desc())
        )
        return list(result.scalars().all())

    async def remaining_for_event(self, user: User, event_id: int) -> tuple[int, int]:
        """Return (count, remaining) for the job seeker in an event."""
        count = await self.count_by_event(user, event_id)
        return count, max(self.max_per_event - count, 0)
