"""Job seeker profile service."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from jobfair.models.user import JobSeekerProfile, User
from jobfair.schemas.profile import JobSeekerProfileUpdate

logger = structlog.get_logger()

_URL_FIELDS = ("resume_url", "portfolio_url")


class ProfileService:
    """Service for job seeker profiles."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def upsert(self, user: User, data: JobSeekerProfileUpdate) -> JobSeekerProfile:
        """Create or replace the user's profile.

        ``user`` must have ``job_seeker_profile`` loaded.
        """
        values = data.model_dump()
        for field in _URL_FIELDS:
            if values.get(field) == "":
                values[field] = None

        profile = user.job_seeker_profile
        if profile is None:
            profile = JobSeekerProfile(user_id=user.id, **values)
            self.db.add(profile)
            user.job_seeker_profile = profile
            created = True
        else:
            for field, value in values.items():
                setattr(profile, field, value)
            created = False

        await self.db.flush()
        logger.info("profile_saved", user_id=user.id, created=created)
        return profile

    @staticmethod
    def status(user: User) -> dict:
        """Completeness of a user's profile; ``job_seeker_profile`` must be loaded."""
        profile = user.job_seeker_profile
        return {
            "is_complete": bool(profile and profile.is_complete),
            "has_profile": profile is not None,
        }
