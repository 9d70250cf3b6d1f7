"""Database models."""

from jobfair.models.base import Base
from jobfair.models.user import AdminCompanyProfile, JobSeekerProfile, Role, User
from jobfair.models.company import Company, EventCompanyParticipation
from jobfair.models.event import Event
from jobfair.models.job import Job
from jobfair.models.application import (
    Application,
    ApplicationProcessHistory,
    ApplicationStatus,
)
from jobfair.models.stored_file import StoredFile

__all__ = [
    "Base",
    "User",
    "Role",
    "JobSeekerProfile",
    "AdminCompanyProfile",
    "Company",
    "EventCompanyParticipation",
    "Event",
    "Job",
    "Application",
    "ApplicationProcessHistory",
    "ApplicationStatus",
    "StoredFile",
]
