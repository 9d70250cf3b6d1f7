"""Pydantic schemas for API validation."""

from jobfair.schemas.auth import (
    SignInRequest,
    SignInResponse,
    SessionResponse,
    SessionUser,
    CurrentUserResponse,
)
from jobfair.schemas.user import (
    JobSeekerAccountCreate,
    CompanyAccountCreate,
    UserResponse,
    UserWithProfileResponse,
)
from jobfair.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyResponse,
    CompanyWithCounts,
    CompanyWithStats,
    CompanyDetails,
    ApplicationStatusUpdate,
)
from jobfair.schemas.event import (
    EventCreate,
    EventUpdate,
    EventResponse,
    EventWithCounts,
    EventWithStats,
    EventDetails,
    JoinEventRequest,
)
from jobfair.schemas.job import JobCreate, JobUpdate, JobResponse
from jobfair.schemas.application import ApplicationCreate, ApplicationResponse
from jobfair.schemas.profile import JobSeekerProfileUpdate, JobSeekerProfileResponse
from jobfair.schemas.file import FileUploadResponse

__all__ = [
    "SignInRequest",
    "SignInResponse",
    "SessionResponse",
    "SessionUser",
    "CurrentUserResponse",
    "JobSeekerAccountCreate",
    "CompanyAccountCreate",
    "UserResponse",
    "UserWithProfileResponse",
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyResponse",
    "CompanyWithCounts",
    "CompanyWithStats",
    "CompanyDetails",
    "ApplicationStatusUpdate",
    "EventCreate",
    "EventUpdate",
    "EventResponse",
    "EventWithCounts",
    "EventWithStats",
    "EventDetails",
    "JoinEventRequest",
    "JobCreate",
    "JobUpdate",
    "JobResponse",
    "ApplicationCreate",
    "ApplicationResponse",
    "JobSeekerProfileUpdate",
    "JobSeekerProfileResponse",
    "FileUploadResponse",
]
