"""Company-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from jobfair.models.application import ApplicationStatus


class CompanyCreate(BaseModel):
    """Schema for creating a company."""

    name: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=6, max_length=6)
    description: str = Field(..., min_length=1)
    website: str | None = Field(None, max_length=500)
    location: str = Field(..., min_length=1, max_length=255)
    logo_url: str | None = Field(None, max_length=1000)

    @field_validator("code")
    @classmethod
    def uppercase_code(cls, value: str) -> str:
        return value.upper()


class CompanyUpdate(BaseModel):
    """Schema for updating a company. Only provided fields change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    code: str | None = Field(None, min_length=6, max_length=6)
    description: str | None = None
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    logo_url: str | None = Field(None, max_length=1000)

    @field_validator("code")
    @classmethod
    def uppercase_code(cls, value: str | None) -> str | None:
        return value.upper() if value else value


class CompanyResponse(BaseModel):
    """Schema for company response."""

    id: int
    name: str
    code: str
    description: str | None
    website: str | None
    location: str | None
    logo_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CompanyWithCounts(CompanyResponse):
    participation_count: int = 0
    job_count: int = 0


class CompanyWithStats(CompanyWithCounts):
    application_count: int = 0


class CompanyEventJob(BaseModel):
    id: int
    title: str
    applicants: int


class ParticipatingEvent(BaseModel):
    id: int
    title: str
    stand_number: str
    date: datetime
    jobs: list[CompanyEventJob] = []


class CompanyDetails(CompanyWithStats):
    """Company with the events it joined and its jobs per event."""

    participating_events: list[ParticipatingEvent] = []


class CompanyPickerItem(BaseModel):
    id: int
    name: str
    code: str

    model_config = {"from_attributes": True}


class CompanyProfileStatus(BaseModel):
    is_complete: bool
    has_profile: bool


class DashboardJob(BaseModel):
    id: int
    title: str
    event_id: int
    event_title: str
    is_remote: bool
    salary_min: int | None
    salary_max: int | None
    application_count: int
    created_at: datetime


class DashboardEvent(BaseModel):
    id: int
    title: str
    date: datetime
    location: str | None
    stand_number: str
    job_count: int


class CompanyDashboard(BaseModel):
    """Company admin's overview of its events, jobs and applications."""

    company: CompanyResponse
    events: list[DashboardEvent]
    jobs: list[DashboardJob]
    total_applications: int
    status_counts: dict[str, int]


class ApplicantProfile(BaseModel):
    full_name: str | None = None
    phone_numbers: list[str] = []
    last_education_level: str | None = None
    institution_name: str | None = None
    resume_url: str | None = None
    skills: list[str] = []


class JobApplicant(BaseModel):
    id: int
    status: ApplicationStatus
    created_at: datetime
    job_seeker_id: int
    email: str
    profile: ApplicantProfile | None = None


class JobApplicationsResponse(BaseModel):
    job_id: int
    title: str
    applications: list[JobApplicant]


class ApplicationStatusUpdate(BaseModel):
    """Reviewer decision on an application."""

    application_id: int = Field(..., ge=1)
    status: ApplicationStatus
    notes: str | None = None
