"""Report and export schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from jobfair.schemas.dashboard import EducationCount


class ReportMetrics(BaseModel):
    total_applications: int
    unique_applicants: int
    total_companies: int
    total_jobs: int
    average_applications_per_job: float
    average_applications_per_company: float


class TopCompany(BaseModel):
    name: str
    count: int


class ReportTopJob(BaseModel):
    title: str
    company: str
    application_count: int


class ReportMetadata(BaseModel):
    generated_at: datetime
    event_id: int | None
    event_title: str
    view_mode: Literal["event", "lifetime"]


class Report(BaseModel):
    """Aggregated fair statistics for one event or for all time."""

    metrics: ReportMetrics
    status_stats: dict[str, int]
    education_stats: list[EducationCount]
    job_type_distribution: dict[str, int]
    top_companies: list[TopCompany]
    top_jobs: list[ReportTopJob]
    metadata: ReportMetadata


class JobseekerExportRow(BaseModel):
    user_id: int
    email: str
    full_name: str | None = None
    phone_numbers: str | None = None
    last_education_level: str | None = None
    bio: str | None = None
    resume_url: str | None = None
    skills: str | None = None


class UserExportRow(BaseModel):
    user_id: int
    email: str
    role: str
    is_blocked: bool
    created_at: datetime
    updated_at: datetime


class JoinedEvent(BaseModel):
    event_id: int
    event_title: str
    event_date: datetime
    stand_number: str


class CompanyExportRow(BaseModel):
    company_id: int
    company_name: str
    company_code: str
    website: str | None = None
    location: str | None = None
    description: str | None = None
    logo_url: str | None = None
    events_joined: list[JoinedEvent] = []
    total_events_joined: int = 0
    created_at: datetime
    updated_at: datetime
