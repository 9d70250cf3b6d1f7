"""Admin dashboard schemas."""

from datetime import datetime

from pydantic import BaseModel

from jobfair.models.application import ApplicationStatus
from jobfair.models.user import Role


class OverviewCompany(BaseModel):
    id: int
    name: str
    code: str
    created_at: datetime

    model_config = {"from_attributes": True}


class OverviewJob(BaseModel):
    id: int
    title: str
    company_id: int
    event_id: int
    salary_min: int | None
    salary_max: int | None
    created_at: datetime

    model_config = {"from_attributes": True}


class OverviewApplication(BaseModel):
    id: int
    status: ApplicationStatus
    created_at: datetime
    job_seeker_id: int
    job_id: int
    job_title: str
    event_id: int
    company_id: int
    company_name: str
    applicant_email: str


class OverviewUser(BaseModel):
    id: int
    email: str
    role: Role
    created_at: datetime

    model_config = {"from_attributes": True}


class OverviewProfile(BaseModel):
    id: int
    user_id: int
    full_name: str
    last_education_level: str | None

    model_config = {"from_attributes": True}


class OverviewEvent(BaseModel):
    id: int
    title: str
    date: datetime
    location: str | None

    model_config = {"from_attributes": True}


class OverviewStats(BaseModel):
    """Raw collections backing the admin dashboard widgets."""

    companies: list[OverviewCompany]
    jobs: list[OverviewJob]
    applications: list[OverviewApplication]
    users: list[OverviewUser]
    job_seeker_profiles: list[OverviewProfile]
    events: list[OverviewEvent]


class RecentApplication(BaseModel):
    id: int
    applicant_email: str
    job_title: str
    company_name: str
    status: ApplicationStatus
    created_at: datetime
    updated_at: datetime


class StatusCount(BaseModel):
    name: str
    value: int


class TopJob(BaseModel):
    job_id: int
    name: str
    count: int


class EducationCount(BaseModel):
    level: str
    count: int
