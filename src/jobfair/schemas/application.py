"""Application-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from jobfair.models.application import ApplicationStatus


class ApplicationCreate(BaseModel):
    """Schema for applying to a job. The applicant comes from the session."""

    job_id: int = Field(..., ge=1)


class ApplicationResponse(BaseModel):
    """Schema for application response."""

    id: int
    job_id: int
    job_seeker_id: int
    status: ApplicationStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ApplicationHistoryEntry(BaseModel):
    id: int
    status: ApplicationStatus
    notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ApplicationJobSummary(BaseModel):
    id: int
    title: str
    company_name: str
    event_id: int
    event_title: str | None = None


class ApplicationWithJob(ApplicationResponse):
    job: ApplicationJobSummary


class MyApplicationResponse(ApplicationWithJob):
    """Job seeker's application with its status history."""

    history: list[ApplicationHistoryEntry] = []


class ApplicationCheckResponse(BaseModel):
    has_applied: bool
    application: ApplicationResponse | None = None


class ApplicationCountResponse(BaseModel):
    count: int
    remaining: int
