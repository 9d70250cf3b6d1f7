"""Job-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class _SalaryRange(BaseModel):
    salary_min: int | None = Field(None, ge=0)
    salary_max: int | None = Field(None, ge=0)

    @model_validator(mode="after")
    def check_salary_range(self):
        if (
            self.salary_min is not None
            and self.salary_max is not None
            and self.salary_min > self.salary_max
        ):
            raise ValueError("salary_min cannot be greater than salary_max")
        return self


class JobCreate(_SalaryRange):
    """Schema for posting a job to an event."""

    event_id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    location: str | None = Field(None, max_length=255)
    tags: list[str] = Field(default_factory=list)
    is_remote: bool = False


class JobUpdate(_SalaryRange):
    """Schema for updating a job. Only provided fields change."""

    title: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = None
    location: str | None = Field(None, max_length=255)
    tags: list[str] | None = None
    is_remote: bool | None = None


class JobResponse(BaseModel):
    """Schema for job response."""

    id: int
    company_id: int
    event_id: int
    title: str
    description: str | None
    location: str | None
    tags: list[str]
    salary_min: int | None
    salary_max: int | None
    is_remote: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class JobCompanyInfo(BaseModel):
    id: int
    name: str
    description: str | None = None
    website: str | None = None
    location: str | None = None
    logo_url: str | None = None


class EventJobCompany(JobCompanyInfo):
    stand_number: str = "N/A"


class EventJobResponse(BaseModel):
    """Job listed within an event, with its company booth."""

    id: int
    title: str
    description: str | None
    location: str | None
    tags: list[str]
    salary_min: int | None
    salary_max: int | None
    is_remote: bool
    application_count: int
    company: EventJobCompany


class JobEventInfo(BaseModel):
    id: int
    title: str
    date: datetime
    location: str | None


class JobDetailResponse(JobResponse):
    application_count: int
    company: JobCompanyInfo
    event: JobEventInfo


class GroupedJob(BaseModel):
    id: int
    title: str
    tags: list[str]
    salary_min: int | None
    salary_max: int | None
    application_count: int


class CompanyJobsGroup(BaseModel):
    """A company's booth and jobs within one event."""

    id: int
    name: str
    logo_url: str | None
    stand_number: str
    job_count: int
    jobs: list[GroupedJob]
