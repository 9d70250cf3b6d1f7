"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, model_validator

from jobfair.models.user import Role
from jobfair.schemas.profile import JobSeekerProfileResponse


class _AccountCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    password_confirmation: str = Field(..., min_length=6)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.password_confirmation:
            raise ValueError("Passwords do not match")
        return self


class JobSeekerAccountCreate(_AccountCreate):
    """Schema for job seeker self-registration."""


class CompanyAccountCreate(_AccountCreate):
    """Schema for company admin registration using a company code."""

    code: str = Field(..., min_length=6, max_length=6)


class UserResponse(BaseModel):
    """Schema for user response."""

    id: int
    email: str
    role: Role
    is_blocked: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserWithProfileResponse(UserResponse):
    job_seeker_profile: JobSeekerProfileResponse | None = None


class BlockToggleRequest(BaseModel):
    is_blocked: bool
