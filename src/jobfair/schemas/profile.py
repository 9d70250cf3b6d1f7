"""Job seeker profile schemas."""

from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, Field, HttpUrl, TypeAdapter

from jobfair.models.user import Role

_http_url = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    _http_url.validate_python(value)
    return value


HttpUrlStr = Annotated[str, AfterValidator(_check_url)]


class SocialLink(BaseModel):
    """Link to a social or professional profile."""

    type: str = Field(..., max_length=50)
    url: HttpUrlStr


class JobSeekerProfileUpdate(BaseModel):
    """Schema for creating or updating the caller's own profile."""

    full_name: str = Field(..., min_length=2, max_length=255)
    bio: str | None = None
    last_education_level: str | None = Field(None, max_length=100)
    graduation_year: int | None = Field(None, ge=1900, le=2100)
    institution_name: str | None = Field(None, max_length=255)
    skills: list[str] = Field(default_factory=list)
    social_links: list[SocialLink] = Field(default_factory=list)
    resume_url: HttpUrlStr | Literal[""] | None = None
    portfolio_url: HttpUrlStr | Literal[""] | None = None
    nik: str | None = Field(None, max_length=32)
    phone_numbers: list[str] = Field(default_factory=list)


class JobSeekerProfileResponse(BaseModel):
    """Schema for profile response."""

    id: int
    full_name: str
    bio: str | None
    last_education_level: str | None
    graduation_year: int | None
    institution_name: str | None
    skills: list[str]
    social_links: list[SocialLink]
    resume_url: str | None
    portfolio_url: str | None
    nik: str | None
    phone_numbers: list[str]

    model_config = {"from_attributes": True}


class MyProfileResponse(BaseModel):
    id: int
    email: str
    role: Role
    profile: JobSeekerProfileResponse | None = None


class ProfileUpdateResponse(BaseModel):
    success: bool = True
    profile: JobSeekerProfileResponse


class ProfileStatusResponse(BaseModel):
    is_complete: bool
    has_profile: bool
