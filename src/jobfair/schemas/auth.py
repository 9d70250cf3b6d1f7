"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field

from jobfair.models.user import Role


class SignInRequest(BaseModel):
    """Credentials for signing in."""

    email: EmailStr
    password: str = Field(..., min_length=6)


class SessionUser(BaseModel):
    """User identity carried by an access token."""

    id: int
    email: str
    role: Role


class SignInResponse(BaseModel):
    success: bool = True
    token: str
    user: SessionUser


class SessionResponse(BaseModel):
    authenticated: bool
    user: SessionUser | None = None


class LogoutResponse(BaseModel):
    success: bool = True
    message: str = "Logged out successfully"


class ProfileSummary(BaseModel):
    id: int
    full_name: str
    bio: str | None

    model_config = {"from_attributes": True}


class CurrentUserResponse(BaseModel):
    """Authenticated user with a short profile summary."""

    id: int
    email: str
    role: Role
    profile: ProfileSummary | None = None
