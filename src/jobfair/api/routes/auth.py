"""Authentication endpoints."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Response

from jobfair.api.deps import CurrentUser, DbSession, get_token
from jobfair.config import get_settings
from jobfair.models.user import Role
from jobfair.schemas.auth import (
    CurrentUserResponse,
    LogoutResponse,
    SessionResponse,
    SignInRequest,
    SignInResponse,
)
from jobfair.security import create_access_token, decode_access_token
from jobfair.services.user_service import UserService

logger = structlog.get_logger()

router = APIRouter()


@router.post("/signin", response_model=SignInResponse, name="auth.signIn")
async def sign_in(data: SignInRequest, response: Response, db: DbSession):
    """Exchange credentials for an access token."""
    user = await UserService(db).authenticate(data.email, data.password)
    token = create_access_token(user.id, user.email, user.role.value)

    response.set_cookie(
        get_settings().token_cookie_name,
        token,
        httponly=True,
        samesite="lax",
    )
    logger.info("user_signed_in", user_id=user.id, role=user.role.value)

    return {
        "success": True,
        "token": token,
        "user": {"id": user.id, "email": user.email, "role": user.role.value},
    }


@router.get("/session", response_model=SessionResponse, name="auth.session")
async def session(token: Annotated[str | None, Depends(get_token)]):
    """Describe the caller's session. Never fails."""
    payload = decode_access_token(token) if token else None
    if (
        not payload
        or not str(payload.get("sub", "")).isdigit()
        or payload.get("role") not in {role.value for role in Role}
    ):
        return {"authenticated": False, "user": None}

    return {
        "authenticated": True,
        "user": {
            "id": int(payload["sub"]),
            "email": payload.get("email", ""),
            "role": payload["role"],
        },
    }


@router.post("/logout", response_model=LogoutResponse, name="auth.logout")
async def logout(response: Response):
    """Tokens are stateless; this only clears the session cookie."""
    response.delete_cookie(get_settings().token_cookie_name)
    return LogoutResponse()


@router.get("/me", response_model=CurrentUserResponse, name="auth.getCurrentUser")
async def get_current_user(current_user: CurrentUser):
    """Get the authenticated user with a profile summary."""
    profile = current_user.job_seeker_profile
    return {
        "id": current_user.id,
        "email": current_user.email,
        "role": current_user.role.value,
        "profile": profile,
    }
