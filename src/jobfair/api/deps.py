"""API dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from jobfair.config import get_settings
from jobfair.database import get_db
from jobfair.models.user import Role, User
from jobfair.security import decode_access_token
from jobfair.services.file_storage import FileStorageService
from jobfair.services.user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_token(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str | None:
    """Read the access token from the Authorization header or the session cookie."""
    if credentials:
        return credentials.credentials
    return request.cookies.get(get_settings().token_cookie_name)


async def get_optional_user(
    token: Annotated[str | None, Depends(get_token)],
    db: DbSession,
) -> User | None:
    """Resolve the token to an active account, or None."""
    if not token:
        return None

    payload = decode_access_token(token)
    if not payload or not str(payload.get("sub", "")).isdigit():
        return None

    user = await UserService(db).get_by_id(int(payload["sub"]))
    if not user or user.is_blocked:
        return None
    return user


async def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """Require an authenticated account."""
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_role(*roles: Role):
    """Dependency factory restricting an endpoint to the given roles."""

    async def checker(user: Annotated[User, Depends(get_current_user)]) -> User:
        if user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action",
            )
        return user

    return checker


async def get_file_storage(db: DbSession) -> FileStorageService:
    return FileStorageService(db)


# Type aliases for dependency injection
OptionalUser = Annotated[User | None, Depends(get_optional_user)]
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_role(Role.ADMIN))]
CompanyAdminUser = Annotated[User, Depends(require_role(Role.ADMIN_COMPANY))]
JobSeekerUser = Annotated[User, Depends(require_role(Role.JOB_SEEKER))]
FileStorage = Annotated[FileStorageService, Depends(get_file_storage)]
