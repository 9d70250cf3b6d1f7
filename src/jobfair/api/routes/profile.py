"""Job seeker profile endpoints."""

from fastapi import APIRouter, HTTPException, status

from jobfair.api.deps import CurrentUser, DbSession, JobSeekerUser
from jobfair.models.user import Role, User
from jobfair.schemas.profile import (
    JobSeekerProfileUpdate,
    MyProfileResponse,
    ProfileStatusResponse,
    ProfileUpdateResponse,
)
from jobfair.services.profile_service import ProfileService
from jobfair.services.user_service import UserService

router = APIRouter()


def _profile_view(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "profile": user.job_seeker_profile,
    }


async def _get_visible_user(db, current_user: User, user_id: int) -> User:
    """Users may look at their own profile; admins at anyone's."""
    if current_user.id != user_id and current_user.role != Role.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only view your own profile",
        )
    user = await UserService(db).get_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user


@router.get("/me", response_model=MyProfileResponse, name="profile.getMyProfile")
async def get_my_profile(current_user: JobSeekerUser):
    return _profile_view(current_user)


@router.put("/me", response_model=ProfileUpdateResponse, name="profile.updateMyProfile")
async def update_my_profile(
    data: JobSeekerProfileUpdate,
    db: DbSession,
    current_user: JobSeekerUser,
):
    """Create or replace the caller's profile."""
    profile = await ProfileService(db).upsert(current_user, data)
    return {"success": True, "profile": profile}


@router.get(
    "/me/status",
    response_model=ProfileStatusResponse,
    name="profile.checkMyProfileComplete",
)
async def check_my_profile(current_user: JobSeekerUser):
    return ProfileService.status(current_user)


@router.get("/{user_id}", response_model=MyProfileResponse, name="profile.getJobSeekerProfile")
async def get_profile(user_id: int, db: DbSession, current_user: CurrentUser):
    user = await _get_visible_user(db, current_user, user_id)
    return _profile_view(user)


@router.get(
    "/{user_id}/status",
    response_model=ProfileStatusResponse,
    name="profile.checkProfileComplete",
)
async def check_profile(user_id: int, db: DbSession, current_user: CurrentUser):
    user = await _get_visible_user(db, current_user, user_id)
    return ProfileService.status(user)
