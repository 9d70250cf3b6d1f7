"""User account endpoints."""

from fastapi import APIRouter, HTTPException, status

from jobfair.api.deps import AdminUser, DbSession, JobSeekerUser
from jobfair.models.user import Role, User
from jobfair.schemas.application import MyApplicationResponse
from jobfair.schemas.user import (
    BlockToggleRequest,
    CompanyAccountCreate,
    JobSeekerAccountCreate,
    UserResponse,
    UserWithProfileResponse,
)
from jobfair.services.user_service import UserService

router = APIRouter()


async def _get_user_or_404(service: UserService, user_id: int) -> User:
    user = await service.get_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user


@router.get("", response_model=list[UserWithProfileResponse], name="users.findAll")
async def list_users(db: DbSession, _: AdminUser):
    """List all accounts with job seeker profiles."""
    return await UserService(db).list_users()


@router.get(
    "/job-seekers",
    response_model=list[UserWithProfileResponse],
    name="users.findAllJobSeekers",
)
async def list_job_seekers(db: DbSession, _: AdminUser):
    return await UserService(db).list_users(Role.JOB_SEEKER)


@router.get(
    "/admin-companies",
    response_model=list[UserResponse],
    name="users.findAllAdminCompanies",
)
async def list_company_admins(db: DbSession, _: AdminUser):
    return await UserService(db).list_users(Role.ADMIN_COMPANY)


@router.post(
    "/job-seekers",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    name="users.createJobSeekerAccount",
)
async def create_job_seeker_account(data: JobSeekerAccountCreate, db: DbSession):
    """Register a new job seeker."""
    return await UserService(db).create_job_seeker_account(data)


@router.post(
    "/company-accounts",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    name="users.createCompanyAccount",
)
async def create_company_account(data: CompanyAccountCreate, db: DbSession):
    """Register a company admin using the company's sign-up code."""
    return await UserService(db).create_company_account(data)


@router.get(
    "/me/applications",
    response_model=list[MyApplicationResponse],
    name="users.getMyApplications",
)
async def get_my_applications(db: DbSession, current_user: JobSeekerUser):
    """Get the caller's applications with status history."""
    applications = await UserService(db).get_applications(current_user)
    return [
        {
            "id": app.id,
            "job_id": app.job_id,
            "job_seeker_id": app.job_seeker_id,
            "status": app.status,
            "created_at": app.created_at,
            "updated_at": app.updated_at,
            "job": {
                "id": app.job.id,
                "title": app.job.title,
                "company_name": app.job.company.name,
                "event_id": app.job.event_id,
                "event_title": app.job.event.title,
            },
            "history": app.history,
        }
        for app in applications
    ]


@router.get("/{user_id}", response_model=UserWithProfileResponse, name="users.findOne")
async def get_user(user_id: int, db: DbSession, _: AdminUser):
    return await _get_user_or_404(UserService(db), user_id)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    name="users.delete",
)
async def delete_user(user_id: int, db: DbSession, current_user: AdminUser):
    """Delete an account and everything it owns."""
    service = UserService(db)
    user = await _get_user_or_404(service, user_id)
    if user.id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot delete your own account",
        )
    await service.delete(user)


@router.post("/{user_id}/block", response_model=UserResponse, name="users.blockAccount")
async def block_account(user_id: int, db: DbSession, _: AdminUser):
    service = UserService(db)
    user = await _get_user_or_404(service, user_id)
    return await service.set_blocked(user, True)


@router.post("/{user_id}/unblock", response_model=UserResponse, name="users.unBlockAccount")
async def unblock_account(user_id: int, db: DbSession, _: AdminUser):
    service = UserService(db)
    user = await _get_user_or_404(service, user_id)
    return await service.set_blocked(user, False)


@router.patch(
    "/{user_id}/block",
    response_model=UserResponse,
    name="users.toggleBlockAccount",
)
async def toggle_block_account(
    user_id: int,
    data: BlockToggleRequest,
    db: DbSession,
    _: AdminUser,
):
    service = UserService(db)
    user = await _get_user_or_404(service, user_id)
    return await service.set_blocked(user, data.is_blocked)
