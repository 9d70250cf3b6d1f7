"""Job application endpoints."""

from fastapi import APIRouter, status

from jobfair.api.deps import DbSession, JobSeekerUser
from jobfair.schemas.application import (
    ApplicationCheckResponse,
    ApplicationCountResponse,
    ApplicationCreate,
    ApplicationResponse,
    ApplicationWithJob,
)
from jobfair.services.application_service import ApplicationService

router = APIRouter()


@router.post(
    "",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    name="applications.create",
)
async def create_application(data: ApplicationCreate, db: DbSession, current_user: JobSeekerUser):
    """Apply to a job."""
    return await ApplicationService(db).create(current_user, data.job_id)


@router.get(
    "/events/{event_id}",
    response_model=list[ApplicationWithJob],
    name="applications.findMyApplicationsByEvent",
)
async def list_my_event_applications(event_id: int, db: DbSession, current_user: JobSeekerUser):
    applications = await ApplicationService(db).list_by_event(current_user, event_id)
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
        }
        for app in applications
    ]


@router.get(
    "/jobs/{job_id}/check",
    response_model=ApplicationCheckResponse,
    name="applications.checkMyApplication",
)
async def check_my_application(job_id: int, db: DbSession, current_user: JobSeekerUser):
    """Whether the caller has applied to a job."""
    application = await ApplicationService(db).get_for_job(current_user, job_id)
    return {"has_applied": application is not None, "application": application}


@router.get(
    "/events/{event_id}/count",
    response_model=ApplicationCountResponse,
    name="applications.countMyApplicationsByEvent",
)
async def count_my_event_applications(event_id: int, db: DbSession, current_user: JobSeekerUser):
    count, remaining = await ApplicationService(db).remaining_for_event(current_user, event_id)
    return {"count": count, "remaining": remaining}
