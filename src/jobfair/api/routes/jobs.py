"""Job posting endpoints."""

from fastapi import APIRouter, HTTPException, status

from jobfair.api.deps import CompanyAdminUser, DbSession
from jobfair.models.job import Job
from jobfair.schemas.job import (
    CompanyJobsGroup,
    EventJobResponse,
    JobCreate,
    JobDetailResponse,
    JobResponse,
    JobUpdate,
)
from jobfair.services.company_service import CompanyService
from jobfair.services.job_service import JobService

router = APIRouter()


async def _get_job_or_404(service: JobService, job_id: int) -> Job:
    job = await service.get_by_id(job_id)
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found",
        )
    return job


@router.get(
    "/events/{event_id}",
    response_model=list[EventJobResponse],
    name="jobs.findByEvent",
)
async def list_event_jobs(event_id: int, db: DbSession):
    """Jobs of an event with company booth and application count."""
    return await JobService(db).list_by_event(event_id)


@router.get(
    "/events/{event_id}/by-company",
    response_model=list[CompanyJobsGroup],
    name="jobs.findByEventGroupedByCompany",
)
async def list_event_jobs_by_company(event_id: int, db: DbSession):
    return await JobService(db).list_by_event_grouped(event_id)


@router.get("/{job_id}", response_model=JobDetailResponse, name="jobs.findById")
async def get_job(job_id: int, db: DbSession):
    detail = await JobService(db).get_detail(job_id)
    if not detail:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found",
        )
    return detail


@router.post(
    "",
    response_model=JobResponse,
    status_code=status.HTTP_201_CREATED,
    name="jobs.create",
)
async def create_job(data: JobCreate, db: DbSession, current_user: CompanyAdminUser):
    """Post a job for an event the caller's company has joined."""
    company = await CompanyService(db).get_for_admin(current_user)
    return await JobService(db).create(company, data)


@router.patch("/{job_id}", response_model=JobResponse, name="jobs.update")
async def update_job(
    job_id: int,
    data: JobUpdate,
    db: DbSession,
    current_user: CompanyAdminUser,
):
    company = await CompanyService(db).get_for_admin(current_user)
    service = JobService(db)
    job = await _get_job_or_404(service, job_id)
    return await service.update(company, job, data)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT, name="jobs.delete")
async def delete_job(job_id: int, db: DbSession, current_user: CompanyAdminUser):
    company = await CompanyService(db).get_for_admin(current_user)
    service = JobService(db)
    job = await _get_job_or_404(service, job_id)
    await service.delete(company, job)
