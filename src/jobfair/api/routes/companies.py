"""Company endpoints."""

from fastapi import APIRouter, HTTPException, status

from jobfair.api.deps import AdminUser, CompanyAdminUser, CurrentUser, DbSession
from jobfair.models.company import Company
from jobfair.models.user import Role
from jobfair.schemas.application import ApplicationResponse
from jobfair.schemas.company import (
    ApplicationStatusUpdate,
    CompanyCreate,
    CompanyDashboard,
    CompanyDetails,
    CompanyProfileStatus,
    CompanyResponse,
    CompanyUpdate,
    CompanyWithCounts,
    CompanyWithStats,
    JobApplicationsResponse,
)
from jobfair.services.company_service import CompanyService

router = APIRouter()


async def _get_company_or_404(service: CompanyService, company_id: int) -> Company:
    company = await service.get_by_id(company_id)
    if not company:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Company not found",
        )
    return company


@router.get("", response_model=list[CompanyWithCounts], name="companies.findAll")
async def list_companies(db: DbSession):
    """List companies with participation and job counts."""
    return await CompanyService(db).list_with_counts()


@router.get("/stats", response_model=list[CompanyWithStats], name="companies.findAllWithStats")
async def list_companies_with_stats(db: DbSession):
    """List companies with participation, job and application counts."""
    return await CompanyService(db).list_with_counts(with_applications=True)


# Company admin endpoints are declared before /{company_id}


@router.get("/me", response_model=CompanyResponse, name="companies.getMyCompanyProfile")
async def get_my_company(db: DbSession, current_user: CompanyAdminUser):
    return await CompanyService(db).get_for_admin(current_user)


@router.get(
    "/me/status",
    response_model=CompanyProfileStatus,
    name="companies.checkMyCompanyProfileComplete",
)
async def check_my_company_profile(db: DbSession, current_user: CompanyAdminUser):
    return await CompanyService(db).profile_status(current_user)


@router.get(
    "/me/dashboard",
    response_model=CompanyDashboard,
    name="companies.getMyCompanyDashboard",
)
async def get_my_dashboard(db: DbSession, current_user: CompanyAdminUser):
    """Joined events, posted jobs and application totals."""
    return await CompanyService(db).get_dashboard(current_user)


@router.get(
    "/me/jobs/{job_id}/applications",
    response_model=JobApplicationsResponse,
    name="companies.getJobApplications",
)
async def get_job_applications(job_id: int, db: DbSession, current_user: CompanyAdminUser):
    return await CompanyService(db).get_job_applications(current_user, job_id)


@router.post(
    "/me/applications/status",
    response_model=ApplicationResponse,
    name="companies.updateApplicationStatus",
)
async def update_application_status(
    data: ApplicationStatusUpdate,
    db: DbSession,
    current_user: CompanyAdminUser,
):
    """Review an application to one of the company's jobs."""
    return await CompanyService(db).update_application_status(current_user, data)


@router.get("/{company_id}", response_model=CompanyResponse, name="companies.findOne")
async def get_company(company_id: int, db: DbSession):
    return await _get_company_or_404(CompanyService(db), company_id)


@router.get(
    "/{company_id}/details",
    response_model=CompanyDetails,
    name="companies.findOneWithDetails",
)
async def get_company_details(company_id: int, db: DbSession):
    """Company with the events it joined and its jobs per event."""
    details = await CompanyService(db).get_details(company_id)
    if not details:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Company not found",
        )
    return details


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    name="companies.create",
)
async def create_company(data: CompanyCreate, db: DbSession, _: AdminUser):
    return await CompanyService(db).create(data)


@router.patch("/{company_id}", response_model=CompanyResponse, name="companies.update")
async def update_company(
    company_id: int,
    data: CompanyUpdate,
    db: DbSession,
    current_user: CurrentUser,
):
    """Update a company. Company admins may update only their own company."""
    service = CompanyService(db)
    company = await _get_company_or_404(service, company_id)

    if current_user.role == Role.ADMIN_COMPANY:
        own = await service.get_for_admin(current_user)
        if own.id != company.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can only update your own company",
            )
    elif current_user.role != Role.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to perform this action",
        )

    return await service.update(company, data)


@router.delete(
    "/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    name="companies.delete",
)
async def delete_company(company_id: int, db: DbSession, _: AdminUser):
    service = CompanyService(db)
    company = await _get_company_or_404(service, company_id)
    await service.delete(company)


@router.post(
    "/{company_id}/regenerate-code",
    response_model=CompanyResponse,
    name="companies.regenerateCompanyCode",
)
async def regenerate_company_code(company_id: int, db: DbSession, _: AdminUser):
    service = CompanyService(db)
    company = await _get_company_or_404(service, company_id)
    return await service.regenerate_code(company)
