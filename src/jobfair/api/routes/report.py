"""Admin report and export endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import Response

from jobfair.api.deps import AdminUser, DbSession
from jobfair.schemas.company import CompanyPickerItem
from jobfair.schemas.report import (
    CompanyExportRow,
    JobseekerExportRow,
    Report,
    UserExportRow,
)
from jobfair.services.company_service import CompanyService
from jobfair.services.report_service import ReportService

router = APIRouter()

EventFilter = Annotated[int | None, Query(ge=1)]


def _csv_response(content: str, basename: str) -> Response:
    filename = f"{basename}-{date.today():%Y-%m-%d}.csv"
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("", response_model=Report, name="report.generateReport")
async def generate_report(db: DbSession, _: AdminUser, event_id: EventFilter = None):
    """Fair statistics for one event, or lifetime when no event is given."""
    return await ReportService(db).generate(event_id)


@router.get(
    "/companies-picker",
    response_model=list[CompanyPickerItem],
    name="report.getCompaniesForPicker",
)
async def get_companies_for_picker(db: DbSession, _: AdminUser):
    return await CompanyService(db).list_for_picker()


@router.get(
    "/jobseekers",
    response_model=list[JobseekerExportRow],
    name="report.exportJobseekerData",
)
async def export_jobseekers(db: DbSession, _: AdminUser, event_id: EventFilter = None):
    return await ReportService(db).jobseeker_rows(event_id)


@router.get("/jobseekers.csv", name="report.exportJobseekerDataCsv")
async def export_jobseekers_csv(db: DbSession, _: AdminUser, event_id: EventFilter = None):
    service = ReportService(db)
    rows = await service.jobseeker_rows(event_id)
    return _csv_response(service.jobseekers_csv(rows), "jobseekers")


@router.get(
    "/companies/{company_id}/jobseekers",
    response_model=list[JobseekerExportRow],
    name="report.exportJobseekersByCompany",
)
async def export_company_jobseekers(
    company_id: int,
    db: DbSession,
    _: AdminUser,
    event_id: EventFilter = None,
):
    return await ReportService(db).jobseeker_rows(event_id, company_id=company_id)


@router.get(
    "/companies/{company_id}/jobseekers.csv",
    name="report.exportJobseekersByCompanyCsv",
)
async def export_company_jobseekers_csv(
    company_id: int,
    db: DbSession,
    _: AdminUser,
    event_id: EventFilter = None,
):
    service = ReportService(db)
    rows = await service.jobseeker_rows(event_id, company_id=company_id)
    return _csv_response(service.jobseekers_csv(rows), f"company-{company_id}-jobseekers")


@router.get("/users", response_model=list[UserExportRow], name="report.exportAllUsers")
async def export_users(db: DbSession, _: AdminUser):
    return await ReportService(db).user_rows()


@router.get("/users.csv", name="report.exportAllUsersCsv")
async def export_users_csv(db: DbSession, _: AdminUser):
    service = ReportService(db)
    return _csv_response(service.users_csv(await service.user_rows()), "users")


@router.get("/companies", response_model=list[CompanyExportRow], name="report.exportCompanies")
async def export_companies(db: DbSession, _: AdminUser):
    return await ReportService(db).company_rows()


@router.get("/companies.csv", name="report.exportCompaniesCsv")
async def export_companies_csv(db: DbSession, _: AdminUser):
    service = ReportService(db)
    return _csv_response(service.companies_csv(await service.company_rows()), "companies")
