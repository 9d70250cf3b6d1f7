"""Admin dashboard endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query

from jobfair.api.deps import AdminUser, DbSession
from jobfair.schemas.dashboard import (
    EducationCount,
    OverviewStats,
    RecentApplication,
    StatusCount,
    TopJob,
)
from jobfair.services.dashboard_service import DashboardService

router = APIRouter()

EventFilter = Annotated[int | None, Query(ge=1)]


@router.get("/overview", response_model=OverviewStats, name="dashboard.getOverviewStats")
async def get_overview(db: DbSession, _: AdminUser, event_id: EventFilter = None):
    """Companies, jobs, latest applications, users, profiles and events."""
    return await DashboardService(db).overview(event_id)


@router.get(
    "/recent-applications",
    response_model=list[RecentApplication],
    name="dashboard.getRecentApplications",
)
async def get_recent_applications(
    db: DbSession,
    _: AdminUser,
    event_id: EventFilter = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    return await DashboardService(db).recent_applications(event_id, limit)


@router.get(
    "/status-breakdown",
    response_model=list[StatusCount],
    name="dashboard.getStatusBreakdown",
)
async def get_status_breakdown(db: DbSession, _: AdminUser, event_id: EventFilter = None):
    return await DashboardService(db).status_breakdown(event_id)


@router.get("/top-jobs", response_model=list[TopJob], name="dashboard.getTopJobs")
async def get_top_jobs(
    db: DbSession,
    _: AdminUser,
    event_id: EventFilter = None,
    limit: Annotated[int, Query(ge=1, le=20)] = 10,
):
    return await DashboardService(db).top_jobs(event_id, limit)


@router.get(
    "/education",
    response_model=list[EducationCount],
    name="dashboard.getEducationDemographics",
)
async def get_education_demographics(db: DbSession, _: AdminUser, event_id: EventFilter = None):
    return await DashboardService(db).education_demographics(event_id)
