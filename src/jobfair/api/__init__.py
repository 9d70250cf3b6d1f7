"""API routes."""

from fastapi import APIRouter

from jobfair.api.routes import (
    applications,
    auth,
    companies,
    dashboard,
    events,
    files,
    health,
    jobs,
    profile,
    report,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(companies.router, prefix="/companies", tags=["companies"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
api_router.include_router(applications.router, prefix="/applications", tags=["applications"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(report.router, prefix="/report", tags=["report"])
api_router.include_router(files.router, prefix="/files", tags=["files"])
