"""Business logic services."""

from jobfair.services.user_service import UserService
from jobfair.services.company_service import CompanyService
from jobfair.services.event_service import EventService
from jobfair.services.job_service import JobService
from jobfair.services.application_service import ApplicationService
from jobfair.services.profile_service import ProfileService
from jobfair.services.dashboard_service import DashboardService
from jobfair.services.report_service import ReportService
from jobfair.services.file_storage import FileStorageService

__all__ = [
    "UserService",
    "CompanyService",
    "EventService",
    "JobService",
    "ApplicationService",
    "ProfileService",
    "DashboardService",
    "ReportService",
    "FileStorageService",
]
