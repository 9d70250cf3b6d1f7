"""User account service."""

import hmac

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobfair.exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from jobfair.models.application import Application
from jobfair.models.company import Company
from jobfair.models.job import Job
from jobfair.models.user import AdminCompanyProfile, Role, User
from jobfair.schemas.user import CompanyAccountCreate, JobSeekerAccountCreate
from jobfair.security import hash_password, is_password_hashed, verify_password

logger = structlog.get_logger()


class UserService:
    """Service for user-related operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> User | None:
        """Get user by ID."""
        result = await self.db.execute(
            select(User)
            .options(
                selectinload(User.job_seeker_profile),
                selectinload(User.company_profile),
            )
            .where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def list_users(self, role: Role | None = None) -> list[User]:
        """List users, newest first, optionally filtered by role."""
        query = select(User).options(selectinload(User.job_seeker_profile))
        if role is not None:
            query = query.where(User.role == role)
        result = await self.db.execute(query.order_by(User.created_at.desc(), User.id.desc()))
        return list(result.scalars().all())

    async def authenticate(self, email: str, password: str) -> User:
        """Check credentials and return the account.

        Accounts created before passwords were hashed still hold the plain
        text. Such a password is accepted once and replaced by its bcrypt hash.
        """
        user = await self.get_by_email(email)
        if not user:
            logger.info("sign_in_failed", reason="unknown_email")
            raise UnauthorizedError("Invalid email or password")

        if is_password_hashed(user.password_hash):
            valid = verify_password(password, user.password_hash)
        else:
            valid = hmac.compare_digest(
                password.encode("utf-8"), user.password_hash.encode("utf-8")
            )
            if valid:
                user.password_hash = hash_password(password)
                await self.db.flush()
                logger.info("legacy_password_rehashed", user_id=user.id)

        if not valid:
            logger.info("sign_in_failed", reason="bad_password", user_id=user.id)
            raise UnauthorizedError("Invalid email or password")

        if user.is_blocked:
            logger.info("sign_in_blocked", user_id=user.id)
            raise ForbiddenError("Your account has been blocked")

        return user

    async def _ensure_email_available(self, email: str) -> None:
        if await self.get_by_email(email):
            raise ConflictError("An account with this email already exists")

    async def create_job_seeker_account(self, data: JobSeekerAccountCreate) -> User:
        """Register a job seeker."""
        await self._ensure_email_available(data.email)

        user = User(
            email=data.email,
            password_hash=hash_password(data.password),
            role=Role.JOB_SEEKER,
        )
        self.db.add(user)
        await self.db.flush()

        logger.info("job_seeker_registered", user_id=user.id)
        return user

    async def create_company_account(self, data: CompanyAccountCreate) -> User:
        """Register a company admin and link it to the company owning ``code``."""
        result = await self.db.execute(
            select(Company).where(Company.code == data.code.upper())
        )
        company = result.scalar_one_or_none()
        if not company:
            raise NotFoundError("Invalid company code")

        await self._ensure_email_available(data.email)

        user = User(
            email=data.email,
            password_hash=hash_password(data.password),
            role=Role.ADMIN_COMPANY,
        )
        self.db.add(user)
        await self.db.flush()

        self.db.add(AdminCompanyProfile(user_id=user.id, company_id=company.id))
        await self.db.flush()

        logger.info("company_admin_registered", user_id=user.id, company_id=company.id)
        return user

    async def set_blocked(self, user: User, is_blocked: bool) -> User:
        user.is_blocked = is_blocked
        await self.db.flush()
        logger.info("user_block_changed", user_id=user.id, is_blocked=is_blocked)
        return user

    async def delete(self, user: User) -> None:
        await self.db.delete(user)
        await self.db.flush()
        logger.info("user_deleted", user_id=user.id)

    async def get_applications(self, user: User) -> list[Application]:
        """Get a job seeker's applications with job, company, event and history."""
        result = await self.db.execute(
            select(Application)
            .options(
                selectinload(Application.job).selectinload(Job.company),
                selectinload(Application.job).selectinload(Job.event),
                selectinload(Application.history),
            )
            .where(Application.job_seeker_id == user.id)
            .order_by(Application.created_at.desc(), Application.id.desc())
        )
        return list(result.scalars().all())
