"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timezone
from typing import AsyncGenerator

# Point settings at SQLite before the application is imported
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from jobfair.models import (
    AdminCompanyProfile,
    Base,
    Company,
    Event,
    EventCompanyParticipation,
    Job,
    JobSeekerProfile,
    Role,
    User,
)
from jobfair.security import create_access_token, hash_password

DEFAULT_PASSWORD = "secret123"


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def storage_dir(tmp_path):
    return tmp_path / "storage"


@pytest_asyncio.fixture
async def client(db_session, storage_dir) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app, sharing the test session."""
    from jobfair.api.deps import get_file_storage
    from jobfair.database import get_db
    from jobfair.main import app
    from jobfair.services.file_storage import FileStorageService

    async def override_get_db():
        yield db_session

    async def override_get_file_storage():
        return FileStorageService(db_session, storage_dir=storage_dir, max_size_mb=1)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = override_get_file_storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def _auth_headers(user: User) -> dict:
    token = create_access_token(user.id, user.email, user.role.value)
    return {"Authorization": f"Bearer {token}"}


# Factories


@pytest.fixture
def make_user(db_session):
    async def factory(
        email: str,
        role: Role = Role.JOB_SEEKER,
        password: str = DEFAULT_PASSWORD,
        full_name: str | None = None,
        education: str | None = None,
    ) -> User:
        user = User(email=email, password_hash=hash_password(password), role=role)
        db_session.add(user)
        await db_session.flush()
        if full_name is not None:
            db_session.add(
                JobSeekerProfile(
                    user_id=user.id,
                    full_name=full_name,
                    last_education_level=education,
                    skills=["Python", "SQL"],
                    phone_numbers=["+62 811 0000"],
                )
            )
            await db_session.flush()
        return user

    return factory


@pytest.fixture
def make_company(db_session):
    async def factory(name: str, code: str) -> Company:
        company = Company(
            name=name,
            code=code,
            description=f"{name} builds things",
            location="Jakarta",
        )
        db_session.add(company)
        await db_session.flush()
        return company

    return factory


@pytest.fixture
def make_event(db_session):
    async def factory(title: str = "Career Expo", day: int = 1) -> Event:
        event = Event(
            title=title,
            description="Annual job fair",
            banner_url="https://example.com/banner.png",
            minimap_url="https://example.com/map.png",
            date=datetime(2026, 3, day, 9, 0, tzinfo=timezone.utc),
            location="Convention Center",
        )
        db_session.add(event)
        await db_session.flush()
        return event

    return factory


@pytest.fixture
def make_job(db_session):
    async def factory(company: Company, event: Event, title: str = "Backend Engineer", **kwargs) -> Job:
        job = Job(company_id=company.id, event_id=event.id, title=title, tags=["python"], **kwargs)
        db_session.add(job)
        await db_session.flush()
        return job

    return factory


@pytest.fixture
def join(db_session):
    async def factory(company: Company, event: Event, stand_number: str) -> EventCompanyParticipation:
        participation = EventCompanyParticipation(
            event_id=event.id,
            company_id=company.id,
            stand_number=stand_number,
        )
        db_session.add(participation)
        await db_session.flush()
        return participation

    return factory


@pytest_asyncio.fixture
async def admin(make_user) -> User:
    return await make_user("admin@example.com", role=Role.ADMIN)


@pytest_asyncio.fixture
async def company(make_company) -> Company:
    return await make_company("Acme Corp", "ACME01")


@pytest_asyncio.fixture
async def company_admin(db_session, make_user, company) -> User:
    user = await make_user("hr@acme.example.com", role=Role.ADMIN_COMPANY)
    db_session.add(AdminCompanyProfile(user_id=user.id, company_id=company.id))
    await db_session.flush()
    return user


@pytest_asyncio.fixture
async def job_seeker(make_user) -> User:
    return await make_user(
        "seeker@example.com",
        full_name="Siti Rahma",
        education="Bachelor",
    )


@pytest_asyncio.fixture
async def fair(make_event) -> Event:
    return await make_event()


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a user."""
    return _auth_headers
