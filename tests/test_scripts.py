"""Tests for maintenance scripts."""

import pytest
from sqlalchemy import select

from jobfair.models import Role, User
from jobfair.scripts.hash_passwords import hash_plain_passwords
from jobfair.scripts.seed_admin import seed_admin
from jobfair.security import is_password_hashed, verify_password


@pytest.mark.asyncio
async def test_seed_admin_creates_account(db_session):
    user = await seed_admin(db_session, "root@example.com", "changeme")

    assert user.role == Role.ADMIN
    assert verify_password("changeme", user.password_hash)


@pytest.mark.asyncio
async def test_seed_admin_updates_existing_admin(db_session, admin):
    user = await seed_admin(db_session, "root@example.com", "rotated-pass")

    assert user.id == admin.id
    assert user.email == "root@example.com"
    assert verify_password("rotated-pass", user.password_hash)

    result = await db_session.execute(select(User).where(User.role == Role.ADMIN))
    assert len(result.scalars().all()) == 1


@pytest.mark.asyncio
async def test_hash_plain_passwords(db_session, job_seeker):
    db_session.add(User(email="old@example.com", password_hash="letmein", role=Role.JOB_SEEKER))
    await db_session.flush()

    hashed, skipped = await hash_plain_passwords(db_session)

    assert (hashed, skipped) == (1, 1)
    legacy = await db_session.scalar(select(User).where(User.email == "old@example.com"))
    assert is_password_hashed(legacy.password_hash)
    assert verify_password("letmein", legacy.password_hash)

    assert await hash_plain_passwords(db_session) == (0, 2)
