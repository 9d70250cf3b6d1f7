"""Create or update the platform admin account.

Usage: python -m jobfair.scripts.seed_admin

Reads ADMIN_EMAIL and ADMIN_PASSWORD from the environment (or .env).
"""

import asyncio
import sys

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobfair.config import get_settings
from jobfair.database import async_session_maker, engine
from jobfair.logging_config import configure_logging
from jobfair.models.user import Role, User
from jobfair.security import hash_password

logger = structlog.get_logger()


async def seed_admin(db: AsyncSession, email: str, password: str) -> User:
    """Upsert the admin account. An existing admin gets the new email and password."""
    result = await db.execute(
        select(User)
        .where((User.role == Role.ADMIN) | (User.email == email))
        .order_by((User.email == email).desc(), User.id)
    )
    user = result.scalars().first()

    if user:
        user.email = email
        user.password_hash = hash_password(password)
        user.role = Role.ADMIN
        user.is_blocked = False
        created = False
    else:
        user = User(email=email, password_hash=hash_password(password), role=Role.ADMIN)
        db.add(user)
        created = True

    await db.flush()
    logger.info("admin_seeded", user_id=user.id, email=email, created=created)
    return user


async def main() -> int:
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.log_json)

    if not settings.admin_email or not settings.admin_password:
        logger.error("admin_credentials_missing", hint="set ADMIN_EMAIL and ADMIN_PASSWORD")
        return 1

    async with async_session_maker() as session:
        await seed_admin(session, settings.admin_email, settings.admin_password)
        await session.commit()

    await engine.dispose()
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
