"""Hash any passwords still stored as plain text.

Usage: python -m jobfair.scripts.hash_passwords

Safe to run repeatedly; already hashed passwords are skipped.
"""

import asyncio

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobfair.config import get_settings
from jobfair.database import async_session_maker, engine
from jobfair.logging_config import configure_logging
from jobfair.models.user import User
from jobfair.security import hash_password, is_password_hashed

logger = structlog.get_logger()


async def hash_plain_passwords(db: AsyncSession) -> tuple[int, int]:
    """Return (hashed, skipped) counts."""
    result = await db.execute(select(User).order_by(User.id))
    hashed = skipped = 0

    for user in result.scalars().all():
        if is_password_hashed(user.password_hash):
            skipped += 1
            continue
        user.password_hash = hash_password(user.password_hash)
        hashed += 1
        logger.info("password_hashed", user_id=user.id)

    await db.flush()
    return hashed, skipped


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.log_json)

    async with async_session_maker() as session:
        hashed, skipped = await hash_plain_passwords(session)
        await session.commit()

    await engine.dispose()
    logger.info("password_migration_complete", hashed=hashed, skipped=skipped)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
