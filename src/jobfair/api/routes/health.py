"""Health check endpoints."""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from jobfair.api.deps import DbSession

logger = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check."""
    return {"status": "healthy"}


@router.get("/health/db")
async def database_health(db: DbSession):
    """Database connectivity check."""
    try:
        await db.execute(text("SELECT 1"))
        database = "up"
    except (SQLAlchemyError, OSError) as e:
        logger.warning("database_health_check_failed", error=str(e))
        database = "down"

    return {
        "database": database,
        "server": "up",
        "server_time": datetime.now(timezone.utc).isoformat(),
    }
