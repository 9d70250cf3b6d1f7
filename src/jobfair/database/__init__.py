"""Database module."""

from jobfair.database.session import get_db, engine, async_session_maker

__all__ = ["get_db", "engine", "async_session_maker"]
