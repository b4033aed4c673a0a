"""Database layer for PostgreSQL reads."""

from campus_companion.db.campus import CampusRepository, Club, Event, Resource
from campus_companion.db.config import DatabaseSettings, get_db_settings
from campus_companion.db.database import Base, close_db, get_async_session_local

__all__ = [
    "Base",
    "CampusRepository",
    "Club",
    "DatabaseSettings",
    "Event",
    "Resource",
    "close_db",
    "get_async_session_local",
    "get_db_settings",
]
