"""Database session management for Taskboard."""

from taskboard.c1_database_session.base import Base, utcnow
from taskboard.c1_database_session.database_manager import DatabaseManager
from taskboard.c1_database_session.repository import Repository

__all__ = ["Base", "utcnow", "DatabaseManager", "Repository"]
