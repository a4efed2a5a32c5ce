"""Database models and schema for Taskboard.

Importing this module registers every mapped model on ``Base.metadata``, so
``DatabaseManager.create_tables()`` sees the full schema.
"""

from taskboard.c1_database_session.base import Base, utcnow
from taskboard.c1_database_session.database_manager import DatabaseManager
from taskboard.c1_user_models.user import User
from taskboard.c1_task_models.task import Task, Subtask

__all__ = [
    "Base",
    "utcnow",
    "DatabaseManager",
    "User",
    "Task",
    "Subtask",
]
