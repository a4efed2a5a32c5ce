"""Database base and declarative_base for Taskboard."""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()
logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
