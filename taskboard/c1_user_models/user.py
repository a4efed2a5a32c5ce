"""User database model for Taskboard."""

from sqlalchemy import Column, String, Text, DateTime, Index

from taskboard.c1_common_types.identifiers import IdType, UserId
from taskboard.c1_database_session.base import Base, utcnow


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookups."""
    return email.strip().lower()


class User(Base):
    """An account that can own or be assigned tasks."""

    __tablename__ = "users"

    id = Column(IdType(UserId), primary_key=True)
    email = Column(String, unique=True, nullable=False, index=True)  # Always normalized
    name = Column(String, nullable=False)
    password_hash = Column(Text, nullable=False)
    avatar_url = Column(Text)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (Index("idx_users_created_at", "created_at"),)

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email}>"
