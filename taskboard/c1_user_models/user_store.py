"""Persistence access for users."""

from typing import Optional

from taskboard.c1_database_session.repository import Repository
from taskboard.c1_user_models.user import User, normalize_email


class UserStore(Repository[User]):
    model = User
    updatable_fields = frozenset({"name", "email", "avatar_url", "password_hash", "updated_at"})

    def find_by_email(self, email: str) -> Optional[User]:
        return self.find_one(email=normalize_email(email))
