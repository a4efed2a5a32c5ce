"""User models for Taskboard."""

from taskboard.c1_user_models.user import User, normalize_email
from taskboard.c1_user_models.user_store import UserStore
from taskboard.c1_user_models.updates import ProfileUpdate

__all__ = ["User", "normalize_email", "UserStore", "ProfileUpdate"]
