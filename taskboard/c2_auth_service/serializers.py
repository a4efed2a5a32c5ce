"""JSON-ready views of identities."""

from typing import Any, Dict, Optional

from taskboard.c1_user_models.user import User


def user_summary(user: Optional[User]) -> Optional[Dict[str, Any]]:
    """Public display attributes of an identity."""
    if user is None:
        return None
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "avatar": user.avatar_url,
    }


def user_profile(user: User) -> Dict[str, Any]:
    """Full profile of the authenticated identity. Never includes the digest."""
    profile = user_summary(user)
    profile["created_at"] = user.created_at.isoformat() if user.created_at else None
    profile["updated_at"] = user.updated_at.isoformat() if user.updated_at else None
    return profile
