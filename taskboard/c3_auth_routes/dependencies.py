"""FastAPI dependency that yields the authenticated principal."""

from typing import Optional

from fastapi import Header

from taskboard.c1_user_models.user import User
from taskboard.c2_auth_service.auth_gate import parse_bearer


def create_current_user_dependency(server_state):
    """Build the dependency resolving ``Authorization: Bearer`` to a User.

    Args:
        server_state: ServerState instance holding the auth_gate

    Returns:
        Callable usable with ``Depends``
    """

    def get_current_user(authorization: Optional[str] = Header(default=None)) -> User:
        return server_state.auth_gate.authenticate(parse_bearer(authorization))

    return get_current_user
