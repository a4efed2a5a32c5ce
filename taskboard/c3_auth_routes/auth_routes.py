"""Registration and login routes for Taskboard."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, EmailStr, Field

from taskboard.c1_user_models.user import User
from taskboard.c2_auth_service.serializers import user_summary

logger = logging.getLogger(__name__)


# Request/Response Models
class RegisterRequest(BaseModel):
    """Request model for registering an account."""

    name: str = Field(..., min_length=1, description="Display name")
    email: EmailStr = Field(..., description="Account email, unique case-insensitively")
    password: str = Field(..., description="Plaintext password, at least 8 characters")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ExternalLoginRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Credential issued by the identity provider")


class UserSummaryResponse(BaseModel):
    id: str
    name: str
    email: str
    avatar: Optional[str] = None


class SessionResponse(BaseModel):
    """A freshly issued session token and the identity it is bound to."""

    token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserSummaryResponse


def create_auth_router(server_state):
    """Create auth router with server_state dependency.

    Args:
        server_state: ServerState instance with credential_store, token_codec
            and an optional external_verifier

    Returns:
        APIRouter: Configured router with registration and login endpoints
    """
    router = APIRouter(prefix="/api/auth", tags=["auth"])

    def _session_for(user: User) -> Dict[str, Any]:
        codec = server_state.token_codec
        return {
            "token": codec.issue(user.id),
            "token_type": "bearer",
            "expires_in": int(codec.ttl.total_seconds()),
            "user": user_summary(user),
        }

    @router.post("/register", response_model=SessionResponse, status_code=201)
    def register(request: RegisterRequest):
        """Register a new account and start a session for it."""
        user = server_state.credential_store.register(
            email=request.email,
            name=request.name,
            plaintext=request.password,
        )
        return _session_for(user)

    @router.post("/login", response_model=SessionResponse)
    def login(request: LoginRequest):
        """Exchange an email and password for a session token."""
        user = server_state.credential_store.login(request.email, request.password)
        logger.info(f"User {user.id} logged in")
        return _session_for(user)

    @router.post("/google", response_model=SessionResponse)
    def login_external(request: ExternalLoginRequest):
        """Log in, or register on first use, with a provider-verified identity."""
        verifier = server_state.external_verifier
        if verifier is None:
            raise HTTPException(status_code=501, detail="External login is not configured")

        profile = verifier.verify(request.token)
        user = server_state.credential_store.login_external(profile)
        logger.info(f"User {user.id} logged in through external provider")
        return _session_for(user)

    return router
