"""Profile routes for the authenticated user."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from taskboard.c1_common_types.sentinels import UNSET
from taskboard.c1_user_models.updates import ProfileUpdate
from taskboard.c1_user_models.user import User
from taskboard.c2_auth_service.serializers import user_profile

logger = logging.getLogger(__name__)


class UserProfileResponse(BaseModel):
    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class UpdateProfileRequest(BaseModel):
    """Only the fields present in the body are changed."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    avatar: Optional[str] = Field(default=None, description="Avatar URL")


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., description="New password, at least 8 characters")


class MessageResponse(BaseModel):
    message: str


def create_user_router(server_state, get_current_user):
    """Create user router.

    Args:
        server_state: ServerState instance with credential_store
        get_current_user: Dependency resolving the authenticated principal

    Returns:
        APIRouter: Configured router with profile endpoints
    """
    router = APIRouter(prefix="/api/users", tags=["users"])

    @router.get("/me", response_model=UserProfileResponse)
    def get_profile(current_user: User = Depends(get_current_user)):
        return user_profile(current_user)

    @router.put("/me", response_model=UserProfileResponse)
    def update_profile(request: UpdateProfileRequest, current_user: User = Depends(get_current_user)):
        provided = request.model_fields_set
        update = ProfileUpdate(
            name=request.name if "name" in provided else UNSET,
            email=request.email if "email" in provided else UNSET,
            avatar_url=request.avatar if "avatar" in provided else UNSET,
        )
        user = server_state.credential_store.update_profile(current_user.id, update)
        return user_profile(user)

    @router.put("/password", response_model=MessageResponse)
    def change_password(request: ChangePasswordRequest, current_user: User = Depends(get_current_user)):
        server_state.credential_store.change_password(
            current_user.id,
            request.current_password,
            request.new_password,
        )
        return {"message": "Password updated successfully"}

    return router
