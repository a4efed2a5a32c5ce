"""Task management routes for Taskboard."""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, ConfigDict, Field, model_validator

from taskboard.c1_common_types.identifiers import SubtaskId, TaskId, UserId
from taskboard.c1_common_types.sentinels import UNSET
from taskboard.c1_task_enums.task_enums import TaskPriority, TaskStatus, TaskType
from taskboard.c1_task_models.updates import SubtaskUpdate, TaskDraft, TaskFieldsUpdate, TaskFilter
from taskboard.c1_user_models.user import User

logger = logging.getLogger(__name__)


# Request/Response Models
class CreateTaskRequest(BaseModel):
    """Request model for creating a task."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=1, description="Task title")
    description: Optional[str] = Field(default=None, description="Longer description")
    status: TaskStatus = Field(default=TaskStatus.DRAFT)
    task_type: TaskType = Field(default=TaskType.MAIN, alias="type")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    tags: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    assignee_id: Optional[str] = Field(default=None, description="User to delegate the task to")
    subtasks: List[str] = Field(default_factory=list, description="Texts of initial subtasks")


class UpdateTaskRequest(BaseModel):
    """Fields the creator may change. Omitted fields are left untouched."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    task_type: Optional[TaskType] = Field(default=None, alias="type")
    priority: Optional[TaskPriority] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    assignee_id: Optional[str] = None

    @model_validator(mode="after")
    def _reject_null_required(self):
        for name in ("title", "status", "task_type", "priority", "tags"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class CreateSubtaskRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    text: str = Field(..., min_length=1, description="Subtask text")


class UpdateSubtaskRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    text: Optional[str] = Field(default=None, min_length=1)
    completed: Optional[bool] = None

    @model_validator(mode="after")
    def _reject_null(self):
        for name in ("text", "completed"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class UserSummaryResponse(BaseModel):
    id: str
    name: str
    email: str
    avatar: Optional[str] = None


class SubtaskResponse(BaseModel):
    id: str
    text: str
    completed: bool
    author_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class TaskResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    status: TaskStatus
    type: TaskType
    priority: TaskPriority
    progress: int
    tags: List[str]
    category: Optional[str] = None
    due_date: Optional[str] = None
    created_by: Optional[UserSummaryResponse] = None
    assigned_to: Optional[UserSummaryResponse] = None
    subtasks: List[SubtaskResponse]
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


def _optional_user_id(raw: Optional[str]) -> Optional[UserId]:
    return UserId.parse(raw) if raw else None


def create_task_router(server_state, get_current_user):
    """Create task router with server_state dependency.

    Args:
        server_state: ServerState instance with task_service
        get_current_user: Dependency resolving the authenticated principal

    Returns:
        APIRouter: Configured router with task and subtask endpoints
    """
    router = APIRouter(prefix="/api/tasks", tags=["tasks"])

    @router.get("", response_model=List[TaskResponse])
    def list_tasks(
        status: Optional[TaskStatus] = Query(default=None),
        priority: Optional[TaskPriority] = Query(default=None),
        category: Optional[str] = Query(default=None),
        search: Optional[str] = Query(default=None),
        current_user: User = Depends(get_current_user),
    ):
        """List tasks created by the current user, newest first."""
        task_filter = TaskFilter(status=status, priority=priority, category=category, search=search)
        return server_state.task_service.list_tasks(current_user.id, task_filter)

    @router.post("", response_model=TaskResponse, status_code=201)
    def create_task(request: CreateTaskRequest, current_user: User = Depends(get_current_user)):
        draft = TaskDraft(
            title=request.title,
            description=request.description,
            status=request.status,
            task_type=request.task_type,
            priority=request.priority,
            tags=tuple(request.tags),
            category=request.category,
            due_date=request.due_date,
            assignee_id=_optional_user_id(request.assignee_id),
            subtasks=tuple(request.subtasks),
        )
        return server_state.task_service.create_task(current_user.id, draft)

    @router.get("/{task_id}", response_model=TaskResponse)
    def get_task(task_id: str, current_user: User = Depends(get_current_user)):
        return server_state.task_service.get_task(current_user.id, TaskId.parse(task_id))

    @router.put("/{task_id}", response_model=TaskResponse)
    def update_task(task_id: str, request: UpdateTaskRequest, current_user: User = Depends(get_current_user)):
        parsed_task_id = TaskId.parse(task_id)
        provided = request.model_fields_set
        update = TaskFieldsUpdate(
            **{name: getattr(request, name) for name in provided if name != "assignee_id"},
            assignee_id=_optional_user_id(request.assignee_id) if "assignee_id" in provided else UNSET,
        )
        return server_state.task_service.update_task(current_user.id, parsed_task_id, update)

    @router.delete("/{task_id}", status_code=204)
    def delete_task(task_id: str, current_user: User = Depends(get_current_user)):
        server_state.task_service.delete_task(current_user.id, TaskId.parse(task_id))
        return Response(status_code=204)

    @router.post("/{task_id}/subtasks", response_model=TaskResponse, status_code=201)
    def add_subtask(task_id: str, request: CreateSubtaskRequest, current_user: User = Depends(get_current_user)):
        return server_state.task_service.add_subtask(current_user.id, TaskId.parse(task_id), request.text)

    @router.put("/{task_id}/subtasks/{subtask_id}", response_model=TaskResponse)
    def update_subtask(
        task_id: str,
        subtask_id: str,
        request: UpdateSubtaskRequest,
        current_user: User = Depends(get_current_user),
    ):
        provided = request.model_fields_set
        update = SubtaskUpdate(
            text=request.text if "text" in provided else UNSET,
            completed=request.completed if "completed" in provided else UNSET,
        )
        return server_state.task_service.update_subtask(
            current_user.id,
            TaskId.parse(task_id),
            SubtaskId.parse(subtask_id),
            update,
        )

    @router.delete("/{task_id}/subtasks/{subtask_id}", response_model=TaskResponse)
    def delete_subtask(task_id: str, subtask_id: str, current_user: User = Depends(get_current_user)):
        return server_state.task_service.delete_subtask(
            current_user.id,
            TaskId.parse(task_id),
            SubtaskId.parse(subtask_id),
        )

    return router
