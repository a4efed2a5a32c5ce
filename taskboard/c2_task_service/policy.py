"""Who may do what to a task."""

import logging
from dataclasses import dataclass
from typing import Optional

from taskboard.c1_common_types.identifiers import UserId
from taskboard.c1_errors.errors import Forbidden
from taskboard.c1_task_enums.task_enums import TaskOperation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskAccess:
    """The stored ownership facts a decision depends on."""

    creator_id: UserId
    assignee_id: Optional[UserId] = None

    @classmethod
    def of(cls, task) -> "TaskAccess":
        return cls(creator_id=task.creator_id, assignee_id=task.assignee_id)


# Assignees may report progress but not reshape or destroy the task
CREATOR_ONLY = frozenset(
    {
        TaskOperation.UPDATE_TASK_FIELDS,
        TaskOperation.DELETE_TASK,
        TaskOperation.DELETE_SUBTASK,
    }
)
COLLABORATORS = frozenset(
    {
        TaskOperation.READ_TASK,
        TaskOperation.CREATE_SUBTASK,
        TaskOperation.UPDATE_SUBTASK,
    }
)


def permit(principal_id: UserId, access: TaskAccess, operation: TaskOperation) -> bool:
    is_creator = principal_id == access.creator_id
    if operation in CREATOR_ONLY:
        return is_creator
    if operation in COLLABORATORS:
        is_assignee = access.assignee_id is not None and principal_id == access.assignee_id
        return is_creator or is_assignee
    return False


def require(principal_id: UserId, access: TaskAccess, operation: TaskOperation, task_id=None) -> None:
    """Raise Forbidden unless ``permit`` allows the operation."""
    if not permit(principal_id, access, operation):
        logger.info(f"Denied {operation.value} on task {task_id} for user {principal_id}")
        raise Forbidden(f"Not authorized to {operation.value.replace('_', ' ')}")
