"""Explicit per-operation change sets for tasks and subtasks.

Each structure names exactly the fields its operation may change. Fields
left as UNSET are not touched; ``progress``, ``creator_id`` and the subtask
list are deliberately absent from every one of them.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from taskboard.c1_common_types.identifiers import UserId
from taskboard.c1_common_types.sentinels import UNSET
from taskboard.c1_task_enums.task_enums import TaskPriority, TaskStatus, TaskType


def _changes(update) -> Dict[str, Any]:
    values = {}
    for f in fields(update):
        value = getattr(update, f.name)
        if value is UNSET:
            continue
        values[f.name] = value.value if isinstance(value, Enum) else value
    return values


@dataclass(frozen=True)
class TaskDraft:
    """Everything a caller may supply when creating a task."""

    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.DRAFT
    task_type: TaskType = TaskType.MAIN
    priority: TaskPriority = TaskPriority.MEDIUM
    tags: Sequence[str] = ()
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    assignee_id: Optional[UserId] = None
    subtasks: Sequence[str] = ()  # Initial subtask texts


@dataclass(frozen=True)
class TaskFieldsUpdate:
    title: Any = UNSET
    description: Any = UNSET
    status: Any = UNSET
    task_type: Any = UNSET
    priority: Any = UNSET
    tags: Any = UNSET
    category: Any = UNSET
    due_date: Any = UNSET
    assignee_id: Any = UNSET

    def changes(self) -> Dict[str, Any]:
        return _changes(self)


@dataclass(frozen=True)
class SubtaskUpdate:
    text: Any = UNSET
    completed: Any = UNSET

    def changes(self) -> Dict[str, Any]:
        return _changes(self)


@dataclass(frozen=True)
class TaskFilter:
    """Optional filters for listing a creator's tasks."""

    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    category: Optional[str] = None
    search: Optional[str] = None
