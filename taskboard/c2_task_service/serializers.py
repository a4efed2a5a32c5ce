"""JSON-ready views of tasks, joined with the identities they reference."""

from datetime import datetime
from typing import Any, Dict, Optional

from taskboard.c1_task_models.task import Subtask, Task
from taskboard.c2_auth_service.serializers import user_summary


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def serialize_subtask(subtask: Subtask) -> Dict[str, Any]:
    return {
        "id": str(subtask.id),
        "text": subtask.text,
        "completed": subtask.completed,
        "author_id": str(subtask.author_id) if subtask.author_id else None,
        "created_at": _iso(subtask.created_at),
        "updated_at": _iso(subtask.updated_at),
    }


def serialize_task(task: Task) -> Dict[str, Any]:
    """Must be called while ``task`` is attached to its session."""
    return {
        "id": str(task.id),
        "title": task.title,
        "description": task.description,
        "status": task.status,
        "type": task.task_type,
        "priority": task.priority,
        "progress": task.progress,
        "tags": list(task.tags or []),
        "category": task.category,
        "due_date": _iso(task.due_date),
        "created_by": user_summary(task.creator),
        "assigned_to": user_summary(task.assignee),
        "subtasks": [serialize_subtask(s) for s in task.subtasks],
        "created_at": _iso(task.created_at),
        "updated_at": _iso(task.updated_at),
    }
