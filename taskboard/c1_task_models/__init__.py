"""Task models for Taskboard."""

from taskboard.c1_task_models.task import Task, Subtask
from taskboard.c1_task_models.task_store import TaskStore
from taskboard.c1_task_models.updates import TaskDraft, TaskFieldsUpdate, SubtaskUpdate, TaskFilter

__all__ = [
    "Task",
    "Subtask",
    "TaskStore",
    "TaskDraft",
    "TaskFieldsUpdate",
    "SubtaskUpdate",
    "TaskFilter",
]
