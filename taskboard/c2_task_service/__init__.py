"""C2 Task Service - authorization policy, progress and task operations."""
from taskboard.c2_task_service.policy import TaskAccess, permit, require
from taskboard.c2_task_service.progress import recompute
from taskboard.c2_task_service.task_service import TaskService
__all__ = ["TaskAccess", "permit", "require", "recompute", "TaskService"]
