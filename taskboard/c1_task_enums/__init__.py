from taskboard.c1_task_enums.task_enums import TaskStatus, TaskType, TaskPriority, TaskOperation

__all__ = ["TaskStatus", "TaskType", "TaskPriority", "TaskOperation"]
