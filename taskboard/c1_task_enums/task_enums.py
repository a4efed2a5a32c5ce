"""Task Enums for Taskboard."""

from enum import Enum


class TaskStatus(str, Enum):
    """Workflow status of a task."""
    DRAFT = "Draft"
    IN_PROGRESS = "In Progress"
    EDITING = "Editing"
    DONE = "Done"


class TaskType(str, Enum):
    """Task tier."""
    MAIN = "Main Task"
    SECONDARY = "Secondary Task"
    TERTIARY = "Tertiary Task"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class TaskOperation(Enum):
    """Operations subject to the task authorization policy."""
    READ_TASK = "read_task"
    UPDATE_TASK_FIELDS = "update_task_fields"
    DELETE_TASK = "delete_task"
    CREATE_SUBTASK = "create_subtask"
    UPDATE_SUBTASK = "update_subtask"
    DELETE_SUBTASK = "delete_subtask"


def sql_in_list(enum_cls) -> str:
    """Render enum values as a SQL IN list for check constraints."""
    return ", ".join(f"'{member.value}'" for member in enum_cls)
