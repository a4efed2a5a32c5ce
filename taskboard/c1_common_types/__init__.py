"""Shared value types for Taskboard."""

from taskboard.c1_common_types.identifiers import EntityId, UserId, TaskId, SubtaskId, IdType
from taskboard.c1_common_types.sentinels import UNSET

__all__ = ["EntityId", "UserId", "TaskId", "SubtaskId", "IdType", "UNSET"]
