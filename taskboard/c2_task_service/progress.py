"""Completion percentage derived from a task's subtasks."""

from typing import Iterable


def recompute(subtasks: Iterable) -> int:
    """Percentage of ``subtasks`` marked completed, rounded half up.

    Returns 0 for an empty sequence. Integer arithmetic keeps exact halves
    exact: 1 of 8 completed is 12.5%, which rounds to 13.
    """
    total = 0
    completed = 0
    for subtask in subtasks:
        total += 1
        if subtask.completed:
            completed += 1
    if total == 0:
        return 0
    return (200 * completed + total) // (2 * total)
