"""Persistence access for tasks."""

from typing import List

from sqlalchemy import func, or_

from taskboard.c1_common_types.identifiers import UserId
from taskboard.c1_database_session.repository import Repository
from taskboard.c1_task_models.task import Task
from taskboard.c1_task_models.updates import TaskFilter


class TaskStore(Repository[Task]):
    model = Task
    updatable_fields = frozenset(
        {
            "title",
            "description",
            "status",
            "task_type",
            "priority",
            "tags",
            "category",
            "due_date",
            "assignee_id",
            "progress",
            "updated_at",
        }
    )

    def find_created_by(self, creator_id: UserId, task_filter: TaskFilter) -> List[Task]:
        """Tasks created by ``creator_id`` matching the filter, newest first."""
        criteria = [Task.creator_id == creator_id]
        if task_filter.status is not None:
            criteria.append(Task.status == task_filter.status.value)
        if task_filter.priority is not None:
            criteria.append(Task.priority == task_filter.priority.value)
        if task_filter.category:
            criteria.append(Task.category == task_filter.category)
        if task_filter.search:
            needle = task_filter.search.lower()
            criteria.append(
                or_(
                    func.lower(Task.title).contains(needle, autoescape=True),
                    func.lower(Task.description).contains(needle, autoescape=True),
                )
            )
        return self.find(*criteria, order_by=Task.created_at.desc())
