"""Service layer for task and subtask operations."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from taskboard.c1_common_types.identifiers import SubtaskId, TaskId, UserId
from taskboard.c1_database_session.base import utcnow
from taskboard.c1_database_session.database_manager import DatabaseManager
from taskboard.c1_errors.errors import NotFound, ValidationFailed
from taskboard.c1_task_enums.task_enums import TaskOperation
from taskboard.c1_task_models.task import Subtask, Task
from taskboard.c1_task_models.task_store import TaskStore
from taskboard.c1_task_models.updates import SubtaskUpdate, TaskDraft, TaskFieldsUpdate, TaskFilter
from taskboard.c1_user_models.user_store import UserStore
from taskboard.c2_task_service.policy import TaskAccess, require
from taskboard.c2_task_service.progress import recompute
from taskboard.c2_task_service.serializers import serialize_task

logger = logging.getLogger(__name__)

# Fields a task must always have a value for
_REQUIRED_FIELDS = ("title", "status", "task_type", "priority", "tags")


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Trimmed, non-empty, de-duplicated tags in first-seen order."""
    seen = []
    for tag in tags or ():
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def normalize_due_date(value: Optional[datetime]) -> Optional[datetime]:
    """Store due dates as naive UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _clean_text(text: Optional[str], what: str) -> str:
    if text is None or not text.strip():
        raise ValidationFailed(f"{what} cannot be empty")
    return text.strip()


class TaskService:
    """Runs every task operation as one read-modify-write.

    Each operation resolves the task (NotFound), checks the authorization
    policy (Forbidden), applies the change, recomputes progress when the
    subtask list changed, persists, and returns the refreshed task joined
    with its creator and assignee.
    """

    def __init__(self, db_manager: DatabaseManager, clock: Optional[Callable[[], datetime]] = None):
        self.db_manager = db_manager
        self._clock = clock or utcnow

    def _load(self, store: TaskStore, principal_id: UserId, task_id: TaskId, operation: TaskOperation) -> Task:
        task = store.find_by_id(task_id)
        if task is None:
            raise NotFound("Task not found")
        require(principal_id, TaskAccess.of(task), operation, task_id=task_id)
        return task

    @staticmethod
    def _check_assignee(session: Session, assignee_id: Optional[UserId]) -> None:
        if assignee_id is not None and UserStore(session).find_by_id(assignee_id) is None:
            raise ValidationFailed("Assignee does not exist")

    @staticmethod
    def _find_subtask(task: Task, subtask_id: SubtaskId) -> Subtask:
        for subtask in task.subtasks:
            if subtask.id == subtask_id:
                return subtask
        raise NotFound("Subtask not found")

    def _new_subtask(self, text: str, author_id: UserId, now: datetime) -> Subtask:
        return Subtask(
            id=SubtaskId.new(),
            text=_clean_text(text, "Subtask text"),
            completed=False,
            author_id=author_id,
            created_at=now,
            updated_at=now,
        )

    def _persist_subtask_change(self, store: TaskStore, task: Task, now: datetime) -> Task:
        return store.update_by_id(task.id, {"progress": recompute(task.subtasks), "updated_at": now})

    def create_task(self, principal_id: UserId, draft: TaskDraft) -> Dict[str, Any]:
        """Create a task owned by ``principal_id``."""
        now = self._clock()
        with self.db_manager.session_scope() as session:
            self._check_assignee(session, draft.assignee_id)

            task = Task(
                id=TaskId.new(),
                title=_clean_text(draft.title, "Title"),
                description=draft.description,
                status=draft.status.value,
                task_type=draft.task_type.value,
                priority=draft.priority.value,
                tags=normalize_tags(draft.tags),
                category=draft.category,
                due_date=normalize_due_date(draft.due_date),
                creator_id=principal_id,
                assignee_id=draft.assignee_id,
                created_at=now,
                updated_at=now,
            )
            for text in draft.subtasks:
                task.subtasks.append(self._new_subtask(text, principal_id, now))
            task.progress = recompute(task.subtasks)

            TaskStore(session).insert(task)
            logger.info(f"User {principal_id} created task {task.id}")
            return serialize_task(task)

    def get_task(self, principal_id: UserId, task_id: TaskId) -> Dict[str, Any]:
        with self.db_manager.session_scope() as session:
            task = self._load(TaskStore(session), principal_id, task_id, TaskOperation.READ_TASK)
            return serialize_task(task)

    def list_tasks(self, principal_id: UserId, task_filter: Optional[TaskFilter] = None) -> List[Dict[str, Any]]:
        """Tasks created by ``principal_id``, newest first."""
        with self.db_manager.session_scope() as session:
            tasks = TaskStore(session).find_created_by(principal_id, task_filter or TaskFilter())
            return [serialize_task(task) for task in tasks]

    def update_task(self, principal_id: UserId, task_id: TaskId, update: TaskFieldsUpdate) -> Dict[str, Any]:
        """Change task fields. Only the creator may do this."""
        changes = update.changes()
        for field_name in _REQUIRED_FIELDS:
            if field_name in changes and changes[field_name] is None:
                raise ValidationFailed(f"{field_name} cannot be null")

        with self.db_manager.session_scope() as session:
            store = TaskStore(session)
            task = self._load(store, principal_id, task_id, TaskOperation.UPDATE_TASK_FIELDS)

            if "title" in changes:
                changes["title"] = _clean_text(changes["title"], "Title")
            if "tags" in changes:
                changes["tags"] = normalize_tags(changes["tags"])
            if "due_date" in changes:
                changes["due_date"] = normalize_due_date(changes["due_date"])
            if "assignee_id" in changes:
                self._check_assignee(session, changes["assignee_id"])

            changes["updated_at"] = self._clock()
            task = store.update_by_id(task.id, changes)
            logger.info(f"User {principal_id} updated task {task_id}: {sorted(update.changes())}")
            return serialize_task(task)

    def delete_task(self, principal_id: UserId, task_id: TaskId) -> None:
        with self.db_manager.session_scope() as session:
            store = TaskStore(session)
            task = self._load(store, principal_id, task_id, TaskOperation.DELETE_TASK)
            store.delete_by_id(task.id)
        logger.info(f"User {principal_id} deleted task {task_id}")

    def add_subtask(self, principal_id: UserId, task_id: TaskId, text: str) -> Dict[str, Any]:
        now = self._clock()
        with self.db_manager.session_scope() as session:
            store = TaskStore(session)
            task = self._load(store, principal_id, task_id, TaskOperation.CREATE_SUBTASK)
            task.subtasks.append(self._new_subtask(text, principal_id, now))
            task = self._persist_subtask_change(store, task, now)
            return serialize_task(task)

    def update_subtask(
        self,
        principal_id: UserId,
        task_id: TaskId,
        subtask_id: SubtaskId,
        update: SubtaskUpdate,
    ) -> Dict[str, Any]:
        now = self._clock()
        changes = update.changes()
        with self.db_manager.session_scope() as session:
            store = TaskStore(session)
            task = self._load(store, principal_id, task_id, TaskOperation.UPDATE_SUBTASK)
            subtask = self._find_subtask(task, subtask_id)

            if "text" in changes:
                subtask.text = _clean_text(changes["text"], "Subtask text")
            if "completed" in changes:
                if not isinstance(changes["completed"], bool):
                    raise ValidationFailed("completed must be a boolean")
                subtask.completed = changes["completed"]
            subtask.updated_at = now

            task = self._persist_subtask_change(store, task, now)
            return serialize_task(task)

    def delete_subtask(self, principal_id: UserId, task_id: TaskId, subtask_id: SubtaskId) -> Dict[str, Any]:
        now = self._clock()
        with self.db_manager.session_scope() as session:
            store = TaskStore(session)
            task = self._load(store, principal_id, task_id, TaskOperation.DELETE_SUBTASK)
            task.subtasks.remove(self._find_subtask(task, subtask_id))
            task = self._persist_subtask_change(store, task, now)
            return serialize_task(task)
