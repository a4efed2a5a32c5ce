"""Task and subtask models for Taskboard."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship, validates

from taskboard.c1_common_types.identifiers import IdType, SubtaskId, TaskId, UserId
from taskboard.c1_database_session.base import Base, utcnow
from taskboard.c1_task_enums.task_enums import TaskPriority, TaskStatus, TaskType, sql_in_list


class Task(Base):
    """A unit of work owned by its creator and optionally delegated to one assignee."""

    __tablename__ = "tasks"

    id = Column(IdType(TaskId), primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    status = Column(
        String,
        CheckConstraint(f"status IN ({sql_in_list(TaskStatus)})"),
        default=TaskStatus.DRAFT.value,
        nullable=False,
    )
    task_type = Column(
        "type",
        String,
        CheckConstraint(f"type IN ({sql_in_list(TaskType)})"),
        default=TaskType.MAIN.value,
        nullable=False,
    )
    priority = Column(
        String,
        CheckConstraint(f"priority IN ({sql_in_list(TaskPriority)})"),
        default=TaskPriority.MEDIUM.value,
        nullable=False,
    )
    # Derived from subtasks; never written from caller input
    progress = Column(
        Integer,
        CheckConstraint("progress BETWEEN 0 AND 100"),
        default=0,
        nullable=False,
    )
    tags = Column(JSON, default=list)
    category = Column(String)
    due_date = Column(DateTime)
    creator_id = Column(IdType(UserId), ForeignKey("users.id"), nullable=False)
    assignee_id = Column(IdType(UserId), ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    creator = relationship("User", foreign_keys=[creator_id])
    assignee = relationship("User", foreign_keys=[assignee_id])
    subtasks = relationship(
        "Subtask",
        back_populates="task",
        order_by="Subtask.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("idx_tasks_creator_status", "creator_id", "status"),
        Index("idx_tasks_assignee_status", "assignee_id", "status"),
        Index("idx_tasks_created_at", "created_at"),
    )

    @validates("creator_id")
    def _validate_creator_id(self, key, value):
        if self.creator_id is not None and value != self.creator_id:
            raise ValueError("creator_id cannot be changed once set")
        return value


class Subtask(Base):
    """A checklist item owned by exactly one task."""

    __tablename__ = "subtasks"

    id = Column(IdType(SubtaskId), primary_key=True)
    task_id = Column(IdType(TaskId), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    text = Column(Text, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    author_id = Column(IdType(UserId), ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    task = relationship("Task", back_populates="subtasks")

    __table_args__ = (Index("idx_subtasks_task", "task_id", "position"),)
