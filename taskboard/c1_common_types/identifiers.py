"""Typed identifiers for Taskboard entities.

Ids of different entity kinds never compare equal, even when they wrap the
same UUID, and an id never compares equal to its string form. Ids of one
kind are ordered by UUID so the ORM can sort primary keys in a flush.
"""

import uuid
from dataclasses import dataclass
from typing import Type, TypeVar

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

from taskboard.c1_errors.errors import ValidationFailed

IdT = TypeVar("IdT", bound="EntityId")


@dataclass(frozen=True, order=True)
class EntityId:
    """Base identifier wrapping a UUID."""

    value: uuid.UUID

    label = "id"

    def __post_init__(self):
        if not isinstance(self.value, uuid.UUID):
            raise TypeError(f"{type(self).__name__} requires a UUID, got {type(self.value).__name__}")

    @classmethod
    def new(cls: Type[IdT]) -> IdT:
        return cls(uuid.uuid4())

    @classmethod
    def parse(cls: Type[IdT], raw: str) -> IdT:
        """Parse a caller-supplied string, raising ValidationFailed if malformed."""
        try:
            return cls(uuid.UUID(str(raw)))
        except (ValueError, TypeError, AttributeError):
            raise ValidationFailed(f"Invalid {cls.label}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class UserId(EntityId):
    label = "user ID"


@dataclass(frozen=True, order=True)
class TaskId(EntityId):
    label = "task ID"


@dataclass(frozen=True, order=True)
class SubtaskId(EntityId):
    label = "subtask ID"


class IdType(TypeDecorator):
    """Stores an EntityId subclass as its canonical UUID string."""

    impl = String(36)
    cache_ok = True

    def __init__(self, id_class: Type[EntityId], *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.id_class = id_class

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, self.id_class):
            raise TypeError(f"Expected {self.id_class.__name__}, got {type(value).__name__}")
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return self.id_class(uuid.UUID(value))
