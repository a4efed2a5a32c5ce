"""Generic lookup/insert/update/delete over a single mapped model."""

from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar, FrozenSet

from sqlalchemy.orm import Session

ModelT = TypeVar("ModelT")


class Repository(Generic[ModelT]):
    """Persistence operations by identifier and by field-equality filter.

    Subclasses set ``model`` and the ``updatable_fields`` that
    ``update_by_id`` may touch; anything else is rejected.
    """

    model: Type[ModelT]
    updatable_fields: FrozenSet[str] = frozenset()

    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, entity_id) -> Optional[ModelT]:
        return self.session.get(self.model, entity_id)

    def find_one(self, **filters: Any) -> Optional[ModelT]:
        return self.session.query(self.model).filter_by(**filters).first()

    def find(self, *criteria, order_by=None, **filters: Any) -> List[ModelT]:
        query = self.session.query(self.model)
        if filters:
            query = query.filter_by(**filters)
        if criteria:
            query = query.filter(*criteria)
        if order_by is not None:
            query = query.order_by(order_by)
        return query.all()

    def insert(self, record: ModelT) -> ModelT:
        self.session.add(record)
        self.session.flush()
        return record

    def update_by_id(self, entity_id, values: Mapping[str, Any]) -> Optional[ModelT]:
        unknown = set(values) - self.updatable_fields
        if unknown:
            raise ValueError(f"Fields not updatable on {self.model.__name__}: {sorted(unknown)}")

        record = self.find_by_id(entity_id)
        if record is None:
            return None
        for field_name, value in values.items():
            setattr(record, field_name, value)
        self.session.flush()
        return record

    def delete_by_id(self, entity_id) -> bool:
        record = self.find_by_id(entity_id)
        if record is None:
            return False
        self.session.delete(record)
        self.session.flush()
        return True
