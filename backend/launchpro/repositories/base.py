from __future__ import annotations

from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar

from sqlalchemy.orm import Session

ModelT = TypeVar("ModelT")


class Repository(Generic[ModelT]):
    """CRUD over one mapped class, bound to the request's session.

    Writes are flushed, not committed; the caller owns the transaction.
    """

    model: Type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def get(self, entity_id: int) -> Optional[ModelT]:
        return self.db.get(self.model, entity_id)

    def list(self) -> List[ModelT]:
        return self.db.query(self.model).order_by(self.model.id).all()

    def add(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.flush()
        return entity

    def update(self, entity: ModelT, changes: Mapping[str, Any]) -> ModelT:
        for field, value in changes.items():
            setattr(entity, field, value)
        self.db.flush()
        return entity

    def delete(self, entity: ModelT) -> None:
        self.db.delete(entity)
        self.db.flush()
