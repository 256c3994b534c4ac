from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, StoreError, ValidationError
from app.models.base import Base


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def driver_message(exc: Exception) -> str:
    return str(getattr(exc, "orig", None) or exc)


def apply_changes(entity: ModelT, changes: dict[str, Any]) -> ModelT:
    """Overwrite only the attributes present in `changes`; everything else is kept."""
    for field, value in changes.items():
        setattr(entity, field, value)
    return entity


class Repository(Generic[ModelT]):
    model: type[ModelT]
    label: str = "Record"

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[ModelT]:
        try:
            return self.db.query(self.model).order_by(self.model.id.asc()).all()
        except SQLAlchemyError as exc:
            raise StoreError(driver_message(exc)) from exc

    def get_by_id(self, entity_id: Any) -> ModelT:
        try:
            entity = self.db.query(self.model).filter(self.model.id == entity_id).first()
        except SQLAlchemyError as exc:
            raise StoreError(driver_message(exc)) from exc
        if entity is None:
            raise NotFoundError(f"{self.label} not found")
        return entity

    def create(self, fields: dict[str, Any]) -> ModelT:
        entity = self.model(**fields)
        self.db.add(entity)
        self._commit()
        self.db.refresh(entity)
        logger.info("Created %s %s", self.label.lower(), entity.id)
        return entity

    def update(self, entity_id: Any, changes: dict[str, Any]) -> ModelT:
        entity = self.get_by_id(entity_id)
        apply_changes(entity, changes)
        self._commit()
        self.db.refresh(entity)
        logger.info("Updated %s %s (%s)", self.label.lower(), entity_id, ", ".join(sorted(changes)) or "no fields")
        return entity

    def delete(self, entity_id: Any) -> int:
        # Deleting an id that does not exist is not an error.
        try:
            result = self.db.execute(delete(self.model).where(self.model.id == entity_id))
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(driver_message(exc)) from exc
        self._commit()
        logger.info("Deleted %s %s (%d row(s))", self.label.lower(), entity_id, result.rowcount)
        return result.rowcount

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ValidationError(driver_message(exc)) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(driver_message(exc)) from exc
