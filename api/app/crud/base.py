"""Base CRUD operations for database models"""

import logging
from typing import Any, Generic, TypeVar

from pydantic import BaseModel as SchemaModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import BaseModel

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=SchemaModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=SchemaModel)


class BaseCRUD(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Base CRUD class for common database operations.

    Writes commit by default. Pass ``commit=False`` to only flush, leaving the
    row inside a transaction the caller commits or rolls back as a unit.
    """

    def __init__(self, model: type[ModelType]):
        """Store the SQLAlchemy model class for CRUD operations."""
        self.model = model

    def _finish(self, db: Session, commit: bool) -> None:
        if commit:
            db.commit()
        else:
            db.flush()

    def get(self, db: Session, id: Any) -> ModelType | None:
        """Get a single record by ID"""
        try:
            return db.query(self.model).filter(self.model.id == id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error getting {self.model.__name__} with id {id}: {e}")
            raise

    def create(
        self,
        db: Session,
        obj_in: CreateSchemaType | dict[str, Any],
        commit: bool = True,
    ) -> ModelType:
        """Create a new record"""
        try:
            if isinstance(obj_in, dict):
                obj_data = obj_in
            else:
                obj_data = obj_in.model_dump(exclude_unset=True)

            db_obj = self.model(**obj_data)
            db.add(db_obj)
            self._finish(db, commit)
            db.refresh(db_obj)
            return db_obj
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating {self.model.__name__}: {e}")
            raise

    def update(
        self,
        db: Session,
        db_obj: ModelType,
        obj_in: UpdateSchemaType | dict[str, Any],
        commit: bool = True,
    ) -> ModelType:
        """Update an existing record"""
        try:
            if isinstance(obj_in, dict):
                obj_data = obj_in
            else:
                obj_data = obj_in.model_dump(exclude_unset=True)

            for key, value in obj_data.items():
                if hasattr(db_obj, key):
                    setattr(db_obj, key, value)

            db.add(db_obj)
            self._finish(db, commit)
            db.refresh(db_obj)
            return db_obj
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating {self.model.__name__}: {e}")
            raise

    def delete(self, db: Session, id: Any, commit: bool = True) -> bool:
        """Delete a record by ID"""
        try:
            db_obj = db.query(self.model).filter(self.model.id == id).first()
            if db_obj:
                db.delete(db_obj)
                self._finish(db, commit)
                return True
            return False
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting {self.model.__name__} with id {id}: {e}")
            raise
