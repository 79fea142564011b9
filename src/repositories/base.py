"""Base repository with common CRUD operations."""
from typing import TypeVar, Generic, Type, Optional, Dict, Any
from sqlalchemy.orm import Session
from uuid import UUID

from src.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common database operations."""

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    def create(self, obj_in: Dict[str, Any], commit: bool = True) -> ModelType:
        """
        Create new record.

        Args:
            obj_in: Dictionary with object data
            commit: Commit immediately; otherwise only flush so the caller
                owns the transaction

        Returns:
            Created model instance
        """
        db_obj = self.model(**obj_in)
        self.db.add(db_obj)
        if commit:
            self.db.commit()
            self.db.refresh(db_obj)
        else:
            self.db.flush()
        return db_obj

    def get(self, id: UUID) -> Optional[ModelType]:
        """
        Get record by ID.

        Args:
            id: Record UUID

        Returns:
            Model instance or None if not found
        """
        return self.db.query(self.model).filter(self.model.id == id).first()

    def get_by_fields(self, **filters: Any) -> Optional[ModelType]:
        """
        Get first record matching every column=value filter.

        Unknown column names are ignored.
        """
        query = self.db.query(self.model)
        for column, value in filters.items():
            if hasattr(self.model, column):
                query = query.filter(getattr(self.model, column) == value)
        return query.first()

    def delete_obj(self, db_obj: ModelType, commit: bool = True) -> None:
        """Hard delete an already loaded record."""
        self.db.delete(db_obj)
        if commit:
            self.db.commit()
        else:
            self.db.flush()

    def commit(self) -> None:
        """Commit current transaction."""
        self.db.commit()
