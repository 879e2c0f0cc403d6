"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Generic, TypeVar, Optional, List, Type
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations.
    All repositories should inherit from this class.

    Write methods take ``commit``; pass ``commit=False`` to stage changes
    inside a larger unit of work that the caller commits or rolls back.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: int) -> Optional[ModelType]:
        """Get entity by integer primary key"""
        return self.db.get(self.model, entity_id)

    def get_all(self, skip: int = 0, limit: Optional[int] = None) -> List[ModelType]:
        """Get all entities ordered by id"""
        query = self.db.query(self.model).order_by(self.model.id).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        """Create new entity"""
        self.db.add(entity)
        if commit:
            self.db.commit()
            self.db.refresh(entity)
        else:
            self.db.flush()
        return entity

    def update(self, entity: ModelType, commit: bool = True) -> ModelType:
        """Update existing entity"""
        if commit:
            self.db.commit()
            self.db.refresh(entity)
        else:
            self.db.flush()
        return entity

    def delete(self, entity_id: int, commit: bool = True) -> bool:
        """Delete entity by ID"""
        entity = self.get_by_id(entity_id)
        if entity is None:
            return False
        self.db.delete(entity)
        if commit:
            self.db.commit()
        else:
            self.db.flush()
        return True

    def exists(self, entity_id: int) -> bool:
        """Check if entity exists"""
        return self.get_by_id(entity_id) is not None
