"""
Catalog Repositories - Data access for categories and serving units
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Category, ServingUnit


class CategoryRepository(BaseRepository[Category]):
    """Repository for food categories"""

    def __init__(self, db: Session):
        super().__init__(db, Category)

    def get_by_name(self, name: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.name == name).first()

    def list_by_name(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name, Category.id).all()


class ServingUnitRepository(BaseRepository[ServingUnit]):
    """Repository for serving units"""

    def __init__(self, db: Session):
        super().__init__(db, ServingUnit)

    def get_by_name(self, name: str) -> Optional[ServingUnit]:
        return self.db.query(ServingUnit).filter(ServingUnit.name == name).first()

    def get_many(self, ids: List[int]) -> List[ServingUnit]:
        if not ids:
            return []
        return self.db.query(ServingUnit).filter(ServingUnit.id.in_(ids)).all()
