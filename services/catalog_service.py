from typing import List
from sqlalchemy.orm import Session
import logging

from domain.models import Category, ServingUnit
from domain.schemas.catalog_schemas import CategoryCreate, ServingUnitCreate
from repositories import CategoryRepository, ServingUnitRepository
from app.exceptions import ConflictError, NotFoundError

logger = logging.getLogger("nutritrack.catalog")


class CategoryService:
    """Business logic for food categories"""

    @staticmethod
    def get_categories(db: Session) -> List[Category]:
        return CategoryRepository(db).list_by_name()

    @staticmethod
    def get_category(db: Session, category_id: int) -> Category:
        category = CategoryRepository(db).get_by_id(category_id)
        if category is None:
            logger.warning(f"category_not_found id={category_id}")
            raise NotFoundError(f"Category with id {category_id} not found")
        return category

    @staticmethod
    def create_category(db: Session, data: CategoryCreate) -> Category:
        repo = CategoryRepository(db)
        if repo.get_by_name(data.name):
            raise ConflictError(f"A category named '{data.name}' already exists")
        category = repo.create(Category(name=data.name))
        logger.info(f"category_created id={category.id} name={category.name}")
        return category

    @staticmethod
    def update_category(db: Session, category_id: int, data: CategoryCreate) -> Category:
        repo = CategoryRepository(db)
        category = CategoryService.get_category(db, category_id)
        existing = repo.get_by_name(data.name)
        if existing is not None and existing.id != category_id:
            raise ConflictError(f"A category named '{data.name}' already exists")
        category.name = data.name
        repo.update(category)
        logger.info(f"category_updated id={category_id}")
        return category

    @staticmethod
    def delete_category(db: Session, category_id: int) -> None:
        """Delete a category; its foods stay in the catalog without a category"""
        CategoryService.get_category(db, category_id)
        try:
            CategoryRepository(db).delete(category_id)
        except Exception:
            db.rollback()
            raise
        logger.info(f"category_deleted id={category_id}")


class ServingUnitService:
    """Business logic for serving units"""

    @staticmethod
    def get_serving_units(db: Session) -> List[ServingUnit]:
        return ServingUnitRepository(db).get_all()

    @staticmethod
    def get_serving_unit(db: Session, serving_unit_id: int) -> ServingUnit:
        unit = ServingUnitRepository(db).get_by_id(serving_unit_id)
        if unit is None:
            logger.warning(f"serving_unit_not_found id={serving_unit_id}")
            raise NotFoundError(f"Serving unit with id {serving_unit_id} not found")
        return unit

    @staticmethod
    def create_serving_unit(db: Session, data: ServingUnitCreate) -> ServingUnit:
        repo = ServingUnitRepository(db)
        if repo.get_by_name(data.name):
            raise ConflictError(f"A serving unit named '{data.name}' already exists")
        unit = repo.create(ServingUnit(name=data.name))
        logger.info(f"serving_unit_created id={unit.id} name={unit.name}")
        return unit

    @staticmethod
    def update_serving_unit(
        db: Session, serving_unit_id: int, data: ServingUnitCreate
    ) -> ServingUnit:
        repo = ServingUnitRepository(db)
        unit = ServingUnitService.get_serving_unit(db, serving_unit_id)
        existing = repo.get_by_name(data.name)
        if existing is not None and existing.id != serving_unit_id:
            raise ConflictError(f"A serving unit named '{data.name}' already exists")
        unit.name = data.name
        repo.update(unit)
        logger.info(f"serving_unit_updated id={serving_unit_id}")
        return unit

    @staticmethod
    def delete_serving_unit(db: Session, serving_unit_id: int) -> None:
        """Delete a serving unit.

        Units still referenced by foods or meals are rejected by the database;
        that IntegrityError propagates to the caller.
        """
        ServingUnitService.get_serving_unit(db, serving_unit_id)
        try:
            ServingUnitRepository(db).delete(serving_unit_id)
        except Exception:
            db.rollback()
            raise
        logger.info(f"serving_unit_deleted id={serving_unit_id}")
