from typing import Any, Mapping, Optional, Union
from sqlalchemy.orm import Session
import logging

from domain.food_query import build_food_query
from domain.models import Food
from domain.pagination import PageResult, paginate
from domain.schemas.catalog_schemas import FoodSave
from domain.schemas.food_filter_schemas import FoodFilters, validate_food_filters
from repositories import CategoryRepository, FoodRepository, ServingUnitRepository
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("nutritrack.foods")

FOOD_NUTRIENTS = ("calories", "protein", "carbohydrates", "fat", "fiber", "sugar")


class FoodService:
    """Business logic for the food catalog"""

    @staticmethod
    def get_foods(
        db: Session, filters: Union[Mapping[str, Any], FoodFilters, None]
    ) -> PageResult[Food]:
        """
        List foods matching a filter payload.

        The payload is validated first (every bad field is reported together),
        then built into a query description, then counted and paged.

        Raises:
            ServiceValidationError: If the filter payload is invalid
        """
        validated = validate_food_filters(filters)
        spec = build_food_query(validated)
        total, rows = FoodRepository(db).find_page(spec)
        logger.debug(
            f"foods_listed total={total} page={validated.page} "
            f"page_size={validated.page_size} predicates={len(spec.where)}"
        )
        return paginate(rows, total, validated.page, validated.page_size)

    @staticmethod
    def get_food(db: Session, food_id: int) -> Food:
        food = FoodRepository(db).get_by_id(food_id)
        if food is None:
            logger.warning(f"food_not_found id={food_id}")
            raise NotFoundError(f"Food with id {food_id} not found")
        return food

    @staticmethod
    def _check_references(db: Session, data: FoodSave) -> None:
        """Fail with one error per dangling category/serving unit reference"""
        problems = []
        if data.category_id is not None:
            if CategoryRepository(db).get_by_id(data.category_id) is None:
                problems.append(
                    {
                        "field": "category_id",
                        "constraint": "reference",
                        "message": f"Category {data.category_id} does not exist",
                    }
                )

        wanted = [u.serving_unit_id for u in data.food_serving_units]
        found = {u.id for u in ServingUnitRepository(db).get_many(wanted)}
        for index, unit_id in enumerate(wanted):
            if unit_id not in found:
                problems.append(
                    {
                        "field": f"food_serving_units.{index}.serving_unit_id",
                        "constraint": "reference",
                        "message": f"Serving unit {unit_id} does not exist",
                    }
                )

        if problems:
            raise ServiceValidationError("Invalid food references", details=problems)

    @staticmethod
    def save_food(db: Session, data: FoodSave, food_id: Optional[int] = None) -> Food:
        """
        Create a food, or update one when ``food_id`` is given.

        The food row and its full set of serving units are written in one
        transaction. On update the existing serving units are deleted and the
        submitted list is inserted in their place.

        Raises:
            NotFoundError: If updating a food that does not exist
            ServiceValidationError: If a category or serving unit is unknown
        """
        repo = FoodRepository(db)
        if food_id is not None:
            food = FoodService.get_food(db, food_id)
        else:
            food = Food()

        FoodService._check_references(db, data)

        try:
            food.name = data.name.strip()
            for attribute in FOOD_NUTRIENTS:
                setattr(food, attribute, getattr(data, attribute))
            food.category_id = data.category_id

            if food_id is None:
                db.add(food)
            db.flush()

            repo.replace_serving_units(
                food,
                [(u.serving_unit_id, u.grams) for u in data.food_serving_units],
            )
            db.commit()
        except Exception:
            db.rollback()
            logger.exception(f"food_save_failed id={food_id}")
            raise

        logger.info(
            f"food_saved id={food.id} action={'update' if food_id else 'create'} "
            f"serving_units={len(data.food_serving_units)}"
        )
        return repo.get_by_id(food.id)

    @staticmethod
    def delete_food(db: Session, food_id: int) -> None:
        """Delete a food and its serving unit rows in one transaction"""
        repo = FoodRepository(db)
        food = FoodService.get_food(db, food_id)
        try:
            repo.delete_serving_units(food_id)
            db.expire(food, ["food_serving_units"])
            db.delete(food)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"food_deleted id={food_id}")
