from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
import logging
from datetime import date, datetime, time, timezone

from domain.models import AppUser, Meal
from domain.mappers import MealMapper
from domain.schemas.meal_schemas import DailyNutritionResponse, MealSave
from repositories import FoodRepository, MealRepository, ServingUnitRepository
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("nutritrack.meals")


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """First and last instant of a calendar day"""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def to_naive_utc(value: datetime) -> datetime:
    """Meals are stored as naive timestamps; aware values are converted to UTC"""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class MealService:
    """Business logic for meals owned by a user"""

    @staticmethod
    def get_meals(db: Session, user: AppUser, day: Optional[date] = None) -> List[Meal]:
        """User's meals for ``day`` (all meals when omitted), newest first"""
        between = day_bounds(day) if day is not None else None
        return MealRepository(db).list_for_user(user.id, between)

    @staticmethod
    def get_meal(db: Session, user: AppUser, meal_id: int) -> Meal:
        """
        Get one of the user's meals.

        Meals owned by someone else are reported as missing.

        Raises:
            NotFoundError: If the meal does not exist or is not the user's
        """
        meal = MealRepository(db).get_for_user(meal_id, user.id)
        if meal is None:
            logger.warning(f"meal_not_found id={meal_id} user_id={user.id}")
            raise NotFoundError(f"Meal with id {meal_id} not found")
        return meal

    @staticmethod
    def _check_line_items(db: Session, data: MealSave, creating: bool) -> None:
        problems = []
        if creating and not data.meal_foods:
            problems.append(
                {
                    "field": "meal_foods",
                    "constraint": "length",
                    "message": "Add at least one item",
                }
            )

        food_ids = [mf.food_id for mf in data.meal_foods]
        unit_ids = [mf.serving_unit_id for mf in data.meal_foods]
        known_foods = {f.id for f in FoodRepository(db).get_many(food_ids)}
        known_units = {u.id for u in ServingUnitRepository(db).get_many(unit_ids)}

        for index, mf in enumerate(data.meal_foods):
            if mf.food_id not in known_foods:
                problems.append(
                    {
                        "field": f"meal_foods.{index}.food_id",
                        "constraint": "reference",
                        "message": f"Food {mf.food_id} does not exist",
                    }
                )
            if mf.serving_unit_id not in known_units:
                problems.append(
                    {
                        "field": f"meal_foods.{index}.serving_unit_id",
                        "constraint": "reference",
                        "message": f"Serving unit {mf.serving_unit_id} does not exist",
                    }
                )

        if problems:
            raise ServiceValidationError("Invalid meal", details=problems)

    @staticmethod
    def save_meal(
        db: Session, user: AppUser, data: MealSave, meal_id: Optional[int] = None
    ) -> Meal:
        """
        Create a meal, or update one of the user's meals when ``meal_id`` is given.

        Updating replaces the meal's entire line item list: existing items are
        deleted and the submitted ones inserted, in a single transaction.

        Raises:
            NotFoundError: If updating a meal the user does not own
            ServiceValidationError: If a new meal has no items or an item
                references an unknown food or serving unit
        """
        repo = MealRepository(db)
        creating = meal_id is None
        meal = Meal(user_id=user.id) if creating else MealService.get_meal(db, user, meal_id)

        MealService._check_line_items(db, data, creating)

        try:
            meal.date_time = to_naive_utc(data.date_time)
            if creating:
                db.add(meal)
            db.flush()

            repo.replace_meal_foods(
                meal,
                [(mf.food_id, mf.serving_unit_id, mf.amount) for mf in data.meal_foods],
            )
            db.commit()
        except Exception:
            db.rollback()
            logger.exception(f"meal_save_failed id={meal_id} user_id={user.id}")
            raise

        logger.info(
            f"meal_saved id={meal.id} user_id={user.id} "
            f"action={'create' if creating else 'update'} items={len(data.meal_foods)}"
        )
        return repo.get_for_user(meal.id, user.id)

    @staticmethod
    def delete_meal(db: Session, user: AppUser, meal_id: int) -> None:
        """Delete one of the user's meals and its line items in one transaction"""
        repo = MealRepository(db)
        meal = MealService.get_meal(db, user, meal_id)
        try:
            repo.delete_meal_foods(meal_id)
            db.expire(meal, ["meal_foods"])
            db.delete(meal)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"meal_deleted id={meal_id} user_id={user.id}")

    @staticmethod
    def get_nutrition_totals(
        db: Session, user: AppUser, day: Optional[date] = None
    ) -> DailyNutritionResponse:
        """Nutrient totals over the user's meals for ``day`` (all meals when omitted)"""
        meals = MealService.get_meals(db, user, day)
        return MealMapper.to_daily_totals(meals, day)
