"""
Meal Repository - Data access layer for logged meals
"""

from typing import List, Optional, Tuple
from datetime import datetime
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import Meal, MealFood


class MealRepository(BaseRepository[Meal]):
    """Repository for meals and their line items"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def _with_foods(self):
        return self.db.query(Meal).options(
            selectinload(Meal.meal_foods).selectinload(MealFood.food),
            selectinload(Meal.meal_foods).selectinload(MealFood.serving_unit),
        )

    def get_for_user(self, meal_id: int, user_id: int) -> Optional[Meal]:
        """Get a meal only if it belongs to the user"""
        return (
            self._with_foods()
            .filter(Meal.id == meal_id, Meal.user_id == user_id)
            .first()
        )

    def list_for_user(
        self, user_id: int, between: Optional[Tuple[datetime, datetime]] = None
    ) -> List[Meal]:
        """User's meals, newest first, optionally bounded by date_time"""
        query = self._with_foods().filter(Meal.user_id == user_id)
        if between is not None:
            start, end = between
            query = query.filter(Meal.date_time >= start, Meal.date_time <= end)
        return query.order_by(Meal.date_time.desc(), Meal.id.desc()).all()

    def replace_meal_foods(
        self, meal: Meal, items: List[Tuple[int, int, float]]
    ) -> None:
        """Delete all line items of ``meal`` and insert ``items``.

        Each item is ``(food_id, serving_unit_id, amount)``. Does not commit.
        """
        self.delete_meal_foods(meal.id)
        for food_id, serving_unit_id, amount in items:
            self.db.add(
                MealFood(
                    meal_id=meal.id,
                    food_id=food_id,
                    serving_unit_id=serving_unit_id,
                    amount=amount,
                )
            )
        self.db.flush()
        self.db.expire(meal, ["meal_foods"])

    def delete_meal_foods(self, meal_id: int) -> int:
        return (
            self.db.query(MealFood)
            .filter(MealFood.meal_id == meal_id)
            .delete()
        )
