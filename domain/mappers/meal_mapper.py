"""
Meal domain mappers.
Handles transformation between ORM models and DTOs for meal-related entities.
"""

from datetime import date
from typing import Iterable, Optional
from domain.models import Meal
from domain.nutrition import calculate_nutrition_total, calculate_total_calories
from domain.schemas.meal_schemas import (
    MealResponse,
    MealFoodResponse,
    DailyNutritionResponse,
)


class MealMapper:
    """Mapper for meal-related transformations."""

    @staticmethod
    def to_response(meal: Meal) -> MealResponse:
        """
        Convert Meal ORM model to MealResponse DTO.

        Args:
            meal: Meal ORM instance with line items, foods and units loaded

        Returns:
            MealResponse DTO including the meal's calorie badge value
        """
        return MealResponse(
            id=meal.id,
            user_id=meal.user_id,
            date_time=meal.date_time,
            meal_foods=[MealFoodResponse.model_validate(mf) for mf in meal.meal_foods],
            total_calories=calculate_total_calories(meal.meal_foods),
        )

    @staticmethod
    def to_daily_totals(
        meals: Iterable[Meal], day: Optional[date] = None
    ) -> DailyNutritionResponse:
        meals = list(meals)
        return DailyNutritionResponse(
            day=day,
            meal_count=len(meals),
            totals=calculate_nutrition_total(meals),
        )
