from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime, date

from domain.schemas.catalog_schemas import Quantity, ServingUnitResponse


class MealFoodInput(BaseModel):
    food_id: int = Field(..., gt=0)
    serving_unit_id: int = Field(..., gt=0)
    amount: Quantity


class MealSave(BaseModel):
    """Payload for creating or updating a meal.

    The owner is always the authenticated user, never a field of the payload.
    """

    date_time: datetime
    meal_foods: List[MealFoodInput] = []

    model_config = {"extra": "forbid"}


class MealFoodFood(BaseModel):
    id: int
    name: str
    calories: Optional[float]
    protein: Optional[float]
    carbohydrates: Optional[float]
    fat: Optional[float]
    fiber: Optional[float]
    sugar: Optional[float]

    model_config = {"from_attributes": True}


class MealFoodResponse(BaseModel):
    id: int
    food_id: int
    serving_unit_id: int
    amount: Optional[float]
    food: MealFoodFood
    serving_unit: Optional[ServingUnitResponse] = None

    model_config = {"from_attributes": True}


class MealResponse(BaseModel):
    id: int
    user_id: int
    date_time: datetime
    meal_foods: List[MealFoodResponse]
    total_calories: float = 0

    model_config = {"from_attributes": True}


class NutritionTotals(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    sugar: float = 0
    fiber: float = 0


class DailyNutritionResponse(BaseModel):
    day: Optional[date]
    meal_count: int
    totals: NutritionTotals
