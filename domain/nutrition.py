"""
Nutrition aggregation over meal line items.

These are plain functions rather than a service class: they only read the
``amount`` of each line item and the nutrient columns of its ``food``, so they
work the same on ORM rows and on lightweight test objects.
"""

from typing import Any, Iterable

from domain.schemas.meal_schemas import NutritionTotals

# NutritionTotals field -> Food attribute
NUTRIENT_FIELDS = (
    ("calories", "calories"),
    ("protein", "protein"),
    ("carbs", "carbohydrates"),
    ("fat", "fat"),
    ("sugar", "sugar"),
    ("fiber", "fiber"),
)


def effective_amount(amount: Any) -> float:
    """Quantity multiplier of a line item.

    A missing or zero amount counts as one serving, so a line item can never
    contribute nothing.
    """
    return float(amount or 1)


def _nutrient(food: Any, attribute: str) -> float:
    return float(getattr(food, attribute, None) or 0)


def calculate_total_calories(meal_foods: Iterable[Any]) -> float:
    """Calories of a single meal's line items"""
    total = 0.0
    for meal_food in meal_foods:
        total += _nutrient(meal_food.food, "calories") * effective_amount(
            meal_food.amount
        )
    return total


def calculate_nutrition_total(meals: Iterable[Any]) -> NutritionTotals:
    """Sum every nutrient over all line items of all ``meals``"""
    totals = {name: 0.0 for name, _ in NUTRIENT_FIELDS}
    for meal in meals:
        for meal_food in meal.meal_foods:
            multiplier = effective_amount(meal_food.amount)
            for name, attribute in NUTRIENT_FIELDS:
                totals[name] += _nutrient(meal_food.food, attribute) * multiplier
    return NutritionTotals(**totals)
