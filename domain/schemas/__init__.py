"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.validation import to_field_errors, parse_or_raise
from domain.schemas.food_filter_schemas import (
    FoodFilters,
    FOOD_FILTERS_UI_DEFAULTS,
    validate_food_filters,
)
from domain.schemas.catalog_schemas import (
    CategoryCreate,
    CategoryResponse,
    ServingUnitCreate,
    ServingUnitResponse,
    FoodServingUnitInput,
    FoodSave,
    FoodServingUnitResponse,
    FoodResponse,
    FoodPageResponse,
)
from domain.schemas.meal_schemas import (
    MealFoodInput,
    MealSave,
    MealFoodResponse,
    MealResponse,
    NutritionTotals,
    DailyNutritionResponse,
)
from domain.schemas.auth_schemas import (
    SignUpRequest,
    SignInRequest,
    UserResponse,
    TokenResponse,
)

__all__ = [
    # Validation helpers
    "to_field_errors",
    "parse_or_raise",
    # Filters
    "FoodFilters",
    "FOOD_FILTERS_UI_DEFAULTS",
    "validate_food_filters",
    # Catalog
    "CategoryCreate",
    "CategoryResponse",
    "ServingUnitCreate",
    "ServingUnitResponse",
    "FoodServingUnitInput",
    "FoodSave",
    "FoodServingUnitResponse",
    "FoodResponse",
    "FoodPageResponse",
    # Meals
    "MealFoodInput",
    "MealSave",
    "MealFoodResponse",
    "MealResponse",
    "NutritionTotals",
    "DailyNutritionResponse",
    # Auth
    "SignUpRequest",
    "SignInRequest",
    "UserResponse",
    "TokenResponse",
]
