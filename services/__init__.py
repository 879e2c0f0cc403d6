"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.catalog_service import CategoryService, ServingUnitService
from services.food_service import FoodService
from services.meal_service import MealService

__all__ = [
    "AuthService",
    "CategoryService",
    "ServingUnitService",
    "FoodService",
    "MealService",
]
