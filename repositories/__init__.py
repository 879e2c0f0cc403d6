"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository
from repositories.catalog_repository import CategoryRepository, ServingUnitRepository
from repositories.food_repository import FoodRepository
from repositories.meal_repository import MealRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "CategoryRepository",
    "ServingUnitRepository",
    "FoodRepository",
    "MealRepository",
]
