"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.food_mapper import FoodMapper
from domain.mappers.meal_mapper import MealMapper

__all__ = ["FoodMapper", "MealMapper"]
