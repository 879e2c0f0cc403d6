"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
    enable_sqlite_pragmas,
)
from domain.models.user import AppUser
from domain.models.food import Category, ServingUnit, Food, FoodServingUnit
from domain.models.meal import Meal, MealFood

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    "enable_sqlite_pragmas",
    # User models
    "AppUser",
    # Catalog models
    "Category",
    "ServingUnit",
    "Food",
    "FoodServingUnit",
    # Meal models
    "Meal",
    "MealFood",
]
