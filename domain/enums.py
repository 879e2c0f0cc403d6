"""
Domain enums for NutriTrack application.
Contains all enumeration types used across the domain models.
"""

import enum


class Role(str, enum.Enum):
    """Account roles"""

    ADMIN = "ADMIN"
    USER = "USER"


class FoodSortField(str, enum.Enum):
    """Columns a food listing can be sorted by"""

    NAME = "name"
    CALORIES = "calories"
    PROTEIN = "protein"
    CARBOHYDRATES = "carbohydrates"
    FAT = "fat"


class SortOrder(str, enum.Enum):
    """Sort direction"""

    ASC = "asc"
    DESC = "desc"

