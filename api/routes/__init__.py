"""API routes package"""

from . import auth, categories, serving_units, foods, meals, health

__all__ = ["auth", "categories", "serving_units", "foods", "meals", "health"]
