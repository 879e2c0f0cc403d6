"""
Domain layer: ORM models, pydantic schemas, enums, and the pure
filter/query/paging/nutrition functions shared by services and routes.
"""

from domain import enums, models, schemas

__all__ = ["enums", "models", "schemas"]
