"""
Food domain mappers.
"""

from domain.models import Food
from domain.pagination import PageResult
from domain.schemas.catalog_schemas import FoodResponse, FoodPageResponse


class FoodMapper:
    """Mapper for food catalog transformations."""

    @staticmethod
    def to_page_response(page: PageResult[Food]) -> FoodPageResponse:
        return FoodPageResponse(
            data=[FoodResponse.model_validate(f) for f in page.data],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )
