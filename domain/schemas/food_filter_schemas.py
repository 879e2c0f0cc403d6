"""
Food listing filters: search text, nutrient ranges, category, sort and paging.
"""

from typing import Annotated, Any, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from app.config import settings
from domain.enums import FoodSortField, SortOrder
from domain.schemas.validation import parse_or_raise

# Empty, 0, 0.xx, or a 1-4 digit integer with up to 2 decimals (max 9999.99)
ZERO_TO_9999 = r"^(|0|0\.\d{0,2}|[1-9]\d{0,3}(\.\d{0,2})?)$"

RangeBound = Annotated[str, StringConstraints(pattern=ZERO_TO_9999)]


class FoodFilters(BaseModel):
    """Validated, fully defaulted food filter record.

    Accepts camelCase keys (``searchTerm``, ``pageSize``) as sent by clients
    and snake_case keys as used internally. The record is immutable so a
    normalized filter can be shared between the count and page queries.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    search_term: str = ""
    calories_range: Tuple[RangeBound, RangeBound] = ("", "")
    protein_range: Tuple[RangeBound, RangeBound] = ("", "")
    category_id: str = ""
    sort_by: FoodSortField = FoodSortField.NAME
    sort_order: SortOrder = SortOrder.ASC
    page: int = Field(default=1, gt=0)
    page_size: int = Field(
        default_factory=lambda: settings.default_page_size,
        gt=0,
        le=settings.max_page_size,
    )


# Preset used by the admin food listing screen
FOOD_FILTERS_UI_DEFAULTS = {
    "searchTerm": "",
    "caloriesRange": ["0", "9999"],
    "proteinRange": ["0", "9999"],
    "categoryId": "",
    "sortBy": "name",
    "sortOrder": "desc",
    "pageSize": 12,
    "page": 1,
}


def validate_food_filters(
    payload: Union[Mapping[str, Any], FoodFilters, None],
) -> FoodFilters:
    """Normalize a loosely typed filter payload.

    ``None`` values count as absent and receive the documented default.
    Out-of-range values fail; ``pageSize`` above the maximum is never clamped.

    Raises:
        ServiceValidationError: listing every field that failed validation
    """
    if payload is None:
        payload = {}
    elif isinstance(payload, FoodFilters):
        payload = payload.model_dump(by_alias=True, mode="json")
    elif not isinstance(payload, Mapping):
        return parse_or_raise(FoodFilters, payload, message="Invalid food filters")

    cleaned = {k: v for k, v in payload.items() if v is not None}
    return parse_or_raise(FoodFilters, cleaned, message="Invalid food filters")
