from pydantic import AfterValidator, BaseModel, Field, field_validator
from typing import Annotated, Optional, List

NUTRIENT_MAX = 9999.99


def at_most_two_decimals(v: float) -> float:
    if round(v, 2) != v:
        raise ValueError("Use at most 2 decimal places")
    return v


# 0 to 9999.99 with up to 2 decimals
Quantity = Annotated[float, Field(ge=0, le=NUTRIENT_MAX), AfterValidator(at_most_two_decimals)]


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name")
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class CategoryResponse(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class ServingUnitCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name")
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class ServingUnitResponse(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class FoodServingUnitInput(BaseModel):
    serving_unit_id: int = Field(..., gt=0)
    grams: Optional[Quantity] = None


class FoodSave(BaseModel):
    """Payload for creating or updating a food and its serving units"""

    name: str = Field(..., min_length=1, max_length=255)
    calories: Optional[Quantity] = None
    protein: Optional[Quantity] = None
    carbohydrates: Optional[Quantity] = None
    fat: Optional[Quantity] = None
    fiber: Optional[Quantity] = None
    sugar: Optional[Quantity] = None
    category_id: Optional[int] = Field(None, gt=0)
    food_serving_units: List[FoodServingUnitInput] = []

    @field_validator("name")
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("food_serving_units")
    def unique_serving_units(cls, v):
        ids = [u.serving_unit_id for u in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Each serving unit can only be specified once")
        return v


class FoodServingUnitResponse(BaseModel):
    id: int
    serving_unit_id: int
    grams: Optional[float]
    serving_unit: Optional[ServingUnitResponse] = None

    model_config = {"from_attributes": True}


class FoodResponse(BaseModel):
    id: int
    name: str
    calories: Optional[float]
    protein: Optional[float]
    carbohydrates: Optional[float]
    fat: Optional[float]
    fiber: Optional[float]
    sugar: Optional[float]
    category_id: Optional[int]
    food_serving_units: List[FoodServingUnitResponse] = []

    model_config = {"from_attributes": True}


class FoodPageResponse(BaseModel):
    """Page metadata returned by food listings"""

    data: List[FoodResponse]
    total: int
    page: int
    page_size: int
    total_pages: int

    model_config = {"from_attributes": True}
