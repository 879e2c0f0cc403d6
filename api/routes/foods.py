"""Food catalog routes"""

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from typing import Any, Dict, Optional

from api.dependencies import get_current_user, get_db, require_admin
from domain.mappers import FoodMapper
from domain.schemas.catalog_schemas import FoodSave, FoodResponse, FoodPageResponse
from services.food_service import FoodService

router = APIRouter(
    prefix="/foods", tags=["Foods"], dependencies=[Depends(get_current_user)]
)
logger = logging.getLogger("nutritrack.api.foods")


def _range(low: Optional[str], high: Optional[str]):
    if low is None and high is None:
        return None
    return [low or "", high or ""]


@router.get("", response_model=FoodPageResponse)
def get_foods(
    search_term: Optional[str] = Query(None, alias="searchTerm"),
    calories_min: Optional[str] = Query(None, alias="caloriesMin"),
    calories_max: Optional[str] = Query(None, alias="caloriesMax"),
    protein_min: Optional[str] = Query(None, alias="proteinMin"),
    protein_max: Optional[str] = Query(None, alias="proteinMax"),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    db: Session = Depends(get_db),
):
    """
    Filtered, sorted and paged food listing.

    Query values are passed to the filter validator as-is, so malformed
    values come back as a 400 listing every offending field.
    """
    payload = {
        "searchTerm": search_term,
        "caloriesRange": _range(calories_min, calories_max),
        "proteinRange": _range(protein_min, protein_max),
        "categoryId": category_id,
        "sortBy": sort_by,
        "sortOrder": sort_order,
        "page": page,
        "pageSize": page_size,
    }
    return FoodMapper.to_page_response(FoodService.get_foods(db, payload))


@router.post("/search", response_model=FoodPageResponse)
def search_foods(
    filters: Optional[Dict[str, Any]] = Body(None), db: Session = Depends(get_db)
):
    """Same listing as GET /foods with the filter object sent as JSON"""
    return FoodMapper.to_page_response(FoodService.get_foods(db, filters))


@router.get("/{food_id}", response_model=FoodResponse)
def get_food(food_id: int, db: Session = Depends(get_db)):
    return FoodResponse.model_validate(FoodService.get_food(db, food_id))


@router.post(
    "",
    response_model=FoodResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_food(payload: FoodSave, db: Session = Depends(get_db)):
    """Create a food with its serving units (admin only)"""
    return FoodResponse.model_validate(FoodService.save_food(db, payload))


@router.put(
    "/{food_id}", response_model=FoodResponse, dependencies=[Depends(require_admin)]
)
def update_food(food_id: int, payload: FoodSave, db: Session = Depends(get_db)):
    """Update a food; the submitted serving units replace the stored ones"""
    food = FoodService.save_food(db, payload, food_id=food_id)
    return FoodResponse.model_validate(food)


@router.delete("/{food_id}", dependencies=[Depends(require_admin)])
def delete_food(food_id: int, db: Session = Depends(get_db)):
    """Delete a food and its serving units (admin only)"""
    FoodService.delete_food(db, food_id)
    return {"status": "ok", "deleted": food_id}
