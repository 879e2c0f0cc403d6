"""Food category routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from typing import List

from api.dependencies import get_current_user, get_db, require_admin
from domain.schemas.catalog_schemas import CategoryCreate, CategoryResponse
from services.catalog_service import CategoryService

router = APIRouter(
    prefix="/categories", tags=["Categories"], dependencies=[Depends(get_current_user)]
)
logger = logging.getLogger("nutritrack.api.categories")


@router.get("", response_model=List[CategoryResponse])
def get_categories(db: Session = Depends(get_db)):
    """List all categories by name"""
    return [CategoryResponse.model_validate(c) for c in CategoryService.get_categories(db)]


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return CategoryResponse.model_validate(CategoryService.get_category(db, category_id))


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    """Create a category (admin only)"""
    return CategoryResponse.model_validate(CategoryService.create_category(db, payload))


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    dependencies=[Depends(require_admin)],
)
def update_category(
    category_id: int, payload: CategoryCreate, db: Session = Depends(get_db)
):
    """Rename a category (admin only)"""
    category = CategoryService.update_category(db, category_id, payload)
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", dependencies=[Depends(require_admin)])
def delete_category(category_id: int, db: Session = Depends(get_db)):
    """Delete a category; its foods lose their category (admin only)"""
    CategoryService.delete_category(db, category_id)
    return {"status": "ok", "deleted": category_id}
