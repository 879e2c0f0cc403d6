"""Meal log routes. Every meal belongs to the authenticated user."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from datetime import date
from typing import List, Optional

from api.dependencies import get_current_user, get_db
from domain.mappers import MealMapper
from domain.models import AppUser
from domain.schemas.meal_schemas import MealSave, MealResponse, DailyNutritionResponse
from services.meal_service import MealService

router = APIRouter(prefix="/meals", tags=["Meals"])
logger = logging.getLogger("nutritrack.api.meals")


@router.get("", response_model=List[MealResponse])
def get_meals(
    day: Optional[date] = Query(None, alias="date"),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the user's meals, optionally for a single day, newest first"""
    meals = MealService.get_meals(db, user, day)
    return [MealMapper.to_response(m) for m in meals]


@router.get("/totals", response_model=DailyNutritionResponse)
def get_meal_totals(
    day: Optional[date] = Query(None, alias="date"),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Summed calories, macros, sugar and fiber across the user's meals"""
    return MealService.get_nutrition_totals(db, user, day)


@router.get("/{meal_id}", response_model=MealResponse)
def get_meal(
    meal_id: int,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MealMapper.to_response(MealService.get_meal(db, user, meal_id))


@router.post("", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
def create_meal(
    payload: MealSave,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Log a meal; at least one line item is required"""
    return MealMapper.to_response(MealService.save_meal(db, user, payload))


@router.put("/{meal_id}", response_model=MealResponse)
def update_meal(
    meal_id: int,
    payload: MealSave,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update a meal; the submitted line items replace the stored ones"""
    meal = MealService.save_meal(db, user, payload, meal_id=meal_id)
    return MealMapper.to_response(meal)


@router.delete("/{meal_id}")
def delete_meal(
    meal_id: int,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    MealService.delete_meal(db, user, meal_id)
    return {"status": "ok", "deleted": meal_id}
