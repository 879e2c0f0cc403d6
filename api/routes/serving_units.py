"""Serving unit routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from typing import List

from api.dependencies import get_current_user, get_db, require_admin
from domain.schemas.catalog_schemas import ServingUnitCreate, ServingUnitResponse
from services.catalog_service import ServingUnitService

router = APIRouter(
    prefix="/serving-units",
    tags=["Serving Units"],
    dependencies=[Depends(get_current_user)],
)
logger = logging.getLogger("nutritrack.api.serving_units")


@router.get("", response_model=List[ServingUnitResponse])
def get_serving_units(db: Session = Depends(get_db)):
    units = ServingUnitService.get_serving_units(db)
    return [ServingUnitResponse.model_validate(u) for u in units]


@router.get("/{serving_unit_id}", response_model=ServingUnitResponse)
def get_serving_unit(serving_unit_id: int, db: Session = Depends(get_db)):
    unit = ServingUnitService.get_serving_unit(db, serving_unit_id)
    return ServingUnitResponse.model_validate(unit)


@router.post(
    "",
    response_model=ServingUnitResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_serving_unit(payload: ServingUnitCreate, db: Session = Depends(get_db)):
    unit = ServingUnitService.create_serving_unit(db, payload)
    return ServingUnitResponse.model_validate(unit)


@router.put(
    "/{serving_unit_id}",
    response_model=ServingUnitResponse,
    dependencies=[Depends(require_admin)],
)
def update_serving_unit(
    serving_unit_id: int, payload: ServingUnitCreate, db: Session = Depends(get_db)
):
    unit = ServingUnitService.update_serving_unit(db, serving_unit_id, payload)
    return ServingUnitResponse.model_validate(unit)


@router.delete("/{serving_unit_id}", dependencies=[Depends(require_admin)])
def delete_serving_unit(serving_unit_id: int, db: Session = Depends(get_db)):
    """
    Delete a serving unit (admin only).

    Units still used by foods or logged meals are rejected with 409.
    """
    ServingUnitService.delete_serving_unit(db, serving_unit_id)
    return {"status": "ok", "deleted": serving_unit_id}
