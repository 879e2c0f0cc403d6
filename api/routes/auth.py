"""Account routes: sign-up, sign-in and the current user"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_current_user, get_db
from domain.models import AppUser
from domain.schemas.auth_schemas import (
    SignUpRequest,
    SignInRequest,
    UserResponse,
    TokenResponse,
)
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("nutritrack.api.auth")


@router.post(
    "/sign-up", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
def sign_up(payload: SignUpRequest, db: Session = Depends(get_db)):
    """Register a new USER account"""
    user = AuthService.sign_up(db, payload)
    return UserResponse.model_validate(user)


@router.post("/sign-in", response_model=TokenResponse)
def sign_in(payload: SignInRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a bearer token"""
    user, token, expires_at = AuthService.sign_in(db, payload)
    return TokenResponse(
        access_token=token,
        expires_at=expires_at,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def me(user: AppUser = Depends(get_current_user)):
    """Return the authenticated account"""
    return UserResponse.model_validate(user)
