"""
Account sign-up, sign-in and bearer token handling.
"""

from typing import Tuple
from sqlalchemy.orm import Session
from datetime import datetime, timedelta, timezone
import logging

import bcrypt
from jose import JWTError, jwt

from app.config import settings
from app.exceptions import ConflictError, UnauthorizedError
from domain.enums import Role
from domain.models import AppUser
from domain.schemas.auth_schemas import SignUpRequest, SignInRequest
from repositories import UserRepository

logger = logging.getLogger("nutritrack.auth")

WRONG_CREDENTIALS = "Wrong credentials or the user was not found."


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=10)).decode(
        "utf-8"
    )


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user: AppUser) -> Tuple[str, datetime]:
    expires_at = datetime.now(timezone.utc) + timedelta(
        minutes=settings.token_ttl_minutes
    )
    payload = {
        "sub": str(user.id),
        "role": user.role.value,
        "exp": expires_at,
    }
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return token, expires_at


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise UnauthorizedError("Invalid or expired token") from exc


class AuthService:
    """Business logic for accounts and sessions"""

    @staticmethod
    def sign_up(db: Session, data: SignUpRequest, role: Role = Role.USER) -> AppUser:
        """
        Register a new account.

        Raises:
            ConflictError: If the email is already registered
        """
        repo = UserRepository(db)
        if repo.get_by_email(data.email):
            raise ConflictError(f"User with email {data.email} already exists")

        user = repo.create_user(
            name=data.name.strip(),
            email=data.email,
            password_hash=hash_password(data.password),
            role=role,
        )
        logger.info(f"user_signed_up id={user.id} role={user.role.value}")
        return user

    @staticmethod
    def sign_in(db: Session, data: SignInRequest) -> Tuple[AppUser, str, datetime]:
        """
        Check credentials and issue a bearer token.

        Raises:
            UnauthorizedError: If the email is unknown or the password is wrong
        """
        user = UserRepository(db).get_by_email(data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            logger.warning("sign_in_failed")
            raise UnauthorizedError(WRONG_CREDENTIALS)

        token, expires_at = create_access_token(user)
        logger.info(f"user_signed_in id={user.id}")
        return user, token, expires_at

    @staticmethod
    def get_user_from_token(db: Session, token: str) -> AppUser:
        """Resolve the account a bearer token was issued to"""
        payload = decode_access_token(token)
        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            raise UnauthorizedError("Invalid token subject")

        user = UserRepository(db).get_by_id(user_id)
        if user is None:
            raise UnauthorizedError("User no longer exists")
        return user
