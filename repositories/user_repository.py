"""
User Repository - Data access layer for user accounts
"""

from typing import Optional
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.enums import Role
from domain.models import AppUser


class UserRepository(BaseRepository[AppUser]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, AppUser)

    def get_by_email(self, email: str) -> Optional[AppUser]:
        """Get user by email (stored lower-cased)"""
        return (
            self.db.query(AppUser)
            .filter(AppUser.email == email.strip().lower())
            .first()
        )

    def create_user(
        self, name: str, email: str, password_hash: str, role: Role = Role.USER
    ) -> AppUser:
        """Create a new user"""
        user = AppUser(
            name=name,
            email=email.strip().lower(),
            password_hash=password_hash,
            role=role,
        )
        return self.create(user)
