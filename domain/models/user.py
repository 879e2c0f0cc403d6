"""
User-related database models.
"""

from sqlalchemy import Column, Integer, Text, String, TIMESTAMP, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base
from domain.enums import Role


class AppUser(Base):
    """User account model"""

    __tablename__ = "app_user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(String(320), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    role = Column(SQLEnum(Role), nullable=False, default=Role.USER)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    meals = relationship("Meal", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
