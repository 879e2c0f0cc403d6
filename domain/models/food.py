"""
Food catalog models: categories, serving units, foods and their unit conversions.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    ForeignKey,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from domain.models.database import Base


class Category(Base):
    """Food category (e.g. Fruits, Dairy)"""

    __tablename__ = "category"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)

    foods = relationship("Food", back_populates="category")


class ServingUnit(Base):
    """Serving unit (e.g. cup, slice, piece)"""

    __tablename__ = "serving_unit"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)

    food_serving_units = relationship("FoodServingUnit", back_populates="serving_unit")


class Food(Base):
    """Catalog food with nutrition values per serving"""

    __tablename__ = "food"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    calories = Column(Float)
    protein = Column(Float)
    carbohydrates = Column(Float)
    fat = Column(Float)
    fiber = Column(Float)
    sugar = Column(Float)
    category_id = Column(
        Integer, ForeignKey("category.id", ondelete="SET NULL"), nullable=True
    )

    category = relationship("Category", back_populates="foods")
    food_serving_units = relationship(
        "FoodServingUnit", back_populates="food", order_by="FoodServingUnit.id"
    )

    __table_args__ = (
        CheckConstraint(
            "calories IS NULL OR calories >= 0", name="ck_food_calories_nonneg"
        ),
        CheckConstraint("protein IS NULL OR protein >= 0", name="ck_food_protein_nonneg"),
        CheckConstraint(
            "carbohydrates IS NULL OR carbohydrates >= 0",
            name="ck_food_carbohydrates_nonneg",
        ),
        CheckConstraint("fat IS NULL OR fat >= 0", name="ck_food_fat_nonneg"),
        CheckConstraint("fiber IS NULL OR fiber >= 0", name="ck_food_fiber_nonneg"),
        CheckConstraint("sugar IS NULL OR sugar >= 0", name="ck_food_sugar_nonneg"),
    )


class FoodServingUnit(Base):
    """Grams-per-unit conversion declared for a food"""

    __tablename__ = "food_serving_unit"

    id = Column(Integer, primary_key=True, autoincrement=True)
    food_id = Column(Integer, ForeignKey("food.id"), nullable=False)
    serving_unit_id = Column(Integer, ForeignKey("serving_unit.id"), nullable=False)
    grams = Column(Float)

    food = relationship("Food", back_populates="food_serving_units")
    serving_unit = relationship("ServingUnit", back_populates="food_serving_units")

    __table_args__ = (
        UniqueConstraint(
            "food_id", "serving_unit_id", name="uq_food_serving_unit_food_unit"
        ),
    )
