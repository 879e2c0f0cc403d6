"""
Meal logging models.
"""

from sqlalchemy import Column, Integer, Float, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship

from domain.models.database import Base


class Meal(Base):
    """A meal eaten by a user at a point in time"""

    __tablename__ = "meal"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    date_time = Column(TIMESTAMP(timezone=False), nullable=False)

    user = relationship("AppUser", back_populates="meals")
    meal_foods = relationship("MealFood", back_populates="meal", order_by="MealFood.id")


class MealFood(Base):
    """Line item: a food eaten in a meal, with amount and serving unit"""

    __tablename__ = "meal_food"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meal_id = Column(Integer, ForeignKey("meal.id"), nullable=False)
    food_id = Column(Integer, ForeignKey("food.id"), nullable=False)
    serving_unit_id = Column(Integer, ForeignKey("serving_unit.id"), nullable=False)
    amount = Column(Float)

    meal = relationship("Meal", back_populates="meal_foods")
    food = relationship("Food")
    serving_unit = relationship("ServingUnit")
