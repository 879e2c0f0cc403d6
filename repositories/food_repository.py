"""
Food Repository - Data access layer for the food catalog
"""

import operator
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.enums import SortOrder
from domain.food_query import QuerySpec, CONTAINS, GTE, LTE, EQ
from domain.models import Food, FoodServingUnit

_COLUMNS = {
    "id": Food.id,
    "name": Food.name,
    "calories": Food.calories,
    "protein": Food.protein,
    "carbohydrates": Food.carbohydrates,
    "fat": Food.fat,
    "category.id": Food.category_id,
}

_OPERATORS = {
    CONTAINS: lambda column, value: column.contains(value, autoescape=True),
    GTE: operator.ge,
    LTE: operator.le,
    EQ: operator.eq,
}


def _column(field_name: str):
    try:
        return _COLUMNS[field_name]
    except KeyError:
        raise ValueError(f"Unsupported food query field: {field_name}")


class FoodRepository(BaseRepository[Food]):
    """Repository for catalog foods"""

    def __init__(self, db: Session):
        super().__init__(db, Food)

    def _with_units(self):
        return self.db.query(Food).options(
            selectinload(Food.food_serving_units).selectinload(
                FoodServingUnit.serving_unit
            )
        )

    def get_by_id(self, food_id: int) -> Optional[Food]:
        """Get food by ID with its serving units loaded"""
        return self._with_units().filter(Food.id == food_id).first()

    def get_many(self, ids: List[int]) -> List[Food]:
        if not ids:
            return []
        return self.db.query(Food).filter(Food.id.in_(ids)).all()

    def conditions(self, spec: QuerySpec) -> list:
        """SQLAlchemy filter expressions for the query's predicates"""
        conditions = []
        for predicate in spec.where:
            try:
                apply = _OPERATORS[predicate.op]
            except KeyError:
                raise ValueError(f"Unsupported food query operator: {predicate.op}")
            conditions.append(apply(_column(predicate.field), predicate.value))
        return conditions

    def ordering(self, spec: QuerySpec) -> list:
        clauses = []
        for sort in spec.order_by:
            column = _column(sort.field)
            clauses.append(
                column.desc() if sort.direction == SortOrder.DESC else column.asc()
            )
        return clauses

    def count(self, spec: QuerySpec) -> int:
        return (
            self.db.query(func.count(Food.id)).filter(*self.conditions(spec)).scalar()
            or 0
        )

    def find_page(self, spec: QuerySpec) -> Tuple[int, List[Food]]:
        """Run the count and page queries; returns (total, rows)"""
        total = self.count(spec)
        query = (
            self._with_units()
            .filter(*self.conditions(spec))
            .order_by(*self.ordering(spec))
            .offset(spec.skip)
        )
        if spec.take is not None:
            query = query.limit(spec.take)
        return total, query.all()

    def replace_serving_units(
        self, food: Food, units: List[Tuple[int, Optional[float]]]
    ) -> None:
        """Delete every serving unit row of ``food`` and insert ``units``.

        Does not commit; the caller owns the transaction.
        """
        self.delete_serving_units(food.id)
        for serving_unit_id, grams in units:
            self.db.add(
                FoodServingUnit(
                    food_id=food.id, serving_unit_id=serving_unit_id, grams=grams
                )
            )
        self.db.flush()
        self.db.expire(food, ["food_serving_units"])

    def delete_serving_units(self, food_id: int) -> int:
        return (
            self.db.query(FoodServingUnit)
            .filter(FoodServingUnit.food_id == food_id)
            .delete()
        )
