"""
Translate validated food filters into a storage-agnostic query description.

Nothing here touches the database: a ``QuerySpec`` is a list of field
predicates plus a sort description and a page window. ``FoodRepository``
turns it into SQLAlchemy filters.
"""

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from domain.enums import SortOrder
from domain.pagination import compute_skip
from domain.schemas.food_filter_schemas import FoodFilters

CONTAINS = "contains"
GTE = "gte"
LTE = "lte"
EQ = "eq"


@dataclass(frozen=True)
class Predicate:
    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: SortOrder = SortOrder.ASC


@dataclass(frozen=True)
class QuerySpec:
    where: List[Predicate] = field(default_factory=list)
    order_by: List[SortSpec] = field(default_factory=list)
    skip: int = 0
    take: Optional[int] = None

    def where_clause(self) -> dict:
        """Nested mapping form, e.g. ``{"calories": {"gte": 50, "lte": 100}}``.

        Dotted fields nest (``category.id`` -> ``{"category": {"id": 1}}``) and
        equality predicates collapse to their value.
        """
        clause: dict = {}
        for predicate in self.where:
            *parents, leaf = predicate.field.split(".")
            target = clause
            for part in parents:
                target = target.setdefault(part, {})
            if predicate.op == EQ:
                target[leaf] = predicate.value
            else:
                target.setdefault(leaf, {})[predicate.op] = predicate.value
        return clause

    def order_by_clause(self) -> dict:
        """Primary sort key only, e.g. ``{"calories": "desc"}``."""
        if not self.order_by:
            return {}
        primary = self.order_by[0]
        return {primary.field: primary.direction.value}


def parse_numeric_value(value: Optional[str]) -> Optional[float]:
    """Parse a non-negative finite number; blank or invalid input gives None."""
    if value is None or not str(value).strip():
        return None
    try:
        parsed = float(str(value).strip())
    except ValueError:
        return None
    if math.isfinite(parsed) and parsed >= 0:
        return parsed
    return None


def build_range_predicates(field_name: str, bounds: Tuple[str, str]) -> List[Predicate]:
    minimum = parse_numeric_value(bounds[0])
    maximum = parse_numeric_value(bounds[1])

    predicates = []
    if minimum is not None:
        predicates.append(Predicate(field_name, GTE, minimum))
    if maximum is not None:
        predicates.append(Predicate(field_name, LTE, maximum))
    return predicates


def build_category_predicate(category_id: Optional[str]) -> Optional[Predicate]:
    parsed = parse_numeric_value(category_id)
    if not parsed or not parsed.is_integer():
        return None
    return Predicate("category.id", EQ, int(parsed))


def build_food_query(filters: FoodFilters) -> QuerySpec:
    """Build the where/sort/page description for a food listing.

    The search term is matched as a case-sensitive substring of the name.
    Ties on the requested sort column are broken by ``id`` ascending so that
    paging over equal values is deterministic.
    """
    where: List[Predicate] = []

    term = filters.search_term.strip()
    if term:
        where.append(Predicate("name", CONTAINS, term))

    where.extend(build_range_predicates("calories", filters.calories_range))
    where.extend(build_range_predicates("protein", filters.protein_range))

    category = build_category_predicate(filters.category_id)
    if category:
        where.append(category)

    order_by = [
        SortSpec(filters.sort_by.value, filters.sort_order),
        SortSpec("id", SortOrder.ASC),
    ]

    return QuerySpec(
        where=where,
        order_by=order_by,
        skip=compute_skip(filters.page, filters.page_size),
        take=filters.page_size,
    )
