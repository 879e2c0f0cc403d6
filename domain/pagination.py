"""
Page arithmetic shared by listing endpoints.
"""

import math
from dataclasses import dataclass, field
from typing import Generic, List, TypeVar, Union

from app.exceptions import ServiceValidationError

T = TypeVar("T")

ELLIPSIS = "ellipsis"


@dataclass
class PageResult(Generic[T]):
    data: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10
    total_pages: int = 0


def compute_skip(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def total_pages(total: int, page_size: int) -> int:
    if page_size <= 0:
        raise ServiceValidationError(
            "Page size must be positive",
            details=[
                {
                    "field": "pageSize",
                    "constraint": "range",
                    "message": "Page size must be greater than 0",
                }
            ],
        )
    if total <= 0:
        return 0
    return math.ceil(total / page_size)


def paginate(data: List[T], total: int, page: int, page_size: int) -> PageResult[T]:
    return PageResult(
        data=list(data),
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages(total, page_size),
    )


def next_page(current: int, action: Union[str, int]) -> int:
    """Resolve a pagination control action.

    ``"next"`` has no upper clamp (the control is disabled on the last page),
    ``"prev"`` never goes below 1, and an explicit page number is returned
    unchanged.
    """
    if action == "next":
        return current + 1
    if action == "prev":
        return max(current - 1, 1)
    if isinstance(action, int) and not isinstance(action, bool):
        return action
    raise ServiceValidationError(
        f"Unknown page action: {action!r}",
        details=[
            {
                "field": "action",
                "constraint": "enum",
                "message": "Expected 'next', 'prev' or a page number",
            }
        ],
    )


def page_window(current: int, pages: int) -> List[Union[int, str]]:
    """Page buttons to render, with ``"ellipsis"`` markers for skipped ranges."""
    if pages <= 7:
        return list(range(1, pages + 1))
    if current < 5:
        return [1, 2, 3, 4, 5, ELLIPSIS, pages]
    if current > pages - 4:
        return [1, ELLIPSIS] + list(range(pages - 4, pages + 1))
    return [1, ELLIPSIS, current - 1, current, current + 1, ELLIPSIS, pages]
