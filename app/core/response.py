"""Standardized JSON response envelope helpers."""


from typing import Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from app.core.pagination import ResultPage

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Single-item response envelope: `{ data: {...} }`"""

    data: T

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


class PageResponse(BaseModel, Generic[T]):
    """Paginated list response envelope: `{ data: [...], pageCount: n }`"""

    data: list[T]
    page_count: int

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


class CountResponse(BaseModel):
    """Count-only envelope: `{ count: n }`"""

    count: int


def paginated(page: ResultPage) -> dict:
    """Build a response dict for use with PageResponse."""
    return {"data": page.items, "page_count": page.page_count}
