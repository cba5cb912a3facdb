"""Pagination helpers for catalog list endpoints."""


import math
from collections.abc import Mapping
from typing import Generic, TypeVar

from fastapi import Request
from pydantic import BaseModel, Field

T = TypeVar("T")

QueryParams = Mapping[str, str | list[str] | None]


def page_count(total: int, per_page: int) -> int:
    """Number of pages needed for *total* rows; 0 when there are no rows."""
    if total <= 0:
        return 0
    return math.ceil(total / per_page)


def page_offset(page: int, per_page: int) -> int:
    return max(0, (page - 1) * per_page)


def raw_query_params(request: Request) -> dict[str, str | list[str]]:
    """Collect the query string as ``{key: value}`` or ``{key: [values]}`` for repeated keys."""
    params: dict[str, str | list[str]] = {}
    for key, value in request.query_params.multi_items():
        existing = params.get(key)
        if existing is None:
            params[key] = value
        elif isinstance(existing, list):
            existing.append(value)
        else:
            params[key] = [existing, value]
    return params


class ResultPage(BaseModel, Generic[T]):
    """One page of rows plus the page count of the whole filtered set."""

    items: list[T] = Field(default_factory=list)
    total_count: int = Field(default=0, ge=0)
    per_page: int = Field(default=1, ge=1)
    page_count: int = Field(default=0, ge=0)

    @classmethod
    def build(cls, items: list, total_count: int, per_page: int) -> "ResultPage":
        return cls(
            items=items,
            total_count=total_count,
            per_page=per_page,
            page_count=page_count(total_count, per_page),
        )

    @classmethod
    def empty(cls) -> "ResultPage":
        return cls()
