"""Catalog filter descriptors — normalized form of untrusted listing query strings.

Every listing endpoint receives the raw query string as a flat mapping of
``key -> str | list[str]``. The ``from_query_params`` constructors below turn
it into an immutable descriptor. Bad input is clamped or defaulted; the only
rejection is an out-of-range ``per_page``, which raises
:class:`~app.core.exceptions.ValidationError` naming the field.

Query keys (storefront products):
  page, per_page, sort=<column>.<asc|desc>, categories=a.b, subcategories=a.b,
  price_range=<min>-<max>, store_ids=a.b, active=true
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.core.pagination import QueryParams, page_offset

TOKEN_SEPARATOR = "."


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ProductSort(str, Enum):
    """Sortable product columns, by their public (camelCase) name."""

    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    NAME = "name"
    PRICE = "price"
    INVENTORY = "inventory"
    RATING = "rating"


class StoreSort(str, Enum):
    CREATED_AT = "createdAt"
    NAME = "name"
    PRODUCT_COUNT = "productCount"


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------

def _first(value: str | list[str] | None) -> Optional[str]:
    """Scalar view of a query value: the first occurrence of a repeated key."""
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _parse_int(value: str | list[str] | None) -> Optional[int]:
    raw = _first(value)
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def parse_page(value: str | list[str] | None) -> int:
    """Absent, non-numeric, zero or negative pages resolve to 1."""
    page = _parse_int(value)
    if page is None or page < 1:
        return 1
    return page


def parse_per_page(
    value: str | list[str] | None, default: int, maximum: int | None = None
) -> int:
    per_page = _parse_int(value)
    if per_page is None:
        return default
    maximum = maximum or settings.max_per_page
    if per_page < 1 or per_page > maximum:
        raise ValidationError("per_page", f"must be between 1 and {maximum}")
    return per_page


def parse_sort(
    value: str | list[str] | None, allowed: type[Enum], default: Enum
) -> tuple[Enum, SortDirection]:
    """Split ``column.direction``; unknown columns fall back to ``default desc``."""
    raw = _first(value)
    if not raw:
        return default, SortDirection.DESC
    column_name, _, direction_name = raw.partition(TOKEN_SEPARATOR)
    try:
        column = allowed(column_name)
    except ValueError:
        return default, SortDirection.DESC
    direction = SortDirection.ASC if direction_name == "asc" else SortDirection.DESC
    return column, direction


def parse_tokens(value: str | list[str] | None) -> frozenset[str]:
    """``a.b`` (possibly repeated) -> {"a", "b"}; empty tokens are dropped."""
    if value is None:
        return frozenset()
    values = value if isinstance(value, list) else [value]
    return frozenset(
        token
        for item in values
        for token in item.split(TOKEN_SEPARATOR)
        if token
    )


def _parse_price(raw: str) -> Optional[Decimal]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        price = Decimal(raw)
    except InvalidOperation:
        return None
    if not price.is_finite() or price < 0:
        return None
    return price


def parse_price_range(value: str | list[str] | None) -> tuple[Optional[Decimal], Optional[Decimal]]:
    """``min-max`` split on the first ``-``; either side may be missing or junk."""
    raw = _first(value)
    if not raw:
        return None, None
    low, _, high = raw.partition("-")
    return _parse_price(low), _parse_price(high)


def parse_flag(value: str | list[str] | None) -> bool:
    return _first(value) == "true"


def parse_date(value: str | list[str] | None) -> Optional[date]:
    raw = _first(value)
    if not raw:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        return None


def _join_tokens(tokens: frozenset[str]) -> str:
    return TOKEN_SEPARATOR.join(sorted(tokens))


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

class PageFilter(BaseModel):
    """Fields shared by every paginated listing."""

    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=10, ge=1)
    sort_direction: SortDirection = SortDirection.DESC

    model_config = {"frozen": True}

    @property
    def offset(self) -> int:
        return page_offset(self.page, self.per_page)

    def _page_query_params(self, sort_column: Enum) -> dict[str, str]:
        return {
            "page": str(self.page),
            "per_page": str(self.per_page),
            "sort": f"{sort_column.value}.{self.sort_direction.value}",
        }


class FilterDescriptor(PageFilter):
    """Storefront product listing filter."""

    per_page: int = Field(default_factory=lambda: settings.catalog_per_page, ge=1)
    sort_column: ProductSort = ProductSort.CREATED_AT
    category_names: frozenset[str] = frozenset()
    subcategory_names: frozenset[str] = frozenset()
    store_ids: frozenset[str] = frozenset()
    price_min: Optional[Decimal] = Field(default=None, ge=0)
    price_max: Optional[Decimal] = Field(default=None, ge=0)
    active_only: bool = False

    @classmethod
    def from_query_params(
        cls, params: QueryParams, *, default_per_page: int | None = None
    ) -> "FilterDescriptor":
        sort_column, sort_direction = parse_sort(
            params.get("sort"), ProductSort, ProductSort.CREATED_AT
        )
        price_min, price_max = parse_price_range(params.get("price_range"))
        return cls(
            page=parse_page(params.get("page")),
            per_page=parse_per_page(
                params.get("per_page"), default_per_page or settings.catalog_per_page
            ),
            sort_column=sort_column,
            sort_direction=sort_direction,
            category_names=parse_tokens(params.get("categories")),
            subcategory_names=parse_tokens(params.get("subcategories")),
            store_ids=parse_tokens(params.get("store_ids")),
            price_min=price_min,
            price_max=price_max,
            active_only=parse_flag(params.get("active")),
        )

    def to_query_params(self) -> dict[str, str]:
        params = self._page_query_params(self.sort_column)
        if self.category_names:
            params["categories"] = _join_tokens(self.category_names)
        if self.subcategory_names:
            params["subcategories"] = _join_tokens(self.subcategory_names)
        if self.store_ids:
            params["store_ids"] = _join_tokens(self.store_ids)
        if self.price_min is not None or self.price_max is not None:
            low = "" if self.price_min is None else format(self.price_min, "f")
            high = "" if self.price_max is None else format(self.price_max, "f")
            params["price_range"] = f"{low}-{high}"
        if self.active_only:
            params["active"] = "true"
        return params


class ProductTableFilter(PageFilter):
    """Merchant dashboard product table filter (one store)."""

    per_page: int = Field(default_factory=lambda: settings.product_table_per_page, ge=1)
    sort_column: ProductSort = ProductSort.CREATED_AT
    name: Optional[str] = None
    category_ids: frozenset[str] = frozenset()
    created_from: Optional[date] = None
    created_to: Optional[date] = None

    @classmethod
    def from_query_params(cls, params: QueryParams) -> "ProductTableFilter":
        sort_column, sort_direction = parse_sort(
            params.get("sort"), ProductSort, ProductSort.CREATED_AT
        )
        name = (_first(params.get("name")) or "").strip()
        return cls(
            page=parse_page(params.get("page")),
            per_page=parse_per_page(params.get("per_page"), settings.product_table_per_page),
            sort_column=sort_column,
            sort_direction=sort_direction,
            name=name or None,
            category_ids=parse_tokens(params.get("category")),
            created_from=parse_date(params.get("from")),
            created_to=parse_date(params.get("to")),
        )

    @property
    def created_range(self) -> Optional[tuple[date, date]]:
        """The creation-date window, applied only when both ends are given."""
        if self.created_from is None or self.created_to is None:
            return None
        return self.created_from, self.created_to


class StoreFilter(PageFilter):
    """Storefront store listing filter."""

    per_page: int = Field(default_factory=lambda: settings.store_per_page, ge=1)
    sort_column: StoreSort = StoreSort.CREATED_AT
    active_only: bool = False
    user_id: Optional[str] = None

    @classmethod
    def from_query_params(cls, params: QueryParams) -> "StoreFilter":
        sort_column, sort_direction = parse_sort(
            params.get("sort"), StoreSort, StoreSort.CREATED_AT
        )
        return cls(
            page=parse_page(params.get("page")),
            per_page=parse_per_page(params.get("per_page"), settings.store_per_page),
            sort_column=sort_column,
            sort_direction=sort_direction,
            active_only=parse_flag(params.get("active")),
            user_id=_first(params.get("user_id")) or None,
        )
