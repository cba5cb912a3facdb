"""Catalog query builder — filtered, sorted, paginated listing statements.

Each ``*_queries`` function turns a filter descriptor into a
:class:`CatalogQuery`: the item statement and the count statement. Both are
built from the same predicate list so pagination metadata always describes
the rows being paged. Statements are plain SQLAlchemy selects; execution
happens in :mod:`app.services.catalog`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, case, func, select

from app.domain.category import Category, Subcategory
from app.domain.product import Product
from app.domain.store import Store
from app.schemas.catalog import (
    FilterDescriptor,
    ProductSort,
    ProductTableFilter,
    SortDirection,
    StoreFilter,
    StoreSort,
)

# Sort whitelist: public column name -> mapped column
PRODUCT_SORT_COLUMNS: dict[ProductSort, Any] = {
    ProductSort.CREATED_AT: Product.created_at,
    ProductSort.UPDATED_AT: Product.updated_at,
    ProductSort.NAME: Product.name,
    ProductSort.PRICE: Product.price,
    ProductSort.INVENTORY: Product.inventory,
    ProductSort.RATING: Product.rating,
}

# Relations a product predicate may need joined, in join order
STORE, CATEGORY, SUBCATEGORY = "store", "category", "subcategory"
_PRODUCT_JOINS = (STORE, CATEGORY, SUBCATEGORY)


@dataclass(frozen=True)
class CatalogQuery:
    items: Select
    count: Select


@dataclass(frozen=True)
class Predicates:
    clauses: tuple[ColumnElement[bool], ...]
    joins: frozenset[str] = frozenset()

    def apply(self, stmt: Select) -> Select:
        if not self.clauses:
            return stmt
        return stmt.where(and_(*self.clauses))


def _ordered(column: Any, direction: SortDirection):
    return column.asc() if direction is SortDirection.ASC else column.desc()


def _join_product_relations(stmt: Select, joins) -> Select:
    if STORE in joins:
        stmt = stmt.outerjoin(Store, Product.store_id == Store.id)
    if CATEGORY in joins:
        stmt = stmt.outerjoin(Category, Product.category_id == Category.id)
    if SUBCATEGORY in joins:
        stmt = stmt.outerjoin(Subcategory, Product.subcategory_id == Subcategory.id)
    return stmt


def _product_count(predicates: Predicates) -> Select:
    stmt = select(func.count(Product.id)).select_from(Product)
    stmt = _join_product_relations(stmt, predicates.joins)
    return predicates.apply(stmt)


# ---------------------------------------------------------------------------
# Storefront product listing
# ---------------------------------------------------------------------------

def product_predicates(descriptor: FilterDescriptor) -> Predicates:
    """AND-ed predicates for the storefront listing; empty sets add nothing."""
    clauses: list[ColumnElement[bool]] = []
    joins: set[str] = set()

    if descriptor.category_names:
        clauses.append(Category.name.in_(sorted(descriptor.category_names)))
        joins.add(CATEGORY)
    if descriptor.subcategory_names:
        clauses.append(Subcategory.name.in_(sorted(descriptor.subcategory_names)))
        joins.add(SUBCATEGORY)
    if descriptor.price_min is not None:
        clauses.append(Product.price >= descriptor.price_min)
    if descriptor.price_max is not None:
        clauses.append(Product.price <= descriptor.price_max)
    if descriptor.store_ids:
        clauses.append(Product.store_id.in_(sorted(descriptor.store_ids)))
    if descriptor.active_only:
        clauses.append(Store.stripe_account_id.is_not(None))
        joins.add(STORE)

    return Predicates(tuple(clauses), frozenset(joins))


def product_queries(descriptor: FilterDescriptor) -> CatalogQuery:
    predicates = product_predicates(descriptor)
    sort_column = PRODUCT_SORT_COLUMNS[descriptor.sort_column]

    items = select(
        Product.id,
        Product.name,
        Product.description,
        Product.images,
        Category.name.label("category"),
        Subcategory.name.label("subcategory"),
        Product.price,
        Product.inventory,
        Product.rating,
        Product.tags,
        Product.store_id,
        Product.created_at,
        Product.updated_at,
        Store.stripe_account_id,
    ).select_from(Product)
    items = _join_product_relations(items, _PRODUCT_JOINS)
    items = (
        predicates.apply(items)
        .order_by(_ordered(sort_column, descriptor.sort_direction), Product.id.asc())
        .limit(descriptor.per_page)
        .offset(descriptor.offset)
    )
    return CatalogQuery(items=items, count=_product_count(predicates))


# ---------------------------------------------------------------------------
# Merchant product table
# ---------------------------------------------------------------------------

def _day_start(day) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def product_table_predicates(table_filter: ProductTableFilter, store_id: str) -> Predicates:
    clauses: list[ColumnElement[bool]] = [Product.store_id == store_id]

    if table_filter.name:
        clauses.append(Product.name.icontains(table_filter.name, autoescape=True))
    if table_filter.category_ids:
        clauses.append(Product.category_id.in_(sorted(table_filter.category_ids)))
    if table_filter.created_range:
        start, end = table_filter.created_range
        # whole "to" day included
        clauses.append(Product.created_at >= _day_start(start))
        clauses.append(Product.created_at < _day_start(end + timedelta(days=1)))

    return Predicates(tuple(clauses))


def product_table_queries(table_filter: ProductTableFilter, store_id: str) -> CatalogQuery:
    predicates = product_table_predicates(table_filter, store_id)
    sort_column = PRODUCT_SORT_COLUMNS[table_filter.sort_column]

    items = select(
        Product.id,
        Product.name,
        Category.name.label("category"),
        Product.price,
        Product.inventory,
        Product.rating,
        Product.created_at,
    ).select_from(Product)
    items = _join_product_relations(items, (CATEGORY,))
    items = (
        predicates.apply(items)
        .order_by(_ordered(sort_column, table_filter.sort_direction), Product.id.asc())
        .limit(table_filter.per_page)
        .offset(table_filter.offset)
    )
    return CatalogQuery(items=items, count=_product_count(predicates))


# ---------------------------------------------------------------------------
# Store listing
# ---------------------------------------------------------------------------

def store_predicates(store_filter: StoreFilter) -> Predicates:
    clauses: list[ColumnElement[bool]] = []
    if store_filter.active_only:
        clauses.append(Store.stripe_account_id.is_not(None))
    if store_filter.user_id:
        clauses.append(Store.user_id == store_filter.user_id)
    return Predicates(tuple(clauses))


def store_queries(store_filter: StoreFilter) -> CatalogQuery:
    predicates = store_predicates(store_filter)

    product_counts = (
        select(Product.store_id, func.count(Product.id).label("product_count"))
        .group_by(Product.store_id)
        .subquery()
    )
    product_count = func.coalesce(product_counts.c.product_count, 0)
    sort_columns: dict[StoreSort, Any] = {
        StoreSort.CREATED_AT: Store.created_at,
        StoreSort.NAME: Store.name,
        StoreSort.PRODUCT_COUNT: product_count,
    }

    items = (
        select(
            Store.id,
            Store.name,
            Store.description,
            Store.stripe_account_id,
            product_count.label("product_count"),
            Store.created_at,
        )
        .select_from(Store)
        .outerjoin(product_counts, product_counts.c.store_id == Store.id)
    )
    items = (
        predicates.apply(items)
        .order_by(
            _ordered(sort_columns[store_filter.sort_column], store_filter.sort_direction),
            Store.id.asc(),
        )
        .limit(store_filter.per_page)
        .offset(store_filter.offset)
    )
    count = predicates.apply(select(func.count(Store.id)).select_from(Store))
    return CatalogQuery(items=items, count=count)


# ---------------------------------------------------------------------------
# Unpaginated catalog reads
# ---------------------------------------------------------------------------

def category_product_count_query(category_id: str) -> Select:
    return select(func.count(Product.id)).where(Product.category_id == category_id)


def featured_products_query(limit: int) -> Select:
    """Products of stores with a payment account first, then with images, newest first."""
    has_payments = case((Store.stripe_account_id.is_not(None), 0), else_=1)
    has_images = case((Product.images.is_not(None), 0), else_=1)
    stmt = select(
        Product.id,
        Product.name,
        Product.images,
        Category.name.label("category"),
        Product.price,
        Product.inventory,
        Store.stripe_account_id,
    ).select_from(Product)
    stmt = _join_product_relations(stmt, (STORE, CATEGORY))
    return stmt.order_by(
        has_payments, has_images, Product.created_at.desc(), Product.id.asc()
    ).limit(limit)


def product_search_query(query: str, limit: int = 50) -> Select:
    """Products whose name contains ``query``, with their category, grouped by category order."""
    stmt = select(
        Category.id.label("category_id"),
        Category.name.label("category_name"),
        Product.id,
        Product.name,
    ).select_from(Product)
    stmt = _join_product_relations(stmt, (CATEGORY,))
    return (
        stmt.where(Product.name.icontains(query, autoescape=True))
        .order_by(Category.name.asc(), Product.name.asc(), Product.id.asc())
        .limit(limit)
    )
