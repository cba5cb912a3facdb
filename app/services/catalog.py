"""Catalog read service — runs listing queries as one atomic read.

Every paginated listing runs its count statement and its item statement in a
single transaction so ``page_count`` and ``items`` describe the same snapshot.
On PostgreSQL this needs ``REPEATABLE READ`` (see ``Settings.read_isolation_level``).

Failure policy: a listing never raises to its caller. Rejected parameters and
storage failures are logged and turned into an empty page
(``items == []``, ``page_count == 0``), so a storage outage looks the same as
"no matching products" to the page being rendered.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.exceptions import StorageError, ValidationError
from app.core.pagination import QueryParams, ResultPage
from app.repositories.catalog import (
    CatalogQuery,
    category_product_count_query,
    featured_products_query,
    product_queries,
    product_search_query,
    product_table_queries,
    store_queries,
)
from app.schemas.catalog import FilterDescriptor, ProductTableFilter, StoreFilter
from app.schemas.category import CategoryWithProducts, ProductMatch
from app.schemas.product import FeaturedProduct, ProductListItem, ProductTableRow
from app.schemas.store import StoreListItem

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=BaseModel)


class CatalogService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        isolation_level: str | None = None,
        featured_limit: int = 8,
    ):
        self._session_factory = session_factory
        self._isolation_level = isolation_level
        self._featured_limit = featured_limit

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _snapshot(self) -> AsyncIterator[AsyncSession]:
        """One session, one read transaction. Database errors surface as StorageError."""
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    if self._isolation_level:
                        await session.connection(
                            execution_options={"isolation_level": self._isolation_level}
                        )
                    yield session
        except SQLAlchemyError as exc:
            raise StorageError(f"catalog read failed ({exc.__class__.__name__})") from exc

    async def _fetch_page(
        self, query: CatalogQuery, per_page: int, row_model: type[RowT]
    ) -> ResultPage[RowT]:
        async with self._snapshot() as session:
            total = (await session.execute(query.count)).scalar_one()
            rows = (await session.execute(query.items)).mappings().all()
        items = [row_model.model_validate(dict(row)) for row in rows]
        return ResultPage.build(items, total, per_page)

    async def _safe_page(
        self,
        label: str,
        build: Callable[[], tuple[CatalogQuery, int]],
        row_model: type[RowT],
    ) -> ResultPage[RowT]:
        try:
            query, per_page = build()
            return await self._fetch_page(query, per_page, row_model)
        except ValidationError as exc:
            logger.warning("%s: rejected query params (%s)", label, exc.message)
        except StorageError:
            logger.exception("%s: storage unavailable, returning an empty page", label)
        except Exception:
            logger.exception("%s: query failed, returning an empty page", label)
        return ResultPage.empty()

    # ------------------------------------------------------------------
    # Paginated listings
    # ------------------------------------------------------------------

    async def get_products(self, params: QueryParams) -> ResultPage[ProductListItem]:
        """Storefront product listing filtered by category, price, store and activity."""

        def build() -> tuple[CatalogQuery, int]:
            descriptor = FilterDescriptor.from_query_params(params)
            return product_queries(descriptor), descriptor.per_page

        return await self._safe_page("product listing", build, ProductListItem)

    async def get_products_table(
        self, params: QueryParams, store_id: str
    ) -> ResultPage[ProductTableRow]:
        """Dashboard product table for one store."""

        def build() -> tuple[CatalogQuery, int]:
            table_filter = ProductTableFilter.from_query_params(params)
            return product_table_queries(table_filter, store_id), table_filter.per_page

        return await self._safe_page("product table", build, ProductTableRow)

    async def get_stores(self, params: QueryParams) -> ResultPage[StoreListItem]:
        def build() -> tuple[CatalogQuery, int]:
            store_filter = StoreFilter.from_query_params(params)
            return store_queries(store_filter), store_filter.per_page

        return await self._safe_page("store listing", build, StoreListItem)

    # ------------------------------------------------------------------
    # Unpaginated reads
    # ------------------------------------------------------------------

    async def get_product_count(self, category_id: str) -> int:
        try:
            async with self._snapshot() as session:
                return (
                    await session.execute(category_product_count_query(category_id))
                ).scalar_one()
        except StorageError:
            logger.exception("product count for category %s failed", category_id)
            return 0

    async def get_featured_products(self) -> list[FeaturedProduct]:
        try:
            async with self._snapshot() as session:
                rows = (
                    await session.execute(featured_products_query(self._featured_limit))
                ).mappings().all()
        except StorageError:
            logger.exception("featured products query failed")
            return []
        return [FeaturedProduct.model_validate(dict(row)) for row in rows]

    async def filter_products(self, query: str) -> list[CategoryWithProducts]:
        """Quick search: categories holding products whose name contains ``query``."""
        query = query.strip()
        if not query:
            return []
        try:
            async with self._snapshot() as session:
                rows = (await session.execute(product_search_query(query))).mappings().all()
        except StorageError:
            logger.exception("product search for %r failed", query)
            return []

        groups: dict[str, CategoryWithProducts] = {}
        for row in rows:
            if row["category_id"] is None:
                continue
            group = groups.get(row["category_id"])
            if group is None:
                group = CategoryWithProducts(
                    id=row["category_id"], name=row["category_name"], products=[]
                )
                groups[row["category_id"]] = group
            group.products.append(ProductMatch(id=row["id"], name=row["name"]))
        return list(groups.values())
