"""Storefront product endpoints: listing, featured, quick search, detail, rating."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.pagination import raw_query_params
from app.core.response import DataResponse, PageResponse, paginated
from app.db.base import get_db
from app.routers.v1.deps import get_catalog_service
from app.schemas.category import CategoryWithProducts
from app.schemas.product import (
    FeaturedProduct,
    ProductListItem,
    ProductOut,
    ProductRatingUpdate,
)
from app.services.catalog import CatalogService
from app.services.product import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=PageResponse[ProductListItem])
async def list_products(
    request: Request,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Paginated product listing.

    ?page=1&per_page=8&sort=price.asc&categories=Shoes.Hats&subcategories=...
    &price_range=10-50&store_ids=A.B&active=true
    """
    page = await catalog.get_products(raw_query_params(request))
    return paginated(page)


@router.get("/featured", response_model=DataResponse[list[FeaturedProduct]])
async def featured_products(catalog: CatalogService = Depends(get_catalog_service)):
    return {"data": await catalog.get_featured_products()}


@router.get("/search", response_model=DataResponse[list[CategoryWithProducts]])
async def search_products(
    query: str = Query(default="", description="Substring of the product name"),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return {"data": await catalog.filter_products(query)}


@router.get("/{product_id}", response_model=DataResponse[ProductOut])
async def get_product(
    product_id: str,
    session: AsyncSession = Depends(get_db),
):
    product = await ProductService(session).get_product(product_id)
    return {"data": ProductOut.model_validate(product)}


@router.patch("/{product_id}/rating", response_model=DataResponse[ProductOut])
async def update_product_rating(
    product_id: str,
    body: ProductRatingUpdate,
    session: AsyncSession = Depends(get_db),
):
    product = await ProductService(session).update_rating(product_id, body.rating)
    return {"data": ProductOut.model_validate(product)}
