"""Store endpoints: storefront listing, store detail, and the merchant product table/CRUD."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.pagination import raw_query_params
from app.core.response import DataResponse, PageResponse, paginated
from app.db.base import get_db
from app.routers.v1.deps import get_catalog_service
from app.schemas.product import ProductCreate, ProductOut, ProductTableRow, ProductUpdate
from app.schemas.store import StoreListItem, StoreOut
from app.services.catalog import CatalogService
from app.services.product import ProductService
from app.services.store import StoreService

router = APIRouter(prefix="/stores", tags=["Stores"])


@router.get("", response_model=PageResponse[StoreListItem])
async def list_stores(
    request: Request,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Paginated store listing. ?sort=productCount.desc&active=true"""
    page = await catalog.get_stores(raw_query_params(request))
    return paginated(page)


@router.get("/{store_id}", response_model=DataResponse[StoreOut])
async def get_store(
    store_id: str,
    session: AsyncSession = Depends(get_db),
):
    store = await StoreService(session).get_store(store_id)
    return {"data": StoreOut.model_validate(store)}


# ------------------------------------------------------------------
# Merchant product table
# ------------------------------------------------------------------

@router.get("/{store_id}/products", response_model=PageResponse[ProductTableRow])
async def list_store_products(
    store_id: str,
    request: Request,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """?page=1&per_page=10&sort=name.asc&name=shoe&category=<id>.<id>&from=2024-01-01&to=2024-01-31"""
    page = await catalog.get_products_table(raw_query_params(request), store_id)
    return paginated(page)


@router.post(
    "/{store_id}/products",
    response_model=DataResponse[ProductOut],
    status_code=status.HTTP_201_CREATED,
)
async def add_product(
    store_id: str,
    body: ProductCreate,
    session: AsyncSession = Depends(get_db),
):
    product = await ProductService(session).add_product(store_id, body)
    return {"data": ProductOut.model_validate(product)}


@router.put("/{store_id}/products/{product_id}", response_model=DataResponse[ProductOut])
async def update_product(
    store_id: str,
    product_id: str,
    body: ProductUpdate,
    session: AsyncSession = Depends(get_db),
):
    product = await ProductService(session).update_product(store_id, product_id, body)
    return {"data": ProductOut.model_validate(product)}


@router.delete("/{store_id}/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    store_id: str,
    product_id: str,
    session: AsyncSession = Depends(get_db),
):
    await ProductService(session).delete_product(store_id, product_id)
