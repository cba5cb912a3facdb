"""Category endpoints: menus, subcategory lists, per-category product counts."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.response import CountResponse, DataResponse
from app.db.base import get_db
from app.routers.v1.deps import get_catalog_service
from app.schemas.category import CategoryOut, SubcategoryOut
from app.services.catalog import CatalogService
from app.services.category import CategoryService

router = APIRouter(tags=["Categories"])


@router.get("/categories", response_model=DataResponse[list[CategoryOut]])
async def list_categories(session: AsyncSession = Depends(get_db)):
    categories = await CategoryService(session).list_categories()
    return {"data": [CategoryOut.model_validate(c) for c in categories]}


@router.get(
    "/categories/{category_id}/subcategories",
    response_model=DataResponse[list[SubcategoryOut]],
)
async def list_category_subcategories(
    category_id: str,
    session: AsyncSession = Depends(get_db),
):
    subcategories = await CategoryService(session).list_subcategories(category_id)
    return {"data": [SubcategoryOut.model_validate(s) for s in subcategories]}


@router.get("/categories/{category_id}/product-count", response_model=CountResponse)
async def category_product_count(
    category_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
):
    return {"count": await catalog.get_product_count(category_id)}


@router.get("/subcategories", response_model=DataResponse[list[SubcategoryOut]])
async def list_subcategories(session: AsyncSession = Depends(get_db)):
    subcategories = await CategoryService(session).list_subcategories()
    return {"data": [SubcategoryOut.model_validate(s) for s in subcategories]}
