"""Shared router dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import settings
from app.db.base import get_session_factory
from app.services.catalog import CatalogService


def get_catalog_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> CatalogService:
    return CatalogService(
        session_factory,
        isolation_level=settings.read_isolation_level,
        featured_limit=settings.featured_products_limit,
    )
