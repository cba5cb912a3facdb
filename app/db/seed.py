"""Seed the catalog with categories, subcategories and demo products.

Usage:
    python -m app.db.seed [store_id]
"""


import asyncio
import logging
import random
import sys
import time
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from app.core.config import settings
from app.db.base import Base, build_engine, build_session_factory
from app.domain.category import Category, Subcategory
from app.domain.product import Product
from app.domain.store import Store
from app.domain.mixins import generate_id

logger = logging.getLogger(__name__)

DEMO_STORE_SLUG = "demo-store"

CATEGORIES: dict[str, list[str]] = {
    "Shoes": ["Sneakers", "Boots", "Sandals"],
    "Clothing": ["T-Shirts", "Hoodies", "Pants"],
    "Accessories": ["Hats", "Bags", "Socks"],
}


def _slug(name: str) -> str:
    return name.lower().replace(" ", "-")


async def create_tables(engine: AsyncEngine) -> None:
    import app.domain  # noqa: F401  (register models on Base.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_categories(session: AsyncSession) -> dict[str, Category]:
    """Insert missing categories and their subcategories; return categories by name."""
    existing = {
        c.name: c for c in (await session.execute(select(Category))).scalars().all()
    }
    known_subcategories = set(
        (await session.execute(select(Subcategory.name))).scalars().all()
    )
    for name, subcategory_names in CATEGORIES.items():
        category = existing.get(name)
        if category is None:
            category = Category(id=generate_id(), name=name, slug=_slug(name))
            session.add(category)
            existing[name] = category
        for sub_name in subcategory_names:
            if sub_name in known_subcategories:
                continue
            session.add(
                Subcategory(
                    id=generate_id(), category_id=category.id, name=sub_name, slug=_slug(sub_name)
                )
            )
    await session.flush()
    return existing


async def seed_products(session: AsyncSession, store_id: str, per_subcategory: int = 5) -> int:
    """Create ``per_subcategory`` products in every subcategory for one store.

    Products the store already has (matched by name) are left alone.
    """
    subcategories = (await session.execute(select(Subcategory))).scalars().all()
    taken = set(
        (await session.execute(select(Product.name).where(Product.store_id == store_id))).scalars().all()
    )
    created = 0
    for subcategory in subcategories:
        for n in range(1, per_subcategory + 1):
            name = f"{subcategory.name} #{n} ({store_id[:6]})"
            if name in taken:
                continue
            session.add(
                Product(
                    store_id=store_id,
                    category_id=subcategory.category_id,
                    subcategory_id=subcategory.id,
                    name=name,
                    price=Decimal(random.randint(500, 20000)) / 100,
                    inventory=random.randint(0, 100),
                    rating=random.randint(0, 5),
                    tags=[_slug(subcategory.name)],
                )
            )
            created += 1
    await session.flush()
    return created


async def ensure_demo_store(session: AsyncSession) -> Store:
    store = (
        await session.execute(select(Store).where(Store.slug == DEMO_STORE_SLUG))
    ).scalar_one_or_none()
    if store is None:
        store = Store(name="Demo Store", slug=DEMO_STORE_SLUG, active=True)
        session.add(store)
        await session.flush()
    return store


async def run_seed(store_id: str | None = None) -> None:
    start = time.monotonic()
    engine = build_engine(settings.database_url)
    try:
        await create_tables(engine)
        async with build_session_factory(engine)() as session:
            await seed_categories(session)
            if store_id is None:
                store_id = (await ensure_demo_store(session)).id
            created = await seed_products(session, store_id)
            await session.commit()
    finally:
        await engine.dispose()
    logger.info(
        "Seed completed: %d products for store %s in %dms",
        created, store_id, round((time.monotonic() - start) * 1000),
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    asyncio.run(run_seed(sys.argv[1] if len(sys.argv) > 1 else None))
