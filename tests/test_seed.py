import pytest
from sqlalchemy import func, select

from app.db.seed import ensure_demo_store, seed_categories, seed_products
from app.domain.category import Category, Subcategory
from app.domain.product import Product
from app.domain.store import Store


async def _seed_once(session_factory) -> int:
    async with session_factory() as session:
        await seed_categories(session)
        store = await ensure_demo_store(session)
        created = await seed_products(session, store.id, per_subcategory=2)
        await session.commit()
    return created


@pytest.mark.asyncio
async def test_seeding_twice_is_idempotent(session_factory):
    assert await _seed_once(session_factory) == 18
    assert await _seed_once(session_factory) == 0

    async with session_factory() as session:
        for model, expected in ((Store, 1), (Category, 3), (Subcategory, 9), (Product, 18)):
            total = await session.scalar(select(func.count()).select_from(model))
            assert total == expected, model.__name__
