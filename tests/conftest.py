"""Shared pytest fixtures: in-memory SQLite catalog and an app wired to it."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import build_session_factory
from app.db.seed import create_tables, seed_categories
from app.domain.category import Subcategory
from app.domain.product import Product
from app.domain.store import Store
from app.services.catalog import CatalogService

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def catalog(session_factory):
    return CatalogService(session_factory)


@pytest_asyncio.fixture
async def categories(session_factory):
    """Seeded categories by name; each has its subcategories loaded into ``subs``."""
    async with session_factory() as session:
        by_name = await seed_categories(session)
        await session.commit()
        subs = (await session.execute(Subcategory.__table__.select())).mappings().all()
    return {
        name: {
            "id": category.id,
            "subs": {s["name"]: s["id"] for s in subs if s["category_id"] == category.id},
        }
        for name, category in by_name.items()
    }


@pytest_asyncio.fixture
async def add_store(session_factory):
    async def _add(store_id: str, stripe_account_id: str | None = None, **kwargs) -> str:
        async with session_factory() as session:
            session.add(
                Store(
                    id=store_id,
                    name=kwargs.pop("name", f"Store {store_id}"),
                    stripe_account_id=stripe_account_id,
                    **kwargs,
                )
            )
            await session.commit()
        return store_id

    return _add


@pytest_asyncio.fixture
async def add_products(session_factory, categories):
    """Insert ``count`` products; prices and creation times step with the index."""

    async def _add(
        store_id: str,
        category: str,
        count: int,
        *,
        subcategory: str | None = None,
        prefix: str | None = None,
        price_step: Decimal = Decimal("10"),
        start: int = 0,
    ) -> list[str]:
        info = categories[category]
        prefix = prefix or f"{store_id}-{category}"
        ids = []
        async with session_factory() as session:
            for i in range(start, start + count):
                product = Product(
                    id=f"{prefix}-{i:03d}",
                    store_id=store_id,
                    category_id=info["id"],
                    subcategory_id=info["subs"][subcategory] if subcategory else None,
                    name=f"{prefix} item {i:03d}",
                    price=price_step * (i + 1),
                    inventory=i,
                    rating=i % 6,
                    created_at=BASE_TIME + timedelta(minutes=i),
                    updated_at=BASE_TIME + timedelta(minutes=i),
                )
                session.add(product)
                ids.append(product.id)
            await session.commit()
        return ids

    return _add


@pytest_asyncio.fixture
async def shoes_catalog(add_store, add_products):
    """15 Shoes in store A, 5 Clothing items in store B."""
    await add_store("A", "acct_A")
    await add_store("B", "acct_B")
    shoes = await add_products("A", "Shoes", 15, subcategory="Sneakers")
    clothing = await add_products("B", "Clothing", 5, subcategory="Hoodies")
    return {"shoes": shoes, "clothing": clothing}


@pytest_asyncio.fixture
async def multi_store_catalog(add_store, add_products):
    """Two Shoes in each of stores A, B, C (payment account) and D (none)."""
    await add_store("A", "acct_A")
    await add_store("B", "acct_B")
    await add_store("C", "acct_C")
    await add_store("D", None)
    return {
        store_id: await add_products(store_id, "Shoes", 2)
        for store_id in ("A", "B", "C", "D")
    }


@pytest_asyncio.fixture
async def client(engine):
    from app.main import create_app

    app = create_app(engine=engine)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
