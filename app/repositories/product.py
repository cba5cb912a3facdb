"""Product repository — store-scoped lookups used by product management."""


from sqlalchemy import select

from app.domain.product import Product
from app.repositories.base import BaseRepository


class ProductRepository(BaseRepository[Product]):
    model = Product

    async def get_by_name(self, name: str) -> Product | None:
        result = await self._session.execute(
            select(Product).where(Product.name == name).limit(1)
        )
        return result.scalars().first()

    async def get_in_store(self, store_id: str, product_id: str) -> Product | None:
        result = await self._session.execute(
            select(Product)
            .where(Product.id == product_id)
            .where(Product.store_id == store_id)
        )
        return result.scalars().first()
