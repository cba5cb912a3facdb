"""Category and Subcategory repositories."""


from sqlalchemy import select

from app.domain.category import Category, Subcategory
from app.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    model = Category

    async def list_all(self) -> list[Category]:
        result = await self._session.execute(select(Category).order_by(Category.name.desc()))
        return list(result.scalars().all())


class SubcategoryRepository(BaseRepository[Subcategory]):
    model = Subcategory

    async def list_all(self, category_id: str | None = None) -> list[Subcategory]:
        q = select(Subcategory).order_by(Subcategory.name.asc())
        if category_id is not None:
            q = q.where(Subcategory.category_id == category_id)
        result = await self._session.execute(q)
        return list(result.scalars().all())
