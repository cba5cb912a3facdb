"""Category lookups for navigation menus and product forms."""


from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.domain.category import Category, Subcategory
from app.repositories.category import CategoryRepository, SubcategoryRepository

class CategoryService:
    def __init__(self, session: AsyncSession):
        self._categories = CategoryRepository(session)
        self._subcategories = SubcategoryRepository(session)

    async def list_categories(self) -> list[Category]:
        return await self._categories.list_all()

    async def list_subcategories(self, category_id: str | None = None) -> list[Subcategory]:
        if category_id is not None and not await self._categories.get_by_id(category_id):
            raise NotFoundError("Category", category_id)
        return await self._subcategories.list_all(category_id)
