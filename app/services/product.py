"""Product management service — store-scoped product CRUD for the merchant dashboard.

Rule: No FastAPI here. Raise AppException subclasses for business rule violations.
"""


from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.domain.product import Product
from app.domain.store import Store
from app.repositories.category import CategoryRepository, SubcategoryRepository
from app.repositories.product import ProductRepository
from app.repositories.store import StoreRepository
from app.schemas.product import ProductCreate, ProductUpdate

# Columns an update may explicitly clear with null.
CLEARABLE_FIELDS = frozenset({"description", "subcategory_id", "images", "tags"})

class ProductService:
    def __init__(self, session: AsyncSession):
        self._products = ProductRepository(session)
        self._stores = StoreRepository(session)
        self._categories = CategoryRepository(session)
        self._subcategories = SubcategoryRepository(session)

    async def _require_store(self, store_id: str) -> Store:
        store = await self._stores.get_by_id(store_id)
        if not store:
            raise NotFoundError("Store", store_id)
        return store

    async def _require_in_store(self, store_id: str, product_id: str) -> Product:
        product = await self._products.get_in_store(store_id, product_id)
        if not product:
            raise NotFoundError("Product", product_id)
        return product

    async def _check_name_free(self, name: str, product_id: str | None = None) -> None:
        existing = await self._products.get_by_name(name)
        if existing and existing.id != product_id:
            raise ConflictError("Product name already taken.")

    async def _check_classification(self, category_id: str, subcategory_id: str | None) -> None:
        if not await self._categories.get_by_id(category_id):
            raise NotFoundError("Category", category_id)
        if subcategory_id is None:
            return
        subcategory = await self._subcategories.get_by_id(subcategory_id)
        if not subcategory:
            raise NotFoundError("Subcategory", subcategory_id)
        if subcategory.category_id != category_id:
            raise ValidationError("subcategory_id", "does not belong to the selected category")

    async def get_product(self, product_id: str) -> Product:
        product = await self._products.get_by_id(product_id)
        if not product:
            raise NotFoundError("Product", product_id)
        return product

    async def add_product(self, store_id: str, data: ProductCreate) -> Product:
        await self._require_store(store_id)
        await self._check_name_free(data.name)
        await self._check_classification(data.category_id, data.subcategory_id)
        return await self._products.create(store_id=store_id, **data.model_dump())

    async def update_product(self, store_id: str, product_id: str, data: ProductUpdate) -> Product:
        product = await self._require_in_store(store_id, product_id)
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in CLEARABLE_FIELDS
        }
        if "name" in changes and changes["name"] != product.name:
            await self._check_name_free(changes["name"], product_id)
        if "category_id" in changes or "subcategory_id" in changes:
            await self._check_classification(
                changes.get("category_id", product.category_id),
                changes.get("subcategory_id", product.subcategory_id),
            )
        if not changes:
            return product
        updated = await self._products.update(product_id, **changes)
        return updated  # type: ignore[return-value]

    async def update_rating(self, product_id: str, rating: int) -> Product:
        _ = await self.get_product(product_id)  # raises 404 if missing
        updated = await self._products.update(product_id, rating=rating)
        return updated  # type: ignore[return-value]

    async def delete_product(self, store_id: str, product_id: str) -> None:
        await self._require_in_store(store_id, product_id)
        await self._products.delete(product_id)
