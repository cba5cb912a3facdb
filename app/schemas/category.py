"""Category / Subcategory Pydantic schemas."""


from app.schemas.common import CamelModel

class CategoryOut(CamelModel):
    id: str
    name: str
    slug: str
    description: str | None = None

class SubcategoryOut(CamelModel):
    id: str
    category_id: str
    name: str
    slug: str
    description: str | None = None

class ProductMatch(CamelModel):
    id: str
    name: str

class CategoryWithProducts(CamelModel):
    """Search result group: one category and its products matching the query."""

    id: str
    name: str
    products: list[ProductMatch]
