"""Product Pydantic schemas (request DTOs and response models)."""


from datetime import datetime
from decimal import Decimal

from pydantic import Field

from app.schemas.common import CamelModel

class StoredFile(CamelModel):
    """Metadata of an image that was uploaded to file storage beforehand."""

    id: str
    name: str
    url: str

class ProductCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category_id: str
    subcategory_id: str | None = None
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    inventory: int = Field(default=0, ge=0)
    images: list[StoredFile] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

class ProductUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category_id: str | None = None
    subcategory_id: str | None = None
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    inventory: int | None = Field(default=None, ge=0)
    images: list[StoredFile] | None = None
    tags: list[str] | None = None

class ProductRatingUpdate(CamelModel):
    rating: int = Field(ge=0, le=5)

class ProductOut(CamelModel):
    id: str
    store_id: str
    category_id: str
    subcategory_id: str | None = None
    name: str
    description: str | None = None
    images: list[StoredFile] | None = None
    price: Decimal
    inventory: int
    rating: int
    tags: list[str] | None = None
    created_at: datetime
    updated_at: datetime

class ProductListItem(CamelModel):
    """Row of the storefront product listing (product joined with store/category)."""

    id: str
    name: str
    description: str | None = None
    images: list[StoredFile] | None = None
    category: str | None = None
    subcategory: str | None = None
    price: Decimal
    inventory: int
    rating: int
    tags: list[str] | None = None
    store_id: str
    created_at: datetime
    updated_at: datetime
    stripe_account_id: str | None = None

class ProductTableRow(CamelModel):
    """Row of the merchant dashboard product table."""

    id: str
    name: str
    category: str | None = None
    price: Decimal
    inventory: int
    rating: int
    created_at: datetime

class FeaturedProduct(CamelModel):
    id: str
    name: str
    images: list[StoredFile] | None = None
    category: str | None = None
    price: Decimal
    inventory: int
    stripe_account_id: str | None = None
