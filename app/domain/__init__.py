"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  store.py     — Stores (payment-account link marks a store as active)
  category.py  — Categories and their Subcategories
  product.py   — Products, owned by a store
  mixins.py    — Shared IdMixin, TimestampMixin, generate_id
"""

from app.domain.category import Category, Subcategory
from app.domain.product import Product
from app.domain.store import Store

__all__ = [
    "Category",
    "Product",
    "Store",
    "Subcategory",
]
