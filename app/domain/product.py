"""SQLAlchemy ORM model for Products."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import ForeignKey, Integer, JSON, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.mixins import IdMixin, TimestampMixin


class Product(Base, IdMixin, TimestampMixin):
    __tablename__ = "products"

    store_id: Mapped[str] = mapped_column(
        String(30), ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[str] = mapped_column(
        String(30), ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    subcategory_id: Mapped[Optional[str]] = mapped_column(
        String(30), ForeignKey("subcategories.id", ondelete="SET NULL"), nullable=True, index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # [{"id": ..., "name": ..., "url": ...}] — metadata of already-uploaded files
    images: Mapped[Optional[Any]] = mapped_column(JSON(none_as_null=True), nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    inventory: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    tags: Mapped[Optional[Any]] = mapped_column(JSON(none_as_null=True), nullable=True)
