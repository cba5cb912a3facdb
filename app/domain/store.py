"""SQLAlchemy ORM model for Stores.

A store is "active" for the storefront when it has a linked payment account
(``stripe_account_id IS NOT NULL``). Linking the account happens elsewhere.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.mixins import IdMixin, TimestampMixin


class Store(Base, IdMixin, TimestampMixin):
    __tablename__ = "stores"

    user_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    stripe_account_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
