"""Reusable SQLAlchemy column mixins and id generation."""

from __future__ import annotations

import secrets
import string
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

_ID_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase


def generate_id(length: int = 16) -> str:
    """Random alphanumeric id, e.g. ``dGnDy3iemggcAbCE``."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def _now() -> datetime:
    return datetime.now(timezone.utc)


class IdMixin:
    """Adds a 30-char string primary key filled with :func:`generate_id`."""

    id: Mapped[str] = mapped_column(String(30), primary_key=True, default=generate_id)


class TimestampMixin:
    """Adds created_at and updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_now,
        onupdate=_now,
        server_default=func.now(),
        nullable=False,
    )
