"""Generic async repository for simple CRUD on one ORM model."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository. Subclasses set ``model``."""

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _base_query(self):
        return select(self.model)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: str) -> ModelT | None:
        result = await self._session.execute(
            self._base_query().where(self.model.id == entity_id)
        )
        return result.scalars().first()

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._session.flush()  # populate id and server defaults
        await self._session.refresh(instance)
        return instance

    async def update(self, entity_id: str, **kwargs: Any) -> ModelT | None:
        from datetime import datetime, timezone

        kwargs.pop("id", None)
        if "updated_at" not in kwargs and hasattr(self.model, "updated_at"):
            kwargs["updated_at"] = datetime.now(timezone.utc)

        await self._session.execute(
            update(self.model)
            .where(self.model.id == entity_id)
            .values(**kwargs)
            .execution_options(synchronize_session=False)
        )
        await self._session.flush()
        self._session.expire_all()
        return await self.get_by_id(entity_id)

    async def delete(self, entity_id: str) -> bool:
        result = await self._session.execute(
            delete(self.model).where(self.model.id == entity_id)
        )
        await self._session.flush()
        return result.rowcount > 0
