from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.domain.store import Store
from app.repositories.store import StoreRepository

class StoreService:
    def __init__(self, session: AsyncSession):
        self._repo = StoreRepository(session)

    async def get_store(self, store_id: str) -> Store:
        store = await self._repo.get_by_id(store_id)
        if not store:
            raise NotFoundError("Store", store_id)
        return store
