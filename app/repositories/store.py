from app.domain.store import Store
from app.repositories.base import BaseRepository


class StoreRepository(BaseRepository[Store]):
    model = Store
