"""Store Pydantic schemas."""


from datetime import datetime

from app.schemas.common import CamelModel

class StoreOut(CamelModel):
    id: str
    user_id: str | None = None
    name: str
    slug: str | None = None
    description: str | None = None
    active: bool
    stripe_account_id: str | None = None
    created_at: datetime
    updated_at: datetime

class StoreListItem(CamelModel):
    id: str
    name: str
    description: str | None = None
    stripe_account_id: str | None = None
    product_count: int = 0
    created_at: datetime
