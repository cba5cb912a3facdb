from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Storefront Catalog API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    # Database (PostgreSQL via asyncpg or SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./storefront_dev.db",
        alias="DATABASE_URL",
    )
    # Isolation level for the catalog read transaction. None = backend default,
    # except PostgreSQL which gets REPEATABLE READ (see read_isolation_level).
    catalog_isolation_level: str | None = Field(
        default=None, alias="CATALOG_ISOLATION_LEVEL",
    )

    # Page sizes
    catalog_per_page: int = Field(default=8, alias="CATALOG_PER_PAGE")
    product_table_per_page: int = Field(default=10, alias="PRODUCT_TABLE_PER_PAGE")
    store_per_page: int = Field(default=10, alias="STORE_PER_PAGE")
    max_per_page: int = Field(default=200, alias="MAX_PER_PAGE")
    featured_products_limit: int = Field(default=8, alias="FEATURED_PRODUCTS_LIMIT")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_postgres(self) -> bool:
        return self.database_url.startswith("postgresql")

    @property
    def read_isolation_level(self) -> str | None:
        """Isolation level for the item + count read pair."""
        if self.catalog_isolation_level:
            return self.catalog_isolation_level
        return "REPEATABLE READ" if self.is_postgres else None

settings = Settings()
