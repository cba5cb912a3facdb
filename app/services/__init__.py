"""Services package — all business logic lives here, never in routers.

Files:
  catalog.py   — paginated catalog listings (products, product table, stores), search, featured
  product.py   — store-scoped product management
  store.py     — store lookups
  category.py  — category / subcategory lookups

Rule: routers call services, services call repositories (or the catalog query builder),
      repositories call the DB. No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
