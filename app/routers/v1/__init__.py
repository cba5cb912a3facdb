"""v1 router package — all /api/v1/* endpoints live here.

Files:
  products.py    — storefront product listing, featured, search, detail, rating
  stores.py      — store listing/detail and the merchant product table + CRUD
  categories.py  — categories, subcategories, per-category product counts
  deps.py        — shared dependencies (CatalogService over the app's session factory)

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to app/services/.
"""
