"""Pydantic schemas package.

Folder intent:
  common.py    — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  catalog.py   — Query-string normalizers: FilterDescriptor, ProductTableFilter, StoreFilter
  product.py   — Product DTOs and listing rows
  store.py     — Store responses
  category.py  — Category / Subcategory responses and search groups
"""
