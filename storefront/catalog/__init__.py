"""
Catalog package for the storefront API.

Exposes the generated book catalog to the single-page front-end and the
admin editor routes (add, edit, delete) that mutate the in-memory store.
"""

from .router import router as catalog_router  # noqa: F401
