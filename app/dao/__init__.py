"""Data access package."""
from app.dao.catalog_store import CatalogStore

__all__ = ["CatalogStore"]
