"""Service layer wrappers around ic_store."""

from ic_gui.services.catalog_service import CatalogService

__all__ = ["CatalogService"]
