"""Store capabilities and implementations for item definitions."""

from ic_store.api import (
    CatalogEntry,
    InMemoryItemStore,
    ItemConfigSettings,
    XmlCatalogStore,
    load_settings,
)

__all__ = [
    "CatalogEntry",
    "InMemoryItemStore",
    "ItemConfigSettings",
    "XmlCatalogStore",
    "load_settings",
]
