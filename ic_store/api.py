"""Public API surface for ic_store."""

from ic_store.interfaces import CatalogEntry, CatalogProvider, ItemStore, ItemTreeService
from ic_store.memory import InMemoryItemStore
from ic_store.settings import (
    ItemConfigSettings,
    load_field_definitions,
    load_settings,
)
from ic_store.xml_catalog import XmlCatalogStore, clean_region

__all__ = [
    "CatalogEntry",
    "CatalogProvider",
    "InMemoryItemStore",
    "ItemConfigSettings",
    "ItemStore",
    "ItemTreeService",
    "XmlCatalogStore",
    "clean_region",
    "load_field_definitions",
    "load_settings",
]
