"""Wrapper around the configured item store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ic_store.api import XmlCatalogStore

if TYPE_CHECKING:
    from ic_store.api import CatalogEntry, ItemConfigSettings, ItemStore

logger = logging.getLogger(__name__)


class CatalogService:
    """Service for listing catalog entries and reaching the item store."""

    def __init__(self, store: "ItemStore | None" = None) -> None:
        self._store = store
        self._entries: list["CatalogEntry"] = []

    def configure(self, settings: "ItemConfigSettings") -> None:
        """Back the service with the XML catalog named in ``settings``."""
        self._store = XmlCatalogStore(
            settings.catalog_dir,
            default_protocol=settings.default_protocol,
            default_region=settings.default_region,
        )
        self._entries = []
        logger.info("Catalog service using %s", settings.catalog_dir)

    @property
    def is_configured(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> "ItemStore":
        """Access the underlying store, raising if none is configured."""
        if self._store is None:
            raise RuntimeError("CatalogService not configured. Call configure() first.")
        return self._store

    @property
    def entries(self) -> list["CatalogEntry"]:
        """Entries from the most recent ``list_items`` call."""
        return list(self._entries)

    def list_items(self) -> list["CatalogEntry"]:
        """Fetch every catalog entry from the store."""
        self._entries = list(self.store.get_all_items())
        return list(self._entries)
