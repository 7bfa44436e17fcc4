"""ViewModel for the item configuration page."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, Signal

from ic_core.fields import ItemIdentity, WorkingItem
from ic_core.registry import ItemRegistry
from ic_gui.workers import StoreCallWorker

if TYPE_CHECKING:
    from ic_core.tree import TreeNode
    from ic_gui.services import CatalogService
    from ic_store.api import CatalogEntry

logger = logging.getLogger(__name__)


class ItemConfigViewModel(QObject):
    """ViewModel for the catalog, the open items and the active item.

    Store calls run on StoreCallWorker threads; their results are applied
    to the registry here, on the GUI thread.
    """

    # Signals
    catalog_loaded = Signal(list)  # list of CatalogEntry
    items_changed = Signal(list)  # list of WorkingItem
    item_appended = Signal(object)  # WorkingItem, for scroll-into-view
    active_changed = Signal(object)  # WorkingItem or None
    saved = Signal(object)  # WorkingItem
    loading_changed = Signal(bool)
    status_changed = Signal(str)
    error_occurred = Signal(str)

    def __init__(
        self,
        catalog_service: "CatalogService",
        registry: ItemRegistry | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._catalog_service = catalog_service
        self._registry = registry if registry is not None else ItemRegistry(catalog_service.store)
        self._registry.on_appended(self.item_appended.emit)
        self._registry.on_changed(self._emit_items)

        # State
        self._catalog: list["CatalogEntry"] = []
        self._workers: list[StoreCallWorker] = []
        self._loading: int = 0

    @property
    def registry(self) -> ItemRegistry:
        return self._registry

    @property
    def catalog(self) -> list["CatalogEntry"]:
        """Catalog entries from the last successful load."""
        return self._catalog

    @property
    def items(self) -> list[WorkingItem]:
        return self._registry.items

    @property
    def active_item(self) -> WorkingItem | None:
        return self._registry.get_active()

    @property
    def is_loading(self) -> bool:
        return self._loading > 0

    def load_catalog(self) -> None:
        """Load every catalog entry from the store."""
        self._start(self._catalog_service.list_items, context=None,
                    on_finished=self._on_catalog_loaded, on_failed=self._on_catalog_failed)

    def select_catalog_entry(self, entry: "CatalogEntry | WorkingItem") -> None:
        """Open ``entry`` and make it the active item.

        The tree is fetched in the background the first time; a failed
        fetch still opens the item, with an empty tree.
        """
        item = self._registry.prepare_entry(entry)
        self.set_active(item)
        if item.tree is not None:
            self._registry.upsert(item)
            return
        self._start(self._registry.load_tree, item, context=item,
                    on_finished=self._on_tree_loaded, on_failed=self._on_tree_failed)

    def set_active(self, item: WorkingItem | None) -> None:
        self._registry.set_active(item)
        self.active_changed.emit(item)

    def apply_tree(self, tree: "TreeNode") -> None:
        """Record an edited tree for the active item."""
        active = self._registry.get_active()
        if active is None:
            self.error_occurred.emit("No item selected")
            return
        updated = self._registry.apply_tree(active.identity, tree)
        self.set_active(updated)

    def remove(self, identity: ItemIdentity) -> None:
        was_active = self.active_item is not None and self.active_item.identity == identity
        removed = self._registry.remove(identity)
        if removed is not None and was_active:
            self.active_changed.emit(None)

    def save_active(self) -> None:
        """Persist the active item through the store."""
        active = self._registry.get_active()
        if active is None:
            self.error_occurred.emit("No item selected")
            return
        self.save(active)

    def save(self, item: WorkingItem) -> None:
        self._start(self._registry.save, item, context=item,
                    on_finished=self._on_saved, on_failed=self._on_save_failed)

    def get_item_rows(self) -> list[list[str]]:
        """Open items formatted as table rows."""
        return [
            [item.item, item.name or "", item.protocol or "", item.region or ""]
            for item in self._registry.items
        ]

    def _start(self, call, *args, context, on_finished, on_failed) -> None:
        self._workers = [worker for worker in self._workers if worker.is_running()]
        worker = StoreCallWorker(call, *args, context=context)
        worker.signals.finished.connect(on_finished)
        worker.signals.failed.connect(on_failed)
        worker.signals.finished.connect(self._on_worker_done)
        worker.signals.failed.connect(self._on_worker_done)
        self._workers.append(worker)
        self._set_loading(+1)
        worker.start()

    def _set_loading(self, delta: int) -> None:
        was_loading = self.is_loading
        self._loading = max(0, self._loading + delta)
        if was_loading != self.is_loading:
            self.loading_changed.emit(self.is_loading)

    def _emit_items(self) -> None:
        self.items_changed.emit(self._registry.items)

    def _on_worker_done(self, _context: object, _result: object) -> None:
        self._set_loading(-1)

    def _on_catalog_loaded(self, _context: object, entries: list) -> None:
        self._catalog = list(entries)
        self.catalog_loaded.emit(self._catalog)
        self.status_changed.emit(f"Loaded {len(self._catalog)} catalog entries")

    def _on_catalog_failed(self, _context: object, message: str) -> None:
        logger.error("Catalog load failed: %s", message)
        self.error_occurred.emit(f"Failed to load catalog: {message}")

    def _on_tree_loaded(self, item: WorkingItem, tree: "TreeNode") -> None:
        synced = self._registry.complete_selection(item, tree)
        if tree.is_empty:
            self.status_changed.emit(f"No definition found for {item.item}")
        active = self._registry.get_active()
        if active is not None and active.identity in (item.identity, synced.identity):
            self.set_active(synced)

    def _on_tree_failed(self, item: WorkingItem, message: str) -> None:
        # load_tree already falls back to an empty tree; reaching here means
        # the call itself blew up.
        logger.error("Tree fetch for %s failed: %s", item.identity, message)
        self.error_occurred.emit(f"Failed to load {item.item}: {message}")

    def _on_saved(self, item: WorkingItem, _result: object) -> None:
        self.saved.emit(item)
        self.status_changed.emit(f"Saved {item.item}")

    def _on_save_failed(self, item: WorkingItem, message: str) -> None:
        logger.error("Save of %s failed: %s", item.identity, message)
        self.error_occurred.emit(f"Failed to save {item.item}: {message}")
