"""Identity-keyed working set of items open for editing."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterator

from ic_common.errors import FetchError, SaveError, wrap_error
from ic_core.fields import ItemIdentity, WorkingItem, derive_fields
from ic_core.tree import EMPTY_NODE, TreeNode

if TYPE_CHECKING:
    from ic_store.interfaces import CatalogEntry, ItemTreeService

logger = logging.getLogger(__name__)

ItemListener = Callable[[WorkingItem], None]


class ItemRegistry:
    """Ordered set of WorkingItems, unique by ``(item, protocol, region)``.

    ``upsert`` is the only place the set is modified. Search, parsing and
    field derivation all produce new values that are handed to it.
    """

    def __init__(self, store: "ItemTreeService") -> None:
        self._store = store
        self._items: list[WorkingItem] = []
        self._active: WorkingItem | None = None
        self._appended_listeners: list[ItemListener] = []
        self._changed_listeners: list[Callable[[], None]] = []

    @property
    def items(self) -> list[WorkingItem]:
        """Snapshot of the working set in display order."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[WorkingItem]:
        return iter(list(self._items))

    def on_appended(self, callback: ItemListener) -> None:
        """Call ``callback`` whenever an upsert appends a new item."""
        self._appended_listeners.append(callback)

    def on_changed(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` after every change to the working set."""
        self._changed_listeners.append(callback)

    def _index_of(self, identity: ItemIdentity) -> int | None:
        for index, existing in enumerate(self._items):
            if existing.identity == identity:
                return index
        return None

    def get(self, identity: ItemIdentity) -> WorkingItem | None:
        index = self._index_of(identity)
        return None if index is None else self._items[index]

    def upsert(self, item: WorkingItem, previous: ItemIdentity | None = None) -> bool:
        """Insert ``item`` or replace the entry with the same identity.

        ``previous`` names the identity the item had before an edit changed
        its id, protocol or region; that slot is replaced so the row keeps
        its position. Returns True when the item was appended.
        """
        index = self._index_of(item.identity)
        if previous is not None and previous != item.identity:
            previous_index = self._index_of(previous)
            if previous_index is not None:
                if index is not None:
                    # The new identity already had its own row; keep one.
                    del self._items[index]
                    if index < previous_index:
                        previous_index -= 1
                index = previous_index

        if index is None:
            self._items.append(item)
        else:
            self._items[index] = item

        if self._active is not None and self._active.identity in (item.identity, previous):
            self._active = item

        self._notify_changed()
        if index is None:
            logger.debug("Appended item %s", item.identity)
            for callback in list(self._appended_listeners):
                callback(item)
            return True
        return False

    def remove(self, identity: ItemIdentity) -> WorkingItem | None:
        """Drop the item with ``identity``; clears the active pointer if it matched."""
        index = self._index_of(identity)
        if index is None:
            return None
        removed = self._items.pop(index)
        if self._active is not None and self._active.identity == identity:
            self._active = None
        self._notify_changed()
        return removed

    def clear(self) -> None:
        self._items.clear()
        self._active = None
        self._notify_changed()

    def set_active(self, item: WorkingItem | None) -> None:
        self._active = item

    def get_active(self) -> WorkingItem | None:
        return self._active

    def prepare_entry(self, descriptor: "CatalogEntry | WorkingItem") -> WorkingItem:
        """Existing working item for ``descriptor`` or a fresh, tree-less one."""
        if isinstance(descriptor, WorkingItem):
            candidate = descriptor
        else:
            candidate = WorkingItem.from_entry(descriptor)
        return self.get(candidate.identity) or candidate

    def load_tree(self, item: WorkingItem) -> TreeNode:
        """Fetch the tree for ``item``; failures yield the empty sentinel.

        Does not touch the working set, so it may run off the GUI thread.
        """
        try:
            return self._store.fetch_item_tree(item.item, item.protocol, item.region, dir=item.dir)
        except FetchError as exc:
            logger.warning("Could not fetch tree for %s: %s", item.identity, exc.to_dict())
        except Exception as exc:
            error = wrap_error(
                FetchError,
                f"Store failed to provide {item.item}",
                context={"item": item.item, "protocol": item.protocol, "region": item.region},
                cause=exc,
            )
            logger.warning("Could not fetch tree for %s: %s", item.identity, error.to_dict())
        return EMPTY_NODE

    def complete_selection(self, item: WorkingItem, tree: TreeNode) -> WorkingItem:
        """Attach a fetched tree to ``item``, sync its fields and upsert it."""
        synced = derive_fields(item, tree)
        self.upsert(synced, previous=item.identity)
        return synced

    def select_catalog_entry(self, descriptor: "CatalogEntry | WorkingItem") -> WorkingItem:
        """Open ``descriptor`` for editing, fetching its tree if needed."""
        item = self.prepare_entry(descriptor)
        if item.tree is not None:
            self.upsert(item)
            return item
        return self.complete_selection(item, self.load_tree(item))

    def apply_tree(self, identity: ItemIdentity, tree: TreeNode) -> WorkingItem:
        """Record an edited tree for the item with ``identity``."""
        current = self.get(identity)
        if current is None:
            current = WorkingItem(item=identity.item, protocol=identity.protocol, region=identity.region)
        updated = derive_fields(current, tree)
        self.upsert(updated, previous=identity)
        return updated

    def save(self, item: WorkingItem) -> None:
        """Persist ``item``'s tree through the store.

        Raises SaveError; nothing is retried and the working set is left as is.
        """
        if not item.protocol or item.tree is None or item.tree.is_empty:
            raise SaveError(
                "Protocol or tree is missing",
                context={"item": item.item, "protocol": item.protocol},
            )
        try:
            self._store.save_item_tree(item.item, item.protocol, item.region, item.tree, dir=item.dir)
        except SaveError:
            raise
        except Exception as exc:
            raise wrap_error(
                SaveError,
                f"Failed to save {item.item}: {exc}",
                context={"item": item.item, "protocol": item.protocol, "region": item.region},
                cause=exc,
            ) from exc
        logger.info("Saved item %s", item.identity)

    def _notify_changed(self) -> None:
        for callback in list(self._changed_listeners):
            callback()
