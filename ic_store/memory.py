"""Dictionary-backed store for tests and demos."""

from __future__ import annotations

import logging
from typing import Iterable

from ic_common.errors import FetchError
from ic_core.fields import ItemIdentity
from ic_core.tree import TreeNode
from ic_store.interfaces import CatalogEntry

logger = logging.getLogger(__name__)

_TreeKey = tuple[ItemIdentity, str | None]


class InMemoryItemStore:
    """Keeps catalog entries and item trees in memory.

    Trees are keyed by identity plus ``dir``. A lookup without ``dir``, or
    against a tree stored without one, matches on identity alone, mirroring
    how ``dir`` only narrows matches in the XML catalog.

    Every successful save is recorded in ``saved`` so callers can assert on
    what was persisted.
    """

    def __init__(
        self,
        entries: Iterable[CatalogEntry] = (),
        trees: dict[ItemIdentity, TreeNode] | None = None,
    ) -> None:
        self._entries: list[CatalogEntry] = list(entries)
        self._trees: dict[_TreeKey, TreeNode] = {
            (identity, None): tree for identity, tree in (trees or {}).items()
        }
        self.saved: list[tuple[ItemIdentity, TreeNode]] = []

    def add(self, entry: CatalogEntry, tree: TreeNode | None = None) -> None:
        self._entries.append(entry)
        if tree is not None:
            identity = ItemIdentity(entry.item, entry.protocol, entry.region)
            self._trees[(identity, entry.dir)] = tree

    def get_all_items(self) -> list[CatalogEntry]:
        return list(self._entries)

    def _lookup(self, identity: ItemIdentity, dir: str | None) -> TreeNode | None:
        if (identity, dir) in self._trees:
            return self._trees[(identity, dir)]
        for (stored, stored_dir), tree in self._trees.items():
            if stored == identity and (dir is None or stored_dir is None):
                return tree
        return None

    def fetch_item_tree(
        self,
        item: str,
        protocol: str | None,
        region: str | None,
        dir: str | None = None,
    ) -> TreeNode:
        tree = self._lookup(ItemIdentity(item, protocol, region), dir)
        if tree is None:
            raise FetchError(
                f"Item {item} not found",
                context={"item": item, "protocol": protocol, "region": region, "dir": dir},
            )
        return tree

    def save_item_tree(
        self,
        item: str,
        protocol: str | None,
        region: str | None,
        tree: TreeNode,
        dir: str | None = None,
    ) -> None:
        identity = ItemIdentity(item, protocol, region)
        self._trees[(identity, dir)] = tree
        self.saved.append((identity, tree))
        logger.debug("Stored tree for %s (dir=%s)", identity, dir)
