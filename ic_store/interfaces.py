"""Capabilities the item registry needs from a backing store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ic_core.tree import TreeNode


@dataclass(frozen=True)
class CatalogEntry:
    """One data item as listed by the catalog."""

    item: str
    name: str | None = None
    protocol: str | None = None
    region: str | None = None
    dir: str | None = None


@runtime_checkable
class CatalogProvider(Protocol):
    """Lists every data item the store knows about."""

    def get_all_items(self) -> list[CatalogEntry]:
        ...


@runtime_checkable
class ItemTreeService(Protocol):
    """Loads and stores the definition tree of a single item.

    ``fetch_item_tree`` raises FetchError and ``save_item_tree`` raises
    SaveError; other exceptions are wrapped by the registry. ``dir`` only
    narrows a match when the stored definition carries one too.
    """

    def fetch_item_tree(
        self, item: str, protocol: str | None, region: str | None, dir: str | None = None
    ) -> TreeNode:
        ...

    def save_item_tree(
        self,
        item: str,
        protocol: str | None,
        region: str | None,
        tree: TreeNode,
        dir: str | None = None,
    ) -> None:
        ...


class ItemStore(CatalogProvider, ItemTreeService, Protocol):
    """A store offering both the catalog and item trees."""
