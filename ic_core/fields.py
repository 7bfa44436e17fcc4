"""Working items and the metadata derived from their trees."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, NamedTuple

from ic_core.tree import TreeNode, find_first

if TYPE_CHECKING:
    from ic_store.interfaces import CatalogEntry

NAME_TAG = "name"

# Root attribute -> WorkingItem field
ROOT_ATTRIBUTE_FIELDS = {
    "id": "item",
    "protocol": "protocol",
    "region": "region",
}


class ItemIdentity(NamedTuple):
    """The triple that makes two working items the same entity."""

    item: str
    protocol: str | None
    region: str | None


@dataclass(frozen=True)
class WorkingItem:
    """An edit session over one catalog entry's tree."""

    item: str
    name: str | None = None
    protocol: str | None = None
    region: str | None = None
    dir: str | None = None
    tree: TreeNode | None = None

    @property
    def identity(self) -> ItemIdentity:
        return ItemIdentity(self.item, self.protocol, self.region)

    @classmethod
    def from_entry(cls, entry: "CatalogEntry") -> "WorkingItem":
        return cls(
            item=entry.item,
            name=entry.name,
            protocol=entry.protocol,
            region=entry.region,
            dir=entry.dir,
        )

    def with_tree(self, tree: TreeNode | None) -> "WorkingItem":
        return replace(self, tree=tree)

    def label(self) -> str:
        """Short display text: id followed by the name, protocol and region."""
        parts = [self.item]
        parts.extend(p for p in (self.name, self.protocol, self.region) if p)
        return " ".join(parts)


def _first_descendant(tree: TreeNode, name: str) -> TreeNode | None:
    for child in tree.children:
        found = find_first(child, name)
        if found is not None:
            return found
    return None


def derive_fields(item: WorkingItem, tree: TreeNode) -> WorkingItem:
    """Return ``item`` carrying ``tree`` with name/id/protocol/region synced.

    The display name comes from the first node named ``name`` in pre-order;
    identity fields come from the root's attributes. Missing sources leave
    the existing field values in place.
    """
    updates: dict[str, str | None] = {}

    name_node = _first_descendant(tree, NAME_TAG)
    if name_node is not None:
        updates["name"] = name_node.value

    for attribute, field_name in ROOT_ATTRIBUTE_FIELDS.items():
        if attribute in tree.attributes:
            updates[field_name] = tree.attributes[attribute]

    return replace(item, tree=tree, **updates)
