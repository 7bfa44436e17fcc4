"""Data-item tree model, markup conversion and the item registry."""

from ic_core.api import (
    EMPTY_NODE,
    ItemRegistry,
    TreeNode,
    WorkingItem,
    parse,
    serialize,
)

__all__ = [
    "EMPTY_NODE",
    "ItemRegistry",
    "TreeNode",
    "WorkingItem",
    "parse",
    "serialize",
]
