"""Public API surface for ic_core."""

from ic_core.editing import EditOrigin, EditOutcome, TextEditSession
from ic_core.fields import ItemIdentity, WorkingItem, derive_fields
from ic_core.markup import parse, serialize
from ic_core.registry import ItemRegistry
from ic_core.search import SearchResult, TermKind, classify_term, run_search, search
from ic_core.tree import (
    EMPTY_NODE,
    TreeNode,
    find_first,
    move_child,
    node_at,
    replace_at,
)

__all__ = [
    "EMPTY_NODE",
    "EditOrigin",
    "EditOutcome",
    "ItemIdentity",
    "ItemRegistry",
    "SearchResult",
    "TermKind",
    "TextEditSession",
    "TreeNode",
    "WorkingItem",
    "classify_term",
    "derive_fields",
    "find_first",
    "move_child",
    "node_at",
    "parse",
    "replace_at",
    "run_search",
    "search",
    "serialize",
]
