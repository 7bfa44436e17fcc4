"""Immutable tree model for protocol data-item definitions."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterator, Mapping, Sequence

Path = Sequence[int]


@dataclass(frozen=True)
class TreeNode:
    """One element of a data-item definition.

    Nodes never point at their parent; edits return new nodes and the
    caller rebuilds the ancestors (see ``replace_at``). When ``value`` is not
    None it is authoritative and ``children`` is ignored on output.

    ``attributes`` is a read-only mapping; use ``with_attribute`` and
    ``without_attribute`` to change it.
    """

    name: str = ""
    attributes: Mapping[str, str] = field(default_factory=dict)
    value: str | None = None
    children: tuple["TreeNode", ...] = ()

    def __post_init__(self) -> None:
        # Read-only copy of the attributes; children always as a tuple.
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def __hash__(self) -> int:
        return hash((self.name, frozenset(self.attributes.items()), self.value, self.children))

    @property
    def is_empty(self) -> bool:
        """Whether this is the "unset" sentinel."""
        return self.name == ""

    def with_value(self, value: str | None) -> "TreeNode":
        return replace(self, value=value)

    def with_attribute(self, key: str, value: str) -> "TreeNode":
        attributes = dict(self.attributes)
        attributes[key] = value
        return replace(self, attributes=attributes)

    def without_attribute(self, key: str) -> "TreeNode":
        attributes = {k: v for k, v in self.attributes.items() if k != key}
        return replace(self, attributes=attributes)

    def with_children(self, children: Sequence["TreeNode"]) -> "TreeNode":
        return replace(self, children=tuple(children))

    def replace_child(self, index: int, child: "TreeNode") -> "TreeNode":
        children = list(self.children)
        children[index] = child
        return self.with_children(children)

    def insert_child(self, index: int, child: "TreeNode") -> "TreeNode":
        children = list(self.children)
        children.insert(index, child)
        return self.with_children(children)

    def remove_child(self, index: int) -> "TreeNode":
        children = list(self.children)
        del children[index]
        return self.with_children(children)

    def walk(self) -> Iterator["TreeNode"]:
        """Depth-first pre-order traversal, starting with this node."""
        yield self
        for child in self.children:
            yield from child.walk()


EMPTY_NODE = TreeNode()


def find_first(root: TreeNode, name: str) -> TreeNode | None:
    """Return the first node named ``name`` in pre-order, root included."""
    return next((node for node in root.walk() if node.name == name), None)


def move_child(parent: TreeNode, from_index: int, to_index: int) -> TreeNode:
    """Move one child of ``parent`` to a new position.

    Implemented as splice-and-reinsert: the child is taken out first and
    then inserted at ``to_index`` of the shortened sequence.
    """
    count = len(parent.children)
    for index in (from_index, to_index):
        if not 0 <= index < count:
            raise IndexError(f"child index {index} out of range for {count} children")
    if from_index == to_index:
        return parent
    children = list(parent.children)
    moved = children.pop(from_index)
    children.insert(to_index, moved)
    return parent.with_children(children)


def node_at(root: TreeNode, path: Path) -> TreeNode:
    """Follow a sequence of child indices from ``root``."""
    node = root
    for index in path:
        node = node.children[index]
    return node


def replace_at(root: TreeNode, path: Path, node: TreeNode) -> TreeNode:
    """Return a new root where the node at ``path`` is replaced by ``node``.

    Every ancestor along the path is rebuilt; siblings are shared.
    """
    if not path:
        return node
    head, rest = path[0], path[1:]
    return root.replace_child(head, replace_at(root.children[head], rest, node))
