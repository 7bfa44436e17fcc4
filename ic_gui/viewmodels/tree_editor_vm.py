"""ViewModel for the structured (tree) editor."""

from __future__ import annotations

from typing import Mapping, Sequence

from PySide6.QtCore import QObject, Signal

from ic_core.tree import EMPTY_NODE, TreeNode, move_child, node_at, replace_at


class TreeEditorViewModel(QObject):
    """ViewModel for editing an item's tree node by node.

    Nodes are addressed by their path of child indices from the root. Every
    edit rebuilds the root and emits ``tree_changed``.
    """

    # Signals
    tree_changed = Signal(object)  # TreeNode after a user edit
    tree_loaded = Signal(object)  # TreeNode pushed in from outside
    error_occurred = Signal(str)

    def __init__(
        self,
        field_definitions: Mapping[str, str] | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._definitions = dict(field_definitions or {})
        self._root: TreeNode = EMPTY_NODE

    @property
    def root(self) -> TreeNode:
        return self._root

    def load_tree(self, tree: TreeNode | None) -> None:
        """Replace the edited tree without reporting a change."""
        tree = tree if tree is not None else EMPTY_NODE
        if tree == self._root:
            return
        self._root = tree
        self.tree_loaded.emit(tree)

    def node(self, path: Sequence[int]) -> TreeNode:
        return node_at(self._root, path)

    def display_name(self, name: str) -> str:
        """Label configured for a tag, or the tag itself."""
        return self._definitions.get(name, name)

    def node_title(self, path: Sequence[int] = ()) -> str:
        """Heading for a node: its label plus the id attribute when present."""
        node = self.node(path)
        title = self.display_name(node.name)
        item_id = node.attributes.get("id")
        return f"{title} ({item_id})" if item_id else title

    def node_badges(self, path: Sequence[int] = ()) -> list[str]:
        """Region and protocol tags shown next to a node's title."""
        attributes = self.node(path).attributes
        return [attributes[key] for key in ("region", "protocol") if attributes.get(key)]

    def set_value(self, path: Sequence[int], value: str) -> None:
        self._edit(path, lambda node: node.with_value(value))

    def set_attribute(self, path: Sequence[int], key: str, value: str) -> None:
        self._edit(path, lambda node: node.with_attribute(key, value))

    def remove_attribute(self, path: Sequence[int], key: str) -> None:
        self._edit(path, lambda node: node.without_attribute(key))

    def insert_child(self, path: Sequence[int], index: int, child: TreeNode) -> None:
        self._edit(path, lambda node: node.insert_child(index, child))

    def remove_child(self, path: Sequence[int], index: int) -> None:
        self._edit(path, lambda node: node.remove_child(index))

    def move_child(self, path: Sequence[int], from_index: int, to_index: int) -> None:
        """Reorder children of the node at ``path`` (drag and drop)."""
        self._edit(path, lambda node: move_child(node, from_index, to_index))

    def _edit(self, path: Sequence[int], change) -> None:
        if self._root.is_empty:
            self.error_occurred.emit("No tree loaded")
            return
        try:
            updated = change(node_at(self._root, path))
            root = replace_at(self._root, path, updated)
        except IndexError as exc:
            self.error_occurred.emit(f"Invalid edit: {exc}")
            return
        if root == self._root:
            return
        self._root = root
        self.tree_changed.emit(root)
