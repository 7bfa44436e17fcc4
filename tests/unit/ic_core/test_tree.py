"""Tests for the immutable TreeNode model."""

from __future__ import annotations

import pytest

from ic_core.tree import (
    EMPTY_NODE,
    TreeNode,
    find_first,
    move_child,
    node_at,
    replace_at,
)


pytestmark = pytest.mark.unit_core


def _item() -> TreeNode:
    return TreeNode(
        "dataitem",
        {"id": "04000100"},
        children=[
            TreeNode("name", value="电压"),
            TreeNode("length", value="2"),
            TreeNode("splitbit", children=[TreeNode("bit", {"id": "0"}, value="A相")]),
        ],
    )


def test_children_are_stored_as_tuple() -> None:
    node = TreeNode("a", children=[TreeNode("b")])

    assert isinstance(node.children, tuple)
    assert node == TreeNode("a", children=(TreeNode("b"),))


def test_empty_sentinel() -> None:
    assert EMPTY_NODE.is_empty
    assert not TreeNode("a").is_empty
    assert EMPTY_NODE == TreeNode()


def test_edits_return_new_nodes() -> None:
    node = TreeNode("length", {"unit": "byte"}, value="2")

    changed = node.with_value("4").with_attribute("scale", "1").without_attribute("unit")

    assert node.value == "2"
    assert node.attributes == {"unit": "byte"}
    assert changed.value == "4"
    assert changed.attributes == {"scale": "1"}


def test_attributes_are_read_only() -> None:
    source = {"id": "A"}
    node = TreeNode("dataitem", source)
    source["id"] = "B"

    with pytest.raises(TypeError):
        node.attributes["id"] = "X"
    with pytest.raises(TypeError):
        EMPTY_NODE.attributes["id"] = "X"
    assert node.attributes == {"id": "A"}
    assert EMPTY_NODE.attributes == {}


def test_nodes_are_hashable_values() -> None:
    first = TreeNode("a", {"k": "1", "j": "2"}, children=[TreeNode("b", value="x")])
    second = TreeNode("a", {"j": "2", "k": "1"}, children=(TreeNode("b", value="x"),))

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second, EMPTY_NODE}) == 2


def test_walk_is_pre_order() -> None:
    names = [node.name for node in _item().walk()]

    assert names == ["dataitem", "name", "length", "splitbit", "bit"]


def test_find_first() -> None:
    root = _item()

    assert find_first(root, "dataitem") is root
    assert find_first(root, "bit").value == "A相"
    assert find_first(root, "missing") is None


def test_move_child_forward_and_back() -> None:
    parent = TreeNode("p", children=[TreeNode("a"), TreeNode("b"), TreeNode("c")])

    forward = move_child(parent, 0, 2)
    back = move_child(forward, 2, 0)

    assert [c.name for c in forward.children] == ["b", "c", "a"]
    assert back == parent


def test_move_child_same_index_returns_parent() -> None:
    parent = TreeNode("p", children=[TreeNode("a"), TreeNode("b")])

    assert move_child(parent, 1, 1) is parent


@pytest.mark.parametrize("from_index,to_index", [(-1, 0), (0, 2), (5, 0)])
def test_move_child_rejects_out_of_range(from_index: int, to_index: int) -> None:
    parent = TreeNode("p", children=[TreeNode("a"), TreeNode("b")])

    with pytest.raises(IndexError):
        move_child(parent, from_index, to_index)


def test_replace_at_rebuilds_ancestors_only() -> None:
    root = _item()

    updated = replace_at(root, (2, 0), TreeNode("bit", {"id": "0"}, value="B相"))

    assert node_at(updated, (2, 0)).value == "B相"
    assert node_at(root, (2, 0)).value == "A相"
    # Untouched siblings are shared, not copied.
    assert updated.children[0] is root.children[0]
    assert replace_at(root, (), EMPTY_NODE) is EMPTY_NODE


def test_node_at_bad_path_raises() -> None:
    with pytest.raises(IndexError):
        node_at(_item(), (7,))
