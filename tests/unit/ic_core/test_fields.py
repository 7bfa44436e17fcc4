"""Tests for WorkingItem and derived field sync."""

from __future__ import annotations

import pytest

from ic_core.fields import ItemIdentity, WorkingItem, derive_fields
from ic_core.markup import parse
from ic_core.tree import EMPTY_NODE, TreeNode
from ic_store.interfaces import CatalogEntry


pytestmark = pytest.mark.unit_core


def test_derive_fields_from_dataitem() -> None:
    tree = parse('<dataitem id="14-00" protocol="CSG13" region="GUANGDONG"><name>电压</name></dataitem>')

    item = derive_fields(WorkingItem(item="old"), tree)

    assert item.item == "14-00"
    assert item.protocol == "CSG13"
    assert item.region == "GUANGDONG"
    assert item.name == "电压"
    assert item.tree is tree


def test_missing_sources_keep_existing_fields() -> None:
    current = WorkingItem(item="04000100", name="电压", protocol="CSG13", region="南网")
    tree = TreeNode("dataitem", children=[TreeNode("length", value="2")])

    item = derive_fields(current, tree)

    assert item.identity == current.identity
    assert item.name == "电压"
    assert item.tree is tree


def test_name_is_first_in_pre_order() -> None:
    tree = TreeNode(
        "dataitem",
        children=[
            TreeNode("group", children=[TreeNode("name", value="inner")]),
            TreeNode("name", value="outer"),
        ],
    )

    assert derive_fields(WorkingItem(item="x"), tree).name == "inner"


def test_root_named_name_is_not_its_own_name() -> None:
    tree = TreeNode("name", value="root")

    assert derive_fields(WorkingItem(item="x", name="kept"), tree).name == "kept"


def test_empty_name_node_clears_name() -> None:
    tree = TreeNode("dataitem", children=[TreeNode("name")])

    assert derive_fields(WorkingItem(item="x", name="before"), tree).name is None


def test_sentinel_tree_changes_nothing_but_tree() -> None:
    current = WorkingItem(item="x", name="n", protocol="P", region="R")

    item = derive_fields(current, EMPTY_NODE)

    assert item == current.with_tree(EMPTY_NODE)


def test_from_entry_and_identity() -> None:
    entry = CatalogEntry(item="04000100", name="电压", protocol="CSG13", region="南网", dir="0")

    item = WorkingItem.from_entry(entry)

    assert item.identity == ItemIdentity("04000100", "CSG13", "南网")
    assert item.dir == "0"
    assert item.tree is None
    assert item.label() == "04000100 电压 CSG13 南网"


def test_working_items_with_trees_are_hashable() -> None:
    first = WorkingItem(item="A", protocol="P", tree=parse('<dataitem id="A"/>'))
    second = WorkingItem(item="A", protocol="P", tree=parse('<dataitem id="A" />'))

    assert {first, second} == {first}
