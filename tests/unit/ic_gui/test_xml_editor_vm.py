"""Unit tests for XmlEditorViewModel."""

from __future__ import annotations

import pytest

from ic_core.markup import parse
from ic_core.tree import TreeNode


pytestmark = pytest.mark.unit_gui

VALID = '<dataitem id="A"><name>电压</name></dataitem>'


def _record(signal) -> list[tuple]:
    calls: list[tuple] = []
    signal.connect(lambda *args: calls.append(args))
    return calls


class TestXmlEditorViewModel:
    """Tests for XmlEditorViewModel."""

    @pytest.fixture
    def vm(self):
        from ic_gui.viewmodels.xml_editor_vm import XmlEditorViewModel

        return XmlEditorViewModel(parse_debounce_ms=20, autosave_debounce_ms=20)

    def test_user_edit_is_debounced(self, vm) -> None:
        """Test valid user text emits tree_changed once after the quiet period."""
        from PySide6.QtTest import QTest

        trees = _record(vm.tree_changed)

        vm.edit_text("<dataitem")
        vm.edit_text(VALID)
        assert vm.is_pending is True
        assert trees == []
        QTest.qWait(150)

        assert trees == [(parse(VALID),)]
        assert vm.text == VALID

    def test_invalid_text_reports_error_only(self, vm) -> None:
        """Test malformed text keeps the last valid tree."""
        vm.edit_text(VALID)
        vm.flush()
        trees = _record(vm.tree_changed)
        errors = _record(vm.error_changed)

        vm.edit_text("<a><b></a>")
        vm.flush()

        assert trees == []
        assert len(errors) == 1 and errors[0][0]
        assert vm.error
        assert vm.tree == parse(VALID)
        assert vm.text == VALID

    def test_load_tree_does_not_emit_tree_changed(self, vm) -> None:
        """Test an external tree is shown without feeding back."""
        trees = _record(vm.tree_changed)
        texts = _record(vm.text_changed)
        tree = TreeNode("dataitem", {"id": "B"}, children=[TreeNode("name", value="x")])

        vm.load_tree(tree)

        assert trees == []
        assert texts == [('<dataitem id="B">\n  <name>x</name>\n</dataitem>',)]
        assert vm.tree is tree

    def test_echo_of_loaded_text_is_ignored(self, vm) -> None:
        """Test the view reporting back programmatic text does not parse."""
        texts = _record(vm.text_changed)
        vm.load_tree(TreeNode("dataitem", {"id": "B"}))

        vm.edit_text(texts[-1][0])

        assert vm.is_pending is False

    def test_load_same_tree_is_noop(self, vm) -> None:
        """Test reloading the current tree keeps in-progress text."""
        vm.edit_text(VALID)
        vm.flush()
        vm.edit_text("<dataitem id=")
        vm.flush()
        texts = _record(vm.text_changed)

        vm.load_tree(parse(VALID))

        assert texts == []
        assert vm.error

    def test_load_tree_cancels_pending_user_text(self, vm) -> None:
        """Test an external tree wins over unparsed user text."""
        from PySide6.QtTest import QTest

        trees = _record(vm.tree_changed)
        vm.edit_text(VALID)

        vm.load_tree(TreeNode("dataitem", {"id": "C"}))
        QTest.qWait(80)

        assert trees == []
        assert vm.tree.attributes == {"id": "C"}

    def test_load_equal_tree_still_discards_pending_text(self, vm) -> None:
        """Test pending text is dropped when the pushed tree equals the current one."""
        from PySide6.QtTest import QTest

        trees = _record(vm.tree_changed)
        texts = _record(vm.text_changed)
        vm.edit_text(VALID)

        vm.load_tree(None)
        QTest.qWait(80)

        assert trees == []
        assert vm.is_pending is False
        assert texts == [("",)]
        assert vm.tree.is_empty

    def test_external_text_is_silent(self, vm) -> None:
        """Test EXTERNAL text replaces the tree without tree_changed."""
        from ic_core.editing import EditOrigin

        trees = _record(vm.tree_changed)

        vm.edit_text(VALID, EditOrigin.EXTERNAL)

        assert trees == []
        assert vm.tree == parse(VALID)

    def test_autosave_after_valid_edit(self, vm) -> None:
        """Test autosave fires only when enabled."""
        from PySide6.QtTest import QTest

        saves = _record(vm.autosave_requested)
        vm.edit_text(VALID)
        vm.flush()
        QTest.qWait(80)
        assert saves == []

        vm.autosave = True
        vm.edit_text('<dataitem id="A"><name>电流</name></dataitem>')
        vm.flush()
        QTest.qWait(150)

        assert saves == [()]
