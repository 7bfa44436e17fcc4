"""ViewModels exposing Qt signals for views."""

from ic_gui.viewmodels.search_vm import SearchViewModel
from ic_gui.viewmodels.item_config_vm import ItemConfigViewModel
from ic_gui.viewmodels.xml_editor_vm import XmlEditorViewModel
from ic_gui.viewmodels.tree_editor_vm import TreeEditorViewModel

__all__ = [
    "SearchViewModel",
    "ItemConfigViewModel",
    "XmlEditorViewModel",
    "TreeEditorViewModel",
]
