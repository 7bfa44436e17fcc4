"""Application setup: services and viewmodel wiring."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ic_core.registry import ItemRegistry
from ic_gui.services import CatalogService
from ic_gui.viewmodels import (
    ItemConfigViewModel,
    SearchViewModel,
    TreeEditorViewModel,
    XmlEditorViewModel,
)
from ic_store.api import ItemConfigSettings, ItemStore, load_field_definitions, load_settings


class ServiceContainer:
    """Container for all GUI services (dependency injection)."""

    def __init__(
        self,
        settings: ItemConfigSettings | None = None,
        store: ItemStore | None = None,
        config_path: Path | None = None,
    ) -> None:
        self._settings = settings
        self._store = store
        self._config_path = config_path
        self._catalog_service: CatalogService | None = None
        self._registry: ItemRegistry | None = None
        self._field_definitions: dict[str, str] | None = None

    @property
    def settings(self) -> ItemConfigSettings:
        if self._settings is None:
            self._settings = load_settings(self._config_path)
        return self._settings

    @property
    def catalog_service(self) -> CatalogService:
        if self._catalog_service is None:
            self._catalog_service = CatalogService(self._store)
            if self._store is None:
                self._catalog_service.configure(self.settings)
        return self._catalog_service

    @property
    def registry(self) -> ItemRegistry:
        if self._registry is None:
            self._registry = ItemRegistry(self.catalog_service.store)
        return self._registry

    @property
    def field_definitions(self) -> dict[str, str]:
        if self._field_definitions is None:
            self._field_definitions = load_field_definitions(self.settings.field_definitions)
        return self._field_definitions


@dataclass
class ItemConfigPage:
    """The viewmodels behind one item configuration page."""

    search: SearchViewModel
    items: ItemConfigViewModel
    xml_editor: XmlEditorViewModel
    tree_editor: TreeEditorViewModel


def _load_active(page: ItemConfigPage, item) -> None:
    tree = item.tree if item is not None else None
    page.xml_editor.load_tree(tree)
    page.tree_editor.load_tree(tree)


def create_page(services: ServiceContainer) -> ItemConfigPage:
    """Create the page viewmodels and connect them to each other.

    Editor changes flow into the registry; the active item's tree flows back
    into both editors through ``load_tree``, which does not re-emit.
    """
    settings = services.settings
    page = ItemConfigPage(
        search=SearchViewModel(debounce_ms=settings.search_debounce_ms),
        items=ItemConfigViewModel(services.catalog_service, services.registry),
        xml_editor=XmlEditorViewModel(
            parse_debounce_ms=settings.parse_debounce_ms,
            autosave_debounce_ms=settings.autosave_debounce_ms,
            autosave=settings.autosave,
        ),
        tree_editor=TreeEditorViewModel(services.field_definitions),
    )

    page.items.catalog_loaded.connect(page.search.set_catalog)
    page.items.active_changed.connect(lambda item: _load_active(page, item))
    page.xml_editor.tree_changed.connect(page.items.apply_tree)
    page.xml_editor.autosave_requested.connect(page.items.save_active)
    page.tree_editor.tree_changed.connect(page.items.apply_tree)
    return page


def select_search_result(page: ItemConfigPage, entry) -> None:
    """Open a search result: fill the box, close the dropdown, load the item."""
    page.search.select_result(entry)
    page.items.select_catalog_entry(entry)
