from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ic_core.registry import ItemRegistry
from ic_store.api import ItemConfigSettings, ItemStore, XmlCatalogStore, load_settings
from ic_ui.console import Presenter


@dataclass
class UIContext:
    """Container for CLI services and state, initialized lazily."""

    config_path: Optional[Path] = None

    # Lazily initialized services
    _settings: Optional[ItemConfigSettings] = None
    _store: Optional[ItemStore] = None
    _presenter: Optional[Presenter] = None

    def configure(self, config_path: Optional[Path]) -> None:
        """Point the context at a settings file and drop derived services."""
        self.config_path = config_path
        self._settings = None
        self._store = None

    @property
    def settings(self) -> ItemConfigSettings:
        if self._settings is None:
            self._settings = load_settings(self.config_path)
        return self._settings

    @settings.setter
    def settings(self, value: ItemConfigSettings):
        self._settings = value

    @property
    def store(self) -> ItemStore:
        if self._store is None:
            settings = self.settings
            self._store = XmlCatalogStore(
                settings.catalog_dir,
                default_protocol=settings.default_protocol,
                default_region=settings.default_region,
            )
        return self._store

    @store.setter
    def store(self, value: ItemStore):
        self._store = value

    @property
    def presenter(self) -> Presenter:
        if self._presenter is None:
            self._presenter = Presenter()
        return self._presenter

    @presenter.setter
    def presenter(self, value: Presenter):
        self._presenter = value

    def registry(self) -> ItemRegistry:
        return ItemRegistry(self.store)
