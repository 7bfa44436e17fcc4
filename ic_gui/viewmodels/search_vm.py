"""ViewModel for the item search box."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from PySide6.QtCore import QObject, QTimer, Signal

from ic_core.search import run_search

if TYPE_CHECKING:
    from ic_store.api import CatalogEntry


class SearchViewModel(QObject):
    """ViewModel for the search box and its result dropdown.

    Keystrokes restart a single-shot timer; only the last term typed within
    the quiet period is matched against the catalog.
    """

    # Signals
    results_changed = Signal(list, bool)  # (matches, show_dropdown)
    loading_changed = Signal(bool)
    term_changed = Signal(str)  # programmatic term updates for the view

    def __init__(self, debounce_ms: int = 300, parent: QObject | None = None) -> None:
        super().__init__(parent)

        # State
        self._catalog: list["CatalogEntry"] = []
        self._term: str = ""
        self._results: list["CatalogEntry"] = []
        self._show_dropdown: bool = False

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(debounce_ms)
        self._timer.timeout.connect(self._perform_search)

    @property
    def term(self) -> str:
        """Current search term."""
        return self._term

    @property
    def results(self) -> list["CatalogEntry"]:
        """Matches of the last completed search."""
        return self._results

    @property
    def show_dropdown(self) -> bool:
        return self._show_dropdown

    @property
    def is_pending(self) -> bool:
        """Whether a debounced search is waiting to run."""
        return self._timer.isActive()

    def set_catalog(self, catalog: Sequence["CatalogEntry"]) -> None:
        """Replace the catalog; a visible search is refreshed."""
        self._catalog = list(catalog)
        if self._term.strip():
            self._timer.start()

    def set_term(self, term: str) -> None:
        """Handle a keystroke in the search box."""
        if term == self._term:
            return
        self._term = term
        if not term.strip():
            self._timer.stop()
            self._publish([], False)
            return
        self._timer.start()

    def cancel(self) -> None:
        """Drop a pending search without running it."""
        self._timer.stop()

    def focus_search(self) -> None:
        """Re-run the current term at once, e.g. when the box regains focus."""
        self._timer.stop()
        if self._term.strip():
            self._perform_search()

    def select_result(self, entry: "CatalogEntry") -> None:
        """Put the chosen entry's id in the box without searching again."""
        self._timer.stop()
        self._term = entry.item
        self.term_changed.emit(entry.item)
        self.hide_dropdown()

    def hide_dropdown(self) -> None:
        """Close the dropdown and keep the last matches."""
        self._publish(self._results, False)

    def get_result_rows(self) -> list[list[str]]:
        """Matches formatted as table rows."""
        return [
            [entry.item, entry.name or "", entry.protocol or "", entry.region or ""]
            for entry in self._results
        ]

    def _perform_search(self) -> None:
        self.loading_changed.emit(True)
        try:
            result = run_search(self._term, self._catalog)
            self._publish(result.matches, result.show_dropdown)
        finally:
            self.loading_changed.emit(False)

    def _publish(self, results: list["CatalogEntry"], show_dropdown: bool) -> None:
        self._results = list(results)
        self._show_dropdown = show_dropdown
        self.results_changed.emit(self._results, show_dropdown)
