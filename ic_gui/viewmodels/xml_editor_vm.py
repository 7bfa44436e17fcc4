"""ViewModel for the raw markup editor."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QTimer, Signal

from ic_core.editing import EditOrigin, TextEditSession
from ic_core.tree import EMPTY_NODE, TreeNode

logger = logging.getLogger(__name__)


class XmlEditorViewModel(QObject):
    """ViewModel for editing one item's tree as markup text.

    User text is parsed after a quiet period. Valid text emits
    ``tree_changed``; invalid text only updates the error status and keeps
    the last valid tree. Text pushed in from outside (``load_tree``) never
    emits ``tree_changed``.
    """

    # Signals
    text_changed = Signal(str)  # text the view should display
    tree_changed = Signal(object)  # TreeNode from a valid user edit
    error_changed = Signal(str)  # parse error, empty when valid
    autosave_requested = Signal()

    def __init__(
        self,
        parse_debounce_ms: int = 300,
        autosave_debounce_ms: int = 1000,
        autosave: bool = False,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._session = TextEditSession()
        self._autosave = autosave

        # State
        self._pending_text: str | None = None
        self._echo_text: str | None = None

        self._parse_timer = QTimer(self)
        self._parse_timer.setSingleShot(True)
        self._parse_timer.setInterval(parse_debounce_ms)
        self._parse_timer.timeout.connect(self._apply_pending)

        self._autosave_timer = QTimer(self)
        self._autosave_timer.setSingleShot(True)
        self._autosave_timer.setInterval(autosave_debounce_ms)
        self._autosave_timer.timeout.connect(self.autosave_requested.emit)

    @property
    def tree(self) -> TreeNode:
        """Last valid tree."""
        return self._session.tree

    @property
    def text(self) -> str:
        """Last valid text."""
        return self._session.last_valid_text

    @property
    def error(self) -> str | None:
        return self._session.error

    @property
    def is_pending(self) -> bool:
        """Whether user text is waiting to be parsed."""
        return self._parse_timer.isActive()

    @property
    def autosave(self) -> bool:
        return self._autosave

    @autosave.setter
    def autosave(self, value: bool) -> None:
        self._autosave = value
        if not value:
            self._autosave_timer.stop()

    def edit_text(self, text: str, origin: EditOrigin = EditOrigin.USER) -> None:
        """Handle a change of the editor's content."""
        if origin is EditOrigin.EXTERNAL:
            self._parse_timer.stop()
            self._pending_text = None
            self._session.submit(text, EditOrigin.EXTERNAL)
            self._show(self._session.last_valid_text)
            return

        if self._echo_text is not None and text == self._echo_text:
            # The view reporting back text we just gave it.
            self._echo_text = None
            return
        self._echo_text = None
        self._pending_text = text
        self._parse_timer.start()

    def flush(self) -> None:
        """Parse pending user text immediately."""
        if self._parse_timer.isActive():
            self._parse_timer.stop()
            self._apply_pending()

    def load_tree(self, tree: TreeNode | None) -> None:
        """Show a tree supplied from outside without reporting it back.

        Unparsed user text is always discarded, even when ``tree`` equals the
        current one: it belonged to whatever item was shown before.
        """
        tree = tree if tree is not None else EMPTY_NODE
        discarded = self._pending_text is not None
        self._parse_timer.stop()
        self._pending_text = None
        if tree == self._session.tree and not discarded:
            return
        self._show(self._session.load_tree(tree))
        self.error_changed.emit("")

    def _show(self, text: str) -> None:
        self._echo_text = text
        self.text_changed.emit(text)

    def _apply_pending(self) -> None:
        text = self._pending_text
        self._pending_text = None
        if text is None:
            return
        outcome = self._session.submit(text, EditOrigin.USER)
        self.error_changed.emit(outcome.error or "")
        if outcome.tree is None:
            return
        logger.debug("Markup edit accepted (%d chars)", len(text))
        self.tree_changed.emit(outcome.tree)
        if self._autosave:
            self._autosave_timer.start()
