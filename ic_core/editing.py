"""Text editing state for one item's markup editor."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ic_common.errors import ParseError
from ic_core.markup import parse, serialize
from ic_core.tree import EMPTY_NODE, TreeNode

logger = logging.getLogger(__name__)


class EditOrigin(str, Enum):
    """Who produced a text update."""

    USER = "user"
    EXTERNAL = "external"


@dataclass(frozen=True)
class EditOutcome:
    """Result of submitting text to a session.

    ``tree`` is set only when a user edit produced a new valid tree that
    should flow on to field sync and the registry.
    """

    tree: TreeNode | None = None
    error: str | None = None

    @property
    def accepted(self) -> bool:
        return self.error is None


class TextEditSession:
    """Keeps the last valid text and tree of a markup editor.

    External updates (a tree pushed in from the structured editor or the
    store) replace both silently. User updates are parsed; an invalid text
    leaves the tree and the last valid text untouched.
    """

    def __init__(self, tree: TreeNode = EMPTY_NODE) -> None:
        self._tree = tree
        self._last_valid_text = serialize(tree)
        self._error: str | None = None

    @property
    def tree(self) -> TreeNode:
        return self._tree

    @property
    def last_valid_text(self) -> str:
        return self._last_valid_text

    @property
    def error(self) -> str | None:
        return self._error

    def load_tree(self, tree: TreeNode) -> str:
        """Replace the session from an already valid tree; returns its text."""
        self._tree = tree
        self._last_valid_text = serialize(tree)
        self._error = None
        return self._last_valid_text

    def submit(self, text: str, origin: EditOrigin = EditOrigin.USER) -> EditOutcome:
        if origin is EditOrigin.EXTERNAL:
            self.load_tree(parse(text))
            return EditOutcome()

        try:
            tree = parse(text)
        except ParseError as exc:
            self._error = str(exc)
            logger.debug("Keeping last valid tree: %s", exc)
            return EditOutcome(error=self._error)

        self._error = None
        if tree.is_empty:
            # Blank editor content never replaces the item's tree.
            return EditOutcome()
        self._tree = tree
        self._last_valid_text = text
        return EditOutcome(tree=tree)
