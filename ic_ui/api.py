"""Public API surface for ic_ui."""

from ic_ui.cli import app, main
from ic_ui.console import Presenter, TableModel
from ic_ui.wiring import UIContext

__all__ = ["app", "main", "Presenter", "TableModel", "UIContext"]
