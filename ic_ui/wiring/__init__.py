"""Dependency wiring for the CLI."""

from ic_ui.wiring.dependencies import UIContext

__all__ = ["UIContext"]
