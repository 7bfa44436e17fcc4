"""Command-line interface for protocol item definitions."""

from ic_ui.api import app, main

__all__ = ["app", "main"]
