"""PySide6 viewmodels and workers for the item configuration page."""
