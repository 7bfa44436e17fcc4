"""Pytest configuration for ic_gui tests."""

from pathlib import Path

import pytest

from tests.helpers.optional_imports import missing_modules

HAS_PYSIDE6 = not missing_modules("PySide6", "PySide6.QtCore")

# Skip collection of test files if the GUI dependency is missing.
if not HAS_PYSIDE6:
    collect_ignore = [path.name for path in Path(__file__).parent.glob("test_*.py")]


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    """Timers and queued signals need a Qt application instance."""
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
