import pytest

from tests.helpers.optional_imports import missing_modules, module_available

pytestmark = pytest.mark.unit_common


def test_module_available_detects_existing_module() -> None:
    assert module_available("xml.etree.ElementTree") is True


def test_module_available_handles_missing_parent() -> None:
    assert module_available("definitely_missing_pkg_123.sub") is False


def test_missing_modules_keeps_order() -> None:
    assert missing_modules("json", "missing_a_123", "missing_b_123") == [
        "missing_a_123",
        "missing_b_123",
    ]
