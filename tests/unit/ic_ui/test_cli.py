"""CLI unit tests for catalog/item commands."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ic_ui.cli import app


pytestmark = [pytest.mark.unit_ui]

ITEM_MARKUP = '<dataitem id="04000100" protocol="CSG13" region="YUNNAN"><name>云南电压V2</name></dataitem>'


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures root logging on every invocation."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_file(tmp_path: Path, catalog_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Settings file pointing at the sample catalog, isolated from the user's env."""
    for name in ("IC_CONFIG", "IC_CATALOG_DIR", "IC_DEFAULT_REGION", "IC_AUTOSAVE", "IC_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("IC_LOG_LEVEL", "WARNING")
    config = tmp_path / "config.yaml"
    config.write_text(f"catalog_dir: {catalog_dir}\n", encoding="utf-8")
    return config


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_catalog_list(runner: CliRunner, config_file: Path) -> None:
    result = runner.invoke(app, ["-c", str(config_file), "catalog", "list"])

    assert result.exit_code == 0, result.output
    assert "04000101" in result.output
    assert "E0000130" in result.output


def test_catalog_list_unknown_protocol(runner: CliRunner, config_file: Path) -> None:
    result = runner.invoke(app, ["-c", str(config_file), "catalog", "list", "--protocol", "DLT645"])

    assert result.exit_code == 0, result.output
    assert "No items found" in result.output


def test_catalog_search(runner: CliRunner, config_file: Path) -> None:
    result = runner.invoke(app, ["-c", str(config_file), "catalog", "search", "E0"])

    assert result.exit_code == 0, result.output
    assert "E0000130" in result.output
    assert "04000100" not in result.output


def test_catalog_search_no_match(runner: CliRunner, config_file: Path) -> None:
    result = runner.invoke(app, ["-c", str(config_file), "catalog", "search", "zz"])

    assert result.exit_code == 0, result.output
    assert "No items match 'zz'" in result.output


def test_item_show(runner: CliRunner, config_file: Path) -> None:
    result = runner.invoke(
        app, ["-c", str(config_file), "item", "show", "04000100", "--region", "YUNNAN"]
    )

    assert result.exit_code == 0, result.output
    assert "<name>云南电压</name>" in result.output


def test_item_show_narrows_by_dir(runner: CliRunner, config_file: Path) -> None:
    found = runner.invoke(app, ["-c", str(config_file), "item", "show", "04000101", "--dir", "0"])
    missing = runner.invoke(app, ["-c", str(config_file), "item", "show", "04000101", "-d", "1"])

    assert found.exit_code == 0, found.output
    assert "<name>电流</name>" in found.output
    assert missing.exit_code == 1
    assert "not found" in missing.output


def test_item_show_missing(runner: CliRunner, config_file: Path) -> None:
    result = runner.invoke(app, ["-c", str(config_file), "item", "show", "FFFFFFFF"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_item_check_valid(runner: CliRunner, config_file: Path, tmp_path: Path) -> None:
    markup = tmp_path / "item.xml"
    markup.write_text(ITEM_MARKUP, encoding="utf-8")

    result = runner.invoke(app, ["-c", str(config_file), "item", "check", str(markup)])

    assert result.exit_code == 0, result.output
    assert "YUNNAN" in result.output
    assert "云南电压V2" in result.output


def test_item_check_malformed(runner: CliRunner, config_file: Path, tmp_path: Path) -> None:
    markup = tmp_path / "broken.xml"
    markup.write_text("<a><b></a>", encoding="utf-8")

    result = runner.invoke(app, ["-c", str(config_file), "item", "check", str(markup)])

    assert result.exit_code == 1
    assert "line 1" in result.output


def test_item_save_round_trip(runner: CliRunner, config_file: Path, tmp_path: Path) -> None:
    markup = tmp_path / "item.xml"
    markup.write_text(ITEM_MARKUP, encoding="utf-8")

    saved = runner.invoke(app, ["-c", str(config_file), "item", "save", str(markup)])
    shown = runner.invoke(
        app, ["-c", str(config_file), "item", "show", "04000100", "--region", "YUNNAN"]
    )

    assert saved.exit_code == 0, saved.output
    assert "Saved 04000100" in saved.output
    assert "云南电压V2" in shown.output


def test_item_save_requires_id(runner: CliRunner, config_file: Path, tmp_path: Path) -> None:
    markup = tmp_path / "item.xml"
    markup.write_text("<dataitem><name>x</name></dataitem>", encoding="utf-8")

    result = runner.invoke(app, ["-c", str(config_file), "item", "save", str(markup)])

    assert result.exit_code == 1
    assert "no id attribute" in result.output


def test_missing_config_file(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["-c", str(tmp_path / "missing.yaml"), "catalog", "list"])

    assert result.exit_code == 2
    assert "not found" in result.output
