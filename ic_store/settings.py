"""Application settings loaded from YAML with environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ic_common.config import parse_bool_env, parse_path_env
from ic_common.errors import ConfigurationError
from ic_store.xml_catalog import DEFAULT_PROTOCOL, DEFAULT_REGION

CONFIG_ENV = "IC_CONFIG"
CATALOG_DIR_ENV = "IC_CATALOG_DIR"
REGION_ENV = "IC_DEFAULT_REGION"
AUTOSAVE_ENV = "IC_AUTOSAVE"

DEFAULT_CONFIG_PATH = Path("~/.config/protocol-item-config/config.yaml")


class ItemConfigSettings(BaseModel):
    """Settings shared by the CLI and the GUI viewmodels."""

    catalog_dir: Path = Field(
        default=Path("resources/protocolconfig"),
        description="Directory holding <PROTOCOL>.xml definition files",
    )
    default_protocol: str = Field(default=DEFAULT_PROTOCOL, min_length=1)
    default_region: str = Field(default=DEFAULT_REGION, min_length=1)
    search_debounce_ms: int = Field(default=300, ge=0)
    parse_debounce_ms: int = Field(default=300, ge=0)
    autosave_debounce_ms: int = Field(default=1000, ge=0)
    autosave: bool = False
    field_definitions: Path | None = Field(
        default=None,
        description="Optional YAML mapping of tag names to display labels",
    )

    model_config = {"extra": "ignore"}

    @field_validator("catalog_dir", "field_definitions", mode="after")
    @classmethod
    def _expand_user(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot read config {path}", context={"path": path}, cause=exc) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Config file must contain a mapping at the top level.", context={"path": path}
        )
    return data


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    catalog_dir = parse_path_env(os.environ.get(CATALOG_DIR_ENV))
    if catalog_dir is not None:
        overrides["catalog_dir"] = catalog_dir
    region = os.environ.get(REGION_ENV)
    if region:
        overrides["default_region"] = region
    autosave = parse_bool_env(os.environ.get(AUTOSAVE_ENV))
    if autosave is not None:
        overrides["autosave"] = autosave
    return overrides


def resolve_config_path(path: Path | None = None) -> Path | None:
    """Explicit path, then ``IC_CONFIG``, then the per-user default if present."""
    if path is not None:
        return path
    env_path = parse_path_env(os.environ.get(CONFIG_ENV))
    if env_path is not None:
        return env_path
    default = DEFAULT_CONFIG_PATH.expanduser()
    return default if default.exists() else None


def load_settings(path: Path | None = None) -> ItemConfigSettings:
    """Load settings from YAML (when available) and apply env overrides."""
    resolved = resolve_config_path(path)
    data: dict[str, Any] = {}
    if resolved is not None:
        if not resolved.exists():
            raise ConfigurationError(
                f"Configuration file not found: {resolved}", context={"path": resolved}
            )
        data = _read_yaml(resolved)
    data.update(_env_overrides())
    try:
        return ItemConfigSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}", cause=exc) from exc


def load_field_definitions(path: Path | None) -> dict[str, str]:
    """Tag name -> display label mapping; empty when no file is configured."""
    if path is None:
        return {}
    data = _read_yaml(path)
    return {str(key): str(value) for key, value in data.items()}
