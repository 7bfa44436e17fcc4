"""Public API surface for ic_common."""

from ic_common.config import parse_bool_env, parse_path_env
from ic_common.errors import (
    ConfigurationError,
    FetchError,
    ItemConfigError,
    ParseError,
    SaveError,
    wrap_error,
)
from ic_common.logging import configure_logging

__all__ = [
    "configure_logging",
    "ConfigurationError",
    "FetchError",
    "ItemConfigError",
    "ParseError",
    "SaveError",
    "wrap_error",
    "parse_bool_env",
    "parse_path_env",
]
