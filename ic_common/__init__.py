"""Shared helpers for protocol-item-config."""

from ic_common.api import configure_logging

__all__ = ["configure_logging"]
