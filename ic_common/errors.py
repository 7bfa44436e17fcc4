"""Error types raised while loading, editing and saving data items."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

_SCALARS = (str, int, float, bool)


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, _SCALARS):
        return value
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {str(key): _jsonable(val) for key, val in context.items()}


class ItemConfigError(Exception):
    """Base class for the errors this project raises on purpose.

    ``context`` carries JSON-friendly details such as the item id, protocol
    or file position; ``to_dict`` is the form that gets logged.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class ParseError(ItemConfigError):
    """Markup text is not well formed."""

    @property
    def position(self) -> tuple[int, int | None] | None:
        """``(line, column)`` of the parser diagnostic, if the parser gave one."""
        line = self.context.get("line")
        if line is None:
            return None
        return line, self.context.get("column")


class FetchError(ItemConfigError):
    """The store could not provide an item tree."""


class SaveError(ItemConfigError):
    """The store failed to persist an item tree."""


class ConfigurationError(ItemConfigError):
    """Settings file or environment values are invalid."""


E = TypeVar("E", bound=ItemConfigError)


def wrap_error(
    error_cls: type[E],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> E:
    """Build an ``error_cls`` around an unexpected exception from a store."""
    return error_cls(message, context=context, cause=cause)
