"""Catalog matching for the item search box."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Protocol

_ALPHANUMERIC = re.compile(r"[a-zA-Z0-9]+")
_CJK = re.compile("[\u4e00-\u9fa5]")


class Searchable(Protocol):
    """Anything with an id and an optional display name."""

    item: str
    name: str | None


class TermKind(str, Enum):
    """How a search term is matched against the catalog."""

    EMPTY = "empty"
    ALPHANUMERIC = "alphanumeric"
    CJK = "cjk"
    MIXED = "mixed"


@dataclass(frozen=True)
class SearchResult:
    """Matches for one term, plus whether a dropdown should be shown."""

    term: str
    kind: TermKind
    matches: list = field(default_factory=list)

    @property
    def show_dropdown(self) -> bool:
        return self.kind is not TermKind.EMPTY


def classify_term(term: str) -> TermKind:
    if not term.strip():
        return TermKind.EMPTY
    if _ALPHANUMERIC.fullmatch(term):
        return TermKind.ALPHANUMERIC
    if _CJK.search(term):
        return TermKind.CJK
    return TermKind.MIXED


def _contains(haystack: str | None, needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def matches(entry: Searchable, term: str, kind: TermKind) -> bool:
    needle = term.lower()
    if kind is TermKind.ALPHANUMERIC:
        return entry.item.lower().startswith(needle)
    if kind is TermKind.CJK:
        return _contains(entry.name, needle)
    if kind is TermKind.MIXED:
        return _contains(entry.item, needle) or _contains(entry.name, needle)
    return False


def run_search(term: str, catalog: Iterable[Searchable]) -> SearchResult:
    """Classify ``term`` once and filter ``catalog`` with the matching rule."""
    kind = classify_term(term)
    if kind is TermKind.EMPTY:
        return SearchResult(term=term, kind=kind)
    found = [entry for entry in catalog if matches(entry, term, kind)]
    return SearchResult(term=term, kind=kind, matches=found)


def search(term: str, catalog: Iterable[Searchable]) -> list:
    """Return the catalog entries matching ``term``; blank terms match nothing."""
    return run_search(term, catalog).matches
