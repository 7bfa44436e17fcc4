"""Store backed by a directory of protocol definition XML files.

Each ``<PROTOCOL>.xml`` file holds ``dataitem`` elements. Attributes are
inherited down the document (except ``id``), so a group element can set
``protocol`` and ``region`` for everything below it. ``protocol`` and
``region`` may hold comma separated lists.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from lxml import etree

from ic_common.errors import FetchError, SaveError
from ic_core.markup import parse, serialize
from ic_core.tree import TreeNode
from ic_store.interfaces import CatalogEntry

logger = logging.getLogger(__name__)

DATAITEM_TAG = "dataitem"
DEFAULT_PROTOCOL = "CSG13"
DEFAULT_REGION = "南网"

_NON_ALNUM = re.compile(r"[^0-9A-Z]")


def _protocol_key(protocol: str) -> str:
    return _NON_ALNUM.sub("", protocol.upper())


def _split_list(value: str) -> list[str]:
    return [part.strip().upper() for part in value.split(",")]


def clean_region(region: str) -> str:
    """First entry of a region list, unquoted and upper-cased."""
    return region.replace('"', "").split(",")[0].strip().upper()


@dataclass
class _ProtocolDocument:
    protocol: str
    path: Path
    tree: etree._ElementTree


def _merge(inherited: dict[str, str], element: etree._Element) -> dict[str, str]:
    merged = {k: v for k, v in inherited.items() if k != "id"}
    merged.update({str(k): v for k, v in element.attrib.items()})
    return merged


def _walk(
    element: etree._Element, inherited: dict[str, str]
) -> Iterator[tuple[etree._Element, dict[str, str]]]:
    merged = _merge(inherited, element)
    yield element, merged
    for child in element:
        if isinstance(child.tag, str):
            yield from _walk(child, merged)


class XmlCatalogStore:
    """Catalog and item trees read from (and written to) protocol XML files."""

    def __init__(
        self,
        catalog_dir: Path,
        *,
        default_protocol: str = DEFAULT_PROTOCOL,
        default_region: str = DEFAULT_REGION,
    ) -> None:
        self._catalog_dir = Path(catalog_dir)
        self._default_protocol = default_protocol
        self._default_region = default_region
        self._documents: dict[str, _ProtocolDocument] | None = None
        self._cache: dict[tuple[str, str, str, str | None], TreeNode | None] = {}
        self._lock = threading.RLock()

    @property
    def catalog_dir(self) -> Path:
        return self._catalog_dir

    def _load_documents(self) -> dict[str, _ProtocolDocument]:
        if self._documents is not None:
            return self._documents
        documents: dict[str, _ProtocolDocument] = {}
        if not self._catalog_dir.is_dir():
            logger.warning("Catalog directory %s does not exist", self._catalog_dir)
        else:
            parser = etree.XMLParser(remove_blank_text=False, resolve_entities=False)
            for path in sorted(self._catalog_dir.glob("*.xml")):
                try:
                    tree = etree.parse(str(path), parser)
                except (OSError, etree.XMLSyntaxError) as exc:
                    logger.error("Failed to load protocol file %s: %s", path, exc)
                    continue
                documents[_protocol_key(path.stem)] = _ProtocolDocument(
                    protocol=path.stem, path=path, tree=tree
                )
                logger.info("Loaded protocol file %s", path.name)
        self._documents = documents
        return documents

    def _document_for(self, protocol: str) -> _ProtocolDocument | None:
        wanted = _protocol_key(protocol)
        documents = self._load_documents()
        if wanted in documents:
            return documents[wanted]
        return next((doc for key, doc in documents.items() if key and key in wanted), None)

    def get_all_items(self) -> list[CatalogEntry]:
        entries: list[CatalogEntry] = []
        with self._lock:
            for document in self._load_documents().values():
                root = document.tree.getroot()
                for element, merged in _walk(root, {}):
                    if str(element.tag).lower() != DATAITEM_TAG or "id" not in element.attrib:
                        continue
                    entries.append(
                        CatalogEntry(
                            item=element.attrib["id"],
                            name=element.findtext("name"),
                            protocol=document.protocol,
                            region=merged.get("region"),
                            dir=merged.get("dir"),
                        )
                    )
        return entries

    @staticmethod
    def _matches(
        merged: dict[str, str],
        item: str,
        protocol: str,
        region: str,
        dir: str | None,
    ) -> bool:
        if merged.get("id", "").lower() != item.lower():
            return False
        if "protocol" not in merged or "region" not in merged:
            return False
        if protocol.upper() not in _split_list(merged["protocol"]):
            return False
        if region not in _split_list(merged["region"]):
            return False
        if dir is not None and "dir" in merged:
            return merged["dir"].strip() == dir.strip()
        return True

    def _find_element(
        self,
        document: _ProtocolDocument,
        item: str,
        protocol: str,
        region: str,
        dir: str | None = None,
    ) -> etree._Element | None:
        root = document.tree.getroot()
        regions = [clean_region(region)]
        fallback = clean_region(self._default_region)
        if fallback not in regions:
            regions.append(fallback)
        for candidate_region in regions:
            for element, merged in _walk(root, {}):
                if self._matches(merged, item, protocol, candidate_region, dir):
                    return element
        return None

    def fetch_item_tree(
        self,
        item: str,
        protocol: str | None,
        region: str | None,
        dir: str | None = None,
    ) -> TreeNode:
        protocol = protocol or self._default_protocol
        region = region or self._default_region
        key = (item.lower(), protocol.upper(), clean_region(region), dir.strip() if dir else None)
        context = {"item": item, "protocol": protocol, "region": region, "dir": dir}

        with self._lock:
            if key in self._cache:
                cached = self._cache[key]
            else:
                document = self._document_for(protocol)
                if document is None:
                    raise FetchError(f"No protocol file for {protocol}", context=context)
                element = self._find_element(document, item, protocol, region, dir)
                cached = None
                if element is not None:
                    cached = parse(etree.tostring(element, encoding="unicode", with_tail=False))
                self._cache[key] = cached

        if cached is None:
            raise FetchError(f"Item {item} not found", context=context)
        return cached

    def save_item_tree(
        self,
        item: str,
        protocol: str | None,
        region: str | None,
        tree: TreeNode,
        dir: str | None = None,
    ) -> None:
        if not protocol:
            raise SaveError("Protocol is missing", context={"item": item})
        context = {"item": item, "protocol": protocol, "region": region, "dir": dir}

        with self._lock:
            document = self._document_for(protocol)
            if document is None:
                raise SaveError(f"No protocol file for {protocol}", context=context)
            try:
                replacement = etree.fromstring(serialize(tree).encode("utf-8"))
            except etree.XMLSyntaxError as exc:
                raise SaveError(f"Tree for {item} is not valid markup", context=context, cause=exc) from exc

            existing = self._find_element(
                document, item, protocol, region or self._default_region, dir
            )
            if existing is None:
                root = document.tree.getroot()
                root.append(replacement)
            elif existing.getparent() is None:
                document.tree._setroot(replacement)
            else:
                replacement.tail = existing.tail
                existing.getparent().replace(existing, replacement)

            try:
                document.tree.write(str(document.path), encoding="utf-8", xml_declaration=True)
            except OSError as exc:
                raise SaveError(f"Failed to write {document.path}", context=context, cause=exc) from exc
            self._cache.clear()
        logger.info("Wrote %s to %s", item, document.path.name)
