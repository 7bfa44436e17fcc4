"""Conversion between TreeNode values and XML markup text."""

from __future__ import annotations

import logging
from xml.sax.saxutils import escape

from lxml import etree

from ic_common.errors import ParseError
from ic_core.tree import EMPTY_NODE, TreeNode

logger = logging.getLogger(__name__)

INDENT = "  "
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def _quote_attribute(value: str) -> str:
    return '"' + escape(value, {'"': "&quot;"}) + '"'


def serialize(node: TreeNode, depth: int = 0) -> str:
    """Render ``node`` as indented markup.

    A node with a value is written on one line and its children are not
    written at all. A node with neither value nor children is self-closing.
    """
    if not node.name:
        return ""

    indent = INDENT * depth
    head = f"{indent}<{node.name}"
    for key, value in node.attributes.items():
        head += f" {key}={_quote_attribute(value)}"

    if not node.children and not node.value:
        return f"{head} />"

    if node.value is not None:
        return f"{head}>{escape(node.value)}</{node.name}>"

    body = "\n".join(serialize(child, depth + 1) for child in node.children)
    return f"{head}>\n{body}\n{indent}</{node.name}>"


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
    )


def _qualified_name(element: etree._Element) -> str:
    qname = etree.QName(element)
    if qname.namespace is None:
        return qname.localname
    if element.prefix:
        return f"{element.prefix}:{qname.localname}"
    return qname.localname


def _attributes(element: etree._Element) -> dict[str, str]:
    attributes: dict[str, str] = {}
    parent = element.getparent()
    inherited = parent.nsmap if parent is not None else {}
    for prefix, uri in element.nsmap.items():
        if inherited.get(prefix) != uri:
            attributes["xmlns" if prefix is None else f"xmlns:{prefix}"] = uri
    for key, value in element.attrib.items():
        attributes[_attribute_name(element, str(key))] = value
    return attributes


def _attribute_name(element: etree._Element, key: str) -> str:
    """Turn lxml's ``{uri}local`` key back into ``prefix:local``."""
    qname = etree.QName(key)
    if qname.namespace is None:
        return qname.localname
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"
    for prefix, uri in element.nsmap.items():
        if prefix is not None and uri == qname.namespace:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _element_to_node(element: etree._Element) -> TreeNode:
    elements = [child for child in element if isinstance(child.tag, str)]
    # Exactly one content node and it is text.
    if len(element) == 0 and element.text is not None:
        return TreeNode(
            name=_qualified_name(element),
            attributes=_attributes(element),
            value=element.text,
        )
    return TreeNode(
        name=_qualified_name(element),
        attributes=_attributes(element),
        value=None,
        children=tuple(_element_to_node(child) for child in elements),
    )


def parse(text: str) -> TreeNode:
    """Parse markup text into a TreeNode.

    Blank text yields the empty sentinel node. Anything that is not
    well-formed raises ParseError with the parser's diagnostic.
    """
    if not text.strip():
        return EMPTY_NODE

    try:
        root = etree.fromstring(text.encode("utf-8"), _make_parser())
    except etree.XMLSyntaxError as exc:
        line, column = exc.position
        logger.debug("Rejected markup at %s:%s: %s", line, column, exc)
        raise ParseError(
            str(exc),
            context={"line": line, "column": column},
            cause=exc,
        ) from exc
    return _element_to_node(root)
