"""Builds node trees from XML text using the standard library DOM."""

from __future__ import annotations

import logging
from typing import Optional
from xml.dom import minidom
from xml.dom import Node as DOMNode
from xml.parsers.expat import ExpatError

from .exceptions import XMLParseError
from .nodes import (
    Node,
    Attribute,
    Element,
    Text,
    CDataSection,
    Comment,
    DocumentType,
    ProcessingInstruction,
    EntityReference,
    Document,
)

logger = logging.getLogger(__name__)


def build_document(
    source: str | bytes,
    ignore_whitespace: bool = False,
    source_name: Optional[str] = None
) -> Document:
    """
    Parse XML text into a node tree.

    Args:
        source: The XML document as text or bytes
        ignore_whitespace: Drop text nodes that contain only whitespace
        source_name: Name used in error messages (e.g. a file name)

    Returns:
        The Document node of the tree

    Raises:
        XMLParseError: If the source is not well-formed XML
    """
    try:
        dom = minidom.parseString(source)
    except ExpatError as e:
        raise XMLParseError(
            f"Cannot parse {source_name or 'document'}: {e}",
            line=getattr(e, 'lineno', None),
            column=getattr(e, 'offset', None),
            source=source_name
        )

    try:
        document = from_dom(dom, ignore_whitespace=ignore_whitespace)
    finally:
        dom.unlink()

    logger.debug("Built %s (%d top-level nodes)",
                 source_name or "document", len(document.children))
    return document


def from_dom(dom_node: minidom.Node, ignore_whitespace: bool = False) -> Node:
    """
    Convert a minidom node and everything below it into a node tree.

    Args:
        dom_node: Any minidom node
        ignore_whitespace: Drop text nodes that contain only whitespace

    Returns:
        The converted node
    """
    node = _convert(dom_node)

    for dom_child in dom_node.childNodes:
        if (ignore_whitespace
                and dom_child.nodeType == DOMNode.TEXT_NODE
                and not dom_child.data.strip()):
            continue
        node.append_child(from_dom(dom_child, ignore_whitespace))

    return node


def _convert(dom_node: minidom.Node) -> Node:
    """Convert a single minidom node, without its children."""
    node_type = dom_node.nodeType
    namespace_uri = dom_node.namespaceURI
    prefix = dom_node.prefix

    if node_type == DOMNode.ELEMENT_NODE:
        element = Element(
            dom_node.tagName,
            namespace_uri=namespace_uri,
            prefix=prefix
        )
        # minidom keeps attributes in document order
        for i in range(dom_node.attributes.length):
            dom_attr = dom_node.attributes.item(i)
            element.set_attribute_node(Attribute(
                dom_attr.name,
                dom_attr.value,
                namespace_uri=dom_attr.namespaceURI,
                prefix=dom_attr.prefix
            ))
        return element

    if node_type == DOMNode.TEXT_NODE:
        return Text(dom_node.data)

    if node_type == DOMNode.CDATA_SECTION_NODE:
        return CDataSection(dom_node.data)

    if node_type == DOMNode.COMMENT_NODE:
        return Comment(dom_node.data)

    if node_type == DOMNode.PROCESSING_INSTRUCTION_NODE:
        return ProcessingInstruction(dom_node.target, dom_node.data)

    if node_type == DOMNode.DOCUMENT_TYPE_NODE:
        return DocumentType(
            dom_node.name,
            public_id=dom_node.publicId,
            system_id=dom_node.systemId
        )

    if node_type == DOMNode.ENTITY_REFERENCE_NODE:
        return EntityReference(dom_node.nodeName)

    if node_type == DOMNode.DOCUMENT_NODE:
        return Document()

    raise XMLParseError(f"Unsupported DOM node type {node_type} ({dom_node.nodeName})")
