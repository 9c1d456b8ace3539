"""Utility functions for the xmldifference engine."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from .models import NodeKind
from .nodes import Node, Attribute


NULL_TEXT = "null"


def as_text(value: Any) -> str:
    """Render a compared value for a listener; absent values become 'null'."""
    if value is None:
        return NULL_TEXT
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def get_document_size_mb(source: str | bytes) -> float:
    """Get the size of a serialized document in megabytes."""
    if isinstance(source, str):
        source = source.encode('utf-8')
    return len(source) / (1024 * 1024)


def _node_test(node: Node) -> str:
    if node.kind in (NodeKind.TEXT, NodeKind.CDATA_SECTION):
        return "text()"
    if node.kind == NodeKind.COMMENT:
        return "comment()"
    if node.kind == NodeKind.PROCESSING_INSTRUCTION:
        return "processing-instruction()"
    if node.kind == NodeKind.ELEMENT:
        return node.node_name
    return "node()"


def _path_step(node: Node) -> str:
    """Build one path step, indexed among siblings with the same node test."""
    test = _node_test(node)
    parent = node.parent
    if parent is None:
        return test

    position = 0
    for sibling in parent.children:
        if _node_test(sibling) == test:
            position += 1
        if sibling is node:
            break
    return f"{test}[{position}]"


def node_path(node: Optional[Node]) -> str:
    """
    Get an XPath-like location for a node.

    Args:
        node: Any node of a tree, or None

    Returns:
        A path such as '/cartoons[1]/toon[2]/@name', or 'null' for None
    """
    if node is None:
        return NULL_TEXT

    if isinstance(node, Attribute):
        owner = node.parent
        prefix = node_path(owner) if owner is not None else ""
        return f"{prefix}/@{node.name}"

    if node.kind == NodeKind.DOCUMENT:
        return "/"

    steps = []
    current = node
    while current is not None and current.kind != NodeKind.DOCUMENT:
        steps.append(_path_step(current))
        current = current.parent

    steps.reverse()
    return "/" + "/".join(steps)
