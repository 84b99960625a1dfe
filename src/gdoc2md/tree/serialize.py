#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Serialize the generic tree back to HTML, or to an indented debug listing."""

from __future__ import annotations

import html

from gdoc2md.constants import VOID_ELEMENTS
from gdoc2md.tree.nodes import Element, Node, Text


def _format_attributes(element: Element) -> str:
    parts = []
    for name, value in element.attributes.items():
        if value == "":
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{html.escape(value, quote=True)}"')
    return "".join(parts)


def to_html(node: Node) -> str:
    """Serialize a node and its descendants to an HTML string.

    Parameters
    ----------
    node : Node
        Root, Element or Text node

    Returns
    -------
    str
        HTML markup. Text is escaped; void elements have no closing tag.

    """
    if isinstance(node, Text):
        return html.escape(node.value, quote=False)
    inner = "".join(to_html(child) for child in node.children)
    if not isinstance(node, Element):
        return inner
    attrs = _format_attributes(node)
    if node.tag in VOID_ELEMENTS and not node.children:
        return f"<{node.tag}{attrs}>"
    return f"<{node.tag}{attrs}>{inner}</{node.tag}>"


def format_tree(node: Node, indent: int = 0) -> str:
    """Return an indented, one-node-per-line listing of a tree for debugging."""
    pad = "  " * indent
    if isinstance(node, Text):
        return f"{pad}#text {node.value!r}"
    if isinstance(node, Element):
        header = f"{pad}<{node.tag}{_format_attributes(node)}>"
    else:
        header = f"{pad}#root"
    lines = [header]
    lines.extend(format_tree(child, indent + 1) for child in node.children)
    return "\n".join(lines)
