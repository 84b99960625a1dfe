#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Generic HTML tree model and serialization helpers."""

from gdoc2md.tree.nodes import (
    Element,
    Node,
    Parent,
    Root,
    Text,
    find_all,
    is_element,
    text_content,
    unwrap,
    walk,
    walk_with_parents,
    wrap_children,
)
from gdoc2md.tree.serialize import format_tree, to_html

__all__ = [
    "Element",
    "Node",
    "Parent",
    "Root",
    "Text",
    "find_all",
    "format_tree",
    "is_element",
    "text_content",
    "to_html",
    "unwrap",
    "walk",
    "walk_with_parents",
    "wrap_children",
]
