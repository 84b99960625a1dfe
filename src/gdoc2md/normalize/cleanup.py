#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/normalize/cleanup.py
"""Final tidy-up: strip presentational markup and drop empty elements."""

from __future__ import annotations

import logging

from gdoc2md.constants import (
    FRAGMENT_MARKER_PATTERN,
    HEADING_ELEMENTS,
    IMPORTANT_ATTRIBUTES,
    KEPT_ATTRIBUTES,
    REMOVED_ELEMENTS,
    SUGGESTION_ELEMENTS,
    TABLE_STRUCTURE_ELEMENTS,
    UNWRAPPED_ELEMENTS,
    VOID_ELEMENTS,
)
from gdoc2md.normalize.base import NormalizeContext, TreePass, contains_replaced_element
from gdoc2md.tree.nodes import Element, Node, Parent, Root, Text
from gdoc2md.utils.text import collapse_whitespace

logger = logging.getLogger(__name__)


def filter_attributes(element: Element) -> dict[str, str]:
    """Return the attributes of ``element`` that carry meaning for Markdown."""
    kept: dict[str, str] = {}
    for name, value in element.attributes.items():
        if name == "data-suggestion-id":
            if element.tag in SUGGESTION_ELEMENTS:
                kept[name] = value
        elif name in KEPT_ATTRIBUTES:
            kept[name] = value
        elif name == "id":
            if element.tag == "a" or element.tag in HEADING_ELEMENTS:
                kept[name] = value
        elif name == "class" and element.tag == "code":
            languages = [token for token in value.split() if token.startswith("language-")]
            if languages:
                kept[name] = languages[0]
    return kept


def is_meaningful(node: Node) -> bool:
    """Return True if ``node`` must survive empty-element removal.

    A lone ``<br>`` does not count as content: a paragraph holding only a
    line break is empty.
    """
    if isinstance(node, Text):
        return bool(node.value.strip())
    if not isinstance(node, Element):
        return any(is_meaningful(child) for child in node.children)
    if node.tag == "br":
        return False
    if node.tag in VOID_ELEMENTS or node.tag in TABLE_STRUCTURE_ELEMENTS:
        return True
    if contains_replaced_element(node):
        return True
    if any(name in IMPORTANT_ATTRIBUTES for name in node.attributes):
        return True
    return any(is_meaningful(child) for child in node.children)


class CleanupPass(TreePass):
    """Remove presentational markup, normalize text and prune empty elements.

    - ``style``, ``meta``, ``script``, ``link``, ``title`` and ``head`` are
      removed; ``html`` and ``body`` are unwrapped
    - attributes are reduced to an allow-list
    - adjacent text nodes are joined and private-use fragment markers are
      deleted from text
    - whitespace runs outside ``pre`` collapse to a single space
    - elements with no meaningful content are removed
    """

    name = "cleanup"

    def transform(self, tree: Root, context: NormalizeContext) -> None:
        self._clean(tree, in_pre=False)
        removed = self._prune(tree)
        logger.debug("Removed %d empty element(s)", removed)

    def _clean(self, parent: Parent, in_pre: bool) -> None:
        index = 0
        while index < len(parent.children):
            child = parent.children[index]
            if isinstance(child, Text):
                following = parent.children[index + 1] if index + 1 < len(parent.children) else None
                if isinstance(following, Text):
                    child.value += following.value
                    del parent.children[index + 1]
                    continue
                value = FRAGMENT_MARKER_PATTERN.sub("", child.value)
                if not in_pre:
                    value = collapse_whitespace(value)
                if not value:
                    del parent.children[index]
                    continue
                child.value = value
            elif isinstance(child, Element):
                if child.tag in REMOVED_ELEMENTS:
                    del parent.children[index]
                    continue
                if child.tag in UNWRAPPED_ELEMENTS:
                    parent.children[index : index + 1] = child.children
                    continue
                child.attributes = filter_attributes(child)
                self._clean(child, in_pre or child.tag == "pre")
            index += 1

    def _prune(self, parent: Parent) -> int:
        """Remove empty elements bottom-up and return how many were removed."""
        removed = 0
        index = 0
        while index < len(parent.children):
            child = parent.children[index]
            if isinstance(child, Element):
                removed += self._prune(child)
                if child.tag != "br" and not is_meaningful(child):
                    del parent.children[index]
                    removed += 1
                    continue
            index += 1
        return removed
