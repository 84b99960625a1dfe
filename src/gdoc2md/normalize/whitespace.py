#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/normalize/whitespace.py
"""Move leading and trailing whitespace out of emphasis-like elements.

Markdown delimiters cannot sit next to whitespace on their inner side:
``** bold**`` is not bold. The editor routinely puts the space that
separates two words inside the styled span, so this pass moves it just
outside the element.

"""

from __future__ import annotations

from gdoc2md.constants import SPACE_SENSITIVE_ELEMENTS
from gdoc2md.normalize.base import NormalizeContext, TreePass, contains_replaced_element
from gdoc2md.tree.nodes import Element, Parent, Root, Text, text_content


def _is_space_sensitive(node: object) -> bool:
    return isinstance(node, Element) and node.tag in SPACE_SENSITIVE_ELEMENTS


def _extract_space(element: Element, at_start: bool) -> str:
    """Strip whitespace from one edge of ``element`` and return it.

    Descends through nested space-sensitive elements that start (or end)
    the content. Stops at the first non-whitespace text, or at any other
    element.
    """
    collected = ""
    count = len(element.children)
    for step in range(count):
        child = element.children[step if at_start else count - 1 - step]
        if isinstance(child, Text):
            value = child.value
            kept = value.lstrip() if at_start else value.rstrip()
            space = value[: len(value) - len(kept)] if at_start else value[len(kept) :]
            child.value = kept
            collected = collected + space if at_start else space + collected
            if kept:
                return collected
        elif _is_space_sensitive(child):
            space = _extract_space(child, at_start)
            collected = collected + space if at_start else space + collected
            if text_content(child) or contains_replaced_element(child):
                return collected
        else:
            return collected
    return collected


class WhitespacePass(TreePass):
    """Relocate edge whitespace of ``em``, ``strong``, ``ins`` and ``del`` to sibling text.

    Elements left empty are kept; cleanup removes them.
    """

    name = "whitespace"

    def transform(self, tree: Root, context: NormalizeContext) -> None:
        self._relocate(tree)

    def _relocate(self, parent: Parent) -> None:
        index = 0
        while index < len(parent.children):
            child = parent.children[index]
            if not isinstance(child, Element) or child.tag == "pre":
                index += 1
                continue
            if _is_space_sensitive(child):
                leading = _extract_space(child, at_start=True)
                trailing = _extract_space(child, at_start=False)
                if trailing:
                    parent.children.insert(index + 1, Text(trailing))
                if leading:
                    parent.children.insert(index, Text(leading))
                    index += 1
            self._relocate(child)
            index += 1
