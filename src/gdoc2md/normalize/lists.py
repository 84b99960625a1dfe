#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/normalize/lists.py
"""List structure repairs: misplaced nested lists and checklist items."""

from __future__ import annotations

import logging

from gdoc2md.constants import CHECKBOX_CHECKED_MARKS, CHECKBOX_MARKS, LIST_ELEMENTS
from gdoc2md.normalize.base import NormalizeContext, TreePass, is_whitespace_text, iter_elements
from gdoc2md.tree.nodes import Element, Parent, Root, Text, text_content

logger = logging.getLogger(__name__)


class NestedListPass(TreePass):
    """Move lists that sit directly inside another list into the preceding item.

    Clipboard HTML nests lists as ``<ul><li>A</li><ul>...</ul></ul>``, which is
    not valid HTML. Each such list becomes the last child of the list item
    just before it. A nested list with no list item before it is left in
    place and logged.
    """

    name = "lists"

    def transform(self, tree: Root, context: NormalizeContext) -> None:
        self._fix(tree)

    def _fix(self, parent: Parent) -> None:
        index = 0
        while index < len(parent.children):
            child = parent.children[index]
            if isinstance(child, Element):
                # Repair inner lists first so moved subtrees are already well formed
                self._fix(child)
                if (
                    isinstance(parent, Element)
                    and parent.tag in LIST_ELEMENTS
                    and child.tag in LIST_ELEMENTS
                    and self._adopt(parent, index)
                ):
                    continue
            index += 1

    @staticmethod
    def _adopt(parent: Element, index: int) -> bool:
        previous = index - 1
        while previous >= 0 and is_whitespace_text(parent.children[previous]):
            previous -= 1
        if previous < 0 or not (
            isinstance(parent.children[previous], Element) and parent.children[previous].tag == "li"
        ):
            logger.warning(
                "Nested <%s> has no preceding list item in its parent <%s>; leaving it in place",
                parent.children[index].tag,
                parent.tag,
            )
            return False
        item = parent.children[previous]
        item.children.append(parent.children.pop(index))
        return True


class ChecklistPass(TreePass):
    """Turn checklist items into list items led by a checkbox input.

    Two shapes are recognized: items marked ``role="checkbox"`` with an
    ``aria-checked`` state, and items whose text starts with a ballot box or
    check mark character (which is removed).
    """

    name = "checklists"

    def transform(self, tree: Root, context: NormalizeContext) -> None:
        for element, _ in iter_elements(tree):
            if element.tag != "li" or self._has_checkbox(element):
                continue
            if element.get("role") == "checkbox":
                self._add_checkbox(element, (element.get("aria-checked") or "").lower() == "true")
                continue
            checked = self._strip_mark(element)
            if checked is not None:
                self._add_checkbox(element, checked)

    @staticmethod
    def _has_checkbox(item: Element) -> bool:
        first = item.children[0] if item.children else None
        return isinstance(first, Element) and first.tag == "input" and first.get("type") == "checkbox"

    @staticmethod
    def _add_checkbox(item: Element, checked: bool) -> None:
        attributes = {"type": "checkbox"}
        if checked:
            attributes["checked"] = ""
        item.children.insert(0, Element("input", attributes))

    def _strip_mark(self, node: Element) -> bool | None:
        """Remove a leading checkbox mark from the first text of ``node``.

        Returns None if there is no mark, otherwise whether it was checked.
        """
        for child in node.children:
            if isinstance(child, Text):
                stripped = child.value.lstrip()
                if not stripped:
                    continue
                if stripped[0] not in CHECKBOX_MARKS:
                    return None
                child.value = stripped[1:].lstrip()
                return stripped[0] in CHECKBOX_CHECKED_MARKS
            if isinstance(child, Element):
                if child.tag in LIST_ELEMENTS:
                    return None
                found = self._strip_mark(child)
                if found is not None:
                    return found
                if text_content(child).strip():
                    return None
        return None
