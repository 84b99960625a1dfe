#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/normalize/styles.py
"""Convert inline CSS into semantic elements.

Clipboard HTML expresses almost all formatting with ``style`` attributes on
``<span>`` elements. This pass reads the effective (inherited) style of each
styled inline element and wraps its content in the matching semantic
element, then removes the now meaningless wrappers and joins neighbouring
elements that ended up identical.

"""

from __future__ import annotations

import logging
from typing import Sequence

from gdoc2md.constants import FLATTENABLE_ELEMENTS, MERGEABLE_INLINE_ELEMENTS, MONOSPACE_FONTS
from gdoc2md.normalize.base import NormalizeContext, TreePass, contains_replaced_element, is_block, iter_elements
from gdoc2md.tree.nodes import Element, Node, Parent, Root, wrap_children
from gdoc2md.utils.css import StyleResolver

logger = logging.getLogger(__name__)

# Tags that already provide the formatting a semantic wrapper would add.
_EQUIVALENT_TAGS = {
    "code": frozenset({"code", "pre"}),
    "em": frozenset({"em", "i"}),
    "strong": frozenset({"strong", "b"}),
    "sup": frozenset({"sup"}),
    "sub": frozenset({"sub"}),
    "del": frozenset({"del", "s", "strike"}),
}

# Wrapping order, innermost first.
_WRAP_ORDER = ("code", "em", "strong", "sup", "sub", "del")

# Tags whose nesting inside an equivalent ancestor is redundant.
_COLLAPSIBLE = frozenset({"code", "em", "strong", "sup", "sub"})


def is_bold(weight: str | None) -> bool:
    """Return True if a CSS ``font-weight`` value renders bold."""
    if not weight:
        return False
    if weight in ("bold", "bolder"):
        return True
    try:
        return int(weight) >= 700
    except ValueError:
        return False


def is_italic(style: str | None) -> bool:
    """Return True if a CSS ``font-style`` value renders italic."""
    return bool(style) and (style.startswith("italic") or style.startswith("oblique"))


def is_monospace(family: str | None) -> bool:
    """Return True if any family in a CSS ``font-family`` list is a monospace font."""
    if not family:
        return False
    for name in family.split(","):
        name = name.strip().strip("'\"").strip()
        if name in MONOSPACE_FONTS or name.endswith(" mono"):
            return True
    return False


def semantic_tags(element: Element, ancestors: Sequence[Node], styles: StyleResolver) -> list[str]:
    """Return the semantic tags implied by the resolved style of ``element``.

    Tags are returned in wrapping order, innermost first.
    """
    tags: set[str] = set()
    if is_italic(styles.resolve(element, "font-style", ancestors)):
        tags.add("em")
    if is_bold(styles.resolve(element, "font-weight", ancestors)):
        tags.add("strong")

    vertical_align = styles.resolve(element, "vertical-align", ancestors) or ""
    if vertical_align.startswith("super"):
        tags.add("sup")
    elif vertical_align.startswith("sub"):
        tags.add("sub")

    decoration = styles.resolve(element, "text-decoration-line", ancestors)
    if decoration is None:
        decoration = styles.resolve(element, "text-decoration", ancestors)
    if decoration and decoration.startswith("line-through"):
        tags.add("del")

    if is_monospace(styles.resolve(element, "font-family", ancestors)) and not contains_replaced_element(element):
        tags.add("code")

    return [tag for tag in _WRAP_ORDER if tag in tags]


class InlineStylePass(TreePass):
    """Wrap styled inline content in ``em``, ``strong``, ``sup``, ``sub``, ``del`` and ``code``.

    A wrapper is skipped when the element or one of its ancestors already
    provides the same formatting. Afterwards ``span`` and ``font`` wrappers
    are unwrapped, as are ``b``/``i`` elements whose style cancels their
    meaning (the clipboard wraps everything in ``<b style="font-weight:normal">``),
    and adjacent elements with the same tag and attributes are merged.
    """

    name = "styles"

    def transform(self, tree: Root, context: NormalizeContext) -> None:
        styles = context.styles
        wrapped = 0
        for element, ancestors in iter_elements(tree):
            if is_block(element) or "style" not in element.attributes:
                continue
            present = self._provided_tags(element, ancestors, styles)
            for tag in semantic_tags(element, ancestors, styles):
                if present & _EQUIVALENT_TAGS[tag]:
                    continue
                wrap_children(element, tag)
                present.add(tag)
                wrapped += 1
        logger.debug("Wrapped %d styled element(s) in semantic tags", wrapped)

        self._flatten(tree, (), styles)
        self._collapse_nested(tree, {})
        merge_adjacent(tree)

    @classmethod
    def _provided_tags(cls, element: Element, ancestors: Sequence[Node], styles: StyleResolver) -> set[str]:
        """Return the tags of ``element`` and its ancestors that still carry their formatting."""
        chain = tuple(ancestors) + (element,)
        return {
            node.tag
            for position, node in enumerate(chain)
            if isinstance(node, Element) and not cls._is_meaningless(node, chain[:position], styles)
        }

    def _collapse_nested(self, parent: Parent, open_tags: dict[str, Element]) -> None:
        """Unwrap elements nested inside an ancestor with an equivalent tag."""
        index = 0
        while index < len(parent.children):
            child = parent.children[index]
            if not isinstance(child, Element):
                index += 1
                continue
            outer = open_tags.get(child.tag) if child.tag in _COLLAPSIBLE else None
            if outer is not None:
                for name, value in child.attributes.items():
                    outer.attributes.setdefault(name, value)
                parent.children[index : index + 1] = child.children
                continue
            inner_tags = dict(open_tags)
            for tag, equivalents in _EQUIVALENT_TAGS.items():
                if child.tag in equivalents and tag in _COLLAPSIBLE:
                    inner_tags.setdefault(tag, child)
            self._collapse_nested(child, inner_tags)
            index += 1

    def _flatten(self, parent: Parent, ancestors: tuple[Parent, ...], styles: StyleResolver) -> None:
        chain = ancestors + (parent,)
        index = 0
        while index < len(parent.children):
            child = parent.children[index]
            if not isinstance(child, Element):
                index += 1
                continue
            if self._is_meaningless(child, chain, styles):
                parent.children[index : index + 1] = child.children
                continue
            self._flatten(child, chain, styles)
            index += 1

    @staticmethod
    def _is_meaningless(element: Element, ancestors: Sequence[Node], styles: StyleResolver) -> bool:
        if element.tag in FLATTENABLE_ELEMENTS:
            return True
        if element.tag == "b":
            return "style" in element.attributes and not is_bold(styles.resolve(element, "font-weight", ancestors))
        if element.tag == "i":
            return "style" in element.attributes and not is_italic(styles.resolve(element, "font-style", ancestors))
        return False


def merge_adjacent(parent: Parent) -> None:
    """Merge neighbouring inline elements that have the same tag and attributes."""
    index = 0
    while index < len(parent.children):
        child = parent.children[index]
        following = parent.children[index + 1] if index + 1 < len(parent.children) else None
        if (
            isinstance(child, Element)
            and isinstance(following, Element)
            and child.tag in MERGEABLE_INLINE_ELEMENTS
            and child.tag == following.tag
            and child.attributes == following.attributes
        ):
            child.children.extend(following.children)
            del parent.children[index + 1]
            continue
        index += 1

    for child in parent.children:
        if isinstance(child, Element):
            merge_adjacent(child)
