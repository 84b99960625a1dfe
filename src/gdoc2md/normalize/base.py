#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/normalize/base.py
"""Base class and shared helpers for normalization passes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator

from gdoc2md.constants import BLOCK_ELEMENTS, REPLACED_ELEMENTS
from gdoc2md.options.conversion import ConversionOptions
from gdoc2md.tree.nodes import Element, Node, Parent, Root, Text
from gdoc2md.utils.css import StyleResolver


@dataclass
class NormalizeContext:
    """State shared by the passes of one normalization run.

    Parameters
    ----------
    options : ConversionOptions
        Conversion options in effect
    styles : StyleResolver
        Style resolver owned by this run; its caches belong to the tree
        being normalized and are never reused for another tree

    """

    options: ConversionOptions = field(default_factory=ConversionOptions)
    styles: StyleResolver = field(default_factory=StyleResolver)


class TreePass(ABC):
    """A single in-place rewrite of the tree.

    Subclasses set :attr:`name` and implement :meth:`transform`. Passes hold no
    per-tree state between calls, so one instance can serve many conversions.
    """

    name: str = ""

    @abstractmethod
    def transform(self, tree: Root, context: NormalizeContext) -> None:
        """Rewrite ``tree`` in place.

        Parameters
        ----------
        tree : Root
            Tree to rewrite
        context : NormalizeContext
            Options and shared resolver for this run

        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def is_block(node: Node) -> bool:
    """Return True if ``node`` is a block-level element."""
    return isinstance(node, Element) and node.tag in BLOCK_ELEMENTS


def contains_replaced_element(node: Node) -> bool:
    """Return True if ``node`` is or contains media that is not text (images, video, ...)."""
    if not isinstance(node, Element):
        return False
    if node.tag in REPLACED_ELEMENTS:
        return True
    if node.tag == "input" and (node.get("type") or "").lower() == "image":
        return True
    return any(contains_replaced_element(child) for child in node.children)


def iter_elements(node: Parent, ancestors: tuple[Parent, ...] = ()) -> Iterator[tuple[Element, tuple[Parent, ...]]]:
    """Yield ``(element, ancestors)`` for every element below ``node``, parents first.

    Children lists are copied before descending, so callers may replace an
    element's own children while iterating. Ancestors run from the root down
    to the element's parent.
    """
    chain = ancestors + (node,)
    for child in list(node.children):
        if isinstance(child, Element):
            yield child, chain
            yield from iter_elements(child, chain)


def is_whitespace_text(node: Node) -> bool:
    """Return True if ``node`` is a Text node containing only whitespace."""
    return isinstance(node, Text) and not node.value.strip()
