#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/tree/nodes.py
"""Generic HTML tree used by the normalization pipeline.

The tree has three node types: ``Root``, ``Element`` and ``Text``. A parent
owns its ``children`` list outright; nodes never hold a reference to their
parent. Code that needs ancestors (style inheritance, range mapping) passes
the ancestor chain explicitly.

All node classes compare and hash by identity, so a node can be used as a
key in external lookup tables such as the style resolver's caches.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, Union


@dataclass(eq=False)
class Text:
    """A run of literal text.

    Parameters
    ----------
    value : str
        The text content

    """

    value: str = ""


@dataclass(eq=False)
class Element:
    """An HTML element.

    Parameters
    ----------
    tag : str
        Lowercase tag name
    attributes : dict[str, str]
        Attribute values keyed by lowercase attribute name. Multi-valued
        attributes such as ``class`` are stored as a space-joined string.
    children : list of Node
        Child nodes, owned by this element

    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return an attribute value, or ``default`` when it is absent."""
        return self.attributes.get(name, default)

    def has_class(self, name: str) -> bool:
        """Return True if ``name`` is one of the element's classes."""
        return name in (self.attributes.get("class") or "").split()


@dataclass(eq=False)
class Root:
    """Top-level container of a parsed document.

    Parameters
    ----------
    children : list of Node
        Top-level nodes

    """

    children: list[Node] = field(default_factory=list)


Node = Union[Root, Element, Text]
Parent = Union[Root, Element]


def is_element(node: object, *tags: str) -> bool:
    """Return True if ``node`` is an Element, optionally with one of ``tags``."""
    if not isinstance(node, Element):
        return False
    return not tags or node.tag in tags


def text_content(node: Node) -> str:
    """Return the concatenated text of a node and its descendants."""
    if isinstance(node, Text):
        return node.value
    return "".join(text_content(child) for child in node.children)


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in document (pre-)order."""
    yield node
    if not isinstance(node, Text):
        for child in list(node.children):
            yield from walk(child)


def walk_with_parents(node: Node, parents: tuple[Parent, ...] = ()) -> Iterator[tuple[Node, tuple[Parent, ...]]]:
    """Yield ``(node, ancestors)`` pairs in document order.

    ``ancestors`` runs from the root down to the node's direct parent.
    """
    yield node, parents
    if not isinstance(node, Text):
        chain = parents + (node,)
        for child in list(node.children):
            yield from walk_with_parents(child, chain)


def find_all(node: Node, predicate: Callable[[Node], bool]) -> list[Node]:
    """Return every node under (and including) ``node`` matching ``predicate``."""
    return [candidate for candidate in walk(node) if predicate(candidate)]


def unwrap(parent: Parent, index: int) -> int:
    """Replace ``parent.children[index]`` with its own children.

    Returns
    -------
    int
        Number of nodes inserted in place of the unwrapped element

    """
    child = parent.children[index]
    replacement = [] if isinstance(child, Text) else list(child.children)
    parent.children[index : index + 1] = replacement
    return len(replacement)


def wrap_children(element: Element, tag: str, attributes: dict[str, str] | None = None) -> Element:
    """Move all children of ``element`` into a new ``tag`` element inside it."""
    wrapper = Element(tag, dict(attributes or {}), element.children)
    element.children = [wrapper]
    return wrapper
