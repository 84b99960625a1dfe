#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/utils/css.py
"""Lightweight CSS handling for inline ``style`` attributes.

Only what clipboard HTML needs is supported: ``style="..."`` property lists
are split into name/value pairs, and properties can be resolved through the
ancestor chain the way inheritance works in a browser. Shorthand properties
are not expanded and quoted semicolons are not understood.

"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from gdoc2md.tree.nodes import Element, Node

logger = logging.getLogger(__name__)

_PROPERTY_PATTERN = re.compile(r"^\s*(?P<name>[\w-]+)\s*:\s*(?P<value>.+?)\s*$", re.DOTALL)

StyleMap = dict[str, str]


def parse_property_list(text: str | None) -> StyleMap:
    """Parse a CSS property list such as the content of a ``style`` attribute.

    Parameters
    ----------
    text : str or None
        Property list, e.g. ``"font-weight: 700; font-style: italic"``

    Returns
    -------
    dict[str, str]
        Lowercased property names mapped to lowercased values. Malformed
        entries are skipped with a warning.

    Examples
    --------
        >>> parse_property_list("Font-Weight: 700; color:#FF0000")
        {'font-weight': '700', 'color': '#ff0000'}

    """
    properties: StyleMap = {}
    if not text:
        return properties

    for entry in text.split(";"):
        if not entry.strip():
            continue
        match = _PROPERTY_PATTERN.match(entry)
        if match is None:
            logger.warning("Could not parse CSS property %r", entry.strip())
            continue
        properties[match.group("name").lower()] = match.group("value").lower()
    return properties


class StyleResolver:
    """Resolve inline and inherited CSS properties of tree elements.

    Parsed and resolved values are memoized in dictionaries owned by the
    resolver and keyed by element identity. One resolver serves one tree for
    the duration of one conversion; mutating an element's ``style`` attribute
    afterwards requires calling :meth:`invalidate`.

    Notes
    -----
    Inheritability is not checked: any property set to ``inherit`` or left
    unset falls back to the nearest ancestor that sets it.

    """

    def __init__(self) -> None:
        self._styles: dict[Element, StyleMap] = {}
        self._resolved: dict[tuple[Element, str], str | None] = {}

    def style_of(self, element: Element) -> StyleMap:
        """Return the parsed ``style`` attribute of ``element``."""
        style = self._styles.get(element)
        if style is None:
            style = parse_property_list(element.get("style"))
            self._styles[element] = style
        return style

    def resolve(self, node: Node, prop: str, ancestors: Sequence[Node] = ()) -> str | None:
        """Resolve the effective value of a property for ``node``.

        Parameters
        ----------
        node : Node
            Element whose value is wanted. Non-element nodes resolve through
            their ancestors.
        prop : str
            Lowercase property name
        ancestors : sequence of Node
            Ancestor chain from the root down to the node's parent

        Returns
        -------
        str or None
            The value, or None if neither the node nor an ancestor sets it

        """
        chain = [ancestor for ancestor in ancestors if isinstance(ancestor, Element)]
        if not isinstance(node, Element):
            if not chain:
                return None
            return self._resolve_element(chain[-1], prop, chain[:-1])
        return self._resolve_element(node, prop, chain)

    def _resolve_element(self, element: Element, prop: str, ancestors: list[Element]) -> str | None:
        key = (element, prop)
        if key in self._resolved:
            return self._resolved[key]

        value = self.style_of(element).get(prop)
        if (value is not None and value != "inherit") or not ancestors:
            resolved = None if value == "inherit" else value
        else:
            resolved = self._resolve_element(ancestors[-1], prop, ancestors[:-1])
        self._resolved[key] = resolved
        return resolved

    def resolved_style(self, node: Node, ancestors: Sequence[Node], props: Iterable[str] | None = None) -> StyleMap:
        """Return a map of resolved properties for ``node``.

        Parameters
        ----------
        node : Node
            Element to resolve
        ancestors : sequence of Node
            Ancestor chain from the root down to the node's parent
        props : iterable of str, optional
            Properties to resolve. Defaults to every property set on the node
            or any of its ancestors.

        """
        if props is None:
            names: set[str] = set()
            for candidate in [*ancestors, node]:
                if isinstance(candidate, Element):
                    names.update(self.style_of(candidate))
            props = sorted(names)
        resolved: StyleMap = {}
        for prop in props:
            value = self.resolve(node, prop, ancestors)
            if value is not None:
                resolved[prop] = value
        return resolved

    def invalidate(self, element: Element | None = None) -> None:
        """Drop memoized values for ``element``, or for every element when None."""
        if element is None:
            self._styles.clear()
            self._resolved.clear()
            return
        self._styles.pop(element, None)
        for key in [key for key in self._resolved if key[0] is element]:
            del self._resolved[key]
