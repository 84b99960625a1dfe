#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/parsers/html.py
"""HTML string to generic tree parser.

BeautifulSoup does the tokenizing and tree building; the result is copied
into the lightweight :mod:`gdoc2md.tree` model, which has identity-based
equality and plain ``children`` lists that the normalizer passes can splice
freely.

"""

from __future__ import annotations

import logging
from typing import Any

from gdoc2md.constants import CLIPBOARD_WRAPPER_ID_PREFIX
from gdoc2md.exceptions import ValidationError
from gdoc2md.tree.nodes import Element, Parent, Root, Text

logger = logging.getLogger(__name__)

DEFAULT_HTML_PARSER = "html.parser"

# Dropped outright while unwrapping the clipboard envelope.
_ENVELOPE_DROP_TAGS = frozenset({"meta", "style", "title"})
_ENVELOPE_WRAPPER_TAGS = frozenset({"b", "div", "span"})


def _convert_attributes(attrs: dict[str, Any]) -> dict[str, str]:
    converted: dict[str, str] = {}
    for name, value in attrs.items():
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        converted[name.lower()] = "" if value is None else str(value)
    return converted


def _convert_node(node: Any) -> Element | Text | None:
    from bs4.element import NavigableString, PreformattedString, Tag

    # Comments, doctypes, CDATA and processing instructions carry no content
    if isinstance(node, PreformattedString):
        return None
    if isinstance(node, NavigableString):
        return Text(str(node))
    if isinstance(node, Tag):
        element = Element(node.name.lower(), _convert_attributes(node.attrs))
        for child in node.children:
            converted = _convert_node(child)
            if converted is not None:
                element.children.append(converted)
        return element
    return None


def parse_html(html: str, parser: str = DEFAULT_HTML_PARSER, unwrap_envelope: bool = True) -> Root:
    """Parse an HTML string into a generic tree.

    Parameters
    ----------
    html : str
        HTML markup, typically the ``text/html`` flavor of a clipboard payload
    parser : str, default "html.parser"
        BeautifulSoup tree builder to use
    unwrap_envelope : bool, default True
        Remove the clipboard wrapper markup (see :func:`unwrap_clipboard_envelope`)

    Returns
    -------
    Root
        Root of the parsed tree

    Raises
    ------
    ValidationError
        If ``html`` is not a string

    Examples
    --------
        >>> root = parse_html("<p>Hello <b>world</b></p>")
        >>> root.children[0].tag
        'p'

    """
    if not isinstance(html, str):
        raise ValidationError(
            f"html must be a string, got {type(html).__name__}", parameter_name="html", parameter_value=html
        )

    from bs4 import BeautifulSoup

    soup = BeautifulSoup(html, parser)
    root = Root()
    for child in soup.children:
        converted = _convert_node(child)
        if converted is not None:
            root.children.append(converted)

    if unwrap_envelope:
        unwrap_clipboard_envelope(root)
    return root


def _is_envelope_wrapper(element: Element) -> bool:
    return element.tag in _ENVELOPE_WRAPPER_TAGS and (element.get("id") or "").startswith(CLIPBOARD_WRAPPER_ID_PREFIX)


def unwrap_clipboard_envelope(node: Parent) -> None:
    """Remove the wrapper markup a document editor adds to copied HTML.

    ``meta``, ``style`` and ``title`` elements are dropped, the
    ``docs-internal-guid-*`` wrapper element is replaced by its children, and
    the trailing ``Apple-interchange-newline`` line break is removed.
    """
    index = 0
    while index < len(node.children):
        child = node.children[index]
        if isinstance(child, Element):
            if child.tag in _ENVELOPE_DROP_TAGS:
                del node.children[index]
                continue
            if child.tag == "br" and child.has_class("Apple-interchange-newline"):
                del node.children[index]
                continue
            if _is_envelope_wrapper(child):
                logger.debug("Unwrapping clipboard envelope element <%s id=%s>", child.tag, child.get("id"))
                node.children[index : index + 1] = child.children
                continue
            unwrap_clipboard_envelope(child)
        index += 1
