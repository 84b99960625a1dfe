#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/normalize/alignment.py
"""Detect table column alignment from cell and paragraph styles."""

from __future__ import annotations

import logging
import re
from typing import Sequence

from gdoc2md.constants import TABLE_CELL_ELEMENTS
from gdoc2md.normalize.base import NormalizeContext, TreePass, is_block, iter_elements
from gdoc2md.tree.nodes import Element, Node, Root
from gdoc2md.utils.css import StyleResolver

logger = logging.getLogger(__name__)

_ALIGNMENT_PATTERN = re.compile(r"^(left|center|right)\b")


def _alignment_of(element: Element, ancestors: Sequence[Node], styles: StyleResolver) -> str | None:
    value = styles.resolve(element, "text-align", ancestors)
    match = _ALIGNMENT_PATTERN.match(value) if value else None
    return match.group(1) if match else None


def cell_alignment(cell: Element, ancestors: Sequence[Node], styles: StyleResolver) -> str | None:
    """Return the alignment of a table cell, or None if it has no consistent one.

    The cell's own (inherited) ``text-align`` wins. Otherwise every block
    inside the cell must report the same alignment.
    """
    own = _alignment_of(cell, ancestors, styles)
    if own:
        return own

    chain = tuple(ancestors) + (cell,)
    found: set[str | None] = set()
    for child in cell.children:
        if isinstance(child, Element) and is_block(child):
            found.add(_alignment_of(child, chain, styles))
    if len(found) == 1:
        return found.pop()
    return None


class AlignmentPass(TreePass):
    """Store the detected alignment of each table cell in its ``align`` attribute."""

    name = "alignment"

    def transform(self, tree: Root, context: NormalizeContext) -> None:
        for element, ancestors in iter_elements(tree):
            if element.tag not in TABLE_CELL_ELEMENTS or "align" in element.attributes:
                continue
            alignment = cell_alignment(element, ancestors, context.styles)
            if alignment:
                element.attributes["align"] = alignment
