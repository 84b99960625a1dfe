#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/normalize/tables.py
"""Table structure normalization."""

from __future__ import annotations

import logging

from gdoc2md.constants import KEPT_CELL_ATTRIBUTES, TABLE_CELL_ELEMENTS
from gdoc2md.normalize.base import NormalizeContext, TreePass, contains_replaced_element, iter_elements
from gdoc2md.tree.nodes import Element, Root, text_content

logger = logging.getLogger(__name__)

_ROW_GROUPS = frozenset({"thead", "tbody", "tfoot"})


class TablePass(TreePass):
    """Give tables a regular shape.

    - rows placed directly in ``<table>`` are wrapped in a ``<tbody>``
    - empty paragraphs inside cells are dropped
    - cell attributes other than ``colspan``/``rowspan`` are removed; the
      ``style`` attribute survives until cleanup so alignment can still be
      detected, and an explicit ``align`` is kept
    """

    name = "tables"

    def transform(self, tree: Root, context: NormalizeContext) -> None:
        for element, _ in iter_elements(tree):
            if element.tag == "table":
                self._wrap_rows(element)
            elif element.tag in TABLE_CELL_ELEMENTS:
                self._clean_cell(element)

    @staticmethod
    def _wrap_rows(table: Element) -> None:
        if any(isinstance(child, Element) and child.tag in _ROW_GROUPS for child in table.children):
            bodies = [child for child in table.children if isinstance(child, Element) and child.tag == "tbody"]
            target = bodies[-1] if bodies else None
        else:
            target = None

        rows = [child for child in table.children if isinstance(child, Element) and child.tag == "tr"]
        if not rows:
            return

        if target is None:
            first = table.children.index(rows[0])
            target = Element("tbody")
            table.children.insert(first, target)
        target.children.extend(rows)
        table.children = [child for child in table.children if not any(child is row for row in rows)]
        logger.debug("Moved %d bare table row(s) into <tbody>", len(rows))

    @staticmethod
    def _clean_cell(cell: Element) -> None:
        cell.children = [
            child
            for child in cell.children
            if not (
                isinstance(child, Element)
                and child.tag == "p"
                and not text_content(child).strip()
                and not contains_replaced_element(child)
            )
        ]
        cell.attributes = {name: value for name, value in cell.attributes.items() if name in KEPT_CELL_ATTRIBUTES}
