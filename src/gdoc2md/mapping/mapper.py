#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/mapping/mapper.py
"""Align spacer-text ranges with the text nodes of an HTML tree.

Slice clip ranges are offsets into the spacer text, a flat copy of the
visible characters. The HTML tree holds the same non-space characters in its
text nodes, but line breaks and some spaces exist only as markup (``<br>``,
paragraph boundaries). The mapper therefore walks text nodes in document
order while keeping a cursor on the next non-space character of the spacer
text, and compares each node's text (minus leading whitespace) against the
spacer text at that cursor.

Once a node's position is known, every pending range that starts before the
node's end is translated into node-local offsets and handed to a visitor. A
range that runs past the node is split: the remainder goes back into the
pending list and is picked up by the following text nodes.

The overall text content of the tree must not change while ranges are being
visited, otherwise later nodes no longer line up with the spacer text.
Visitors that need to change text should wrap it in a new element and edit
that element in a later pass.

"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from gdoc2md.constants import SPACER_SKIP_PATTERN
from gdoc2md.exceptions import RangeMappingError
from gdoc2md.mapping.ranges import DocRange
from gdoc2md.tree.nodes import Element, Node, Parent, Text

logger = logging.getLogger(__name__)


@dataclass
class RangeVisit:
    """A range, or the piece of a range, located inside one text node.

    Parameters
    ----------
    node : Text
        Text node containing the range piece
    parent : Root or Element
        Parent of ``node``
    index : int
        Position of ``node`` in ``parent.children``
    parents : tuple of Node
        Ancestor chain from the tree root down to ``parent``
    range : DocRange
        The range being applied; for split ranges, the piece starting in this node
    local_start : int
        Start offset of the piece within ``node.value``
    local_end : int
        End offset of the piece within ``node.value``

    """

    node: Text
    parent: Parent
    index: int
    parents: tuple[Parent, ...]
    range: DocRange
    local_start: int
    local_end: int

    @property
    def text(self) -> str:
        """Return the text covered by this piece."""
        return self.node.value[self.local_start : self.local_end]


RangeVisitor = Callable[[RangeVisit], None]
RangeReplacer = Callable[[DocRange, str], "Node | None"]


def index_of_next_nonspace(spacer_text: str, start: int = 0) -> int:
    """Return the first offset at or after ``start`` that is not whitespace or a snippet marker."""
    match = SPACER_SKIP_PATTERN.match(spacer_text, start)
    return match.end() if match else start


def _insert_sorted(pending: list[DocRange], doc_range: DocRange) -> None:
    starts = [candidate.start for candidate in pending]
    pending.insert(bisect.bisect_left(starts, doc_range.start), doc_range)


def visit_ranges_in_tree(spacer_text: str, ranges: Sequence[DocRange], tree: Parent, visitor: RangeVisitor) -> None:
    """Call ``visitor`` for every range, located in the tree's text nodes.

    Parameters
    ----------
    spacer_text : str
        Spacer text the range offsets refer to
    ranges : sequence of DocRange
        Ranges to apply, in any order. The sequence itself is not modified.
    tree : Root or Element
        Tree to walk
    visitor : callable
        Receives a :class:`RangeVisit` for each range piece. It may replace
        the visited text node in its parent; the walk resumes at the same
        child index, so replacement nodes are walked as well.

    Raises
    ------
    RangeMappingError
        If a text node does not match the spacer text at the current cursor.
        Ranges visited before the mismatch stay applied.

    """
    pending = sorted(ranges, key=lambda doc_range: doc_range.start)
    if not pending:
        return

    cursor = index_of_next_nonspace(spacer_text, 0)
    # Each frame is (parent, index of the next child to visit, ancestors up to and including parent)
    stack: list[tuple[Parent, int, tuple[Parent, ...]]] = [(tree, 0, (tree,))]

    while stack and pending:
        parent, index, ancestors = stack[-1]
        if index >= len(parent.children):
            stack.pop()
            continue

        node = parent.children[index]
        if isinstance(node, Element):
            stack[-1] = (parent, index + 1, ancestors)
            stack.append((node, 0, ancestors + (node,)))
            continue
        if not isinstance(node, Text):
            stack[-1] = (parent, index + 1, ancestors)
            continue

        stripped = node.value.lstrip()
        if not stripped:
            stack[-1] = (parent, index + 1, ancestors)
            continue

        leading = len(node.value) - len(stripped)
        end_index = cursor + len(stripped)
        expected = spacer_text[cursor:end_index]
        if expected != stripped:
            raise RangeMappingError(
                f"Tree text no longer matches the spacer text at offset {cursor}: "
                f"expected {expected[:40]!r}, found {stripped[:40]!r}",
                offset=cursor,
                expected=expected,
                actual=stripped,
            )

        if pending[0].start < end_index:
            doc_range = pending.pop(0)
            local_start = max(leading + doc_range.start - cursor, 0)
            local_end = min(max(leading + doc_range.end - cursor, local_start), len(node.value))

            if doc_range.end > end_index:
                _insert_sorted(pending, doc_range.remainder(end_index))
                piece = DocRange(doc_range.start, end_index, doc_range.kind, doc_range.payload)
            else:
                piece = doc_range

            if local_end > local_start or doc_range.start == doc_range.end:
                visitor(RangeVisit(node, parent, index, ancestors, piece, local_start, local_end))
            else:
                logger.debug("Range %s..%s maps to no text in node %r", doc_range.start, doc_range.end, node.value)
            # More ranges may start in this node (or in what replaced it), so stay on this index.
            continue

        cursor = index_of_next_nonspace(spacer_text, end_index)
        stack[-1] = (parent, index + 1, ancestors)

    if pending:
        logger.debug("%d range(s) start past the end of the tree text and were not applied", len(pending))


def replace_ranges_in_tree(
    spacer_text: str, ranges: Sequence[DocRange], tree: Parent, replacer: RangeReplacer
) -> None:
    """Replace the text covered by each range with a node built by ``replacer``.

    The visited text node is spliced into ``[text before, replacement, text
    after]``, omitting empty pieces. ``replacer(range, text)`` receives the
    covered text and must return a node that contains exactly that text (for
    example, the text wrapped in a new element). Returning None removes the
    covered text, which is only safe for zero-width ranges.

    Raises
    ------
    RangeMappingError
        See :func:`visit_ranges_in_tree`.

    """

    def replace(visit: RangeVisit) -> None:
        value = visit.node.value
        before = value[: visit.local_start]
        after = value[visit.local_end :]

        new_nodes: list[Node] = []
        if before:
            new_nodes.append(Text(before))
        replacement = replacer(visit.range, visit.text)
        if replacement is not None:
            new_nodes.append(replacement)
        if after:
            new_nodes.append(Text(after))
        visit.parent.children[visit.index : visit.index + 1] = new_nodes

    visit_ranges_in_tree(spacer_text, ranges, tree, replace)
