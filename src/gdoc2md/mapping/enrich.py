#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/mapping/enrich.py
"""Carry slice clip information into the HTML tree.

The clipboard HTML lacks several things the slice clip knows about. This
module writes them into the tree as ordinary HTML so that the normalizer and
transformer only ever deal with HTML:

- suggested insertions and deletions become ``<ins>``/``<del>`` elements
  with a ``data-suggestion-id`` attribute
- headings get their editor ``id``
- links pointing at headings or bookmarks of the document become ``#id``
- bookmarks become empty ``<a id="...">`` anchors
- code snippet text is wrapped in ``<code data-code-block-id data-language>``

The steps run in that fixed order. Where a suggestion and a bookmark share a
boundary, the suggestion wrapper exists before the bookmark anchor is placed.

"""

from __future__ import annotations

import logging
from typing import Callable
from urllib.parse import urlparse

from gdoc2md.constants import HEADING_ELEMENTS
from gdoc2md.exceptions import RangeMappingError
from gdoc2md.mapping.mapper import RangeVisit, replace_ranges_in_tree, visit_ranges_in_tree
from gdoc2md.mapping.ranges import (
    CodeBlockInfo,
    DocRange,
    Suggestion,
    get_bookmarks,
    get_headings,
    ranges_for_code_snippets,
    ranges_for_headings,
    ranges_for_suggestions,
)
from gdoc2md.parsers.slice_clip import SliceClip
from gdoc2md.tree.nodes import Element, Node, Parent, Text, walk

logger = logging.getLogger(__name__)

_DOCS_HOSTS = ("docs.google.com",)
_FRAGMENT_PREFIXES = ("heading=", "bookmark=")


def _suggestion_wrapper(tag: str) -> Callable[[DocRange, str], Node]:
    def build(doc_range: DocRange, text: str) -> Node:
        suggestion: Suggestion = doc_range.payload
        return Element(tag, {"data-suggestion-id": suggestion.suggestion_id}, [Text(text)])

    return build


def mark_suggestions(tree: Parent, clip: SliceClip) -> None:
    """Wrap suggested insertions in ``<ins>`` and suggested deletions in ``<del>``."""
    insertions = ranges_for_suggestions(clip, "insertion")
    deletions = ranges_for_suggestions(clip, "deletion")
    logger.debug("Marking %d insertion and %d deletion range(s)", len(insertions), len(deletions))
    replace_ranges_in_tree(clip.spacers, insertions, tree, _suggestion_wrapper("ins"))
    replace_ranges_in_tree(clip.spacers, deletions, tree, _suggestion_wrapper("del"))


def apply_heading_ids(tree: Parent, clip: SliceClip) -> None:
    """Set the editor's heading id on each heading element lacking an ``id``."""
    ranges = [doc_range for doc_range in ranges_for_headings(clip) if doc_range.end > doc_range.start]

    def set_id(visit: RangeVisit) -> None:
        for ancestor in reversed(visit.parents):
            if isinstance(ancestor, Element) and ancestor.tag in HEADING_ELEMENTS:
                if "id" not in ancestor.attributes:
                    ancestor.attributes["id"] = visit.range.payload.id
                return
        logger.debug("Heading %r is not inside a heading element", visit.range.payload.text)

    visit_ranges_in_tree(clip.spacers, ranges, tree, set_id)


def _internal_target(href: str) -> str | None:
    """Return the heading or bookmark id a document link points at, if any."""
    parsed = urlparse(href)
    if parsed.netloc and parsed.netloc not in _DOCS_HOSTS:
        return None
    fragment = parsed.fragment
    if not fragment:
        return None
    for prefix in _FRAGMENT_PREFIXES:
        if fragment.startswith(prefix):
            return fragment[len(prefix) :]
    return fragment if not parsed.netloc and not parsed.path else None


def fix_internal_links(tree: Parent, clip: SliceClip) -> None:
    """Point links at headings and bookmarks of this document to ``#id``.

    The editor writes such links as ``#heading=h.abc``, ``#bookmark=id.xyz``
    or as a full document URL with one of those fragments. Links whose target
    is not part of the copied content are left alone.
    """
    bookmark_ids, _ = get_bookmarks(clip)
    known_ids = bookmark_ids | {heading.id for heading in get_headings(clip)}
    if not known_ids:
        return

    for node in walk(tree):
        if not isinstance(node, Element) or node.tag != "a":
            continue
        href = node.get("href")
        if not href:
            continue
        target = _internal_target(href)
        if target and target in known_ids:
            node.attributes["href"] = f"#{target}"


def place_bookmarks(tree: Parent, clip: SliceClip) -> None:
    """Insert an empty ``<a id="...">`` anchor at each bookmark position."""
    _, ranges = get_bookmarks(clip)
    replace_ranges_in_tree(clip.spacers, ranges, tree, lambda doc_range, text: Element("a", {"id": doc_range.payload}))


def mark_code_snippets(tree: Parent, clip: SliceClip) -> None:
    """Wrap the text of each code snippet in ``<code>`` tagged with its block id and language."""

    def build(doc_range: DocRange, text: str) -> Node:
        info: CodeBlockInfo = doc_range.payload
        attributes = {"data-code-block-id": info.id}
        if info.language:
            attributes["data-language"] = info.language
        return Element("code", attributes, [Text(text)])

    replace_ranges_in_tree(clip.spacers, ranges_for_code_snippets(clip), tree, build)


ENRICHMENT_STEPS: tuple[tuple[str, Callable[[Parent, SliceClip], None]], ...] = (
    ("suggestions", mark_suggestions),
    ("heading_ids", apply_heading_ids),
    ("internal_links", fix_internal_links),
    ("bookmarks", place_bookmarks),
    ("code_snippets", mark_code_snippets),
)


def apply_slice_clip(tree: Parent, clip: SliceClip) -> bool:
    """Run every enrichment step against ``tree``.

    A :class:`RangeMappingError` stops enrichment: the failing step and all
    later steps are skipped, a warning is logged, and the tree keeps whatever
    earlier steps produced.

    Returns
    -------
    bool
        True if every step completed, False if enrichment was cut short

    """
    for name, step in ENRICHMENT_STEPS:
        try:
            step(tree, clip)
        except RangeMappingError as e:
            logger.warning("Skipping remaining metadata enrichment at step %r: %s", name, e.message)
            return False
        logger.debug("Applied slice clip enrichment step %r", name)
    return True
