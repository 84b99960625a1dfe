#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/mapping/ranges.py
"""Derive annotated character ranges from slice clip metadata.

Every range is expressed in spacer-text coordinates as a half-open
``[start, end)`` interval. Slice clip tables are position-indexed lists: the
entry at index ``i`` describes the character at offset ``i`` and most entries
are ``null``.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from gdoc2md.constants import (
    CODE_SNIPPET_PATTERN,
    MAX_HEADING_LEVEL,
    STYLE_SLICE_CODE_SNIPPET,
    STYLE_SLICE_PARAGRAPH,
    RangeKind,
    SuggestionType,
)
from gdoc2md.parsers.slice_clip import SliceClip

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Suggestion:
    """Payload of a suggestion range."""

    suggestion_id: str
    type: SuggestionType


@dataclass(frozen=True)
class CodeBlockInfo:
    """Payload of a code snippet range.

    Parameters
    ----------
    id : str
        Document-unique id, ``code-0``, ``code-1``, ...
    language : str or None
        Lowercased language name, or None when the editor had none set
    text : str
        Code text with trailing whitespace removed

    """

    id: str
    language: str | None
    text: str


@dataclass(frozen=True)
class HeadingInfo:
    """A heading paragraph described by the metadata's paragraph styles."""

    start: int
    end: int
    text: str
    level: int
    id: str


@dataclass
class DocRange:
    """A ``[start, end)`` span of spacer text carrying an annotation.

    Parameters
    ----------
    start : int
        Offset of the first character
    end : int
        Offset one past the last character; equal to ``start`` for
        zero-width ranges such as bookmarks
    kind : str
        One of ``suggestion-insertion``, ``suggestion-deletion``,
        ``bookmark``, ``code-snippet`` or ``heading``
    payload : Any
        :class:`Suggestion`, bookmark id string, :class:`CodeBlockInfo` or
        :class:`HeadingInfo`, depending on ``kind``

    """

    start: int
    end: int
    kind: RangeKind
    payload: Any = None

    def __len__(self) -> int:
        return max(self.end - self.start, 0)

    def remainder(self, start: int) -> DocRange:
        """Return a copy of this range starting at ``start``."""
        return replace(self, start=start)


def ranges_for_suggestions(clip: SliceClip, suggestion_type: SuggestionType) -> list[DocRange]:
    """Build ranges for suggested insertions or deletions.

    Each non-null entry of the position table lists the suggestion ids present
    from that offset on. An id that was open but is no longer listed closes at
    that offset; an id not yet open starts there. Ranges still open at the end
    of the table close at the end of the spacer text.

    For example, suggestion ``a`` covers ``[2, 7)`` and ``b`` covers ``[2, 5)``
    in::

        [[], null, ["a", "b"], null, null, ["a"], null, []]

    """
    table = clip.suggested_insertions if suggestion_type == "insertion" else clip.suggested_deletions
    if not table:
        return []

    kind: RangeKind = "suggestion-insertion" if suggestion_type == "insertion" else "suggestion-deletion"
    ranges: list[DocRange] = []
    open_ranges: dict[str, DocRange] = {}

    for index, value in enumerate(table):
        if value is None:
            continue
        listed = [str(suggestion_id) for suggestion_id in value]
        for suggestion_id in list(open_ranges):
            if suggestion_id not in listed:
                open_ranges.pop(suggestion_id).end = index
        for suggestion_id in listed:
            if suggestion_id not in open_ranges:
                doc_range = DocRange(index, index, kind, Suggestion(suggestion_id, suggestion_type))
                ranges.append(doc_range)
                open_ranges[suggestion_id] = doc_range

    for doc_range in open_ranges.values():
        doc_range.end = len(clip.spacers)

    return [doc_range for doc_range in ranges if doc_range.end > doc_range.start]


def ranges_for_code_snippets(clip: SliceClip) -> list[DocRange]:
    """Build ranges for code snippet objects.

    The spacer text brackets each code snippet between U+EC03 and U+EC02. The
    ``code_snippet`` style slice holds an entry at the offset of the opening
    marker, whose ``cos_l`` field names the language.
    """
    code_styles = clip.get_styles(STYLE_SLICE_CODE_SNIPPET)
    if not code_styles:
        return []

    ranges: list[DocRange] = []
    for number, match in enumerate(CODE_SNIPPET_PATTERN.finditer(clip.spacers)):
        text = match.group(1).rstrip()
        style = code_styles[match.start()] if match.start() < len(code_styles) else None
        language = None
        if isinstance(style, dict):
            language = str(style.get("cos_l") or "").lower() or None
        if language == "unset":
            language = None

        start = match.start() + 1
        ranges.append(
            DocRange(start, start + len(text), "code-snippet", CodeBlockInfo(f"code-{number}", language, text))
        )
    return ranges


def get_headings(clip: SliceClip) -> list[HeadingInfo]:
    """Return every heading described by the ``paragraph`` style slice.

    Paragraph styles sit at the offset of each paragraph's end, and the
    character after that (a line break) starts the next paragraph. Titles use
    level 100 and are skipped.
    """
    headings: list[HeadingInfo] = []
    start = 0
    for index, style in enumerate(clip.get_styles(STYLE_SLICE_PARAGRAPH)):
        if style is None:
            continue
        if isinstance(style, dict):
            level = style.get("ps_hd")
            heading_id = style.get("ps_hdid")
            if heading_id and isinstance(level, int) and 0 < level <= MAX_HEADING_LEVEL:
                headings.append(HeadingInfo(start, index, clip.spacers[start:index], level, str(heading_id)))
        start = index + 1
    return headings


def ranges_for_headings(clip: SliceClip) -> list[DocRange]:
    """Return one ``heading`` range per heading found by :func:`get_headings`."""
    return [DocRange(heading.start, heading.end, "heading", heading) for heading in get_headings(clip)]


def get_bookmarks(clip: SliceClip) -> tuple[set[str], list[DocRange]]:
    """Return the ids and zero-width positions of all bookmarks.

    Returns
    -------
    tuple of (set of str, list of DocRange)
        Every bookmark id, and one ``bookmark`` range per id and position

    """
    ids: set[str] = set()
    ranges: list[DocRange] = []
    positions = clip.entity_position_map.get("bookmark") or []
    for index, bookmark_ids in enumerate(positions):
        if bookmark_ids is None:
            continue
        for bookmark_id in bookmark_ids:
            ids.add(str(bookmark_id))
            ranges.append(DocRange(index, index, "bookmark", str(bookmark_id)))
    return ids, ranges
