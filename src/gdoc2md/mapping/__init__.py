#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Range mapping between slice clip spacer text and the HTML tree."""

from gdoc2md.mapping.enrich import apply_slice_clip
from gdoc2md.mapping.mapper import RangeVisit, replace_ranges_in_tree, visit_ranges_in_tree
from gdoc2md.mapping.ranges import (
    CodeBlockInfo,
    DocRange,
    HeadingInfo,
    Suggestion,
    get_bookmarks,
    get_headings,
    ranges_for_code_snippets,
    ranges_for_suggestions,
)

__all__ = [
    "CodeBlockInfo",
    "DocRange",
    "HeadingInfo",
    "RangeVisit",
    "Suggestion",
    "apply_slice_clip",
    "get_bookmarks",
    "get_headings",
    "ranges_for_code_snippets",
    "ranges_for_suggestions",
    "replace_ranges_in_tree",
    "visit_ranges_in_tree",
]
