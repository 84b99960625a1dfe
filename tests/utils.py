"""Test utilities for the gdoc2md test suite.

Helpers for building slice clip documents and small HTML trees without
going through the parser.
"""

import json

from gdoc2md.constants import CODE_SNIPPET_END, CODE_SNIPPET_START

# Markers that bracket a code snippet in the spacer text
SNIPPET_START = CODE_SNIPPET_START
SNIPPET_END = CODE_SNIPPET_END


def position_table(length, entries):
    """Return a position-indexed table of ``length`` nulls with ``entries`` filled in."""
    table = [None] * length
    for index, value in entries.items():
        table[index] = value
    return table


def make_slice_clip(
    spacers,
    insertions=None,
    deletions=None,
    paragraph_styles=None,
    code_styles=None,
    bookmarks=None,
):
    """Build a decoded slice clip document.

    Each keyword maps an offset to the table entry at that offset.
    """
    length = len(spacers) + 1
    style_slices = []
    if paragraph_styles is not None:
        style_slices.append({"stsl_type": "paragraph", "stsl_styles": position_table(length, paragraph_styles)})
    if code_styles is not None:
        style_slices.append({"stsl_type": "code_snippet", "stsl_styles": position_table(length, code_styles)})

    entity_map = {}
    if bookmarks is not None:
        entity_map["bookmark"] = position_table(length, bookmarks)

    resolved = {
        "dsl_spacers": spacers,
        "dsl_styleslices": style_slices,
        "dsl_entitypositionmap": entity_map,
    }
    if insertions is not None:
        resolved["dsl_suggestedinsertions"] = {"sgsl_sugg": position_table(length, insertions)}
    if deletions is not None:
        resolved["dsl_suggesteddeletions"] = {"sgsl_sugg": position_table(length, deletions)}
    return {"resolved": resolved}


def slice_clip_json(*args, **kwargs):
    """Return :func:`make_slice_clip` output as JSON text wrapped in a ``data`` envelope."""
    return json.dumps({"data": json.dumps(make_slice_clip(*args, **kwargs))})
