#  Copyright (c) 2025 Tom Villani, Ph.D.
"""gdoc2md - Convert Google Docs clipboard content to Markdown.

When text is copied out of a Google Docs document, the clipboard carries two
payloads: ``text/html`` with styling expressed mostly as inline CSS, and an
optional "slice clip" JSON document with information the HTML leaves out
(suggested edits, bookmarks, heading ids, code block languages). gdoc2md
combines both and produces clean, GitHub-flavored Markdown.

Examples
--------
Basic conversion:

    >>> from gdoc2md import to_markdown
    >>> to_markdown('<p><span style="font-weight:700">Bold</span> text</p>')
    '**Bold** text\\n'

With slice clip metadata and options:

    >>> markdown = to_markdown(html, slice_clip, suggestions="accept", heading_ids="html")

Inspecting the enriched HTML:

    >>> from gdoc2md import combine_google_doc_formats
    >>> print(combine_google_doc_formats(html, slice_clip))

"""

from __future__ import annotations

from gdoc2md.api import (
    combine_google_doc_formats,
    normalize_tree,
    parse_html,
    parse_slice_clip,
    to_ast,
    to_markdown,
)
from gdoc2md.exceptions import (
    Gdoc2MdError,
    MetadataError,
    MetadataParseError,
    MetadataValidationError,
    RangeMappingError,
    TransformError,
    ValidationError,
)
from gdoc2md.options import ConversionOptions, MarkdownRendererOptions
from gdoc2md.parsers.slice_clip import SliceClip

__version__ = "1.0.0"

__all__ = [
    "ConversionOptions",
    "Gdoc2MdError",
    "MarkdownRendererOptions",
    "MetadataError",
    "MetadataParseError",
    "MetadataValidationError",
    "RangeMappingError",
    "SliceClip",
    "TransformError",
    "ValidationError",
    "__version__",
    "combine_google_doc_formats",
    "normalize_tree",
    "parse_html",
    "parse_slice_clip",
    "to_ast",
    "to_markdown",
]
