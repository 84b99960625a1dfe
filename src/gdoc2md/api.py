#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/api.py
"""Public conversion API.

A conversion runs four stages: the clipboard HTML is parsed into a generic
tree, the optional slice clip metadata enriches that tree, the normalizer
rewrites it into a clean semantic shape, and the transformer and renderer
turn it into Markdown text.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Optional

from gdoc2md.ast.nodes import Document
from gdoc2md.exceptions import ValidationError
from gdoc2md.mapping.enrich import apply_slice_clip
from gdoc2md.normalize.pipeline import HtmlNormalizer
from gdoc2md.options.conversion import ConversionOptions
from gdoc2md.options.markdown import MarkdownRendererOptions
from gdoc2md.parsers.html import parse_html
from gdoc2md.parsers.slice_clip import RawSliceClip, parse_slice_clip
from gdoc2md.renderers.markdown import MarkdownRenderer
from gdoc2md.transformer import HtmlTreeToAst
from gdoc2md.tree.nodes import Root
from gdoc2md.tree.serialize import to_html

logger = logging.getLogger(__name__)

__all__ = [
    "combine_google_doc_formats",
    "normalize_tree",
    "parse_html",
    "parse_slice_clip",
    "to_ast",
    "to_markdown",
]


def _split_kwargs(kwargs: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split keyword options into conversion and renderer options by field name.

    Raises
    ------
    ValidationError
        If a keyword names a field of neither options class

    """
    conversion_fields = {f.name for f in fields(ConversionOptions)}
    renderer_fields = {f.name for f in fields(MarkdownRendererOptions)}

    conversion_kwargs: dict[str, Any] = {}
    renderer_kwargs: dict[str, Any] = {}
    for key, value in kwargs.items():
        if key in conversion_fields:
            conversion_kwargs[key] = value
        elif key in renderer_fields:
            renderer_kwargs[key] = value
        else:
            raise ValidationError(f"Unknown conversion option: {key}", parameter_name=key, parameter_value=value)
    return conversion_kwargs, renderer_kwargs


def _build_tree(html: str, metadata: Optional[RawSliceClip]) -> Root:
    if not isinstance(html, str):
        raise ValidationError(
            f"html must be a string, got {type(html).__name__}", parameter_name="html", parameter_value=html
        )
    tree = parse_html(html)
    if metadata is not None:
        clip = parse_slice_clip(metadata)
        if not apply_slice_clip(tree, clip):
            logger.warning("Slice clip metadata could only be partially applied")
    return tree


def normalize_tree(root: Root, options: Optional[ConversionOptions] = None) -> Root:
    """Run the default normalization passes against ``root`` in place.

    Parameters
    ----------
    root : Root
        Tree from :func:`parse_html`, optionally enriched with slice clip metadata
    options : ConversionOptions, optional
        Conversion options; the suggestion mode is the one that matters here

    Returns
    -------
    Root
        The same tree, normalized

    """
    return HtmlNormalizer().normalize(root, options)


def to_ast(
    html: str, metadata: Optional[RawSliceClip] = None, *, options: Optional[ConversionOptions] = None
) -> Document:
    """Convert clipboard HTML to a Markdown AST without rendering it.

    Parameters
    ----------
    html : str
        The ``text/html`` clipboard payload
    metadata : str, bytes, mapping or SliceClip, optional
        The slice clip that accompanies the HTML
    options : ConversionOptions, optional
        Conversion options

    Returns
    -------
    Document
        AST document ready for a renderer

    """
    options = options or ConversionOptions()
    tree = normalize_tree(_build_tree(html, metadata), options)
    return HtmlTreeToAst(options).convert(tree)


def to_markdown(
    html: str,
    metadata: Optional[RawSliceClip] = None,
    *,
    options: Optional[ConversionOptions] = None,
    renderer_options: Optional[MarkdownRendererOptions] = None,
    **kwargs: Any,
) -> str:
    """Convert a clipboard document to Markdown.

    Parameters
    ----------
    html : str
        The ``text/html`` clipboard payload
    metadata : str, bytes, mapping or SliceClip, optional
        The slice clip that accompanies the HTML, as JSON text or a decoded
        object. A ``{"data": ...}`` envelope is removed transparently. Without
        it, suggestions, bookmarks, heading ids and code languages are not
        recovered, but all structural cleanup still happens.
    options : ConversionOptions, optional
        Conversion options
    renderer_options : MarkdownRendererOptions, optional
        Markdown formatting options. ``code_block_style`` always follows
        ``options.code_blocks`` unless overridden through ``kwargs``.
    kwargs : Any
        Individual option overrides. Each keyword is routed to
        ``ConversionOptions`` or ``MarkdownRendererOptions`` by field name.

    Returns
    -------
    str
        Markdown text. Non-empty output ends with a single newline.

    Raises
    ------
    ValidationError
        If ``html`` is not a string or an option is unknown or invalid
    MetadataParseError
        If the metadata is not valid JSON
    MetadataValidationError
        If the metadata lacks a required field

    Examples
    --------
    Basic conversion:
        >>> to_markdown("<p>Hello <b>world</b></p>")
        'Hello **world**\\n'

    With metadata and options:
        >>> markdown = to_markdown(html, slice_clip_json, suggestions="accept", code_blocks="fenced")

    """
    conversion_kwargs, renderer_kwargs = _split_kwargs(kwargs)
    options = options or ConversionOptions()
    if conversion_kwargs:
        options = options.create_updated(**conversion_kwargs)

    renderer_options = (renderer_options or MarkdownRendererOptions()).create_updated(
        **{"code_block_style": options.code_blocks, **renderer_kwargs}
    )

    document = to_ast(html, metadata, options=options)
    return MarkdownRenderer(renderer_options).render_to_string(document)


def combine_google_doc_formats(html: str, metadata: RawSliceClip) -> str:
    """Apply slice clip metadata to clipboard HTML and return the enriched HTML.

    The clipboard envelope is removed and the metadata ranges are marked up
    (``ins``/``del`` for suggestions, ids on headings, bookmark anchors and
    code snippet ``code`` elements). No normalization pass runs.

    Examples
    --------
        >>> combine_google_doc_formats("<p>Hello</p>", slice_clip_json)
        '<p>Hello</p>'

    """
    return to_html(_build_tree(html, metadata))
