#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers for the two halves of a clipboard payload: HTML and slice clip metadata."""

from gdoc2md.parsers.html import parse_html, unwrap_clipboard_envelope
from gdoc2md.parsers.slice_clip import SliceClip, parse_slice_clip

__all__ = ["SliceClip", "parse_html", "parse_slice_clip", "unwrap_clipboard_envelope"]
