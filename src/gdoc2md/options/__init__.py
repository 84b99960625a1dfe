#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for gdoc2md.

Options are frozen dataclasses. Use ``create_updated`` to derive a modified
copy instead of mutating an instance.
"""

from __future__ import annotations

from gdoc2md.options.base import CloneFrozenMixin
from gdoc2md.options.conversion import ConversionOptions
from gdoc2md.options.markdown import MarkdownRendererOptions

__all__ = [
    "CloneFrozenMixin",
    "ConversionOptions",
    "MarkdownRendererOptions",
]
