#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers that turn the Markdown AST into text."""

from gdoc2md.renderers.base import BaseRenderer, InlineContentMixin
from gdoc2md.renderers.markdown import MarkdownRenderer

__all__ = ["BaseRenderer", "InlineContentMixin", "MarkdownRenderer"]
