#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Heuristic normalization of clipboard HTML trees."""

from gdoc2md.normalize.alignment import AlignmentPass
from gdoc2md.normalize.base import NormalizeContext, TreePass
from gdoc2md.normalize.cleanup import CleanupPass
from gdoc2md.normalize.code_blocks import CodeBlockPass
from gdoc2md.normalize.lists import ChecklistPass, NestedListPass
from gdoc2md.normalize.pipeline import HtmlNormalizer, default_passes
from gdoc2md.normalize.styles import InlineStylePass
from gdoc2md.normalize.suggestions import SuggestionPass
from gdoc2md.normalize.tables import TablePass
from gdoc2md.normalize.whitespace import WhitespacePass

__all__ = [
    "AlignmentPass",
    "ChecklistPass",
    "CleanupPass",
    "CodeBlockPass",
    "HtmlNormalizer",
    "InlineStylePass",
    "NestedListPass",
    "NormalizeContext",
    "SuggestionPass",
    "TablePass",
    "TreePass",
    "WhitespacePass",
    "default_passes",
]
