#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown rendering."""
# src/gdoc2md/options/markdown.py

from __future__ import annotations

from dataclasses import dataclass, field

from gdoc2md.constants import (
    DEFAULT_BLANK_LINES_BEFORE_HEADING,
    DEFAULT_BULLET_SYMBOL,
    DEFAULT_CODE_BLOCKS,
    DEFAULT_CODE_FENCE_CHAR,
    DEFAULT_CODE_FENCE_MIN,
    DEFAULT_EMPHASIS_SYMBOL,
    DEFAULT_ESCAPE_SPECIAL,
    DEFAULT_PAD_TABLE_CELLS,
    DEFAULT_STRONG_SYMBOL,
    BulletSymbol,
    CodeBlockStyle,
    CodeFenceChar,
    EmphasisSymbol,
    StrongSymbol,
)
from gdoc2md.exceptions import ValidationError
from gdoc2md.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class MarkdownRendererOptions(CloneFrozenMixin):
    r"""Markdown rendering options for converting the AST to Markdown text.

    Parameters
    ----------
    emphasis_symbol : {"\*", "\_"}, default "\*"
        Symbol to use for emphasis/italic formatting.
    strong_symbol : {"\*\*", "\_\_"}, default "\*\*"
        Symbol to use for strong/bold formatting.
    bullet_symbol : {"-", "\*", "+"}, default "-"
        Marker for unordered list items.
    code_block_style : {"indented", "fenced"}, default "indented"
        Whether code blocks are indented by four spaces or fenced.
    code_fence_char : {"\`", "~"}, default "\`"
        Character used for code fences.
    code_fence_min : int, default 3
        Minimum length of a code fence.
    pad_table_cells : bool, default True
        Pad table cells to the width of the widest cell in their column.
    escape_special : bool, default True
        Escape characters that would otherwise be read as Markdown syntax.
    blank_lines_before_heading : int, default 2
        Blank lines written before a heading that follows a non-heading block.

    """

    emphasis_symbol: EmphasisSymbol = field(
        default=DEFAULT_EMPHASIS_SYMBOL,
        metadata={"help": "Symbol to use for emphasis/italic formatting", "choices": ["*", "_"], "importance": "core"},
    )
    strong_symbol: StrongSymbol = field(
        default=DEFAULT_STRONG_SYMBOL,
        metadata={"help": "Symbol to use for strong/bold formatting", "choices": ["**", "__"], "importance": "core"},
    )
    bullet_symbol: BulletSymbol = field(
        default=DEFAULT_BULLET_SYMBOL,
        metadata={"help": "Marker for unordered list items", "choices": ["-", "*", "+"], "importance": "advanced"},
    )
    code_block_style: CodeBlockStyle = field(
        default=DEFAULT_CODE_BLOCKS,
        metadata={
            "help": "Write code blocks indented or fenced",
            "choices": ["indented", "fenced"],
            "importance": "core",
        },
    )
    code_fence_char: CodeFenceChar = field(
        default=DEFAULT_CODE_FENCE_CHAR,
        metadata={"help": "Character to use for code fences", "choices": ["`", "~"], "importance": "advanced"},
    )
    code_fence_min: int = field(
        default=DEFAULT_CODE_FENCE_MIN,
        metadata={"help": "Minimum length for code fences", "type": int, "importance": "advanced"},
    )
    pad_table_cells: bool = field(
        default=DEFAULT_PAD_TABLE_CELLS,
        metadata={"help": "Pad table cells to the column width", "importance": "advanced"},
    )
    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={"help": "Escape special Markdown characters in text content", "importance": "core"},
    )
    blank_lines_before_heading: int = field(
        default=DEFAULT_BLANK_LINES_BEFORE_HEADING,
        metadata={
            "help": "Blank lines before a heading that follows a non-heading block",
            "type": int,
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValidationError
            If any field holds a value outside its valid range.

        """
        self._validate_choice("emphasis_symbol", ("*", "_"))
        self._validate_choice("strong_symbol", ("**", "__"))
        self._validate_choice("bullet_symbol", ("-", "*", "+"))
        self._validate_choice("code_block_style", ("indented", "fenced"))
        self._validate_choice("code_fence_char", ("`", "~"))
        if self.code_fence_min < 3:
            raise ValidationError(
                f"code_fence_min must be at least 3, got {self.code_fence_min}",
                parameter_name="code_fence_min",
                parameter_value=self.code_fence_min,
            )
        if self.blank_lines_before_heading < 1:
            raise ValidationError(
                f"blank_lines_before_heading must be at least 1, got {self.blank_lines_before_heading}",
                parameter_name="blank_lines_before_heading",
                parameter_value=self.blank_lines_before_heading,
            )
