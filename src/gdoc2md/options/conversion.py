#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the clipboard HTML conversion pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

from gdoc2md.constants import (
    CODE_BLOCK_STYLES,
    DEFAULT_CODE_BLOCKS,
    DEFAULT_HEADING_IDS,
    DEFAULT_SUGGESTIONS,
    HEADING_ID_MODES,
    SUGGESTION_MODES,
    CodeBlockStyle,
    HeadingIdMode,
    SuggestionMode,
)
from gdoc2md.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class ConversionOptions(CloneFrozenMixin):
    """Options controlling how a clipboard document is converted.

    Parameters
    ----------
    code_blocks : {"indented", "fenced"}, default "indented"
        How code blocks are written in the Markdown output.
    heading_ids : {"hidden", "html", "extended"}, default "hidden"
        How heading ids are exposed. ``hidden`` drops them and rewrites links
        to headings into GitHub-style slugs; ``html`` appends an
        ``<a id="..."></a>`` anchor; ``extended`` appends ``{#id}``.
    suggestions : {"show", "hide", "accept", "reject"}, default "reject"
        What to do with suggested edits found in the metadata.

    Examples
    --------
        >>> options = ConversionOptions(code_blocks="fenced")
        >>> options.create_updated(suggestions="accept").suggestions
        'accept'

    """

    code_blocks: CodeBlockStyle = field(
        default=DEFAULT_CODE_BLOCKS,
        metadata={
            "help": "Write code blocks indented by four spaces or fenced with backticks",
            "choices": list(CODE_BLOCK_STYLES),
            "importance": "core",
        },
    )
    heading_ids: HeadingIdMode = field(
        default=DEFAULT_HEADING_IDS,
        metadata={
            "help": "How to expose heading ids: hidden (use slugs), html anchors, or extended {#id} syntax",
            "choices": list(HEADING_ID_MODES),
            "importance": "core",
        },
    )
    suggestions: SuggestionMode = field(
        default=DEFAULT_SUGGESTIONS,
        metadata={
            "help": "How to handle suggested edits: show, hide, accept, or reject",
            "choices": list(SUGGESTION_MODES),
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValidationError
            If any field holds a value outside its allowed choices.

        """
        self._validate_choice("code_blocks", CODE_BLOCK_STYLES)
        self._validate_choice("heading_ids", HEADING_ID_MODES)
        self._validate_choice("suggestions", SUGGESTION_MODES)
