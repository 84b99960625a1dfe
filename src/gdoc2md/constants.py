#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the gdoc2md library.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Conversion Defaults - Default option values
3. Markdown Formatting - Renderer output settings
4. HTML Element Sets - Element classification used by the normalizer
5. Slice Clip - Markers and keys of the clipboard metadata format
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

CodeBlockStyle = Literal["indented", "fenced"]
HeadingIdMode = Literal["hidden", "html", "extended"]
SuggestionMode = Literal["show", "hide", "accept", "reject"]
EmphasisSymbol = Literal["*", "_"]
StrongSymbol = Literal["**", "__"]
BulletSymbol = Literal["-", "*", "+"]
CodeFenceChar = Literal["`", "~"]
Alignment = Literal["left", "center", "right"]
RangeKind = Literal["suggestion-insertion", "suggestion-deletion", "bookmark", "code-snippet", "heading"]
SuggestionType = Literal["insertion", "deletion"]

# =============================================================================
# Conversion Defaults
# =============================================================================

DEFAULT_CODE_BLOCKS: CodeBlockStyle = "indented"
DEFAULT_HEADING_IDS: HeadingIdMode = "hidden"
DEFAULT_SUGGESTIONS: SuggestionMode = "reject"

CODE_BLOCK_STYLES: tuple[str, ...] = ("indented", "fenced")
HEADING_ID_MODES: tuple[str, ...] = ("hidden", "html", "extended")
SUGGESTION_MODES: tuple[str, ...] = ("show", "hide", "accept", "reject")

# =============================================================================
# Markdown Formatting
# =============================================================================

DEFAULT_EMPHASIS_SYMBOL: EmphasisSymbol = "*"
DEFAULT_STRONG_SYMBOL: StrongSymbol = "**"
DEFAULT_BULLET_SYMBOL: BulletSymbol = "-"
DEFAULT_CODE_FENCE_CHAR: CodeFenceChar = "`"
DEFAULT_CODE_FENCE_MIN = 3
DEFAULT_INDENTED_CODE_WIDTH = 4
DEFAULT_BLANK_LINES_BEFORE_HEADING = 2
DEFAULT_PAD_TABLE_CELLS = True
DEFAULT_ESCAPE_SPECIAL = True
MIN_TABLE_COLUMN_WIDTH = 3

# =============================================================================
# HTML Element Sets
# =============================================================================

BLOCK_ELEMENTS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "body",
        "caption",
        "center",
        "col",
        "colgroup",
        "dd",
        "details",
        "dialog",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "html",
        "li",
        "main",
        "menu",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "summary",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "tr",
        "ul",
    }
)

HEADING_ELEMENTS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

LIST_ELEMENTS = frozenset({"ul", "ol"})

TABLE_CELL_ELEMENTS = frozenset({"td", "th"})

TABLE_STRUCTURE_ELEMENTS = frozenset({"table", "thead", "tbody", "tfoot", "tr", "td", "th", "colgroup", "col"})

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

# Elements whose content is external media rather than text.
REPLACED_ELEMENTS = frozenset(
    {"img", "video", "iframe", "embed", "fencedframe", "audio", "canvas", "object"}
)

SPACE_SENSITIVE_ELEMENTS = frozenset({"em", "strong", "ins", "del"})

SUGGESTION_ELEMENTS = frozenset({"ins", "del"})

# Semantic inline elements produced from CSS; adjacent equal siblings merge.
MERGEABLE_INLINE_ELEMENTS = frozenset({"em", "strong", "sup", "sub", "del", "code", "ins"})

# Wrappers that carry no meaning once their styles have been converted.
FLATTENABLE_ELEMENTS = frozenset({"span", "font"})

REMOVED_ELEMENTS = frozenset({"style", "meta", "script", "link", "title", "head"})

UNWRAPPED_ELEMENTS = frozenset({"html", "body"})

KEPT_ATTRIBUTES = frozenset(
    {
        "href",
        "src",
        "alt",
        "title",
        "colspan",
        "rowspan",
        "type",
        "value",
        "name",
        "checked",
        "start",
        "align",
        "data-suggestion-id",
    }
)

# Attributes that keep an otherwise empty element alive during cleanup.
IMPORTANT_ATTRIBUTES = frozenset({"href", "src", "alt", "title", "colspan", "rowspan", "type", "value", "name", "id"})

# Table cell attributes that survive table normalization.
KEPT_CELL_ATTRIBUTES = frozenset({"colspan", "rowspan", "style", "align"})

MONOSPACE_FONTS = frozenset(
    {
        "monospace",
        "courier",
        "courier new",
        "consolas",
        "monaco",
        "menlo",
        "source code pro",
        "roboto mono",
        "ubuntu mono",
        "inconsolata",
        "fira code",
        "fira mono",
        "jetbrains mono",
        "lucida console",
        "andale mono",
        "dejavu sans mono",
        "liberation mono",
        "space mono",
        "ibm plex mono",
        "pt mono",
        "cousine",
        "noto sans mono",
    }
)

CHECKBOX_MARKS = frozenset({chr(0x2610), chr(0x2611), chr(0x2713), chr(0x2714)})
CHECKBOX_CHECKED_MARKS = frozenset({chr(0x2611), chr(0x2713), chr(0x2714)})

# =============================================================================
# Slice Clip
# =============================================================================

CODE_SNIPPET_START = chr(0xEC03)
CODE_SNIPPET_END = chr(0xEC02)
CODE_SNIPPET_PATTERN = re.compile(f"{CODE_SNIPPET_START}([^{CODE_SNIPPET_END}]*){CODE_SNIPPET_END}")

# Whitespace plus the code snippet markers, which never appear in HTML text.
SPACER_SKIP_PATTERN = re.compile(f"[\\s{CODE_SNIPPET_END}{CODE_SNIPPET_START}]*")

# Private-use characters the editor leaves behind as fragment markers.
FRAGMENT_MARKER_PATTERN = re.compile(f"[{chr(0xE000)}-{chr(0xF8FF)}]")

CLIPBOARD_WRAPPER_ID_PREFIX = "docs-internal-guid"

# Titles use ps_hd = 100; only real heading levels count.
MAX_HEADING_LEVEL = 6

STYLE_SLICE_CODE_SNIPPET = "code_snippet"
STYLE_SLICE_PARAGRAPH = "paragraph"
