#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/renderers/markdown.py
"""Markdown rendering from AST.

This module provides the MarkdownRenderer class which converts AST nodes
to Markdown text. The renderer uses the visitor pattern to traverse the
AST; each ``visit_*`` method appends text to an output buffer.

Blocks are joined with one blank line, except that a heading following a
non-heading block gets ``blank_lines_before_heading`` blank lines (two by
default). Blank lines are never collapsed, and the output ends with a
single newline.

"""

from __future__ import annotations

import re

from gdoc2md.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from gdoc2md.ast.visitors import NodeVisitor
from gdoc2md.constants import DEFAULT_INDENTED_CODE_WIDTH, MIN_TABLE_COLUMN_WIDTH
from gdoc2md.options.markdown import MarkdownRendererOptions
from gdoc2md.renderers.base import BaseRenderer, InlineContentMixin

_ORDERED_MARKER_PATTERN = re.compile(r"^(\d+)([.)])(?=\s|$)")
_RULE_LINE_PATTERN = re.compile(r"(?:-[ \t]*)+$|=+[ \t]*$")
_TAG_START_PATTERN = re.compile(r"[A-Za-z/!?]")
_ENTITY_PATTERN = re.compile(r"#?\w+;")
_URL_NEEDS_BRACKETS = re.compile(r"[\s()<>]")

# Separates blocks that would otherwise merge into the preceding list.
_BLOCK_SEPARATOR_COMMENT = "<!---->"


class MarkdownRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to Markdown text.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Markdown formatting options

    Examples
    --------
        >>> from gdoc2md.ast import Document, Heading, Text
        >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")])])
        >>> MarkdownRenderer().render_to_string(doc)
        '# Title\\n'

    """

    def __init__(self, options: MarkdownRendererOptions | None = None):
        if options is not None and not isinstance(options, MarkdownRendererOptions):
            raise TypeError(f"Expected MarkdownRendererOptions, got {type(options).__name__}")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options
        self._output: list[str] = []
        self._in_table: bool = False
        self._line_start: bool = True

    def render_to_string(self, document: Document) -> str:
        """Render a document AST to a Markdown string.

        Parameters
        ----------
        document : Document
            The document node to render

        Returns
        -------
        str
            Markdown text ending in a newline, or an empty string for an
            empty document

        """
        self._output = []
        self._in_table = False
        self._line_start = True
        document.accept(self)
        result = "".join(self._output)
        self._output.clear()
        return result + "\n" if result else ""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _separator(self, previous: Node, following: Node, in_list_item: bool = False) -> str:
        """Return the text placed between two sibling blocks."""
        if isinstance(following, Heading) and not isinstance(previous, Heading):
            return "\n" * (self.options.blank_lines_before_heading + 1)
        if in_list_item and isinstance(following, List):
            return "\n"
        if isinstance(previous, List) and (
            (isinstance(following, List) and following.ordered == previous.ordered)
            or (isinstance(following, CodeBlock) and self.options.code_block_style == "indented")
        ):
            return f"\n\n{_BLOCK_SEPARATOR_COMMENT}\n\n"
        return "\n\n"

    def _render_blocks(self, children: list[Node], in_list_item: bool = False) -> str:
        """Render block nodes and join them with the block separators."""
        saved_output = self._output
        parts: list[str] = []
        previous: Node | None = None
        for child in children:
            self._output = []
            child.accept(self)
            rendered = "".join(self._output)
            if previous is not None:
                parts.append(self._separator(previous, child, in_list_item))
            parts.append(rendered)
            previous = child
        self._output = saved_output
        return "".join(parts)

    @staticmethod
    def _indent(text: str, prefix: str) -> str:
        """Prefix every non-empty line of ``text`` except the first."""
        lines = text.split("\n")
        return "\n".join([lines[0]] + [prefix + line if line else line for line in lines[1:]])

    def _escape_markdown(self, text: str, at_line_start: bool = True) -> str:
        """Escape characters that would be read as Markdown or HTML syntax.

        Backslash, backtick, asterisk, braces and brackets are always escaped.
        Underscores are escaped except inside words (``snake_case``). ``<``
        is escaped where it could open a tag, and ``&`` where it could start
        an entity. When the text starts a line, ``#``, ``>``, list markers
        and rule or setext underline runs are escaped as well, since they
        could start a block there.
        """
        if not self.options.escape_special:
            return text

        always_escape = "\\`*{}[]~"
        starts_rule = at_line_start and _RULE_LINE_PATTERN.match(text) is not None
        escaped_chars = []
        for i, char in enumerate(text):
            if char in always_escape:
                escaped_chars.append("\\")
                escaped_chars.append(char)
            elif char == "_":
                prev_alnum = i > 0 and text[i - 1].isalnum()
                next_alnum = i < len(text) - 1 and text[i + 1].isalnum()
                if not (prev_alnum and next_alnum):
                    escaped_chars.append("\\")
                escaped_chars.append(char)
            elif char == "<" and _TAG_START_PATTERN.match(text, i + 1):
                escaped_chars.append("\\<")
            elif char == "&" and _ENTITY_PATTERN.match(text, i + 1):
                escaped_chars.append("\\&")
            elif i == 0 and at_line_start and (
                char in "#>" or (char in "-+" and text[1:2] in ("", " ")) or starts_rule
            ):
                escaped_chars.append("\\")
                escaped_chars.append(char)
            else:
                escaped_chars.append(char)

        escaped = "".join(escaped_chars)
        if at_line_start:
            escaped = _ORDERED_MARKER_PATTERN.sub(r"\1\\\2", escaped)
        return escaped

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render a Document node."""
        self._output.append(self._render_blocks(node.children))

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node as an ATX heading."""
        self._line_start = False
        content = self._render_inline_content(node.content)
        prefix = "#" * node.level
        self._output.append(f"{prefix} {content}" if content else prefix)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        self._line_start = True
        self._output.append(self._render_inline_content(node.content))

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node, indented or fenced per ``code_block_style``."""
        if self.options.code_block_style == "indented":
            prefix = " " * DEFAULT_INDENTED_CODE_WIDTH
            self._output.append("\n".join(prefix + line if line.strip() else "" for line in node.content.split("\n")))
            return

        fence_char = self.options.code_fence_char
        fence_length = self.options.code_fence_min
        # The fence must be longer than any run of fence characters in the code
        runs = re.findall(f"{re.escape(fence_char)}+", node.content)
        if runs:
            fence_length = max(fence_length, max(len(run) for run in runs) + 1)

        fence = fence_char * fence_length
        lang = node.language or ""
        self._output.append(f"{fence}{lang}\n")
        self._output.append(node.content)
        if node.content and not node.content.endswith("\n"):
            self._output.append("\n")
        self._output.append(fence)

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node."""
        quoted = self._render_blocks(node.children)
        self._output.append("\n".join(f"> {line}" if line else ">" for line in quoted.split("\n")))

    def visit_list(self, node: List) -> None:
        """Render a List node as a tight list."""
        rendered_items: list[str] = []
        for i, item in enumerate(node.items):
            marker = f"{node.start + i}. " if node.ordered else f"{self.options.bullet_symbol} "
            self._output, saved_output = [], self._output
            self._render_list_item(item, marker)
            rendered_items.append("".join(self._output))
            self._output = saved_output
        self._output.append("\n".join(rendered_items))

    def _render_list_item(self, node: ListItem, marker: str) -> None:
        if node.task_status:
            checkbox = "[x]" if node.task_status == "checked" else "[ ]"
            content = self._render_blocks(node.children, in_list_item=True)
            content = f"{checkbox} {content}" if content else checkbox
        else:
            content = self._render_blocks(node.children, in_list_item=True)
        if not content:
            self._output.append(marker.rstrip())
            return
        # Continuation lines line up with the text after the marker
        self._output.append(marker + self._indent(content, " " * len(marker)))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node outside of a list, using a bullet marker."""
        self._render_list_item(node, f"{self.options.bullet_symbol} ")

    def _render_cells_to_strings(self, rows: list[TableRow], num_cols: int) -> list[list[str]]:
        self._in_table = True
        rendered_rows: list[list[str]] = []
        for row in rows:
            cells = [self._render_cell(cell) for cell in row.cells[:num_cols]]
            cells.extend([""] * (num_cols - len(cells)))
            rendered_rows.append(cells)
        self._in_table = False
        return rendered_rows

    def _render_cell(self, cell: TableCell) -> str:
        self._line_start = False
        return self._render_inline_content(cell.content).replace("|", "\\|")

    def _calculate_column_widths(self, rendered_rows: list[list[str]], num_cols: int) -> list[int]:
        col_widths: list[int] = [MIN_TABLE_COLUMN_WIDTH] * num_cols
        for row_cells in rendered_rows:
            for i, cell_content in enumerate(row_cells):
                col_widths[i] = max(col_widths[i], len(cell_content))
        return col_widths

    @staticmethod
    def _generate_alignment_row(node: Table, col_widths: list[int]) -> str:
        """Generate the delimiter row, each cell exactly as wide as its column."""
        delimiters = []
        for j, width in enumerate(col_widths):
            alignment = node.alignments[j] if j < len(node.alignments) else None
            if alignment == "center":
                delimiters.append(":" + "-" * (width - 2) + ":")
            elif alignment == "right":
                delimiters.append("-" * (width - 1) + ":")
            elif alignment == "left":
                delimiters.append(":" + "-" * (width - 1))
            else:
                delimiters.append("-" * width)
        return "| " + " | ".join(delimiters) + " |"

    def visit_table(self, node: Table) -> None:
        """Render a Table node as a GFM pipe table."""
        rows_to_render = ([node.header] if node.header else []) + node.rows
        num_cols = node.column_count
        if not rows_to_render or num_cols == 0:
            return

        rendered_rows = self._render_cells_to_strings(rows_to_render, num_cols)
        if self.options.pad_table_cells:
            col_widths = self._calculate_column_widths(rendered_rows, num_cols)
        else:
            col_widths = [MIN_TABLE_COLUMN_WIDTH] * num_cols

        lines: list[str] = []
        for i, row_cells in enumerate(rendered_rows):
            if self.options.pad_table_cells:
                row_cells = [cell.ljust(col_widths[j]) for j, cell in enumerate(row_cells)]
            lines.append("| " + " | ".join(row_cells) + " |")
            if i == 0:
                lines.append(self._generate_alignment_row(node, col_widths))
        self._output.append("\n".join(lines))

    def visit_table_row(self, node: TableRow) -> None:
        """Table rows are rendered by :meth:`visit_table`."""
        pass

    def visit_table_cell(self, node: TableCell) -> None:
        """Table cells are rendered by :meth:`visit_table`."""
        pass

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._output.append("---")

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render an HTMLBlock node verbatim."""
        self._output.append(node.content)

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node."""
        self._output.append(self._escape_markdown(node.content, self._line_start))
        if node.content:
            self._line_start = False

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._line_start = False
        content = self._render_inline_content(node.content)
        symbol = self.options.emphasis_symbol
        self._output.append(f"{symbol}{content}{symbol}")

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._line_start = False
        content = self._render_inline_content(node.content)
        symbol = self.options.strong_symbol
        self._output.append(f"{symbol}{content}{symbol}")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._line_start = False
        content = self._render_inline_content(node.content)
        self._output.append(f"~~{content}~~")

    def visit_code(self, node: Code) -> None:
        """Render a Code node with enough backticks to contain its content."""
        runs = re.findall("`+", node.content)
        backticks = "`" * (max((len(run) for run in runs), default=0) + 1)
        content = node.content
        if content.startswith("`") or content.endswith("`"):
            content = f" {content} "
        self._output.append(f"{backticks}{content}{backticks}")
        self._line_start = False

    def visit_link(self, node: Link) -> None:
        """Render a Link node as an inline link."""
        self._line_start = False
        content = self._render_inline_content(node.content)
        url = node.url
        if _URL_NEEDS_BRACKETS.search(url):
            url = "<" + url.replace("<", "%3C").replace(">", "%3E") + ">"
        if node.title:
            title = node.title.replace('"', '\\"')
            self._output.append(f'[{content}]({url} "{title}")')
        else:
            self._output.append(f"[{content}]({url})")

    def visit_image(self, node: Image) -> None:
        """Render an Image node."""
        alt = node.alt_text.replace("[", "\\[").replace("]", "\\]")
        url = node.url
        if _URL_NEEDS_BRACKETS.search(url):
            url = "<" + url.replace("<", "%3C").replace(">", "%3E") + ">"
        if node.title:
            title = node.title.replace('"', '\\"')
            self._output.append(f'![{alt}]({url} "{title}")')
        else:
            self._output.append(f"![{alt}]({url})")
        self._line_start = False

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a hard LineBreak node; inside tables, where newlines are not allowed, as ``<br>``."""
        self._output.append("<br>" if self._in_table else "  \n")
        self._line_start = not self._in_table

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render an HTMLInline node verbatim."""
        self._output.append(node.content)
        self._line_start = False
