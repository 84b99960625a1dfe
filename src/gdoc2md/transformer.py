#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/transformer.py
"""Normalized HTML tree to Markdown AST conversion.

This module converts the generic HTML tree produced by the normalizer into
the Markdown AST in :mod:`gdoc2md.ast`. Elements are converted by handlers
looked up in dispatch tables: one for block-level elements and one for
inline elements. Elements without a handler are transparent, meaning their
children are converted in their place.

Markup that Markdown has no syntax for (``sup``, ``sub``, ``ins`` and anchor
targets) is kept as raw HTML islands around the converted content.

"""

from __future__ import annotations

import html
import logging
import re
from typing import Callable

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
from gdoc2md.ast.visitors import ValidationVisitor
from gdoc2md.constants import BLOCK_ELEMENTS, HEADING_ELEMENTS, LIST_ELEMENTS, TABLE_CELL_ELEMENTS
from gdoc2md.options.conversion import ConversionOptions
from gdoc2md.tree.nodes import Element, Root, text_content, walk
from gdoc2md.tree.nodes import Node as HtmlNode
from gdoc2md.tree.nodes import Text as HtmlText
from gdoc2md.utils.text import GithubSlugger

logger = logging.getLogger(__name__)

_ALIGNMENTS = ("left", "center", "right")
_LANGUAGE_CLASS_PATTERN = re.compile(r"(?:^|\s)(?:language|lang)-(\S+)")
_BOOKMARK_ISLAND_PATTERN = re.compile(r'<a id="[^"]*"></a>')


def _expect_element(node: object, tags: frozenset[str] | set[str] | tuple[str, ...], handler: str) -> Element:
    """Return ``node`` if it is an element with one of ``tags``.

    Raises
    ------
    TypeError
        If ``node`` is anything else. Handlers are only dispatched on matching
        elements, so this signals a programming error, not bad input.

    """
    if not isinstance(node, Element) or node.tag not in tags:
        found = node.tag if isinstance(node, Element) else type(node).__name__
        raise TypeError(f"{handler} expected one of {sorted(tags)}, got {found!r}")
    return node


def _merge_text(nodes: list[Node]) -> list[Node]:
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
            merged[-1] = Text(content=merged[-1].content + node.content)
        else:
            merged.append(node)
    return merged


def _is_blank(nodes: list[Node]) -> bool:
    return all(
        (isinstance(node, Text) and not node.content.strip()) or isinstance(node, LineBreak) for node in nodes
    )


def finalize_inline(nodes: list[Node], strip_end: bool = False) -> list[Node]:
    """Tidy a run of inline nodes before it becomes block content.

    Adjacent text nodes are merged, leading whitespace and line breaks are
    removed, and trailing line breaks are dropped. With ``strip_end`` trailing
    whitespace is removed as well.
    """
    result = _merge_text(nodes)
    while result and isinstance(result[0], LineBreak):
        result.pop(0)
    if result and isinstance(result[0], Text):
        stripped = result[0].content.lstrip()
        if stripped:
            result[0] = Text(content=stripped)
        else:
            return finalize_inline(result[1:], strip_end)
    while result and isinstance(result[-1], LineBreak):
        result.pop()
    if strip_end and result and isinstance(result[-1], Text):
        stripped = result[-1].content.rstrip()
        if stripped:
            result[-1] = Text(content=stripped)
        else:
            return finalize_inline(result[:-1], strip_end)
    return result


def _paragraph_or_anchors(content: list[Node]) -> Node:
    """Wrap block content as a paragraph, or as an HTML block when it holds only bookmark anchors."""
    visible = [node for node in content if not (isinstance(node, Text) and not node.content.strip())]
    if visible and all(
        isinstance(node, HTMLInline) and _BOOKMARK_ISLAND_PATTERN.fullmatch(node.content) for node in visible
    ):
        return HTMLBlock(content="".join(node.content for node in visible))
    return Paragraph(content=content)


def _lay_out_rows(rows: list[TableRow]) -> None:
    """Place cells on the column grid implied by their spans, in place.

    A cell spanning ``n`` columns is followed by ``n - 1`` empty cells, and a
    cell spanning ``n`` rows leaves an empty cell in the same columns of the
    next ``n - 1`` rows.
    """
    carried: dict[int, int] = {}
    for row in rows:
        laid_out: list[TableCell] = []

        def fill_carried() -> None:
            while carried.get(len(laid_out), 0) > 0:
                carried[len(laid_out)] -= 1
                laid_out.append(TableCell())

        for cell in row.cells:
            fill_carried()
            start = len(laid_out)
            laid_out.append(cell)
            laid_out.extend(TableCell() for _ in range(cell.colspan - 1))
            if cell.rowspan > 1:
                for column in range(start, len(laid_out)):
                    carried[column] = cell.rowspan - 1
        fill_carried()
        for column in sorted(carried):
            if column >= len(laid_out) and carried[column] > 0:
                laid_out.extend(TableCell() for _ in range(column + 1 - len(laid_out)))
                carried[column] -= 1
        row.cells = laid_out


def _code_language(element: Element) -> str | None:
    for candidate in (element, *[c for c in element.children if isinstance(c, Element) and c.tag == "code"]):
        match = _LANGUAGE_CLASS_PATTERN.search(candidate.get("class") or "")
        if match:
            return match.group(1)
    return None


def _code_text(node: HtmlNode) -> str:
    if isinstance(node, HtmlText):
        return node.value
    if isinstance(node, Element) and node.tag == "br":
        return "\n"
    return "".join(_code_text(child) for child in node.children)


def _int_attribute(element: Element, name: str, default: int) -> int:
    value = element.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={value!r} on <{element.tag}>")
        return default


class HtmlTreeToAst:
    """Convert a normalized HTML tree into a Markdown :class:`Document`.

    Parameters
    ----------
    options : ConversionOptions or None, default = None
        Conversion options. ``heading_ids`` controls how heading ids are
        written and whether links to headings are rewritten to slugs.

    Examples
    --------
        >>> from gdoc2md.parsers import parse_html
        >>> doc = HtmlTreeToAst().convert(parse_html("<h1>Title</h1><p>Body</p>"))
        >>> [type(child).__name__ for child in doc.children]
        ['Heading', 'Paragraph']

    """

    _BLOCK_HANDLERS: dict[str, str] = {
        "p": "_convert_paragraph",
        "h1": "_convert_heading",
        "h2": "_convert_heading",
        "h3": "_convert_heading",
        "h4": "_convert_heading",
        "h5": "_convert_heading",
        "h6": "_convert_heading",
        "pre": "_convert_code_block",
        "ul": "_convert_list",
        "ol": "_convert_list",
        "table": "_convert_table",
        "blockquote": "_convert_blockquote",
        "hr": "_convert_thematic_break",
    }

    _INLINE_HANDLERS: dict[str, str] = {
        "em": "_convert_emphasis",
        "i": "_convert_emphasis",
        "strong": "_convert_strong",
        "b": "_convert_strong",
        "del": "_convert_strikethrough",
        "s": "_convert_strikethrough",
        "strike": "_convert_strikethrough",
        "code": "_convert_code",
        "a": "_convert_anchor",
        "img": "_convert_image",
        "br": "_convert_line_break",
        "sup": "_convert_island",
        "sub": "_convert_island",
        "ins": "_convert_island",
        "input": "_convert_input",
    }

    def __init__(self, options: ConversionOptions | None = None):
        self.options = options or ConversionOptions()
        self._element_by_id: dict[str, Element] = {}
        self._heading_slugs: dict[Element, str] = {}

    def convert(self, root: Root) -> Document:
        """Convert ``root`` and return the Markdown document."""
        self._index(root)
        children = self._convert_blocks(root.children)
        logger.debug(f"Converted HTML tree into {len(children)} top-level block(s)")
        document = Document(children=children)

        validator = ValidationVisitor(strict=False)
        document.accept(validator)
        for error in validator.errors:
            logger.debug(f"AST validation: {error}")
        return document

    def _index(self, root: Root) -> None:
        """Record elements by id and compute one slug per heading in document order."""
        self._element_by_id = {}
        self._heading_slugs = {}
        slugger = GithubSlugger()
        for node in walk(root):
            if not isinstance(node, Element):
                continue
            element_id = node.get("id")
            if element_id and element_id not in self._element_by_id:
                self._element_by_id[element_id] = node
            if node.tag in HEADING_ELEMENTS:
                self._heading_slugs[node] = slugger.slug(text_content(node).strip())

    # ------------------------------------------------------------------
    # Block context
    # ------------------------------------------------------------------

    def _is_block(self, node: HtmlNode) -> bool:
        return isinstance(node, Element) and (node.tag in BLOCK_ELEMENTS or node.tag in self._BLOCK_HANDLERS)

    def _convert_blocks(self, nodes: list[HtmlNode]) -> list[Node]:
        """Convert sibling nodes in block context.

        Runs of inline content between blocks become paragraphs; runs that
        hold only whitespace are dropped.
        """
        blocks: list[Node] = []
        inline_buffer: list[Node] = []

        def flush() -> None:
            if inline_buffer and not _is_blank(inline_buffer):
                content = finalize_inline(inline_buffer, strip_end=True)
                if content:
                    blocks.append(_paragraph_or_anchors(content))
            inline_buffer.clear()

        for node in nodes:
            if self._is_block(node):
                flush()
                blocks.extend(self._convert_block(node))
            else:
                inline_buffer.extend(self._convert_inline(node))
        flush()
        return blocks

    def _convert_block(self, element: Element) -> list[Node]:
        handler_name = self._BLOCK_HANDLERS.get(element.tag)
        if handler_name is None:
            # Unknown block containers (div, section, li outside a list...) are transparent
            return self._convert_blocks(element.children)
        handler: Callable[[Element], list[Node]] = getattr(self, handler_name)
        return handler(element)

    def _convert_paragraph(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, ("p",), "_convert_paragraph")
        if any(self._is_block(child) for child in element.children):
            return self._convert_blocks(element.children)
        content = finalize_inline(self._convert_inline_children(element))
        if not content or _is_blank(content):
            return []
        return [_paragraph_or_anchors(content)]

    def _convert_heading(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, HEADING_ELEMENTS, "_convert_heading")
        content = finalize_inline(self._convert_inline_children(element, flatten_blocks=True), strip_end=True)
        heading_id = element.get("id")
        if heading_id:
            if self.options.heading_ids == "html":
                content.append(HTMLInline(content=f'<a id="{html.escape(heading_id)}"></a>'))
            elif self.options.heading_ids == "extended":
                content.append(HTMLInline(content=f" {{#{heading_id}}}"))
        return [Heading(level=int(element.tag[1]), content=content)]

    def _convert_code_block(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, ("pre",), "_convert_code_block")
        code = _code_text(element)
        if code.endswith("\n"):
            code = code[:-1]
        return [CodeBlock(content=code, language=_code_language(element))]

    def _convert_list(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, LIST_ELEMENTS, "_convert_list")
        ordered = element.tag == "ol"
        items: list[ListItem] = []
        for child in element.children:
            if isinstance(child, Element) and child.tag == "li":
                items.append(self._convert_list_item(child))
            elif isinstance(child, Element) and child.tag in LIST_ELEMENTS:
                # A nested list the normalizer could not attach to an item
                items.append(ListItem(children=self._convert_list(child)))
            else:
                stray = self._convert_blocks([child])
                if stray:
                    items.append(ListItem(children=stray))
        if not items:
            return []
        start = _int_attribute(element, "start", 1) if ordered else 1
        return [List(ordered=ordered, items=items, start=start)]

    def _convert_list_item(self, element: HtmlNode) -> ListItem:
        element = _expect_element(element, ("li",), "_convert_list_item")
        children = list(element.children)
        task_status = None
        first = next((child for child in children if not (isinstance(child, HtmlText) and not child.value.strip())), None)
        if isinstance(first, Element) and first.tag == "input" and (first.get("type") or "").lower() == "checkbox":
            task_status = "checked" if "checked" in first.attributes else "unchecked"
            children.remove(first)
        return ListItem(children=self._convert_blocks(children), task_status=task_status)

    def _convert_table(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, ("table",), "_convert_table")
        header_rows: list[Element] = []
        body_rows: list[Element] = []
        for child in element.children:
            if not isinstance(child, Element):
                continue
            if child.tag == "tr":
                body_rows.append(child)
            elif child.tag in ("thead", "tbody", "tfoot"):
                rows = [row for row in child.children if isinstance(row, Element) and row.tag == "tr"]
                (header_rows if child.tag == "thead" else body_rows).extend(rows)

        all_rows = header_rows + body_rows
        if not all_rows:
            return []

        converted = [self._convert_table_row(row) for row in all_rows]
        _lay_out_rows(converted)
        columns = max(len(row.cells) for row in converted)
        if columns == 0:
            return []
        for row in converted:
            row.cells.extend(TableCell() for _ in range(columns - len(row.cells)))

        header = converted[0]
        header.is_header = True
        alignments = [cell.alignment for cell in header.cells][:columns]
        alignments.extend([None] * (columns - len(alignments)))
        return [Table(header=header, rows=converted[1:], alignments=alignments)]

    def _convert_table_row(self, element: Element) -> TableRow:
        cells: list[TableCell] = []
        for child in element.children:
            if isinstance(child, Element) and child.tag in TABLE_CELL_ELEMENTS:
                align = (child.get("align") or "").lower()
                cells.append(
                    TableCell(
                        content=finalize_inline(self._convert_inline_children(child, flatten_blocks=True), True),
                        colspan=max(_int_attribute(child, "colspan", 1), 1),
                        rowspan=max(_int_attribute(child, "rowspan", 1), 1),
                        alignment=align if align in _ALIGNMENTS else None,  # type: ignore[arg-type]
                    )
                )
        return TableRow(cells=cells)

    def _convert_blockquote(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, ("blockquote",), "_convert_blockquote")
        children = self._convert_blocks(element.children)
        return [BlockQuote(children=children)] if children else []

    def _convert_thematic_break(self, element: HtmlNode) -> list[Node]:
        _expect_element(element, ("hr",), "_convert_thematic_break")
        return [ThematicBreak()]

    # ------------------------------------------------------------------
    # Inline context
    # ------------------------------------------------------------------

    def _convert_inline_children(self, element: Element, flatten_blocks: bool = False) -> list[Node]:
        """Convert the children of ``element`` as inline content.

        With ``flatten_blocks``, block children (paragraphs inside a table
        cell, say) are flattened to their inline content separated by spaces.
        """
        result: list[Node] = []
        for child in element.children:
            if flatten_blocks and self._is_block(child):
                flattened = finalize_inline(self._convert_inline_children(child, flatten_blocks=True), True)
                if flattened:
                    if result and not _is_blank(result):
                        result.append(Text(content=" "))
                    result.extend(flattened)
                continue
            result.extend(self._convert_inline(child))
        return result

    def _convert_inline(self, node: HtmlNode) -> list[Node]:
        if isinstance(node, HtmlText):
            return [Text(content=node.value)] if node.value else []
        if not isinstance(node, Element):
            raise TypeError(f"Cannot convert {type(node).__name__} in inline context")
        handler_name = self._INLINE_HANDLERS.get(node.tag)
        if handler_name is None:
            return self._convert_inline_children(node, flatten_blocks=True)
        handler: Callable[[Element], list[Node]] = getattr(self, handler_name)
        return handler(node)

    def _convert_emphasis(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, ("em", "i"), "_convert_emphasis")
        content = self._convert_inline_children(element)
        return [Emphasis(content=content)] if content else []

    def _convert_strong(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, ("strong", "b"), "_convert_strong")
        content = self._convert_inline_children(element)
        return [Strong(content=content)] if content else []

    def _convert_strikethrough(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, ("del", "s", "strike"), "_convert_strikethrough")
        content = self._convert_inline_children(element)
        return [Strikethrough(content=content)] if content else []

    def _convert_code(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, ("code",), "_convert_code")
        code = _code_text(element).replace("\n", " ")
        return [Code(content=code)] if code else []

    def _convert_island(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, ("sup", "sub", "ins"), "_convert_island")
        return [
            HTMLInline(content=f"<{element.tag}>"),
            *self._convert_inline_children(element),
            HTMLInline(content=f"</{element.tag}>"),
        ]

    def _convert_anchor(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, ("a",), "_convert_anchor")
        href = element.get("href")
        anchor_name = element.get("id") or element.get("name")
        if anchor_name and not href:
            # Bookmark target: Markdown has no anchor syntax, keep it as HTML
            return [
                HTMLInline(content=f'<a id="{html.escape(anchor_name)}"></a>'),
                *self._convert_inline_children(element),
            ]
        if not href:
            return self._convert_inline_children(element)

        if href.startswith("#") and self.options.heading_ids == "hidden":
            target = self._element_by_id.get(href[1:])
            if target is not None and target in self._heading_slugs:
                href = f"#{self._heading_slugs[target]}"
        return [Link(url=href, content=self._convert_inline_children(element), title=element.get("title"))]

    def _convert_image(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, ("img",), "_convert_image")
        src = element.get("src")
        if not src:
            logger.debug("Skipping <img> without a src")
            return []
        return [Image(url=src, alt_text=element.get("alt") or "", title=element.get("title"))]

    def _convert_line_break(self, element: HtmlNode) -> list[Node]:
        _expect_element(element, ("br",), "_convert_line_break")
        return [LineBreak()]

    def _convert_input(self, element: HtmlNode) -> list[Node]:
        element = _expect_element(element, ("input",), "_convert_input")
        if (element.get("type") or "").lower() == "checkbox":
            return [Text(content="[x] " if "checked" in element.attributes else "[ ] ")]
        return []
