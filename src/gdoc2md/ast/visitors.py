#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/ast/visitors.py
"""Visitor pattern base class and a structural validator for the Markdown AST."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

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
    is_inline,
)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement a ``visit_*`` method for every node type. Nodes call
    the matching method from their ``accept``.

    Examples
    --------
    Count text nodes:

        >>> class TextCounter(NodeVisitor):
        ...     def visit_text(self, node):
        ...         self.count += 1
        ...     # remaining visit_* methods descend into children

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""
        pass

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""
        pass

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        pass

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        pass

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""
        pass

    @abstractmethod
    def visit_html_block(self, node: HTMLBlock) -> Any:
        """Visit an HTMLBlock node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""
        pass

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""
        pass

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""
        pass

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""
        pass

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""
        pass

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit a Strikethrough node."""
        pass

    @abstractmethod
    def visit_html_inline(self, node: HTMLInline) -> Any:
        """Visit an HTMLInline node."""
        pass


class ValidationVisitor(NodeVisitor):
    """Visitor that checks the structural invariants of a document.

    Checks heading levels, inline-only content in headings, paragraphs and
    cells, block-only content in list items, and that every table's
    alignment list matches its column count.

    Parameters
    ----------
    strict : bool, default = True
        Raise ``ValueError`` on the first problem. When False, problems are
        only collected in :attr:`errors`.

    Examples
    --------
        >>> validator = ValidationVisitor(strict=False)
        >>> document.accept(validator)
        >>> validator.errors
        []

    """

    def __init__(self, strict: bool = True):
        self.strict = strict
        self.errors: list[str] = []

    def _add_error(self, message: str) -> None:
        self.errors.append(message)
        if self.strict:
            raise ValueError(message)

    def _validate_children_are_inline(self, children: list[Node], context: str) -> None:
        for i, child in enumerate(children):
            if not is_inline(child):
                self._add_error(f"{context} can only contain inline nodes, but child {i} is {type(child).__name__}")

    def _validate_children_are_blocks(self, children: list[Node], context: str) -> None:
        for i, child in enumerate(children):
            if is_inline(child):
                self._add_error(f"{context} can only contain block nodes, but child {i} is {type(child).__name__}")

    def _visit_all(self, children: list[Node]) -> None:
        for child in children:
            child.accept(self)

    def visit_document(self, node: Document) -> None:
        """Validate a Document node."""
        self._validate_children_are_blocks(node.children, "Document")
        self._visit_all(node.children)

    def visit_heading(self, node: Heading) -> None:
        """Validate a Heading node."""
        if not 1 <= node.level <= 6:
            self._add_error(f"Invalid heading level: {node.level}")
        self._validate_children_are_inline(node.content, "Heading")
        self._visit_all(node.content)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Validate a Paragraph node."""
        self._validate_children_are_inline(node.content, "Paragraph")
        self._visit_all(node.content)

    def visit_code_block(self, node: CodeBlock) -> None:
        """Validate a CodeBlock node."""
        pass

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Validate a BlockQuote node."""
        self._validate_children_are_blocks(node.children, "BlockQuote")
        self._visit_all(node.children)

    def visit_list(self, node: List) -> None:
        """Validate a List node."""
        if node.ordered and node.start < 0:
            self._add_error(f"Ordered list start must be >= 0, got {node.start}")
        if not node.items:
            self._add_error("List must have at least one item")
        self._visit_all(node.items)

    def visit_list_item(self, node: ListItem) -> None:
        """Validate a ListItem node."""
        self._validate_children_are_blocks(node.children, "ListItem")
        self._visit_all(node.children)

    def visit_table(self, node: Table) -> None:
        """Validate a Table node."""
        columns = node.column_count
        rows = ([node.header] if node.header else []) + node.rows
        for i, row in enumerate(rows):
            if len(row.cells) != columns:
                self._add_error(f"Table row {i} has {len(row.cells)} cells, expected {columns}")
        if len(node.alignments) != columns:
            self._add_error(f"Table has {len(node.alignments)} alignments but {columns} columns")
        self._visit_all(rows)

    def visit_table_row(self, node: TableRow) -> None:
        """Validate a TableRow node."""
        self._visit_all(node.cells)

    def visit_table_cell(self, node: TableCell) -> None:
        """Validate a TableCell node."""
        if node.colspan < 1:
            self._add_error(f"TableCell colspan must be >= 1, got {node.colspan}")
        if node.rowspan < 1:
            self._add_error(f"TableCell rowspan must be >= 1, got {node.rowspan}")
        self._validate_children_are_inline(node.content, "TableCell")
        self._visit_all(node.content)

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Validate a ThematicBreak node."""
        pass

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Validate an HTMLBlock node."""
        pass

    def visit_text(self, node: Text) -> None:
        """Validate a Text node."""
        pass

    def visit_emphasis(self, node: Emphasis) -> None:
        """Validate an Emphasis node."""
        self._validate_children_are_inline(node.content, "Emphasis")
        self._visit_all(node.content)

    def visit_strong(self, node: Strong) -> None:
        """Validate a Strong node."""
        self._validate_children_are_inline(node.content, "Strong")
        self._visit_all(node.content)

    def visit_code(self, node: Code) -> None:
        """Validate a Code node."""
        pass

    def visit_link(self, node: Link) -> None:
        """Validate a Link node."""
        self._validate_children_are_inline(node.content, "Link")
        self._visit_all(node.content)

    def visit_image(self, node: Image) -> None:
        """Validate an Image node."""
        if not node.url:
            self._add_error("Image must have a source URL")

    def visit_line_break(self, node: LineBreak) -> None:
        """Validate a LineBreak node."""
        pass

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Validate a Strikethrough node."""
        self._validate_children_are_inline(node.content, "Strikethrough")
        self._visit_all(node.content)

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Validate an HTMLInline node."""
        pass
