#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast.py
"""Unit tests for AST nodes and the validation visitor."""

import pytest

from gdoc2md.ast import (
    Document,
    Emphasis,
    Heading,
    List,
    ListItem,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
    ValidationVisitor,
    is_inline,
)


@pytest.mark.unit
class TestNodes:
    """Tests for node construction helpers."""

    def test_heading_level_checked(self):
        with pytest.raises(ValueError):
            Heading(level=7)

    def test_is_inline(self):
        assert is_inline(Text(content="x"))
        assert is_inline(Emphasis())
        assert not is_inline(Paragraph())

    def test_column_count_uses_widest_row(self):
        table = Table(
            header=TableRow(cells=[TableCell()], is_header=True),
            rows=[TableRow(cells=[TableCell(), TableCell()])],
        )
        assert table.column_count == 2

    def test_visitor_dispatch(self):
        class TextCollector(ValidationVisitor):
            def __init__(self):
                super().__init__()
                self.seen = []

            def visit_text(self, node):
                self.seen.append(node.content)

        collector = TextCollector()
        Document(children=[Paragraph(content=[Text(content="a"), Text(content="b")])]).accept(collector)
        assert collector.seen == ["a", "b"]


@pytest.mark.unit
class TestValidationVisitor:
    """Tests for structural validation."""

    def test_valid_document(self):
        doc = Document(
            children=[
                Heading(level=1, content=[Text(content="T")]),
                List(ordered=False, items=[ListItem(children=[Paragraph(content=[Text(content="i")])])]),
            ]
        )
        validator = ValidationVisitor()
        doc.accept(validator)
        assert validator.errors == []

    def test_strict_raises(self):
        doc = Document(children=[Paragraph(content=[Paragraph()])])
        with pytest.raises(ValueError, match="inline"):
            doc.accept(ValidationVisitor())

    def test_collects_errors_when_not_strict(self):
        table = Table(
            header=TableRow(cells=[TableCell(), TableCell()], is_header=True),
            rows=[TableRow(cells=[TableCell()])],
            alignments=[None],
        )
        doc = Document(children=[Text(content="loose"), table, List(ordered=True, items=[])])
        validator = ValidationVisitor(strict=False)
        doc.accept(validator)
        assert len(validator.errors) == 4
        assert any("block nodes" in error for error in validator.errors)
        assert any("row 1 has 1 cells" in error for error in validator.errors)
        assert any("alignments" in error for error in validator.errors)
        assert any("at least one item" in error for error in validator.errors)
