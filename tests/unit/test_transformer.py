#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_transformer.py
"""Unit tests for converting the normalized HTML tree into the Markdown AST."""

import logging

import pytest

from gdoc2md.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Paragraph,
    Text,
    ThematicBreak,
)
from gdoc2md.options import ConversionOptions
from gdoc2md.parsers import parse_html
from gdoc2md.transformer import HtmlTreeToAst, finalize_inline
from gdoc2md.tree import Element, Root


def convert(html, **options):
    return HtmlTreeToAst(ConversionOptions(**options)).convert(parse_html(html)).children


@pytest.mark.unit
class TestFinalizeInline:
    """Tests for finalize_inline."""

    def test_merges_and_trims_start(self):
        nodes = [LineBreak(), Text(content="  a"), Text(content="b "), LineBreak()]
        assert finalize_inline(nodes) == [Text(content="ab ")]

    def test_strip_end(self):
        nodes = [Text(content=" a "), Emphasis(content=[Text(content="b")]), Text(content="  ")]
        assert finalize_inline(nodes, strip_end=True) == [Text(content="a "), Emphasis(content=[Text(content="b")])]

    def test_whitespace_only(self):
        assert finalize_inline([Text(content="  "), LineBreak(), Text(content=" ")], strip_end=True) == []


@pytest.mark.unit
class TestBlocks:
    """Tests for block-level conversion."""

    def test_heading_and_paragraph(self):
        assert convert("<h1>Title</h1><p>Body</p>") == [
            Heading(level=1, content=[Text(content="Title")]),
            Paragraph(content=[Text(content="Body")]),
        ]

    def test_implicit_paragraphs_around_blocks(self):
        blocks = convert("text <em>x</em> <h2>H</h2> tail ")
        assert blocks == [
            Paragraph(content=[Text(content="text "), Emphasis(content=[Text(content="x")])]),
            Heading(level=2, content=[Text(content="H")]),
            Paragraph(content=[Text(content="tail")]),
        ]

    def test_paragraph_keeps_trailing_whitespace(self):
        blocks = convert("<p>Hello <em>x</em> </p>")
        assert blocks[0].content[-1] == Text(content=" ")

    def test_line_breaks_trimmed_at_edges(self):
        assert convert("<p><br>a<br>b<br></p>") == [
            Paragraph(content=[Text(content="a"), LineBreak(), Text(content="b")])
        ]

    def test_empty_paragraph_dropped(self):
        assert convert("<p> <br> </p><p>x</p>") == [Paragraph(content=[Text(content="x")])]

    def test_code_block(self):
        blocks = convert('<pre><code class="language-python">x = 1\n</code></pre>')
        assert blocks == [CodeBlock(content="x = 1", language="python")]

    def test_blockquote_and_rule(self):
        blocks = convert("<blockquote><p>q</p></blockquote><hr>")
        assert blocks == [BlockQuote(children=[Paragraph(content=[Text(content="q")])]), ThematicBreak()]

    def test_transparent_container(self):
        assert convert("<div><p>a</p></div>") == [Paragraph(content=[Text(content="a")])]


@pytest.mark.unit
class TestHeadingIds:
    """Tests for the heading id modes and heading link rewriting."""

    HTML = '<h1 id="h.1">My Title</h1><p><a href="#h.1">go</a></p>'

    def test_hidden_rewrites_links_to_slugs(self):
        heading, paragraph = convert(self.HTML)
        assert heading.content == [Text(content="My Title")]
        assert paragraph.content[0].url == "#my-title"

    def test_html_anchor(self):
        heading, paragraph = convert(self.HTML, heading_ids="html")
        assert heading.content[-1] == HTMLInline(content='<a id="h.1"></a>')
        assert paragraph.content[0].url == "#h.1"

    def test_extended_attribute(self):
        heading, _ = convert(self.HTML, heading_ids="extended")
        assert heading.content[-1] == HTMLInline(content=" {#h.1}")

    def test_duplicate_heading_slugs(self):
        html = '<h2 id="a">Same</h2><h2 id="b">Same</h2><p><a href="#b">x</a></p>'
        blocks = convert(html)
        assert blocks[-1].content[0].url == "#same-1"

    def test_link_to_non_heading_kept(self):
        blocks = convert('<p><a id="id.1"></a>x <a href="#id.1">y</a></p>')
        content = blocks[0].content
        assert content[0] == HTMLInline(content='<a id="id.1"></a>')
        assert content[-1] == Link(url="#id.1", content=[Text(content="y")])

    def test_bookmark_only_paragraph_becomes_html_block(self):
        blocks = convert('<p><a id="id.1"></a> <a id="id.2"></a></p><p>Text</p>')
        assert blocks == [
            HTMLBlock(content='<a id="id.1"></a><a id="id.2"></a>'),
            Paragraph(content=[Text(content="Text")]),
        ]


@pytest.mark.unit
class TestLists:
    """Tests for list conversion."""

    def test_task_items(self):
        blocks = convert('<ul><li><input type="checkbox" checked><p>Done</p></li><li>Plain</li></ul>')
        assert blocks == [
            List(
                ordered=False,
                items=[
                    ListItem(children=[Paragraph(content=[Text(content="Done")])], task_status="checked"),
                    ListItem(children=[Paragraph(content=[Text(content="Plain")])]),
                ],
            )
        ]

    def test_ordered_start(self):
        assert convert('<ol start="3"><li>a</li></ol>')[0].start == 3

    def test_bad_start_ignored(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert convert('<ol start="x"><li>a</li></ol>')[0].start == 1
        assert "start" in caplog.text

    def test_nested_list_in_item(self):
        item = convert("<ul><li>A<ul><li>B</li></ul></li></ul>")[0].items[0]
        assert isinstance(item.children[0], Paragraph)
        assert isinstance(item.children[1], List)

    def test_empty_list_dropped(self):
        assert convert("<ul> </ul>") == []


@pytest.mark.unit
class TestTables:
    """Tests for table conversion."""

    def test_header_alignment_and_padding(self):
        html = (
            '<table><thead><tr><th align="center">H</th><th>I</th></tr></thead>'
            "<tbody><tr><td>1</td></tr></tbody></table>"
        )
        table = convert(html)[0]
        assert table.header.is_header
        assert table.alignments == ["center", None]
        assert len(table.rows) == 1
        assert len(table.rows[0].cells) == 2

    def test_first_body_row_becomes_header(self):
        table = convert("<table><tbody><tr><td>a</td></tr><tr><td>b</td></tr></tbody></table>")[0]
        assert table.header.cells[0].content == [Text(content="a")]
        assert table.rows[0].cells[0].content == [Text(content="b")]

    def test_cell_paragraphs_joined(self):
        table = convert("<table><tbody><tr><td><p>a</p><p>b</p></td></tr></tbody></table>")[0]
        assert table.header.cells[0].content == [Text(content="a b")]

    @staticmethod
    def _texts(row):
        return [cell.content[0].content if cell.content else "" for cell in row.cells]

    def test_colspan_keeps_following_cells_in_their_columns(self):
        html = (
            "<table><tbody><tr><td colspan=\"2\">A</td><td>X</td></tr>"
            "<tr><td>B</td><td>C</td><td>D</td></tr></tbody></table>"
        )
        table = convert(html)[0]
        assert self._texts(table.header) == ["A", "", "X"]
        assert self._texts(table.rows[0]) == ["B", "C", "D"]
        assert table.alignments == [None, None, None]

    def test_rowspan_carries_into_following_rows(self):
        html = (
            "<table><tbody><tr><td rowspan=\"3\">A</td><td>B</td></tr>"
            "<tr><td>C</td></tr><tr><td>D</td></tr><tr><td>E</td><td>F</td></tr></tbody></table>"
        )
        table = convert(html)[0]
        assert self._texts(table.header) == ["A", "B"]
        assert [self._texts(row) for row in table.rows] == [["", "C"], ["", "D"], ["E", "F"]]

    def test_rowspan_in_last_column(self):
        html = (
            "<table><tbody><tr><td>A</td><td rowspan=\"2\">B</td></tr>"
            "<tr><td>C</td></tr></tbody></table>"
        )
        table = convert(html)[0]
        assert self._texts(table.rows[0]) == ["C", ""]

    def test_colspan_and_rowspan_together(self):
        html = (
            "<table><tbody><tr><td colspan=\"2\" rowspan=\"2\">A</td><td>B</td></tr>"
            "<tr><td>C</td></tr></tbody></table>"
        )
        table = convert(html)[0]
        assert self._texts(table.header) == ["A", "", "B"]
        assert self._texts(table.rows[0]) == ["", "", "C"]


@pytest.mark.unit
class TestInline:
    """Tests for inline conversion."""

    def test_islands(self):
        assert convert("<p>x<sup>2</sup></p>")[0].content == [
            Text(content="x"),
            HTMLInline(content="<sup>"),
            Text(content="2"),
            HTMLInline(content="</sup>"),
        ]

    def test_inline_code_newlines(self):
        assert convert("<p><code>a\nb</code></p>")[0].content == [Code(content="a b")]

    def test_image(self):
        assert convert('<p><img src="a.png" alt="A"></p>')[0].content == [Image(url="a.png", alt_text="A")]

    def test_image_without_src_dropped(self):
        assert convert("<p>x<img></p>")[0].content == [Text(content="x")]

    def test_link_title(self):
        content = convert('<p><a href="https://e.com" title="T">e</a></p>')[0].content
        assert content == [Link(url="https://e.com", content=[Text(content="e")], title="T")]


@pytest.mark.unit
class TestHandlerTypeChecks:
    """Handlers reject nodes they are not meant for."""

    def test_block_handler_rejects_other_tag(self):
        with pytest.raises(TypeError, match="_convert_heading"):
            HtmlTreeToAst()._convert_heading(Element("p"))

    def test_inline_rejects_root(self):
        with pytest.raises(TypeError):
            HtmlTreeToAst()._convert_inline(Root())
