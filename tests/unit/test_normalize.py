#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_normalize.py
"""Unit tests for the individual HTML normalization passes."""

import logging

import pytest

from gdoc2md.normalize import (
    AlignmentPass,
    ChecklistPass,
    CleanupPass,
    CodeBlockPass,
    InlineStylePass,
    NestedListPass,
    SuggestionPass,
    TablePass,
    WhitespacePass,
)
from gdoc2md.parsers import parse_html
from gdoc2md.tree import Element, Root, Text, is_element, text_content, to_html

SUGGESTED = '<p>a<ins data-suggestion-id="1">b</ins><del data-suggestion-id="2">c</del></p>'


def run(tree_pass, html, context):
    tree = parse_html(html)
    tree_pass.transform(tree, context)
    return tree


@pytest.mark.unit
class TestSuggestionPass:
    """Tests for the four suggestion modes."""

    @pytest.mark.parametrize(
        "mode,expected",
        [
            ("show", SUGGESTED),
            ("hide", "<p>a</p>"),
            ("accept", "<p>ab</p>"),
            ("reject", "<p>ac</p>"),
        ],
    )
    def test_modes(self, make_context, mode, expected):
        tree = run(SuggestionPass(), SUGGESTED, make_context(suggestions=mode))
        assert to_html(tree) == expected

    def test_plain_ins_untouched(self, make_context):
        tree = run(SuggestionPass(), "<p><ins>x</ins></p>", make_context(suggestions="hide"))
        assert to_html(tree) == "<p><ins>x</ins></p>"

    def test_nested_suggestions_resolved(self, make_context):
        html = '<p><ins data-suggestion-id="1">a<del data-suggestion-id="2">b</del>c</ins></p>'
        tree = run(SuggestionPass(), html, make_context(suggestions="accept"))
        assert to_html(tree) == "<p>ac</p>"


@pytest.mark.unit
class TestNestedListPass:
    """Tests for moving misplaced nested lists into list items."""

    def test_nested_list_moved(self, context):
        tree = run(NestedListPass(), "<ul><li>A</li><ul><li>B</li></ul></ul>", context)
        assert to_html(tree) == "<ul><li>A<ul><li>B</li></ul></li></ul>"

    def test_whitespace_between_items_skipped(self, context):
        tree = run(NestedListPass(), "<ul><li>A</li>\n<ul><li>B</li></ul></ul>", context)
        assert to_html(tree) == "<ul><li>A<ul><li>B</li></ul></li>\n</ul>"

    def test_multiple_levels(self, context):
        html = "<ol><li>A</li><ol><li>B</li><ol><li>C</li></ol></ol></ol>"
        tree = run(NestedListPass(), html, context)
        assert to_html(tree) == "<ol><li>A<ol><li>B<ol><li>C</li></ol></li></ol></li></ol>"

    def test_orphan_nested_list_left_in_place(self, context, caplog):
        with caplog.at_level(logging.WARNING):
            tree = run(NestedListPass(), "<ul><ul><li>B</li></ul></ul>", context)
        assert to_html(tree) == "<ul><ul><li>B</li></ul></ul>"
        assert "no preceding list item" in caplog.text


@pytest.mark.unit
class TestChecklistPass:
    """Tests for checklist detection."""

    @staticmethod
    def _checkbox(item):
        first = item.children[0]
        assert is_element(first, "input")
        assert first.get("type") == "checkbox"
        return "checked" in first.attributes

    def test_aria_checkbox_items(self, context):
        html = (
            '<ul><li role="checkbox" aria-checked="true">Done</li>'
            '<li role="checkbox" aria-checked="false">Todo</li></ul>'
        )
        tree = run(ChecklistPass(), html, context)
        done, todo = tree.children[0].children
        assert self._checkbox(done) is True
        assert self._checkbox(todo) is False

    def test_leading_marks_removed(self, context):
        html = f"<ul><li><span>{chr(0x2611)} Done</span></li><li>{chr(0x2610)} Todo</li></ul>"
        tree = run(ChecklistPass(), html, context)
        done, todo = tree.children[0].children
        assert self._checkbox(done) is True
        assert text_content(done) == "Done"
        assert self._checkbox(todo) is False
        assert text_content(todo) == "Todo"

    def test_plain_items_unchanged(self, context):
        tree = run(ChecklistPass(), "<ul><li>Plain</li></ul>", context)
        assert to_html(tree) == "<ul><li>Plain</li></ul>"

    def test_existing_checkbox_not_duplicated(self, context):
        html = '<ul><li role="checkbox" aria-checked="true"><input type="checkbox" checked>x</li></ul>'
        tree = run(ChecklistPass(), html, context)
        item = tree.children[0].children[0]
        assert sum(1 for child in item.children if is_element(child, "input")) == 1


@pytest.mark.unit
class TestTablePass:
    """Tests for table structure normalization."""

    def test_rows_wrapped_in_tbody(self, context):
        tree = run(TablePass(), "<table><tr><td>a</td></tr></table>", context)
        table = tree.children[0]
        assert [child.tag for child in table.children] == ["tbody"]
        assert is_element(table.children[0].children[0], "tr")

    def test_bare_rows_after_thead(self, context):
        html = "<table><thead><tr><th>H</th></tr></thead><tr><td>1</td></tr></table>"
        tree = run(TablePass(), html, context)
        table = tree.children[0]
        assert [child.tag for child in table.children] == ["thead", "tbody"]
        assert text_content(table.children[1]) == "1"

    def test_cell_cleaned(self, context):
        html = '<table><tbody><tr><td class="x" colspan="2" style="text-align:center"><p></p><p>A</p></td></tr></tbody></table>'
        tree = run(TablePass(), html, context)
        cell = tree.children[0].children[0].children[0].children[0]
        assert cell.attributes == {"colspan": "2", "style": "text-align:center"}
        assert len(cell.children) == 1
        assert text_content(cell) == "A"


@pytest.mark.unit
class TestInlineStylePass:
    """Tests for CSS to semantic element conversion."""

    @pytest.mark.parametrize(
        "style,expected",
        [
            ("font-weight:700", "<p><strong>x</strong></p>"),
            ("font-weight:bold", "<p><strong>x</strong></p>"),
            ("font-style:italic", "<p><em>x</em></p>"),
            ("vertical-align:super", "<p><sup>x</sup></p>"),
            ("vertical-align:sub", "<p><sub>x</sub></p>"),
            ("text-decoration:line-through", "<p><del>x</del></p>"),
            ("font-family:'Courier New',monospace", "<p><code>x</code></p>"),
            ("color:#ff0000", "<p>x</p>"),
        ],
    )
    def test_single_style(self, context, style, expected):
        tree = run(InlineStylePass(), f'<p><span style="{style}">x</span></p>', context)
        assert to_html(tree) == expected

    def test_wrap_order(self, context):
        tree = run(InlineStylePass(), '<p><span style="font-weight:700;font-style:italic">x</span></p>', context)
        assert to_html(tree) == "<p><strong><em>x</em></strong></p>"

    def test_adjacent_equal_elements_merged(self, context):
        html = '<p><span style="font-weight:700">a</span><span style="font-weight:700">b</span></p>'
        tree = run(InlineStylePass(), html, context)
        assert to_html(tree) == "<p><strong>ab</strong></p>"

    def test_existing_semantic_ancestor_not_repeated(self, context):
        tree = run(InlineStylePass(), '<p><strong><span style="font-weight:700">x</span></strong></p>', context)
        assert to_html(tree) == "<p><strong>x</strong></p>"

    def test_normal_weight_wrapper_removed(self, context):
        html = '<b style="font-weight:normal"><p><span style="font-weight:700">x</span> y</p></b>'
        tree = run(InlineStylePass(), html, context)
        assert to_html(tree) == "<p><strong>x</strong> y</p>"


@pytest.mark.unit
class TestCodeBlockPass:
    """Tests for merging code paragraphs into code blocks."""

    def test_consecutive_lines_merged(self, context):
        html = "<p><code>a</code></p><p><code>b</code></p><p><code>c</code></p>"
        tree = run(CodeBlockPass(), html, context)
        assert len(tree.children) == 1
        pre = tree.children[0]
        assert is_element(pre, "pre")
        code = pre.children[0]
        assert is_element(code, "code")
        assert code.children[0].value == "a\nb\nc"

    def test_snippets_with_different_ids_stay_separate(self, context):
        html = (
            '<p><code data-code-block-id="code-0" data-language="python">a</code></p>'
            '<p><code data-code-block-id="code-1">b</code></p>'
        )
        tree = run(CodeBlockPass(), html, context)
        assert [child.tag for child in tree.children] == ["pre", "pre"]
        assert tree.children[0].children[0].get("class") == "language-python"
        assert tree.children[1].children[0].get("class") is None

    def test_mixed_paragraph_not_code(self, context):
        tree = run(CodeBlockPass(), "<p><code>a</code> text</p>", context)
        assert is_element(tree.children[0], "p")

    def test_run_interrupted_by_prose(self, context):
        html = "<p><code>a</code></p><p>prose</p><p><code>b</code></p>"
        tree = run(CodeBlockPass(), html, context)
        assert [child.tag for child in tree.children] == ["pre", "p", "pre"]

    def test_line_break_and_nbsp(self, context):
        tree = run(CodeBlockPass(), "<p><code>a<br>&nbsp;&nbsp;b</code></p>", context)
        assert tree.children[0].children[0].children[0].value == "a\n  b"


@pytest.mark.unit
class TestWhitespacePass:
    """Tests for relocating edge whitespace out of emphasis."""

    def test_whitespace_moved_outside(self, context):
        tree = run(WhitespacePass(), "<p>Hello<em> italics </em>end</p>", context)
        assert to_html(tree) == "<p>Hello <em>italics</em> end</p>"

    def test_nested_emphasis(self, context):
        tree = run(WhitespacePass(), "<p>a<strong><em> x </em></strong>b</p>", context)
        assert to_html(tree) == "<p>a <strong><em>x</em></strong> b</p>"

    def test_pre_untouched(self, context):
        tree = run(WhitespacePass(), "<pre><em> x </em></pre>", context)
        assert to_html(tree) == "<pre><em> x </em></pre>"

    def test_whitespace_only_element_emptied(self, context):
        tree = run(WhitespacePass(), "<p>a<em> </em>b</p>", context)
        assert text_content(tree) == "a b"
        em = next(child for child in tree.children[0].children if is_element(child, "em"))
        assert text_content(em) == ""


@pytest.mark.unit
class TestAlignmentPass:
    """Tests for table cell alignment detection."""

    def test_alignment_from_cell_and_paragraph(self, context):
        html = (
            "<table><tbody><tr>"
            '<td style="text-align:center">a</td>'
            '<td><p style="text-align:right">b</p></td>'
            "<td>c</td>"
            "</tr></tbody></table>"
        )
        tree = run(AlignmentPass(), html, context)
        cells = tree.children[0].children[0].children[0].children
        assert [cell.get("align") for cell in cells] == ["center", "right", None]

    def test_inconsistent_paragraphs(self, context):
        html = (
            '<table><tbody><tr><td><p style="text-align:left">a</p>'
            '<p style="text-align:center">b</p></td></tr></tbody></table>'
        )
        tree = run(AlignmentPass(), html, context)
        assert tree.children[0].children[0].children[0].children[0].get("align") is None

    def test_existing_align_kept(self, context):
        html = '<table><tbody><tr><td align="right" style="text-align:center">a</td></tr></tbody></table>'
        tree = run(AlignmentPass(), html, context)
        assert tree.children[0].children[0].children[0].children[0].get("align") == "right"


@pytest.mark.unit
class TestCleanupPass:
    """Tests for the final tidy-up."""

    def test_attributes_filtered_and_whitespace_collapsed(self, context):
        tree = run(CleanupPass(), '<p style="color:red" class="c" id="x">a   \n b</p>', context)
        assert to_html(tree) == "<p>a b</p>"

    def test_ids_kept_on_headings_and_anchors(self, context):
        tree = run(CleanupPass(), '<h1 id="h.1">T</h1><p><a id="b"></a>x</p>', context)
        assert to_html(tree) == '<h1 id="h.1">T</h1><p><a id="b"></a>x</p>'

    def test_empty_elements_removed(self, context):
        tree = run(CleanupPass(), "<p><span></span></p><p><br></p><p>x</p>", context)
        assert to_html(tree) == "<p>x</p>"

    def test_images_kept(self, context):
        tree = run(CleanupPass(), '<p><img src="a.png" width="10"></p>', context)
        assert to_html(tree) == '<p><img src="a.png"></p>'

    def test_pre_whitespace_preserved(self, context):
        tree = run(CleanupPass(), "<pre><code>a\n  b</code></pre>", context)
        assert tree.children[0].children[0].children[0].value == "a\n  b"

    def test_code_language_class_kept(self, context):
        tree = run(CleanupPass(), '<pre><code class="x language-py">a</code></pre>', context)
        assert tree.children[0].children[0].attributes == {"class": "language-py"}

    def test_fragment_markers_removed(self, context):
        tree = Root([Element("p", {}, [Text("a" + chr(0xE000) + "b")])])
        CleanupPass().transform(tree, context)
        assert to_html(tree) == "<p>ab</p>"

    def test_document_wrappers(self, context):
        html = "<html><head><title>t</title></head><body><style>p{}</style><p>x</p></body></html>"
        tree = run(CleanupPass(), html, context)
        assert to_html(tree) == "<p>x</p>"
