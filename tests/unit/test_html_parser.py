#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_html_parser.py
"""Unit tests for HTML parsing into the generic tree and its serialization."""

import pytest

from gdoc2md.exceptions import ValidationError
from gdoc2md.parsers import parse_html, unwrap_clipboard_envelope
from gdoc2md.tree import (
    Element,
    Root,
    Text,
    find_all,
    format_tree,
    is_element,
    text_content,
    to_html,
    unwrap,
    walk_with_parents,
    wrap_children,
)

CLIPBOARD_HTML = (
    '<meta charset="utf-8">'
    '<b style="font-weight:normal;" id="docs-internal-guid-1234-abcd">'
    '<p dir="ltr"><span style="font-weight:700">Hello</span></p>'
    "</b>"
    '<br class="Apple-interchange-newline">'
)


@pytest.mark.unit
class TestParseHtml:
    """Tests for parse_html."""

    def test_simple_document(self):
        root = parse_html("<p>Hello <b>world</b></p>")
        assert isinstance(root, Root)
        assert len(root.children) == 1
        p = root.children[0]
        assert is_element(p, "p")
        assert isinstance(p.children[0], Text)
        assert p.children[0].value == "Hello "
        assert is_element(p.children[1], "b")
        assert text_content(p) == "Hello world"

    def test_attributes_are_strings(self):
        root = parse_html('<p class="a b" id="x">t</p>')
        assert root.children[0].attributes == {"class": "a b", "id": "x"}
        assert root.children[0].has_class("b")

    def test_comments_and_doctype_dropped(self):
        root = parse_html("<!DOCTYPE html><p>a<!-- note -->b</p>")
        assert len(root.children) == 1
        assert [child.value for child in root.children[0].children] == ["a", "b"]

    def test_entities_decoded(self):
        root = parse_html("<p>a &amp; b&nbsp;c</p>")
        assert text_content(root) == "a & b" + chr(0xA0) + "c"

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_html(b"<p>bytes</p>")
        assert exc_info.value.parameter_name == "html"

    def test_clipboard_envelope_removed(self):
        root = parse_html(CLIPBOARD_HTML)
        assert len(root.children) == 1
        p = root.children[0]
        assert is_element(p, "p")
        assert text_content(p) == "Hello"

    def test_envelope_kept_when_disabled(self):
        root = parse_html(CLIPBOARD_HTML, unwrap_envelope=False)
        assert [child.tag for child in root.children] == ["meta", "b", "br"]

    def test_unwrap_envelope_nested(self):
        wrapper = Element("span", {"id": "docs-internal-guid-x"}, [Text("inner")])
        root = Root([Element("div", {}, [wrapper, Element("style")])])
        unwrap_clipboard_envelope(root)
        div = root.children[0]
        assert len(div.children) == 1
        assert div.children[0].value == "inner"


@pytest.mark.unit
class TestTreeHelpers:
    """Tests for the generic tree helpers."""

    def test_unwrap(self):
        inner = Element("span", {}, [Text("a"), Text("b")])
        parent = Element("p", {}, [Text("x"), inner])
        assert unwrap(parent, 1) == 2
        assert [child.value for child in parent.children] == ["x", "a", "b"]

    def test_wrap_children(self):
        p = Element("p", {}, [Text("a"), Text("b")])
        wrapper = wrap_children(p, "em", {"class": "c"})
        assert p.children == [wrapper]
        assert wrapper.tag == "em"
        assert text_content(wrapper) == "ab"

    def test_walk_with_parents(self):
        text = Text("t")
        span = Element("span", {}, [text])
        root = Root([Element("p", {}, [span])])
        pairs = {id(node): parents for node, parents in walk_with_parents(root)}
        assert [getattr(p, "tag", "#root") for p in pairs[id(text)]] == ["#root", "p", "span"]

    def test_find_all(self):
        root = parse_html("<p><a href='1'>x</a><span><a href='2'>y</a></span></p>")
        links = find_all(root, lambda node: is_element(node, "a"))
        assert [link.get("href") for link in links] == ["1", "2"]

    def test_nodes_compare_by_identity(self):
        assert Text("a") != Text("a")
        assert Element("p") != Element("p")


@pytest.mark.unit
class TestSerialization:
    """Tests for to_html and format_tree."""

    def test_to_html_escapes_text_and_attributes(self):
        element = Element("a", {"href": 'x"y', "title": "t"}, [Text("1 < 2 & 3")])
        assert to_html(element) == '<a href="x&quot;y" title="t">1 &lt; 2 &amp; 3</a>'

    def test_void_and_boolean_attributes(self):
        element = Element("p", {}, [Element("input", {"type": "checkbox", "checked": ""}), Element("br")])
        assert to_html(element) == '<p><input type="checkbox" checked><br></p>'

    def test_root_serializes_children(self):
        assert to_html(Root([Element("p", {}, [Text("a")]), Element("hr")])) == "<p>a</p><hr>"

    def test_round_trip_through_parser(self):
        html = '<p>a <em>b</em> <a href="#x">c</a></p><ul><li>d</li></ul>'
        assert to_html(parse_html(html)) == html

    def test_format_tree(self):
        root = Root([Element("p", {"id": "x"}, [Text("hi")])])
        assert format_tree(root) == "#root\n  <p id=\"x\">\n    #text 'hi'"
