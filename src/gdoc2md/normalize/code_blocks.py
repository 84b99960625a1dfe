#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/normalize/code_blocks.py
"""Merge consecutive all-code paragraphs into preformatted code blocks.

Code copied from the editor arrives as a series of paragraphs, one per
line, whose text is entirely inline ``<code>`` (either from a monospace font
or from a code snippet in the slice clip). This pass joins each run of such
paragraphs into a single ``<pre><code>`` block.

"""

from __future__ import annotations

import logging

from gdoc2md.normalize.base import NormalizeContext, TreePass, contains_replaced_element, is_whitespace_text
from gdoc2md.tree.nodes import Element, Node, Parent, Root, Text

logger = logging.getLogger(__name__)

# Block elements that can be absorbed into a code block.
_LINE_ELEMENTS = frozenset({"p", "div"})

_NBSP = chr(0xA0)


def _all_text_code(node: Node, in_code: bool = False) -> bool | None:
    """Return whether all non-whitespace text under ``node`` is inside ``code``.

    Returns None when the node holds no non-whitespace text at all.
    """
    if isinstance(node, Text):
        if not node.value.strip():
            return None
        return in_code
    if isinstance(node, Element) and node.tag == "code":
        in_code = True
    result: bool | None = None
    for child in node.children:
        child_result = _all_text_code(child, in_code)
        if child_result is False:
            return False
        if child_result:
            result = True
    return result


def _code_block_id(node: Node) -> str | None:
    """Return the first ``data-code-block-id`` found under ``node``."""
    if isinstance(node, Text):
        return None
    if isinstance(node, Element) and "data-code-block-id" in node.attributes:
        return node.attributes["data-code-block-id"]
    for child in node.children:
        found = _code_block_id(child)
        if found is not None:
            return found
    return None


def _language(node: Node) -> str | None:
    if isinstance(node, Text):
        return None
    if isinstance(node, Element) and node.get("data-language"):
        return node.get("data-language")
    for child in node.children:
        found = _language(child)
        if found:
            return found
    return None


def _code_text(node: Node) -> str:
    if isinstance(node, Text):
        return node.value.replace(_NBSP, " ")
    if isinstance(node, Element) and node.tag == "br":
        return "\n"
    return "".join(_code_text(child) for child in node.children)


def is_code_line(node: Node) -> bool:
    """Return True if ``node`` is a paragraph-like block holding nothing but code."""
    return (
        isinstance(node, Element)
        and node.tag in _LINE_ELEMENTS
        and not contains_replaced_element(node)
        and _all_text_code(node) is True
    )


class CodeBlockPass(TreePass):
    """Replace runs of code-only paragraphs with one ``pre > code`` element.

    Whitespace text between the paragraphs does not interrupt a run. A run
    ends at any other content, and is split wherever the code block id
    changes, so two adjacent snippets stay separate blocks. The language of
    the snippet becomes a ``language-*`` class on the ``code`` element.
    """

    name = "code_blocks"

    def transform(self, tree: Root, context: NormalizeContext) -> None:
        self._merge(tree)

    def _merge(self, parent: Parent) -> None:
        runs: list[list[int]] = []
        current: list[int] = []
        current_id: str | None = None

        for index, child in enumerate(parent.children):
            if is_whitespace_text(child):
                continue
            if is_code_line(child):
                block_id = _code_block_id(child)
                if current and block_id != current_id:
                    runs.append(current)
                    current = []
                current.append(index)
                current_id = block_id
                continue
            if current:
                runs.append(current)
                current = []
            if isinstance(child, Element) and child.tag != "pre":
                self._merge(child)
        if current:
            runs.append(current)

        for run in reversed(runs):
            blocks = [parent.children[index] for index in run]
            text = "\n".join(_code_text(block) for block in blocks)
            attributes = {}
            language = next((found for found in map(_language, blocks) if found), None)
            if language:
                attributes["class"] = f"language-{language}"
            pre = Element("pre", {}, [Element("code", attributes, [Text(text)])])
            parent.children[run[0] : run[-1] + 1] = [pre]
            logger.debug("Merged %d line(s) into a code block", len(run))
