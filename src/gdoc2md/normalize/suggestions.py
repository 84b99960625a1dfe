#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/normalize/suggestions.py
"""Resolve suggested edits according to the configured suggestion mode."""

from __future__ import annotations

import logging

from gdoc2md.constants import SUGGESTION_ELEMENTS
from gdoc2md.normalize.base import NormalizeContext, TreePass
from gdoc2md.tree.nodes import Element, Node, Parent, Root

logger = logging.getLogger(__name__)

# For each mode: what happens to (insertions, deletions).
_ACTIONS = {
    "hide": ("remove", "remove"),
    "accept": ("unwrap", "remove"),
    "reject": ("remove", "unwrap"),
}


def is_suggestion(node: Node) -> bool:
    """Return True if ``node`` is an ``ins``/``del`` element marking a suggested edit."""
    return isinstance(node, Element) and node.tag in SUGGESTION_ELEMENTS and "data-suggestion-id" in node.attributes


class SuggestionPass(TreePass):
    """Show, hide, accept or reject suggested edits.

    - ``show`` keeps the ``ins``/``del`` wrappers
    - ``hide`` removes every suggestion along with its content
    - ``accept`` removes deletions and unwraps insertions
    - ``reject`` removes insertions and unwraps deletions
    """

    name = "suggestions"

    def transform(self, tree: Root, context: NormalizeContext) -> None:
        mode = context.options.suggestions
        if mode == "show":
            return
        insert_action, delete_action = _ACTIONS[mode]
        counts = {"removed": 0, "unwrapped": 0}
        self._resolve(tree, insert_action, delete_action, counts)
        logger.debug("Suggestions (%s): removed %d, unwrapped %d", mode, counts["removed"], counts["unwrapped"])

    def _resolve(self, parent: Parent, insert_action: str, delete_action: str, counts: dict[str, int]) -> None:
        index = 0
        while index < len(parent.children):
            child = parent.children[index]
            if not isinstance(child, Element):
                index += 1
                continue
            if is_suggestion(child):
                action = insert_action if child.tag == "ins" else delete_action
                if action == "remove":
                    del parent.children[index]
                    counts["removed"] += 1
                    continue
                # Unwrapped children are examined in place, they may hold nested suggestions
                parent.children[index : index + 1] = child.children
                counts["unwrapped"] += 1
                continue
            self._resolve(child, insert_action, delete_action, counts)
            index += 1
