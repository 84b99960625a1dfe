#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/normalize/pipeline.py
"""Ordered execution of the normalization passes.

The pipeline is an explicit list of :class:`TreePass` instances run in
order against one tree. The default list is::

    suggestions -> lists -> checklists -> tables -> styles -> code_blocks
    -> whitespace -> alignment -> cleanup

Passes can be inserted or removed by name without subclassing.

Examples
--------
Skip whitespace relocation:

    >>> normalizer = HtmlNormalizer()
    >>> normalizer.remove_pass("whitespace")
    >>> normalizer.normalize(tree, ConversionOptions())

"""

from __future__ import annotations

import logging
from typing import Sequence

from gdoc2md.exceptions import Gdoc2MdError, TransformError, ValidationError
from gdoc2md.normalize.alignment import AlignmentPass
from gdoc2md.normalize.base import NormalizeContext, TreePass
from gdoc2md.normalize.cleanup import CleanupPass
from gdoc2md.normalize.code_blocks import CodeBlockPass
from gdoc2md.normalize.lists import ChecklistPass, NestedListPass
from gdoc2md.normalize.styles import InlineStylePass
from gdoc2md.normalize.suggestions import SuggestionPass
from gdoc2md.normalize.tables import TablePass
from gdoc2md.normalize.whitespace import WhitespacePass
from gdoc2md.options.conversion import ConversionOptions
from gdoc2md.tree.nodes import Root
from gdoc2md.tree.serialize import format_tree
from gdoc2md.utils.css import StyleResolver

logger = logging.getLogger(__name__)


def default_passes() -> list[TreePass]:
    """Return fresh instances of the built-in passes in their standard order."""
    return [
        SuggestionPass(),
        NestedListPass(),
        ChecklistPass(),
        TablePass(),
        InlineStylePass(),
        CodeBlockPass(),
        WhitespacePass(),
        AlignmentPass(),
        CleanupPass(),
    ]


class HtmlNormalizer:
    """Run an ordered list of normalization passes.

    Parameters
    ----------
    passes : sequence of TreePass, optional
        Passes to run, in order. Defaults to :func:`default_passes`.

    """

    def __init__(self, passes: Sequence[TreePass] | None = None):
        self._passes: list[TreePass] = list(passes) if passes is not None else default_passes()

    @property
    def passes(self) -> tuple[TreePass, ...]:
        """Return the passes in execution order."""
        return tuple(self._passes)

    @property
    def pass_names(self) -> list[str]:
        """Return the names of the passes in execution order."""
        return [tree_pass.name for tree_pass in self._passes]

    def _index_of(self, name: str) -> int:
        for index, tree_pass in enumerate(self._passes):
            if tree_pass.name == name:
                return index
        raise ValidationError(f"No normalization pass named {name!r}", parameter_name="name", parameter_value=name)

    def add_pass(self, tree_pass: TreePass, before: str | None = None, after: str | None = None) -> None:
        """Insert a pass.

        Parameters
        ----------
        tree_pass : TreePass
            Pass to insert
        before : str, optional
            Name of the pass to insert in front of
        after : str, optional
            Name of the pass to insert behind. Without ``before`` or
            ``after`` the pass is appended.

        Raises
        ------
        ValidationError
            If both ``before`` and ``after`` are given, or a named pass does not exist

        """
        if before is not None and after is not None:
            raise ValidationError("Specify at most one of 'before' and 'after'")
        if before is not None:
            self._passes.insert(self._index_of(before), tree_pass)
        elif after is not None:
            self._passes.insert(self._index_of(after) + 1, tree_pass)
        else:
            self._passes.append(tree_pass)

    def remove_pass(self, name: str) -> TreePass:
        """Remove the pass called ``name`` and return it.

        Raises
        ------
        ValidationError
            If no pass has that name

        """
        return self._passes.pop(self._index_of(name))

    def normalize(self, tree: Root, options: ConversionOptions | None = None) -> Root:
        """Run every pass against ``tree`` in place and return it.

        Raises
        ------
        TransformError
            If a pass fails with an exception that is not a :class:`Gdoc2MdError`

        """
        context = NormalizeContext(options=options or ConversionOptions(), styles=StyleResolver())
        for tree_pass in self._passes:
            logger.debug(f"Running normalization pass: {tree_pass.name}")
            try:
                tree_pass.transform(tree, context)
            except Gdoc2MdError:
                raise
            except Exception as e:
                logger.error(f"Normalization pass {tree_pass.name!r} failed: {e}", exc_info=True)
                raise TransformError(
                    f"Normalization pass {tree_pass.name!r} failed: {e}", pass_name=tree_pass.name, original_error=e
                ) from e
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Normalized tree:\n{format_tree(tree)}")
        return tree
