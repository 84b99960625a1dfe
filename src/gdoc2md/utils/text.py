#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/utils/text.py
"""Text processing utilities.

This module provides GitHub-compatible slug generation for heading anchors.
GitHub derives a heading's anchor by lowercasing its text, dropping
punctuation and symbols, and turning spaces into hyphens. Repeated slugs in
one document get ``-1``, ``-2``, ... suffixes.

Functions
---------
github_slug : Convert text to a GitHub-style anchor slug

Classes
-------
GithubSlugger : Stateful slug generator with duplicate handling

Examples
--------
    >>> github_slug("Hello, World!")
    'hello-world'
    >>> slugger = GithubSlugger()
    >>> slugger.slug("Intro"), slugger.slug("Intro")
    ('intro', 'intro-1')

"""

from __future__ import annotations

import re
import unicodedata

_WHITESPACE_PATTERN = re.compile(r"\s+")


def _keep_char(char: str) -> bool:
    if char in "-_ ":
        return True
    return unicodedata.category(char)[0] in ("L", "M", "N")


def github_slug(text: str) -> str:
    """Create a GitHub-style anchor slug from heading text.

    Parameters
    ----------
    text : str
        Heading text

    Returns
    -------
    str
        Lowercase slug. Letters, digits, ``-`` and ``_`` are kept, every other
        character is removed, and each space becomes a hyphen. Consecutive
        hyphens are not collapsed, matching GitHub's own anchors.

    Examples
    --------
        >>> github_slug("API Reference (v2.0)")
        'api-reference-v20'
        >>> github_slug("a -- b")
        'a----b'

    """
    lowered = text.lower()
    kept = "".join(char for char in lowered if _keep_char(char))
    return kept.replace(" ", "-")


class GithubSlugger:
    """Generate unique GitHub-style slugs for one document.

    Each instance remembers the slugs it has produced. A repeated slug gets a
    numeric suffix starting at ``-1``. Create a new instance per document.
    """

    def __init__(self) -> None:
        self._occurrences: dict[str, int] = {}

    def slug(self, text: str) -> str:
        """Return a unique slug for ``text`` and record it."""
        base = github_slug(text)
        result = base
        while result in self._occurrences:
            self._occurrences[base] += 1
            result = f"{base}-{self._occurrences[base]}"
        self._occurrences[result] = 0
        return result

    def reset(self) -> None:
        """Forget all previously generated slugs."""
        self._occurrences.clear()


def collapse_whitespace(text: str) -> str:
    """Replace each run of whitespace in ``text`` with a single space."""
    return _WHITESPACE_PATTERN.sub(" ", text)
