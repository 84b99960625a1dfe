#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gdoc2md/parsers/slice_clip.py
"""Parser for slice clip metadata.

A slice clip is the editor's internal clipboard format. It travels next to
the HTML payload and carries what the HTML leaves out: suggested edits,
bookmarks, heading ids and code block languages. Everything in it is indexed
by character offset into ``resolved.dsl_spacers``, a flat plain-text copy of
the selection (the spacer text).

Only the handful of fields the converter needs are modelled. The full JSON is
kept on :attr:`SliceClip.raw`.

"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from gdoc2md.exceptions import MetadataParseError, MetadataValidationError

logger = logging.getLogger(__name__)

RawSliceClip = Union[str, bytes, Mapping[str, Any]]


@dataclass
class SliceClip:
    """Validated slice clip metadata.

    Parameters
    ----------
    spacers : str
        The spacer text every offset refers to
    style_slices : list of dict
        Style slices, each with ``stsl_type`` and a position-indexed
        ``stsl_styles`` list
    entity_position_map : dict
        Position-indexed entity tables (bookmarks live under ``bookmark``)
    suggested_insertions : list, optional
        Position-indexed suggestion id lists for insertions
    suggested_deletions : list, optional
        Position-indexed suggestion id lists for deletions
    raw : dict
        The unwrapped JSON document

    """

    spacers: str
    style_slices: list[dict[str, Any]] = field(default_factory=list)
    entity_position_map: dict[str, Any] = field(default_factory=dict)
    suggested_insertions: list[Any] | None = None
    suggested_deletions: list[Any] | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def text(self) -> str:
        """Return the spacer text."""
        return self.spacers

    def get_styles(self, style_type: str) -> list[Any]:
        """Return the position-indexed styles of the first slice of ``style_type``."""
        for style_slice in self.style_slices:
            if isinstance(style_slice, Mapping) and style_slice.get("stsl_type") == style_type:
                styles = style_slice.get("stsl_styles")
                return styles if isinstance(styles, list) else []
        return []


def _loads(text: str | bytes, what: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MetadataParseError(f"Invalid JSON in {what}: {e}", original_error=e) from e


def _suggestion_table(resolved: Mapping[str, Any], key: str) -> list[Any] | None:
    table = resolved.get(key)
    if table is None:
        return None
    if not isinstance(table, Mapping) or not isinstance(table.get("sgsl_sugg"), list):
        raise MetadataValidationError(
            f"Slice clip field resolved.{key}.sgsl_sugg must be an array", field_path=f"resolved.{key}.sgsl_sugg"
        )
    return table["sgsl_sugg"]


def parse_slice_clip(raw: RawSliceClip | SliceClip) -> SliceClip:
    """Parse and validate slice clip metadata.

    Parameters
    ----------
    raw : str, bytes, mapping or SliceClip
        JSON text or an already decoded object. The document may be wrapped
        in a ``{"data": ...}`` envelope whose ``data`` is itself JSON text or
        an object; the envelope is removed transparently.

    Returns
    -------
    SliceClip
        The validated metadata

    Raises
    ------
    MetadataParseError
        If the JSON (or the JSON inside the envelope) is malformed
    MetadataValidationError
        If ``resolved.dsl_entitypositionmap`` is not an object,
        ``resolved.dsl_spacers`` is not a string, or
        ``resolved.dsl_styleslices`` is not an array

    Examples
    --------
        >>> clip = parse_slice_clip('{"resolved": {"dsl_spacers": "Hi", '
        ...                         '"dsl_styleslices": [], "dsl_entitypositionmap": {}}}')
        >>> clip.text
        'Hi'

    """
    if isinstance(raw, SliceClip):
        return raw

    document: Any = _loads(raw, "slice clip") if isinstance(raw, (str, bytes)) else raw

    if isinstance(document, Mapping) and document.get("data"):
        data = document["data"]
        document = _loads(data, "slice clip data") if isinstance(data, (str, bytes)) else data

    if not isinstance(document, Mapping):
        raise MetadataValidationError(
            f"Slice clip must be a JSON object, got {type(document).__name__}", field_path=""
        )

    resolved = document.get("resolved")
    if not isinstance(resolved, Mapping):
        raise MetadataValidationError(
            "Document does not appear to be a slice clip: missing object field 'resolved'", field_path="resolved"
        )
    if not isinstance(resolved.get("dsl_entitypositionmap"), Mapping):
        raise MetadataValidationError(
            "Slice clip field resolved.dsl_entitypositionmap must be an object",
            field_path="resolved.dsl_entitypositionmap",
        )
    if not isinstance(resolved.get("dsl_spacers"), str):
        raise MetadataValidationError(
            "Slice clip field resolved.dsl_spacers must be a string", field_path="resolved.dsl_spacers"
        )
    if not isinstance(resolved.get("dsl_styleslices"), list):
        raise MetadataValidationError(
            "Slice clip field resolved.dsl_styleslices must be an array", field_path="resolved.dsl_styleslices"
        )

    clip = SliceClip(
        spacers=resolved["dsl_spacers"],
        style_slices=list(resolved["dsl_styleslices"]),
        entity_position_map=dict(resolved["dsl_entitypositionmap"]),
        suggested_insertions=_suggestion_table(resolved, "dsl_suggestedinsertions"),
        suggested_deletions=_suggestion_table(resolved, "dsl_suggesteddeletions"),
        raw=dict(document),
    )
    logger.debug(
        "Parsed slice clip: %d spacer characters, %d style slices", len(clip.spacers), len(clip.style_slices)
    )
    return clip
