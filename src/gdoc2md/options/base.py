#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for conversion and renderer options.

This module defines the foundation classes for the option dataclasses
used throughout the gdoc2md conversion pipeline.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Iterable

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from gdoc2md.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        Raises
        ------
        ValidationError
            If a keyword does not name a field of this options class

        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ValidationError(
                f"Unknown option(s) for {type(self).__name__}: {', '.join(unknown)}",
                parameter_name=unknown[0],
                parameter_value=kwargs[unknown[0]],
            )
        return replace(self, **kwargs)

    def _validate_choice(self, name: str, allowed: Iterable[str]) -> None:
        """Raise ValidationError if field ``name`` is not one of ``allowed``."""
        value = getattr(self, name)
        allowed = tuple(allowed)
        if value not in allowed:
            raise ValidationError(
                f"Invalid value for {name}: {value!r}. Expected one of: {', '.join(allowed)}",
                parameter_name=name,
                parameter_value=value,
            )
