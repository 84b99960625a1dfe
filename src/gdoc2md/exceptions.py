#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the gdoc2md library.

This module defines the exception classes raised while converting clipboard
HTML and its slice clip metadata into Markdown. Each failure category can be
caught on its own, and all of them share a common base class.

Exception Hierarchy
-------------------
- Gdoc2MdError (base exception)

  - ValidationError (parameter/option validation)

  - MetadataError (slice clip metadata problems)
    - MetadataParseError (metadata is not valid JSON)
    - MetadataValidationError (metadata lacks a required field)

  - RangeMappingError (metadata text no longer matches the HTML tree)

  - TransformError (a normalization pass failed unexpectedly)

"""

from __future__ import annotations

from typing import Any


class Gdoc2MdError(Exception):
    """Base exception class for all gdoc2md-specific errors.

    Catching this will catch every error the library raises on purpose.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Gdoc2MdError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class MetadataError(Gdoc2MdError):
    """Base class for problems with slice clip metadata."""

    pass


class MetadataParseError(MetadataError):
    """Exception raised when slice clip metadata is not valid JSON.

    The underlying ``json.JSONDecodeError`` is available as ``original_error``.
    """

    pass


class MetadataValidationError(MetadataError):
    """Exception raised when slice clip metadata does not have the expected shape.

    Parameters
    ----------
    message : str
        Description of the problem
    field_path : str, optional
        Dotted path of the missing or mistyped field (e.g. ``resolved.dsl_spacers``)
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, field_path: str | None = None, original_error: Exception | None = None):
        """Initialize the validation error with the offending field path."""
        super().__init__(message, original_error=original_error)
        self.field_path = field_path


class RangeMappingError(Gdoc2MdError):
    """Exception raised when the HTML tree text diverges from the spacer text.

    Range mapping cannot continue past the point of divergence. The conversion
    API recovers from this error by skipping the remaining metadata enrichment.

    Parameters
    ----------
    message : str
        Description of the mismatch
    offset : int
        Spacer text offset where the mismatch was found
    expected : str
        Spacer text at that offset
    actual : str
        Text node content that failed to match

    """

    def __init__(self, message: str, offset: int = 0, expected: str = "", actual: str = ""):
        """Initialize the mapping error with mismatch details."""
        super().__init__(message)
        self.offset = offset
        self.expected = expected
        self.actual = actual


class TransformError(Gdoc2MdError):
    """Exception raised when a normalization pass fails.

    Parameters
    ----------
    message : str
        Description of the failure
    pass_name : str, optional
        Name of the pass that failed
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, pass_name: str | None = None, original_error: Exception | None = None):
        """Initialize the transform error with the failing pass name."""
        super().__init__(message, original_error=original_error)
        self.pass_name = pass_name


__all__ = [
    "Gdoc2MdError",
    "ValidationError",
    "MetadataError",
    "MetadataParseError",
    "MetadataValidationError",
    "RangeMappingError",
    "TransformError",
]
