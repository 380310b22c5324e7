"""
Nominatim Location — Exception Hierarchy
=========================================
Errors raised by the response helpers, validators, and the export tool.
The :class:`~nominatim_location.location.Location` accessors never raise
these; a missing or malformed field always reads as ``None``.

Hierarchy::

    NominatimLocationError               ← catch-all base
    ├── InputValidationError             ← missing file, bad extension, bad JSON
    ├── GeocodingError                   ← provider returned an error payload
    └── OutputWriteError                 ← cannot write to output path

Usage::

    from nominatim_location.exceptions import GeocodingError

    raise GeocodingError("Nominatim reported: Unable to geocode")
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class NominatimLocationError(Exception):
    """Base exception for the package.

    Catch this to handle any package-specific error without caring about
    the exact subtype.

    Args:
        message: Human-readable description of the error.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


class InputValidationError(NominatimLocationError):
    """Raised when an input file or payload fails pre-processing checks."""


# ---------------------------------------------------------------------------
# Geocoding
# ---------------------------------------------------------------------------


class GeocodingError(NominatimLocationError):
    """Raised when a saved provider response is an error payload.

    Nominatim answers an unresolvable ``/reverse`` query with
    ``{"error": "Unable to geocode"}`` instead of a result object.

    Args:
        reason: The provider's error text.
        provider: Name of the geocoding service.
    """

    def __init__(self, reason: str, provider: str = "Nominatim") -> None:
        super().__init__(f"{provider} reported an error: {reason}")
        self.reason: str = reason
        self.provider: str = provider


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class OutputWriteError(NominatimLocationError):
    """Raised when the export file cannot be written.

    Args:
        output_path: The path that could not be written.
        reason: The underlying OS error message.
    """

    def __init__(self, output_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to write output to '{output_path}': {reason}"
        )
        self.output_path: str = output_path
        self.reason: str = reason
