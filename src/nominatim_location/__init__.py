"""
Nominatim Location
===================
Typed, null-safe access to OpenStreetMap / Nominatim geocoding results,
plus a small tool for exporting saved responses to GeoJSON or CSV.

Public API::

    from nominatim_location import Location, BoundingBox, LocationExporter
"""

from nominatim_location.exceptions import (
    GeocodingError,
    InputValidationError,
    NominatimLocationError,
    OutputWriteError,
)
from nominatim_location.exporter import ExportConfig, ExportResult, LocationExporter
from nominatim_location.location import BoundingBox, Location

__all__ = [
    "Location",
    "BoundingBox",
    "LocationExporter",
    "ExportConfig",
    "ExportResult",
    "NominatimLocationError",
    "InputValidationError",
    "GeocodingError",
    "OutputWriteError",
]
__version__ = "1.0.0"
