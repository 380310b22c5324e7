"""
Nominatim Location — Core Module
=================================
Typed, null-safe access to a single OpenStreetMap / Nominatim result.

A Nominatim result is loosely typed: coordinates arrive as strings,
identifiers as numbers or strings, and any key may be missing.
:class:`Location` keeps the decoded mapping untouched and coerces each field
lazily when it is read.  An absent or malformed field reads as ``None``;
accessors never raise.

Classes:
    BoundingBox     Immutable ``min_lat/max_lat/min_lon/max_lon`` record.
    Location        Read-only wrapper around one result mapping.

Usage::

    from nominatim_location.location import Location

    hit = Location({"lat": "51.5", "lon": "-0.12", "address": {"city": "London"}})
    hit.latitude        # 51.5
    hit.city            # "London"
    hit.postcode        # None
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping, TypeVar

from nominatim_location.exceptions import GeocodingError, InputValidationError

logger = logging.getLogger("nominatim_location.location")

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def _to_float(value: Any) -> float | None:
    """Coerce numbers and numeric strings to a finite ``float``; anything else → ``None``.

    Integers too large for a float, ``"nan"`` and ``"inf"`` all read as ``None``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_int(value: Any) -> int | None:
    """Coerce integers, integral floats and numeric strings to ``int``.

    ``"12345"`` and ``"12345.0"`` both give ``12345``; ``12.5`` gives ``None``
    rather than silently truncating an identifier.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            value = _to_float(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _to_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _to_mapping(value: Any) -> Mapping[str, Any] | None:
    return value if isinstance(value, Mapping) else None


def _is_sequence(value: Any) -> bool:
    # JSON arrays decode to lists; tuples are accepted for hand-built data.
    return isinstance(value, (list, tuple))


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BoundingBox:
    """Geographic extent of a place, as reported by Nominatim.

    Nominatim orders the ``boundingbox`` array as
    ``[min_lat, max_lat, min_lon, max_lon]``, which differs from the
    GeoJSON ``bbox`` order.  See :meth:`to_geojson_bbox`.

    Attributes:
        min_lat: Southern latitude boundary.
        max_lat: Northern latitude boundary.
        min_lon: Western longitude boundary.
        max_lon: Eastern longitude boundary.
    """

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def to_dict(self) -> dict[str, float]:
        """Return ``{"min_lat", "max_lat", "min_lon", "max_lon"}`` as a plain dict."""
        return {
            "min_lat": self.min_lat,
            "max_lat": self.max_lat,
            "min_lon": self.min_lon,
            "max_lon": self.max_lon,
        }

    def to_geojson_bbox(self) -> list[float]:
        """Return the extent in RFC 7946 order: ``[west, south, east, north]``."""
        return [self.min_lon, self.min_lat, self.max_lon, self.max_lat]


@dataclass(frozen=True)
class Location:
    """Read-only view over one raw Nominatim result.

    The mapping passed in is stored as-is and never reassigned; no
    validation happens at construction time.  Every accessor is a pure
    read of :attr:`data` and returns ``None`` when its key is missing or
    holds a value of the wrong shape.

    Attributes:
        data: The decoded result object (``lat``, ``lon``, ``address``, ...).

    Example::

        loc = Location({"place_id": "12345", "boundingbox": ["51.28", "51.69", "-0.51", "0.33"]})
        loc.place_id                # 12345
        loc.bounding_box.max_lon    # 0.33
    """

    data: Mapping[str, Any]

    # The wrapped dict is mutable, so instances are not hashable.
    __hash__ = None  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_response(cls, payload: Any) -> list["Location"]:
        """Build locations from a decoded Nominatim response body.

        ``/search`` returns a JSON array of results; ``/reverse`` and
        ``/details`` return a single object.  Both shapes are accepted.

        Args:
            payload: The JSON-decoded response body.

        Returns:
            One :class:`Location` per result object, in response order.
            Array entries that are not objects are skipped.

        Raises:
            GeocodingError: If *payload* is a Nominatim error object
                (``{"error": "..."}``).
            InputValidationError: If *payload* is neither an object nor
                an array.
        """
        if isinstance(payload, Mapping):
            if "error" in payload:
                error = payload["error"]
                if isinstance(error, Mapping):
                    error = error.get("message", error)
                raise GeocodingError(str(error))
            return [cls(payload)]

        if not isinstance(payload, list):
            raise InputValidationError(
                f"Expected a JSON object or array of results, got {type(payload).__name__}."
            )

        locations: list[Location] = []
        for index, entry in enumerate(payload):
            if not isinstance(entry, Mapping):
                logger.warning(
                    "Skipping result %d: expected an object, got %s",
                    index, type(entry).__name__,
                )
                continue
            locations.append(cls(entry))

        logger.debug("Parsed %d location(s) from response", len(locations))
        return locations

    # ------------------------------------------------------------------
    # Internal field getter
    # ------------------------------------------------------------------

    def _field(self, key: str, coerce: Callable[[Any], T | None]) -> T | None:
        value = self.data.get(key)
        if value is None:
            return None
        return coerce(value)

    # ------------------------------------------------------------------
    # Coordinates and identifiers
    # ------------------------------------------------------------------

    @property
    def latitude(self) -> float | None:
        return self._field("lat", _to_float)

    @property
    def longitude(self) -> float | None:
        return self._field("lon", _to_float)

    @property
    def coordinates(self) -> tuple[float, float] | None:
        """``(latitude, longitude)``, or ``None`` unless both are available."""
        lat, lon = self.latitude, self.longitude
        if lat is None or lon is None:
            return None
        return (lat, lon)

    @property
    def display_name(self) -> str | None:
        return self._field("display_name", _to_str)

    @property
    def place_id(self) -> int | None:
        """Nominatim's internal place identifier (not stable across imports)."""
        return self._field("place_id", _to_int)

    @property
    def osm_type(self) -> str | None:
        """OSM entity type: ``"node"``, ``"way"`` or ``"relation"``."""
        return self._field("osm_type", _to_str)

    @property
    def osm_id(self) -> int | None:
        return self._field("osm_id", _to_int)

    # ------------------------------------------------------------------
    # Classification and metadata
    # ------------------------------------------------------------------

    @property
    def place_class(self) -> str | None:
        """Main OSM tag key of the place (``class``), e.g. ``"amenity"``."""
        return self._field("class", _to_str)

    @property
    def place_type(self) -> str | None:
        """Main OSM tag value of the place (``type``), e.g. ``"hospital"``."""
        return self._field("type", _to_str)

    @property
    def importance(self) -> float | None:
        return self._field("importance", _to_float)

    @property
    def license(self) -> str | None:
        # Nominatim spells the key the British way.
        return self._field("licence", _to_str)

    # ------------------------------------------------------------------
    # Bounding box
    # ------------------------------------------------------------------

    @property
    def has_bounding_box(self) -> bool:
        """``True`` if ``boundingbox`` is present and is an array.

        Only the container type is checked; a short or non-numeric array
        still counts, although :attr:`bounding_box` will read as ``None``.
        """
        return _is_sequence(self.data.get("boundingbox"))

    @property
    def bounding_box(self) -> BoundingBox | None:
        """The place extent, or ``None`` if absent or malformed.

        Arrays with fewer than four entries, or with entries that are not
        numeric, are logged at WARNING level and read as ``None``.
        """
        raw = self.data.get("boundingbox")
        if not _is_sequence(raw):
            return None

        if len(raw) < 4:
            logger.warning(
                "Ignoring boundingbox of place_id=%s: expected 4 values, got %d",
                self.data.get("place_id"), len(raw),
            )
            return None

        min_lat, max_lat, min_lon, max_lon = (_to_float(v) for v in raw[:4])
        if min_lat is None or max_lat is None or min_lon is None or max_lon is None:
            logger.warning(
                "Ignoring boundingbox of place_id=%s: non-numeric value in %r",
                self.data.get("place_id"), list(raw[:4]),
            )
            return None

        return BoundingBox(
            min_lat=min_lat, max_lat=max_lat, min_lon=min_lon, max_lon=max_lon
        )

    # ------------------------------------------------------------------
    # Address
    # ------------------------------------------------------------------

    @property
    def address(self) -> Mapping[str, Any] | None:
        """The nested ``address`` object as returned by the provider."""
        return self._field("address", _to_mapping)

    def address_component(self, component: str) -> str | None:
        """Return one address part by its Nominatim key.

        Args:
            component: Key inside ``address`` (e.g. ``"suburb"``,
                ``"postcode"``, ``"ISO3166-2-lvl4"``).

        Returns:
            The component string, or ``None`` if the address or the
            component is missing.
        """
        address = self.address
        if address is None:
            return None
        return _to_str(address.get(component))

    @property
    def house_number(self) -> str | None:
        return self.address_component("house_number")

    @property
    def street(self) -> str | None:
        return self.address_component("road")

    @property
    def city(self) -> str | None:
        return self.address_component("city")

    @property
    def state(self) -> str | None:
        return self.address_component("state")

    @property
    def postcode(self) -> str | None:
        return self.address_component("postcode")

    @property
    def country(self) -> str | None:
        return self.address_component("country")

    @property
    def country_code(self) -> str | None:
        """ISO 3166-1 alpha-2 code, upper-cased (Nominatim sends lower case)."""
        code = self.address_component("country_code")
        return code.upper() if code else None

    @property
    def borough(self) -> str | None:
        return self.address_component("borough")

    # ------------------------------------------------------------------
    # Raw access and export
    # ------------------------------------------------------------------

    @property
    def raw_data(self) -> Mapping[str, Any]:
        """The mapping passed to the constructor, unmodified."""
        return self.data

    def to_record(self) -> dict[str, Any]:
        """Flatten every typed accessor into a single-level dict.

        Used as the row for tabular export and as GeoJSON feature
        properties.  Bounding-box columns are ``None`` when no usable
        bounding box is present.
        """
        bbox = self.bounding_box
        return {
            "place_id": self.place_id,
            "osm_type": self.osm_type,
            "osm_id": self.osm_id,
            "display_name": self.display_name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "class": self.place_class,
            "type": self.place_type,
            "importance": self.importance,
            "licence": self.license,
            "house_number": self.house_number,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "postcode": self.postcode,
            "country": self.country,
            "country_code": self.country_code,
            "borough": self.borough,
            "min_lat": bbox.min_lat if bbox else None,
            "max_lat": bbox.max_lat if bbox else None,
            "min_lon": bbox.min_lon if bbox else None,
            "max_lon": bbox.max_lon if bbox else None,
        }

    def to_geojson_feature(self, extra_props: dict[str, Any] | None = None) -> dict[str, Any]:
        """Convert this location to a GeoJSON Feature dict.

        Args:
            extra_props: Additional properties merged over the flat record
                         from :meth:`to_record`.

        Returns:
            A GeoJSON Feature with a ``Point`` geometry, or ``None``
            geometry when either coordinate is missing.  A ``bbox`` member
            is added when :attr:`bounding_box` is available.
        """
        props = self.to_record()
        if extra_props:
            props.update(extra_props)

        coords = self.coordinates
        geometry = (
            {"type": "Point", "coordinates": [coords[1], coords[0]]}
            if coords is not None
            else None
        )
        feature: dict[str, Any] = {"type": "Feature", "geometry": geometry, "properties": props}

        bbox = self.bounding_box
        if bbox is not None:
            feature["bbox"] = bbox.to_geojson_bbox()
        return feature

    def __repr__(self) -> str:
        return (
            f"Location(display_name={self.display_name!r}, "
            f"lat={self.latitude}, lon={self.longitude})"
        )
