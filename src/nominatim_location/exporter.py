"""
Nominatim Location — Export Tool
=================================
Converts a saved Nominatim response (``.json``) into a GeoJSON
FeatureCollection or a flat CSV table, one row/feature per result.

Classes:
    ExportConfig        Output settings for the exporter.
    ExportResult        Immutable summary of a completed run.
    LocationExporter    Primary tool class (inherits FileTool).

Typical usage::

    from pathlib import Path
    from nominatim_location.exporter import ExportConfig, LocationExporter

    tool = LocationExporter(
        input_path=Path("responses/search_london.json"),
        output_path=Path("output/london.csv"),
        config=ExportConfig(output_format="csv"),
    )
    tool.run()
    print(tool.result.summary())
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

import pandas as pd

from nominatim_location.base_tool import FileTool
from nominatim_location.exceptions import InputValidationError, OutputWriteError
from nominatim_location.location import Location
from nominatim_location.validators import Validators

logger = logging.getLogger("nominatim_location.exporter")

_OUTPUT_EXTENSIONS: dict[str, list[str]] = {
    "geojson": [".geojson", ".json"],
    "csv": [".csv"],
}

_INTEGER_COLUMNS = ("place_id", "osm_id")


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class ExportConfig:
    """Configuration bundle for :class:`LocationExporter`.

    Attributes:
        output_format: ``"geojson"`` for a FeatureCollection or ``"csv"``
                       for one row per result.
        skip_without_coordinates: When ``True``, results missing ``lat``
                       or ``lon`` are dropped instead of written with
                       ``null`` geometry / empty coordinate cells.
    """

    output_format: Literal["geojson", "csv"] = "geojson"
    skip_without_coordinates: bool = False


@dataclass(frozen=True)
class ExportResult:
    """Immutable container for a completed export run.

    Attributes:
        locations_read: Result objects found in the input response.
        locations_written: Features / rows written to the output file.
        locations_skipped: Results dropped for missing coordinates.
        output_path: Path where the export was written.
    """

    locations_read: int
    locations_written: int
    locations_skipped: int
    output_path: Path

    def summary(self) -> str:
        """Return a human-readable summary string for logging or display."""
        return (
            f"Exported {self.locations_written}/{self.locations_read} locations "
            f"({self.locations_skipped} skipped) | Output: {self.output_path}"
        )


# ---------------------------------------------------------------------------
# Main tool class
# ---------------------------------------------------------------------------


class LocationExporter(FileTool):
    """Export every result of a saved Nominatim response to GeoJSON or CSV.

    Inherits the Template Method pipeline from
    :class:`~nominatim_location.base_tool.FileTool`:
    ``validate_inputs`` → ``process`` → ``_report_success``.

    Args:
        input_path: Path to the ``.json`` response file.
        output_path: Path for the ``.geojson`` / ``.csv`` output.
        config: An :class:`ExportConfig`.  Defaults to GeoJSON output.
        verbose: Enable DEBUG-level logging.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        config: ExportConfig | None = None,
        *,
        verbose: bool = False,
    ) -> None:
        super().__init__(input_path, output_path, verbose=verbose)
        self.config: ExportConfig = config or ExportConfig()

        self._result: ExportResult | None = None

    # ------------------------------------------------------------------
    # FileTool abstract method implementations
    # ------------------------------------------------------------------

    def validate_inputs(self) -> None:
        """Validate the input file and output target before exporting.

        Raises:
            InputValidationError: If the input is missing or not ``.json``,
                the output extension does not match the format, or the
                format itself is unknown.
            OutputWriteError: If the output directory cannot be created.
        """
        if self.config.output_format not in _OUTPUT_EXTENSIONS:
            raise InputValidationError(
                f"Unsupported output format '{self.config.output_format}'. "
                f"Choose one of: {', '.join(_OUTPUT_EXTENSIONS)}"
            )

        Validators.assert_file_exists(self.input_path)
        Validators.assert_supported_extension(self.input_path, [".json"])
        Validators.assert_supported_extension(
            self.output_path, _OUTPUT_EXTENSIONS[self.config.output_format]
        )
        Validators.assert_output_dir_writable(self.output_path)
        logger.debug("Inputs validated successfully.")

    def process(self) -> None:
        """Load the response, wrap each result, and write the export.

        Raises:
            InputValidationError: If the file is not valid JSON or not a
                Nominatim result object/array.
            GeocodingError: If the file holds a Nominatim error payload.
            OutputWriteError: If writing the output file fails.
        """
        locations = Location.from_response(self._load_payload())
        total = len(locations)
        logger.info("Loaded %d location(s) from %s", total, self.input_path.name)

        kept: list[Location] = []
        for loc in locations:
            if self.config.skip_without_coordinates and loc.coordinates is None:
                logger.warning("  ✗ Skipped (no coordinates): %s", loc.display_name or loc.place_id)
                continue
            kept.append(loc)

        try:
            if self.config.output_format == "csv":
                self._write_csv(kept)
            else:
                self._write_geojson(kept)
        except OSError as exc:
            raise OutputWriteError(str(self.output_path), str(exc)) from exc

        self._result = ExportResult(
            locations_read=total,
            locations_written=len(kept),
            locations_skipped=total - len(kept),
            output_path=self.output_path,
        )
        logger.info(self._result.summary())

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _load_payload(self) -> Any:
        try:
            text = self.input_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InputValidationError(
                f"Cannot read '{self.input_path.name}': {exc}"
            ) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise InputValidationError(
                f"'{self.input_path.name}' is not valid JSON: {exc}"
            ) from exc

    def _write_geojson(self, locations: list[Location]) -> None:
        geojson: dict[str, Any] = {
            "type": "FeatureCollection",
            "features": [loc.to_geojson_feature() for loc in locations],
        }
        with open(self.output_path, "w", encoding="utf-8") as fh:
            json.dump(geojson, fh, indent=2, default=str, allow_nan=False)

    def _write_csv(self, locations: list[Location]) -> None:
        """Write one row per location; columns follow :meth:`Location.to_record`."""
        columns = list(Location({}).to_record())
        records = [loc.to_record() for loc in locations]
        df = pd.DataFrame(records, columns=columns)
        # Nullable ints keep ids as 258512435, not 258512435.0, when some rows lack them.
        for col in _INTEGER_COLUMNS:
            df[col] = pd.array([rec[col] for rec in records], dtype="Int64")
        df.to_csv(self.output_path, index=False)

    @property
    def result(self) -> ExportResult | None:
        """The :class:`ExportResult` from the last :meth:`run` call.

        Returns ``None`` if :meth:`run` has not been called yet.
        """
        return self._result
