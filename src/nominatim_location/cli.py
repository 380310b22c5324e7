"""
Nominatim Location — CLI Entry Point
=====================================
Installed as the ``nominatim-location`` command via ``pyproject.toml``.

Usage:
    nominatim-location --input responses/search.json --output out/places.geojson
    nominatim-location -i responses/reverse.json -o out/place.csv --skip-missing
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from nominatim_location.exceptions import NominatimLocationError
from nominatim_location.exporter import ExportConfig, LocationExporter


@click.command(
    name="nominatim-location",
    help="Export a saved Nominatim JSON response to GeoJSON or CSV.",
)
@click.option(
    "--input", "-i", "input_path",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    help="Path to the saved Nominatim response (.json).",
)
@click.option(
    "--output", "-o", "output_path",
    required=True,
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    help="Path for the .geojson or .csv output.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["geojson", "csv"], case_sensitive=False),
    default=None,
    help="Output format.  Inferred from the output suffix when omitted.",
)
@click.option(
    "--skip-missing",
    is_flag=True,
    default=False,
    help="Drop results that have no lat/lon instead of writing null geometry.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def main(
    input_path: Path,
    output_path: Path,
    output_format: str | None,
    skip_missing: bool,
    verbose: bool,
) -> None:
    """CLI entry point — wires Click options into LocationExporter."""
    if output_format is None:
        output_format = "csv" if output_path.suffix.lower() == ".csv" else "geojson"

    tool = LocationExporter(
        input_path=input_path,
        output_path=output_path,
        config=ExportConfig(
            output_format=output_format.lower(),  # type: ignore[arg-type]
            skip_without_coordinates=skip_missing,
        ),
        verbose=verbose,
    )

    try:
        tool.run()
        result = tool.result
        click.echo(f"\n{output_format.upper()} written to: {output_path}")
        if result is not None:
            click.echo(
                f"Exported: {result.locations_written}/{result.locations_read} locations."
            )
    except NominatimLocationError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
