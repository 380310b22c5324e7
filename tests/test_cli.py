"""
Tests — CLI
============
Drives the ``nominatim-location`` command through Click's ``CliRunner``.
"""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest
from click.testing import CliRunner

from nominatim_location.cli import main


@pytest.fixture()
def search_json(tmp_path: Path) -> Path:
    path = tmp_path / "search.json"
    path.write_text(
        json.dumps(
            [
                {"place_id": "1", "lat": "52.52", "lon": "13.40", "address": {"city": "Berlin"}},
                {"place_id": "2", "display_name": "No coordinates"},
            ]
        ),
        encoding="utf-8",
    )
    return path


class TestCli:
    def test_geojson_inferred_from_suffix(self, tmp_path: Path, search_json: Path) -> None:
        output = tmp_path / "out.geojson"
        result = CliRunner().invoke(main, ["-i", str(search_json), "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert "Exported: 2/2 locations." in result.output
        assert len(json.loads(output.read_text())["features"]) == 2

    def test_csv_inferred_from_suffix(self, tmp_path: Path, search_json: Path) -> None:
        output = tmp_path / "out.csv"
        result = CliRunner().invoke(
            main, ["-i", str(search_json), "-o", str(output), "--skip-missing"]
        )
        assert result.exit_code == 0, result.output
        df = pd.read_csv(output)
        assert list(df["city"]) == ["Berlin"]

    def test_error_exits_nonzero(self, tmp_path: Path) -> None:
        path = tmp_path / "reverse.json"
        path.write_text(json.dumps({"error": "Unable to geocode"}), encoding="utf-8")
        result = CliRunner().invoke(main, ["-i", str(path), "-o", str(tmp_path / "out.geojson")])
        assert result.exit_code == 1
        assert "Unable to geocode" in result.output

    def test_format_mismatch_exits_nonzero(self, tmp_path: Path, search_json: Path) -> None:
        result = CliRunner().invoke(
            main,
            ["-i", str(search_json), "-o", str(tmp_path / "out.geojson"), "--format", "csv"],
        )
        assert result.exit_code == 1
        assert "Unsupported file extension" in result.output

    def test_non_utf8_input_reports_error(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.json"
        path.write_bytes(b'[{"display_name": "\xff\xfe"}]')
        result = CliRunner().invoke(main, ["-i", str(path), "-o", str(tmp_path / "out.geojson")])
        assert result.exit_code == 1
        assert "Error: Cannot read 'latin1.json'" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)
