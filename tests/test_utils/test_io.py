"""Tests for pipestake.utils.io: snapshot reader, points JSON and Trimble CSV."""

import json
from pathlib import Path

import pytest

from pipestake.core.contracts import PointRecord
from pipestake.utils.io import (
    format_number,
    read_parts_json,
    read_points_json,
    write_points_json,
    write_trimble_csv,
)
from tests.factories import straight


def _write_json(path: Path, data) -> Path:
    with open(path, "w") as f:
        json.dump(data, f)
    return path


class TestReadPartsJson:
    def test_object_form(self, tmp_path: Path):
        path = _write_json(tmp_path / "parts.json", {"units": "ft", "parts": [straight("A", (0, 0, 0), (1, 0, 0))]})
        parts, skipped = read_parts_json(path)
        assert [p.id for p in parts] == ["A"]
        assert skipped == 0

    def test_bare_list(self, tmp_path: Path):
        path = _write_json(tmp_path / "parts.json", [straight("A", (0, 0, 0), (1, 0, 0))])
        parts, _ = read_parts_json(path)
        assert len(parts) == 1

    def test_millimetres_scaled(self, tmp_path: Path):
        raw = straight("A", (0, 0, 0), (3048, 0, 0), radius=30.48, attributes={"OD": 60.96, "Size": "2 in"})
        path = _write_json(tmp_path / "parts.json", {"units": "mm", "parts": [raw]})
        parts, _ = read_parts_json(path)
        conn = parts[0].connectors[1]
        assert conn.origin == pytest.approx([10.0, 0.0, 0.0])
        assert conn.radius == pytest.approx(0.1)
        assert parts[0].attributes["OD"] == pytest.approx(0.2)
        assert parts[0].attributes["Size"] == "2 in"
        # Axes are directions and stay unscaled
        assert conn.axis == pytest.approx([1.0, 0.0, 0.0])

    def test_invalid_part_skipped(self, tmp_path: Path):
        path = _write_json(tmp_path / "parts.json", {"parts": [
            straight("A", (0, 0, 0), (1, 0, 0)),
            {"id": "B", "connectors": [{"origin": "nowhere"}]},
            "not a part",
        ]})
        parts, skipped = read_parts_json(path)
        assert [p.id for p in parts] == ["A"]
        assert skipped == 2

    def test_missing_parts_key(self, tmp_path: Path):
        path = _write_json(tmp_path / "parts.json", {"units": "ft"})
        with pytest.raises(ValueError, match="parts"):
            read_parts_json(path)

    def test_unsupported_units(self, tmp_path: Path):
        path = _write_json(tmp_path / "parts.json", {"units": "furlong", "parts": []})
        with pytest.raises(ValueError, match="units"):
            read_parts_json(path)

    def test_malformed_json(self, tmp_path: Path):
        path = tmp_path / "parts.json"
        path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            read_parts_json(path)


class TestPointsJson:
    def test_write_and_read(self, tmp_path: Path):
        points = [PointRecord(name="P-1", x=1.0, y=2.0, z=3.0, source="riser")]
        path = tmp_path / "points.json"
        write_points_json(path, points, status="ok", raw_count=1)

        with open(path) as f:
            data = json.load(f)
        assert data["status"] == "ok"
        assert data["raw_count"] == 1
        assert read_points_json(path) == points


class TestTrimbleCsv:
    def test_exact_bytes(self, tmp_path: Path):
        path = tmp_path / "Trimble_Points.csv"
        n = write_trimble_csv(path, [PointRecord(name="P-1", x=1.5, y=2.0, z=-0.05)])
        assert n == 1
        assert path.read_bytes() == b"Name,X,Y,Z,Description\r\nP-1,1.5,2.0,-0.05,BOP\r\n"

    def test_header_only_when_empty(self, tmp_path: Path):
        path = tmp_path / "empty.csv"
        assert write_trimble_csv(path, []) == 0
        assert path.read_bytes() == b"Name,X,Y,Z,Description\r\n"

    def test_quoting(self, tmp_path: Path):
        path = tmp_path / "quoted.csv"
        write_trimble_csv(path, [PointRecord(name="P-1", x=0.0, y=0.0, z=0.0, description='BOP, 2" main')])
        row = path.read_bytes().decode("utf-8").split("\r\n")[1]
        assert row == 'P-1,0.0,0.0,0.0,"BOP, 2"" main"'

    def test_creates_parent_dir(self, tmp_path: Path):
        path = tmp_path / "out" / "nested" / "pts.csv"
        write_trimble_csv(path, [])
        assert path.exists()

    def test_bom_encoding(self, tmp_path: Path):
        path = tmp_path / "bom.csv"
        write_trimble_csv(path, [], encoding="utf-8-sig")
        assert path.read_bytes().startswith(b"\xef\xbb\xbfName")

    @pytest.mark.parametrize("value, text", [
        (0.1, "0.1"),
        (10.0, "10.0"),
        (-0.05, "-0.05"),
        (1234567.891, "1234567.891"),
        (1.0 / 3.0, "0.3333333333333333"),
    ])
    def test_format_number(self, value, text):
        assert format_number(value) == text
        assert float(format_number(value)) == value
