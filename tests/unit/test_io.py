"""Unit tests for the batch file I/O layer.

Tests for PolylineReader, ResultWriter, and converter functions.
"""

import json
from pathlib import Path

import pytest

from contourlab.domain import Point, Polyline, PolylineKind
from contourlab.exceptions import InvalidInputError, PolylineLoadError, ResultSaveError
from contourlab.io.converter import polyline_to_record, record_to_polyline
from contourlab.io.reader import PolylineReader
from contourlab.io.writer import ResultWriter


def _write_batch(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestPolylineReader:
    """Tests for PolylineReader class."""

    def test_init(self):
        """Test PolylineReader initialization."""
        path = Path("test.json")
        reader = PolylineReader(path)
        assert reader._path == path
        assert reader._records is None

    def test_load_nonexistent_file(self, tmp_path: Path):
        """Test loading a nonexistent file raises PolylineLoadError."""
        reader = PolylineReader(tmp_path / "missing.json")
        with pytest.raises(PolylineLoadError, match="file not found"):
            reader.load()

    def test_count_before_load(self):
        """Test accessing count before loading raises RuntimeError."""
        reader = PolylineReader(Path("test.json"))
        with pytest.raises(RuntimeError, match="not loaded"):
            _ = reader.count

    def test_iter_records_before_load(self):
        """Test iterating records before loading raises RuntimeError."""
        reader = PolylineReader(Path("test.json"))
        with pytest.raises(RuntimeError, match="not loaded"):
            list(reader.iter_records())

    def test_invalid_json(self, tmp_path: Path):
        """Test a file that is not JSON is rejected."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(PolylineLoadError):
            PolylineReader(path).load()

    @pytest.mark.parametrize(
        "data",
        [[], {"shapes": []}, {"polylines": {"a": 1}}],
    )
    def test_wrong_layout(self, tmp_path: Path, data: object):
        """Test files without a polylines list are rejected."""
        path = _write_batch(tmp_path / "batch.json", data)
        with pytest.raises(PolylineLoadError, match="'polylines' list"):
            PolylineReader(path).load()

    def test_record_not_object(self, tmp_path: Path):
        """Test non-object records are rejected with their index."""
        path = _write_batch(tmp_path / "batch.json", {"polylines": [{"points": []}, 5]})
        with pytest.raises(PolylineLoadError, match="record 1"):
            PolylineReader(path).load()

    def test_load_and_iterate(self, tmp_path: Path):
        """Test records are loaded in order with default names."""
        path = _write_batch(
            tmp_path / "batch.json",
            {
                "polylines": [
                    {"name": "a", "kind": "open", "points": [[0, 0], [1, 1]]},
                    {"points": [[0, 0], [0, 1], [1, 1]]},
                ]
            },
        )
        reader = PolylineReader(path)
        reader.load()

        assert reader.count == 2
        names = [r["name"] for r in reader.iter_records()]
        assert names == ["a", "polyline_1"]

        polylines = dict(reader.iter_polylines())
        assert polylines["a"].kind == PolylineKind.OPEN
        assert polylines["polyline_1"].kind == PolylineKind.CLOSED
        assert len(polylines["polyline_1"]) == 3

    def test_context_manager(self, tmp_path: Path):
        """Test the reader loads on entry and releases records on exit."""
        path = _write_batch(tmp_path / "batch.json", {"polylines": []})
        with PolylineReader(path) as reader:
            assert reader.count == 0
        assert reader._records is None


class TestResultWriter:
    """Tests for ResultWriter class."""

    def test_init(self):
        """Test ResultWriter initialization."""
        writer = ResultWriter(Path("out.json"))
        assert writer._output_path == Path("out.json")
        assert writer._results == []
        assert writer._errors == []

    def test_save_sorted(self, tmp_path: Path):
        """Test results and errors are written sorted by name."""
        output = tmp_path / "out.json"
        writer = ResultWriter(output)
        writer.add_result({"name": "b", "perimeter": 2.0})
        writer.add_result({"name": "a", "perimeter": 1.0})
        writer.add_error("z", "bad")
        writer.add_error("c", "worse")
        writer.save()

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["generator"].startswith("contourlab ")
        assert "created" in data
        assert [r["name"] for r in data["results"]] == ["a", "b"]
        assert data["errors"] == [{"name": "c", "error": "worse"}, {"name": "z", "error": "bad"}]

    def test_save_to_missing_directory(self, tmp_path: Path):
        """Test unwritable output raises ResultSaveError."""
        writer = ResultWriter(tmp_path / "missing" / "out.json")
        with pytest.raises(ResultSaveError) as exc_info:
            writer.save()
        assert exc_info.value.reason

    def test_save_unserializable(self, tmp_path: Path):
        """Test values JSON cannot represent raise ResultSaveError."""
        writer = ResultWriter(tmp_path / "out.json")
        writer.add_result({"name": "a", "value": object()})
        with pytest.raises(ResultSaveError):
            writer.save()

    def test_get_default_path(self):
        """Test default output path generation."""
        assert ResultWriter.get_default_path(Path("/data/contours.json")) == Path(
            "/data/contours-descriptors.json"
        )

    def test_get_default_path_other_extension(self):
        """Test the default output is always JSON."""
        assert ResultWriter.get_default_path(Path("shapes.txt")) == Path(
            "shapes-descriptors.json"
        )


class TestConverter:
    """Tests for record conversion functions."""

    def test_record_to_polyline(self):
        """Test conversion of a full record."""
        poly = record_to_polyline({"name": "x", "kind": "open", "points": [[0, 0], [1.5, 2]]})
        assert poly.kind == PolylineKind.OPEN
        assert poly.points == (Point(0.0, 0.0), Point(1.5, 2.0))

    def test_kind_defaults_to_closed(self):
        """Test records without a kind are closed."""
        poly = record_to_polyline({"points": [[0, 0], [1, 0], [1, 1]]})
        assert poly.is_closed

    def test_unknown_kind(self):
        """Test unknown kinds are rejected."""
        with pytest.raises(InvalidInputError, match="Unknown polyline kind"):
            record_to_polyline({"kind": "spiral", "points": [[0, 0]]})

    def test_missing_points(self):
        """Test records without a point list are rejected."""
        with pytest.raises(InvalidInputError):
            record_to_polyline({"name": "x"})

    @pytest.mark.parametrize("item", [[1], [1, 2, 3], "ab", [None, 1], ["x", 1]])
    def test_malformed_points(self, item: object):
        """Test malformed coordinates are rejected."""
        with pytest.raises(InvalidInputError):
            record_to_polyline({"points": [[0, 0], item]})

    def test_roundtrip(self):
        """Test polyline to record and back."""
        poly = Polyline.open([Point(1.0, 2.0), Point(3.0, 4.0)])
        record = polyline_to_record("p", poly)
        assert record == {"name": "p", "kind": "open", "points": [[1.0, 2.0], [3.0, 4.0]]}
        assert record_to_polyline(record) == poly
