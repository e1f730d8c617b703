"""Integration tests for the command line interface."""

import json
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from contourlab import __version__
from contourlab.cli.app import app, parse_ellipse
from contourlab.domain import EllipseParams

runner = CliRunner()


@pytest.fixture
def batch_file(tmp_path: Path) -> Path:
    """Small batch with a square, a path and an empty record."""
    path = tmp_path / "contours.json"
    path.write_text(
        json.dumps(
            {
                "polylines": [
                    {"name": "square", "points": [[0, 0], [0, 10], [10, 10], [10, 0]]},
                    {"name": "path", "kind": "open", "points": [[0, 0], [5, 5], [10, 0]]},
                    {"name": "empty", "points": []},
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


class TestVersion:
    """Tests for the --version option."""

    def test_version(self):
        """Test version output."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestParseEllipse:
    """Tests for parse_ellipse helper."""

    def test_valid(self):
        """Test a well-formed ellipse string."""
        assert parse_ellipse("1, 2, 3, 1.5, 0.25") == EllipseParams(1.0, 2.0, 3.0, 1.5, 0.25)

    @pytest.mark.parametrize("value", ["1,2,3", "a,b,c,d,e", "0,0,0,1,0", "0,0,1,-1,0"])
    def test_invalid(self, value: str):
        """Test malformed ellipse strings are rejected."""
        with pytest.raises(typer.BadParameter):
            parse_ellipse(value)


class TestIntersectCommand:
    """Tests for the intersect command."""

    def test_two_circles(self):
        """Test two overlapping circles print two points."""
        result = runner.invoke(app, ["intersect", "--first", "0,0,2,2,0", "--second", "2,0,2,2,0"])
        assert result.exit_code == 0
        assert "2 intersection points" in result.output
        assert "1.732051" in result.output

    def test_disjoint(self):
        """Test far apart ellipses print no points."""
        result = runner.invoke(app, ["intersect", "--first", "0,0,1,1,0", "--second", "5,0,1,1,0"])
        assert result.exit_code == 0
        assert "No real intersection points" in result.output

    def test_bad_parameter(self):
        """Test malformed input exits with an error."""
        result = runner.invoke(app, ["intersect", "--first", "1,2,3", "--second", "0,0,1,1,0"])
        assert result.exit_code == 1
        assert "Expected cx,cy,a,b,angle" in result.output

    def test_identical_ellipses(self):
        """Test coinciding ellipses exit with an error."""
        result = runner.invoke(app, ["intersect", "--first", "0,0,2,1,0", "--second", "0,0,2,1,0"])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestAnalyzeCommand:
    """Tests for the analyze command."""

    def test_missing_input(self, tmp_path: Path):
        """Test a missing input file exits with an error."""
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Input file not found" in result.output

    def test_directory_input(self, tmp_path: Path):
        """Test a directory is not accepted as input."""
        result = runner.invoke(app, ["analyze", str(tmp_path)])
        assert result.exit_code == 1
        assert "not a file" in result.output

    def test_verbose_and_quiet(self, batch_file: Path):
        """Test conflicting verbosity flags are rejected."""
        result = runner.invoke(app, ["analyze", str(batch_file), "-v", "-q"])
        assert result.exit_code == 1

    def test_invalid_batch(self, tmp_path: Path):
        """Test an unreadable batch exits with an error."""
        path = tmp_path / "bad.json"
        path.write_text("[]", encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(path), "--log-file", str(tmp_path / "run.log")])
        assert result.exit_code == 1
        assert "Could not load polylines" in result.output

    def test_analyze_writes_results(self, batch_file: Path, tmp_path: Path):
        """Test a full run writes one result per valid polyline."""
        output = tmp_path / "out.json"
        result = runner.invoke(
            app,
            [
                "analyze",
                str(batch_file),
                "-o",
                str(output),
                "--sides",
                "4",
                "--workers",
                "1",
                "--log-file",
                str(tmp_path / "run.log"),
                "-q",
            ],
        )
        assert result.exit_code == 0, result.output

        data = json.loads(output.read_text(encoding="utf-8"))
        assert [r["name"] for r in data["results"]] == ["path", "square"]
        assert data["errors"] == [{"name": "empty", "error": "Polyline has no points"}]

        square = data["results"][1]
        assert square["oriented_area"] == pytest.approx(100.0)
        assert len(square["polygon"]) == 4

    def test_analyze_default_output(self, batch_file: Path, tmp_path: Path):
        """Test the default output path sits next to the input."""
        result = runner.invoke(
            app,
            ["analyze", str(batch_file), "-j", "1", "--log-file", str(tmp_path / "run.log")],
        )
        assert result.exit_code == 0, result.output
        assert "Complete" in result.output
        assert (batch_file.parent / "contours-descriptors.json").exists()
