"""Tests for the reference shape catalog."""

import pytest

from contourlab.core.catalog import flip_x, pentominoes
from contourlab.core.geometry import area, oriented_area
from contourlab.core.moments import moments_contour
from contourlab.domain import Point, Polyline


class TestFlipX:
    """Tests for flip_x function."""

    def test_mirrors_about_y_axis(self):
        """Test x coordinates are negated."""
        poly = Polyline.open([Point(1, 2), Point(-3, 4)])
        assert flip_x(poly).points == (Point(-1, 2), Point(3, 4))

    def test_reverses_orientation(self, unit_square_cw: Polyline):
        """Test mirroring flips the sign of the oriented area."""
        assert oriented_area(flip_x(unit_square_cw)) == pytest.approx(-oriented_area(unit_square_cw))


class TestPentominoes:
    """Tests for pentominoes function."""

    def test_eighteen_shapes(self):
        """Test the one-sided set has eighteen members."""
        shapes = pentominoes()
        assert len(shapes) == 18
        assert list(shapes)[:3] == ["I", "L", "J"]

    def test_all_closed_with_area_five(self):
        """Test every outline encloses five unit cells."""
        for name, poly in pentominoes().items():
            assert poly.is_closed, name
            assert area(poly) == pytest.approx(5.0), name

    def test_same_orientation(self):
        """Test every outline is traced counter-clockwise."""
        for name, poly in pentominoes().items():
            assert oriented_area(poly) == pytest.approx(-5.0), name

    @pytest.mark.parametrize("left, right", [("L", "J"), ("P", "B"), ("Y", "Y'"), ("N", "N'")])
    def test_mirror_pairs_share_second_moments(self, left: str, right: str):
        """Test mirror images have equal variances and opposite covariance."""
        shapes = pentominoes()
        a = moments_contour(shapes[left])
        b = moments_contour(shapes[right])
        assert a.var_x == pytest.approx(b.var_x)
        assert a.var_y == pytest.approx(b.var_y)
        assert a.covar_xy == pytest.approx(-b.covar_xy)

    def test_fresh_mapping_each_call(self):
        """Test callers cannot corrupt the catalog."""
        first = pentominoes()
        first.pop("I")
        assert "I" in pentominoes()
