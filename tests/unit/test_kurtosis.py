"""Tests for higher-order moment descriptors."""

import math

import pytest

from contourlab.core.kurtosis import (
    deriv_coefs,
    ica_angles,
    kurt_alpha,
    kurt_coefs,
    kurtosis_x,
    skew_x,
)
from contourlab.core.transforms import desp, rot3, transform_polyline
from contourlab.domain import Point, Polyline
from contourlab.exceptions import InvalidInputError


class TestAxisMoments:
    """Tests for kurtosis_x and skew_x functions."""

    def test_unit_square(self, unit_square_cw: Polyline):
        """Test integrals of x^4 and x^3 over the unit square."""
        assert kurtosis_x(unit_square_cw) == pytest.approx(0.2)
        assert skew_x(unit_square_cw) == pytest.approx(0.25)

    def test_orientation_flips_sign(self, unit_square_cw: Polyline, unit_square_ccw: Polyline):
        """Test reversed traversal negates the values."""
        assert kurtosis_x(unit_square_ccw) == pytest.approx(-kurtosis_x(unit_square_cw))
        assert skew_x(unit_square_ccw) == pytest.approx(-skew_x(unit_square_cw))

    def test_centered_square_has_no_skew(self, unit_square_cw: Polyline):
        """Test a symmetric region has zero third moment."""
        centered = transform_polyline(desp(-0.5, -0.5), unit_square_cw)
        assert skew_x(centered) == pytest.approx(0.0, abs=1e-12)
        assert kurtosis_x(centered) == pytest.approx(1 / 80)

    def test_open_raises(self):
        """Test open polylines are rejected."""
        path = Polyline.open([Point(0, 0), Point(1, 0), Point(1, 1)])
        with pytest.raises(InvalidInputError):
            kurtosis_x(path)
        with pytest.raises(InvalidInputError):
            skew_x(path)


class TestKurtosisProfile:
    """Tests for kurt_coefs, kurt_alpha and deriv_coefs functions."""

    def test_seven_coefficients(self, rectangle: Polyline):
        """Test the profile has seven coefficients."""
        assert len(kurt_coefs(rectangle)) == 7

    def test_last_coefficient_is_kurtosis(self, rectangle: Polyline):
        """Test coefs[6] is the x-axis kurtosis."""
        assert kurt_coefs(rectangle)[6] == pytest.approx(kurtosis_x(rectangle))

    def test_zero_angle(self, rectangle: Polyline):
        """Test the profile at angle zero is the x-axis kurtosis."""
        coefs = kurt_coefs(rectangle)
        assert kurt_alpha(coefs, 0.0) == pytest.approx(coefs[6])

    def test_unit_square_quarter_turn(self, unit_square_cw: Polyline):
        """Test the y-axis kurtosis of the unit square equals the x-axis one."""
        coefs = kurt_coefs(unit_square_cw)
        assert coefs[0] == pytest.approx(0.2)
        assert kurt_alpha(coefs, math.pi / 2) == pytest.approx(0.2)

    def test_profile_has_period_pi(self, rectangle: Polyline):
        """Test opposite directions have the same kurtosis."""
        coefs = kurt_coefs(rectangle)
        assert kurt_alpha(coefs, 0.4 + math.pi) == pytest.approx(kurt_alpha(coefs, 0.4))

    def test_deriv_coefs(self):
        """Test the derivative polynomial layout."""
        assert deriv_coefs([1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0]) == [
            -2.0,
            0.0,
            -2.0,
            -8.0,
            -18.0,
            -32.0,
            6.0,
        ]

    def test_deriv_coefs_wrong_length(self):
        """Test anything but seven coefficients is rejected."""
        with pytest.raises(InvalidInputError):
            deriv_coefs([1.0, 2.0, 3.0])


class TestIcaAngles:
    """Tests for ica_angles function."""

    def test_sorted_by_decreasing_kurtosis(self, make_ellipse_polygon):
        """Test angles are ordered from most to least peaked."""
        poly = make_ellipse_polygon(5, 4.0, 1.5, angle=0.35, cx=1.0, cy=2.0)
        angles = ica_angles(poly)
        coefs = kurt_coefs(poly)
        values = [kurt_alpha(coefs, a) for a in angles]
        assert all(isinstance(a, float) for a in angles)
        assert values == sorted(values, reverse=True)

    def test_angles_in_range(self, rectangle: Polyline):
        """Test atan(1/r) keeps every angle within a half turn."""
        for a in ica_angles(rectangle):
            assert -math.pi / 2 <= a <= math.pi / 2

    def test_centered_rectangle_long_axis_first(self):
        """Test the long axis of a centered rectangle is the dominant angle."""
        poly = Polyline.closed([Point(-2, -1), Point(-2, 1), Point(2, 1), Point(2, -1)])
        angles = ica_angles(poly)
        assert len(angles) == 2
        assert angles[0] == pytest.approx(0.0, abs=1e-9)
        assert abs(angles[1]) == pytest.approx(math.pi / 2)

    def test_rotated_rectangle_dominant_angle(self):
        """Test the dominant angle follows a rotated centered rectangle."""
        centered = Polyline.closed([Point(-2, -1), Point(-2, 1), Point(2, 1), Point(2, -1)])
        poly = transform_polyline(rot3(0.4), centered)
        angles = ica_angles(poly)
        assert angles
        assert abs(angles[0]) == pytest.approx(0.4, abs=1e-6)

        coefs = kurt_coefs(poly)
        grid = [-math.pi / 2 + math.pi * k / 20000 for k in range(20000)]
        peak = max(kurt_alpha(coefs, a) for a in grid)
        assert kurt_alpha(coefs, angles[0]) == pytest.approx(peak, rel=1e-6)

    def test_open_raises(self):
        """Test open polylines are rejected."""
        with pytest.raises(InvalidInputError):
            ica_angles(Polyline.open([Point(0, 0), Point(1, 0), Point(1, 1)]))
