"""Shared fixtures for contourlab tests."""

import math

import pytest

from contourlab.domain import Point, Polyline


def regular_polygon(n: int, r: float = 1.0, cx: float = 0.0, cy: float = 0.0) -> Polyline:
    """Counter-clockwise regular n-gon inscribed in a circle of radius r."""
    return Polyline.closed(
        Point(cx + r * math.cos(2 * math.pi * k / n), cy + r * math.sin(2 * math.pi * k / n))
        for k in range(n)
    )


def ellipse_polygon(
    n: int, a: float, b: float, angle: float = 0.0, cx: float = 0.0, cy: float = 0.0
) -> Polyline:
    """Counter-clockwise polygon sampled from a rotated ellipse."""
    c = math.cos(angle)
    s = math.sin(angle)
    points = []
    for k in range(n):
        t = 2 * math.pi * k / n
        x = a * math.cos(t)
        y = b * math.sin(t)
        points.append(Point(cx + c * x - s * y, cy + s * x + c * y))
    return Polyline.closed(points)


@pytest.fixture
def unit_square_cw() -> Polyline:
    """Unit square traced clockwise (positive oriented area)."""
    return Polyline.closed([Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)])


@pytest.fixture
def unit_square_ccw() -> Polyline:
    """Unit square traced counter-clockwise."""
    return Polyline.closed([Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)])


@pytest.fixture
def rectangle() -> Polyline:
    """4 x 2 rectangle with its lower left corner at (1, 1), clockwise."""
    return Polyline.closed([Point(1, 1), Point(1, 3), Point(5, 3), Point(5, 1)])


@pytest.fixture
def make_regular_polygon():
    """Factory for regular polygons."""
    return regular_polygon


@pytest.fixture
def make_ellipse_polygon():
    """Factory for polygons sampled from ellipses."""
    return ellipse_polygon
