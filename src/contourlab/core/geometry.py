"""Polyline metrics and basic geometric operations.

This module provides core mathematical utilities for:
- Perimeter and oriented area (shoelace formula)
- Bounding boxes
- Intersection of infinite lines in homogeneous coordinates

All functions are pure, stateless, and designed for use in parallel processing.
"""

import numpy as np
from numpy.typing import NDArray

from contourlab.domain import Point, Polyline, Segment
from contourlab.exceptions import InvalidInputError


def perimeter(poly: Polyline) -> float:
    """Sum of edge lengths.

    For an open polyline this is its length; a closed polyline includes the
    wrap-around edge. A single point has perimeter 0.

    Args:
        poly: Input polyline

    Returns:
        Total edge length
    """
    return sum(a.distance_to(b) for a, b in poly.edges())


def oriented_area(poly: Polyline) -> float:
    """Calculate oriented area of a closed polyline using the shoelace formula.

    The clockwise sense is positive in the x-y world frame (y up). In an
    image frame (y down) the same traversal gives the opposite sign, so
    callers must track their own frame convention.

    Args:
        poly: Closed polyline

    Returns:
        Signed area

    Raises:
        InvalidInputError: If the polyline is open

    Examples:
        >>> square = Polyline.closed([Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)])
        >>> oriented_area(square)  # clockwise
        1.0
    """
    if not poly.is_closed:
        raise InvalidInputError("Undefined orientation of open polyline")

    total = 0.0
    for a, b in poly.edges():
        total += a.x * b.y - b.x * a.y

    return -0.5 * total


def area(poly: Polyline) -> float:
    """Absolute area of a closed polyline."""
    return abs(oriented_area(poly))


def bounding_box(poly: Polyline) -> tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y) of the polyline points."""
    xs = [p.x for p in poly.points]
    ys = [p.y for p in poly.points]
    return (min(xs), min(ys), max(xs), max(ys))


def bounding(poly: Polyline) -> Polyline:
    """Closed polygon of the bounding box.

    Vertices are ordered (x2, y2), (x1, y2), (x1, y1), (x2, y1) with
    x1 <= x2 and y1 <= y2.
    """
    x1, y1, x2, y2 = bounding_box(poly)
    return Polyline.closed([Point(x2, y2), Point(x1, y2), Point(x1, y1), Point(x2, y1)])


def homogeneous_line(segment: Segment) -> NDArray[np.float64]:
    """Homogeneous coordinates of the infinite line through a segment."""
    p1 = np.array([segment.extreme1.x, segment.extreme1.y, 1.0])
    p2 = np.array([segment.extreme2.x, segment.extreme2.y, 1.0])
    return np.cross(p1, p2)


def line_intersection(s1: Segment, s2: Segment) -> Point:
    """Intersection of the infinite lines supporting two segments.

    Args:
        s1: First segment
        s2: Second segment

    Returns:
        Intersection point

    Raises:
        InvalidInputError: If the lines are parallel or a segment is degenerate
    """
    h = np.cross(homogeneous_line(s1), homogeneous_line(s2))
    scale = max(abs(h[0]), abs(h[1]), 1.0)
    if abs(h[2]) < 1e-12 * scale:
        raise InvalidInputError("Supporting lines are parallel")
    return Point(float(h[0] / h[2]), float(h[1] / h[2]))
