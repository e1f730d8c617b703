"""Polyline simplification.

This module provides:
- Douglas-Peucker reduction of open and closed point sequences
- Reduction of a polygon to its k longest edges
- Selection of contours that are well approximated by n-sided polygons
- Removal of nearly straight vertices

The Douglas-Peucker recursion runs over index ranges of a single backing
array with an explicit work stack, so long contours do not hit the
interpreter recursion limit.
"""

from collections.abc import Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from contourlab.core.geometry import line_intersection, oriented_area, perimeter
from contourlab.domain import Point, Polyline, Segment
from contourlab.exceptions import InvalidInputError


def _critical_index(
    pts: NDArray[np.float64], start: int, end: int, eps2: float
) -> int | None:
    """Index of the point farthest from the chord start-end.

    Uses the squared distance minus the squared projection on the chord, so
    no square roots are taken.

    Returns:
        Index of the farthest interior point if its squared distance exceeds
        eps2, otherwise None
    """
    if end - start < 2:
        return None

    p1 = pts[start]
    chord = pts[end] - p1
    l2 = float(chord @ chord)

    rel = pts[start + 1 : end] - p1
    d2 = np.einsum("ij,ij->i", rel, rel)
    if l2 > 0.0:
        d2 = d2 - (rel @ chord) ** 2 / l2

    k = int(np.argmax(d2))
    if d2[k] > eps2:
        return start + 1 + k
    return None


def _douglas_peucker_indices(pts: NDArray[np.float64], eps: float) -> list[int]:
    """Indices kept by Douglas-Peucker on an open sequence."""
    n = len(pts)
    eps2 = eps * eps

    keep = np.zeros(n, dtype=bool)
    keep[0] = True
    keep[n - 1] = True

    stack = [(0, n - 1)]
    while stack:
        start, end = stack.pop()
        k = _critical_index(pts, start, end, eps2)
        if k is None:
            continue
        keep[k] = True
        stack.append((start, k))
        stack.append((k, end))

    return [int(i) for i in np.flatnonzero(keep)]


def douglas_peucker(eps: float, points: Sequence[Point]) -> list[Point]:
    """Simplify an open sequence of points.

    The first and last points are always kept. Between two anchors, the point
    farthest from their chord is kept if its distance exceeds eps, and both
    halves are processed again; otherwise all points in between are dropped.

    Args:
        eps: Distance tolerance
        points: Open sequence of points

    Returns:
        Retained points, in order

    Raises:
        InvalidInputError: If fewer than 2 points are given

    Examples:
        >>> pts = [Point(0, 0), Point(0, 1), Point(0, 2), Point(5, 2), Point(5, 0)]
        >>> [p.to_tuple() for p in douglas_peucker(0.5, pts)]
        [(0, 0), (0, 2), (5, 2), (5, 0)]
    """
    if len(points) < 2:
        raise InvalidInputError("Douglas-Peucker needs at least 2 points")

    pts = np.array([p.to_tuple() for p in points], dtype=np.float64)
    return [points[i] for i in _douglas_peucker_indices(pts, eps)]


def douglas_peucker_closed(eps: float, points: Sequence[Point]) -> list[Point]:
    """Simplify a closed sequence of points.

    Anchors on the first two points: the second point starts the result and
    the first point ends it, so the arc between them that contains every
    other point is simplified against the closing chord.

    Args:
        eps: Distance tolerance
        points: Closed sequence of points (first point not repeated)

    Returns:
        Retained points, starting at the second input point

    Raises:
        InvalidInputError: If fewer than 2 points are given
    """
    if len(points) < 2:
        raise InvalidInputError("Douglas-Peucker needs at least 2 points")

    rotated = list(points[1:]) + [points[0]]
    return douglas_peucker(eps, rotated)


def simplify(poly: Polyline, eps: float) -> Polyline:
    """Douglas-Peucker on a polyline, open or closed variant by kind."""
    if poly.is_closed:
        return poly.with_points(douglas_peucker_closed(eps, poly.points))
    return poly.with_points(douglas_peucker(eps, poly.points))


def longest_segments(k: int, poly: Polyline) -> list[Segment]:
    """Edges at least as long as the k-th longest edge.

    Edges keep their original order. Ties at the threshold length are all
    kept, so more than k edges may be returned.

    Args:
        k: Number of edges to keep
        poly: Input polyline

    Returns:
        Retained edges

    Raises:
        InvalidInputError: If k < 1
    """
    if k < 1:
        raise InvalidInputError(f"Number of segments must be positive, got {k}")

    segments = poly.segments()
    if not segments:
        return []

    lengths = sorted((s.length for s in segments), reverse=True)
    threshold = lengths[min(k, len(lengths)) - 1]
    return [s for s in segments if s.length >= threshold]


def longest_segments_polygon(poly: Polyline, k: int) -> Polyline:
    """Reduce a polyline to the polygon formed by its k longest edges.

    The supporting line of each retained edge is intersected with the next
    one (cyclically) to rebuild the corners.

    Args:
        poly: Input polyline
        k: Number of edges to keep

    Returns:
        Closed polygon with one vertex per retained edge

    Raises:
        InvalidInputError: If fewer than 3 edges qualify or two consecutive
            retained edges are parallel
    """
    segments = longest_segments(k, poly)
    if len(segments) < 3:
        raise InvalidInputError(f"Polygon reduction needs at least 3 edges, got {len(segments)}")

    m = len(segments)
    corners = [line_intersection(segments[i], segments[(i + 1) % m]) for i in range(m)]
    return Polyline.closed(corners)


def _try_polygon(eps: float, n: int, poly: Polyline) -> Polyline | None:
    a1 = oriented_area(poly)
    if a1 == 0.0:
        return None

    try:
        reduced = longest_segments_polygon(poly, n)
    except InvalidInputError:
        return None

    if len(reduced) != n:
        return None

    a2 = oriented_area(reduced)
    if abs((a1 - a2) / a1) >= eps:
        return None

    min_length = min(s.length for s in reduced.segments())
    if min_length < perimeter(reduced) / n / 10:
        return None

    return reduced


def select_polygons(eps: float, n: int, polylines: Iterable[Polyline]) -> list[Polyline]:
    """Keep the contours that are well approximated by n-sided polygons.

    A contour passes if its reduction to the n longest edges has exactly n
    vertices, its area differs from the original by a relative amount below
    eps, and no reduced edge is shorter than perimeter / (10 n). Failing
    contours are dropped.

    Args:
        eps: Relative area tolerance
        n: Number of polygon sides
        polylines: Closed polylines

    Returns:
        One reduced polygon per passing contour, in input order

    Raises:
        InvalidInputError: If an input polyline is open
    """
    selected: list[Polyline] = []
    for poly in polylines:
        reduced = _try_polygon(eps, n, poly)
        if reduced is not None:
            selected.append(reduced)
    return selected


def clean_polygon(tol: float, poly: Polyline) -> Polyline:
    """Keep only vertices where the polygon turns sharply enough.

    A vertex survives when the absolute cosine of the angle between its
    incoming and outgoing edges is below tol. Vertices with a zero-length
    incident edge are dropped.

    Args:
        tol: Cosine threshold in [0, 1]
        poly: Closed polyline

    Returns:
        Closed polyline with the surviving vertices

    Raises:
        InvalidInputError: If the polyline is open or nothing survives
    """
    if not poly.is_closed:
        raise InvalidInputError("Polygon cleaning needs a closed polyline")

    pts = poly.points
    n = len(pts)
    kept: list[Point] = []
    for i in range(n):
        p1, p2, p3 = pts[i - 1], pts[i], pts[(i + 1) % n]
        dx1, dy1 = p2.x - p1.x, p2.y - p1.y
        dx2, dy2 = p3.x - p2.x, p3.y - p2.y
        l1 = p1.distance_to(p2)
        l2 = p2.distance_to(p3)
        if l1 == 0.0 or l2 == 0.0:
            continue
        cos_angle = (dx1 * dx2 + dy1 * dy2) / l1 / l2
        if abs(cos_angle) < tol:
            kept.append(p2)

    if not kept:
        raise InvalidInputError("No vertex survives polygon cleaning")
    return poly.with_points(kept)
