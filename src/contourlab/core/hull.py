"""Convex hull of a planar point set (Graham scan)."""

from collections.abc import Iterable

from contourlab.domain import Point
from contourlab.exceptions import InvalidInputError


def is_left(p1: Point, p2: Point, p3: Point) -> bool:
    """True if p3 lies strictly to the left of the directed line p1 -> p2."""
    return (p2.x - p1.x) * (p3.y - p1.y) - (p2.y - p1.y) * (p3.x - p1.x) > 0


def convex_hull(points: Iterable[Point]) -> list[Point]:
    """Vertices of the convex hull, counter-clockwise from the lowest point.

    The anchor is the point with the smallest (y, x). The other points are
    swept in order of the negated cosine of their direction from the anchor,
    which is monotonic in the polar angle, and every point that does not make
    a strict left turn is popped. Collinear points on the hull boundary are
    not reported as vertices.

    Args:
        points: Input points (any order, duplicates allowed)

    Returns:
        Hull vertices, a subsequence of the input points

    Raises:
        InvalidInputError: If there are fewer than 3 distinct points or all
            points are collinear
    """
    pts = list(points)
    if not pts:
        raise InvalidInputError("Convex hull needs at least 3 points, got 0")

    anchor = min(pts, key=lambda p: (p.y, p.x))
    rest = [p for p in pts if p != anchor]
    if len(set(rest)) < 2:
        raise InvalidInputError("Convex hull needs at least 3 distinct points")

    def sweep_key(p: Point) -> tuple[float, float]:
        d = anchor.distance_to(p)
        return ((anchor.x - p.x) / d, d)

    hull = [anchor]
    for p in sorted(rest, key=sweep_key):
        while len(hull) >= 2 and not is_left(hull[-2], hull[-1], p):
            hull.pop()
        hull.append(p)

    while len(hull) >= 3 and not is_left(hull[-2], hull[-1], anchor):
        hull.pop()

    if len(hull) < 3:
        raise InvalidInputError("Convex hull of collinear points is degenerate")
    return hull
