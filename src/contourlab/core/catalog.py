"""Reference shapes for shape-matching experiments."""

import numpy as np

from contourlab.core.transforms import transform_polyline
from contourlab.domain import Point, Polyline

_FLIP_X = np.diag([-1.0, 1.0, 1.0])

# (name, vertices, mirrored). Unmirrored outlines are traced in reverse.
_PENTOMINOES: list[tuple[str, list[tuple[int, int]], bool]] = [
    ("I", [(0, 0), (0, 1), (5, 1), (5, 0)], False),
    ("L", [(0, 0), (0, 1), (3, 1), (3, 2), (4, 2), (4, 0)], True),
    ("J", [(0, 0), (0, 1), (3, 1), (3, 2), (4, 2), (4, 0)], False),
    (
        "X",
        [(1, 0), (1, 1), (0, 1), (0, 2), (1, 2), (1, 3), (2, 3), (2, 2), (3, 2), (3, 1), (2, 1), (2, 0)],
        False,
    ),
    ("V", [(0, 0), (0, 3), (1, 3), (1, 1), (3, 1), (3, 0)], False),
    ("T", [(0, 0), (0, 1), (1, 1), (1, 3), (2, 3), (2, 1), (3, 1), (3, 0)], False),
    ("P", [(0, 0), (0, 3), (2, 3), (2, 1), (1, 1), (1, 0)], True),
    ("B", [(0, 0), (0, 3), (2, 3), (2, 1), (1, 1), (1, 0)], False),
    ("Z", [(0, 2), (0, 3), (2, 3), (2, 1), (3, 1), (3, 0), (1, 0), (1, 2)], True),
    ("S", [(0, 2), (0, 3), (2, 3), (2, 1), (3, 1), (3, 0), (1, 0), (1, 2)], False),
    ("U", [(0, 0), (0, 2), (1, 2), (1, 1), (2, 1), (2, 2), (3, 2), (3, 0)], False),
    ("Y", [(0, 0), (0, 1), (2, 1), (2, 2), (3, 2), (3, 1), (4, 1), (4, 0)], True),
    ("Y'", [(0, 0), (0, 1), (2, 1), (2, 2), (3, 2), (3, 1), (4, 1), (4, 0)], False),
    ("F", [(0, 1), (0, 3), (1, 3), (1, 2), (3, 2), (3, 1), (2, 1), (2, 0), (1, 0), (1, 1)], True),
    ("Q", [(0, 1), (0, 3), (1, 3), (1, 2), (3, 2), (3, 1), (2, 1), (2, 0), (1, 0), (1, 1)], False),
    ("N", [(0, 1), (0, 2), (2, 2), (2, 1), (4, 1), (4, 0), (1, 0), (1, 1)], True),
    ("N'", [(0, 1), (0, 2), (2, 2), (2, 1), (4, 1), (4, 0), (1, 0), (1, 1)], False),
    ("W", [(0, 1), (0, 3), (1, 3), (1, 2), (2, 2), (2, 1), (3, 1), (3, 0), (1, 0), (1, 1)], False),
]


def flip_x(poly: Polyline) -> Polyline:
    """Mirror a polyline about the y axis."""
    return transform_polyline(_FLIP_X, poly)


def pentominoes() -> dict[str, Polyline]:
    """Outlines of the one-sided pentominoes, keyed by name.

    Mirror pairs are distinguished (L/J, P/B, Z/S, Y/Y', F/Q, N/N'). All
    outlines have area 5 and are traced in the same (counter-clockwise)
    sense.

    Returns:
        Ordered mapping from name to closed polyline
    """
    shapes: dict[str, Polyline] = {}
    for name, vertices, mirrored in _PENTOMINOES:
        outline = Polyline.closed(Point(float(x), float(y)) for x, y in vertices)
        if mirrored:
            shapes[name] = flip_x(outline)
        else:
            shapes[name] = outline.with_points(reversed(outline.points))
    return shapes
