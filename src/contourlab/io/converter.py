"""Conversion between batch file records and domain polylines.

A record is the JSON form of one named polyline:

    {"name": "blob-1", "kind": "closed", "points": [[x, y], ...]}

The kind defaults to closed when omitted.
"""

from typing import Any

from contourlab.domain import Point, Polyline, PolylineKind
from contourlab.exceptions import InvalidInputError


def record_to_polyline(record: dict[str, Any]) -> Polyline:
    """Convert a batch file record to a Polyline.

    Args:
        record: Dictionary with "points" and optional "kind"

    Returns:
        Polyline instance

    Raises:
        InvalidInputError: If the record is malformed
    """
    try:
        kind = PolylineKind(record.get("kind", PolylineKind.CLOSED.value))
    except ValueError as e:
        raise InvalidInputError(f"Unknown polyline kind: {record.get('kind')!r}") from e

    raw_points = record.get("points")
    if not isinstance(raw_points, list):
        raise InvalidInputError("Record has no point list")

    points = []
    for item in raw_points:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise InvalidInputError(f"Expected an [x, y] pair, got {item!r}")
        try:
            points.append(Point(float(item[0]), float(item[1])))
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Non-numeric coordinate in {item!r}") from e

    return Polyline(points=tuple(points), kind=kind)


def polyline_to_record(name: str, poly: Polyline) -> dict[str, Any]:
    """Convert a Polyline to a batch file record."""
    return {
        "name": name,
        "kind": poly.kind.value,
        "points": [[p.x, p.y] for p in poly.points],
    }
