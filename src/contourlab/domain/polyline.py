"""Core geometric types for polyline representation.

This module defines the fundamental geometric types used throughout contourlab:
- Point: A 2D point
- Segment: An ordered pair of points
- PolylineKind: Enum for open/closed polylines
- Polyline: An immutable open or closed sequence of points
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray

from contourlab.exceptions import InvalidInputError


class PolylineKind(Enum):
    """Polyline kind.

    - OPEN: endpoints are not joined
    - CLOSED: an implicit edge joins the last point back to the first
    """

    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_complex(self) -> complex:
        """Convert to the complex number x + iy."""
        return complex(self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True, slots=True)
class Segment:
    """An ordered pair of points.

    Attributes:
        extreme1: Start point
        extreme2: End point
    """

    extreme1: Point
    extreme2: Point

    @property
    def length(self) -> float:
        """Euclidean distance between the extremes."""
        return self.extreme1.distance_to(self.extreme2)


@dataclass(frozen=True, slots=True)
class Polyline:
    """An open or closed sequence of points.

    Closed polylines are stored without repeating the first point; the
    wrap-around edge is produced by edges(). All transforms build new
    Polyline values.

    Attributes:
        points: Ordered points
        kind: Open or closed
    """

    points: tuple[Point, ...]
    kind: PolylineKind = PolylineKind.CLOSED

    def __post_init__(self) -> None:
        points = tuple(self.points)
        if not points:
            raise InvalidInputError("Polyline must have at least one point")
        object.__setattr__(self, "points", points)

    @classmethod
    def open(cls, points: Iterable[Point]) -> "Polyline":
        """Create an open polyline."""
        return cls(points=tuple(points), kind=PolylineKind.OPEN)

    @classmethod
    def closed(cls, points: Iterable[Point]) -> "Polyline":
        """Create a closed polyline."""
        return cls(points=tuple(points), kind=PolylineKind.CLOSED)

    @property
    def is_closed(self) -> bool:
        """True for closed polylines."""
        return self.kind is PolylineKind.CLOSED

    def __len__(self) -> int:
        return len(self.points)

    def edges(self) -> Iterator[tuple[Point, Point]]:
        """Iterate over consecutive point pairs.

        For closed polylines the last pair is (last, first).

        Yields:
            (start, end) point pairs
        """
        n = len(self.points)
        count = n if self.is_closed and n > 1 else n - 1
        for i in range(count):
            yield self.points[i], self.points[(i + 1) % n]

    def segments(self) -> list[Segment]:
        """Return the edges as Segment values."""
        return [Segment(a, b) for a, b in self.edges()]

    def with_points(self, points: Iterable[Point]) -> "Polyline":
        """Create a polyline of the same kind with new points."""
        return Polyline(points=tuple(points), kind=self.kind)

    def to_array(self) -> NDArray[np.float64]:
        """Return the points as an (n, 2) float array."""
        return np.array([p.to_tuple() for p in self.points], dtype=np.float64)

    @classmethod
    def from_array(
        cls, array: NDArray[np.float64], kind: PolylineKind = PolylineKind.CLOSED
    ) -> "Polyline":
        """Create a polyline from an (n, 2) array.

        Args:
            array: Point coordinates, one row per point
            kind: Polyline kind

        Returns:
            Polyline instance

        Raises:
            InvalidInputError: If the array is not (n, 2)
        """
        arr = np.asarray(array, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise InvalidInputError(f"Expected an (n, 2) array, got shape {arr.shape}")
        return cls(points=tuple(Point(float(x), float(y)) for x, y in arr), kind=kind)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the polyline
        """
        return {
            "kind": self.kind.value,
            "points": [p.to_dict() for p in self.points],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polyline":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a polyline

        Returns:
            Polyline instance
        """
        points = tuple(Point.from_dict(p) for p in data["points"])
        return cls(points=points, kind=PolylineKind(data["kind"]))
