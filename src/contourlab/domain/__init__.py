"""Domain models for contourlab.

This module contains the value types consumed and produced by the geometric
core. All models are designed to be:

- Immutable (frozen dataclasses, read-only arrays)
- Serializable for inter-process communication (parallel processing)
- Independent of any image or rendering library

Key classes:
- Point: A 2D point
- Segment: Ordered pair of points
- Polyline: Open or closed sequence of points
- Conic: Symmetric 3x3 conic matrix
- EllipseParams: Canonical ellipse parameters
- EllipseDescription: Canonical parameters plus normalizing transform
"""

from contourlab.domain.conic import Conic, EllipseDescription, EllipseParams
from contourlab.domain.polyline import Point, Polyline, PolylineKind, Segment

__all__: list[str] = [
    # Enums
    "PolylineKind",
    # Core types
    "Point",
    "Segment",
    "Polyline",
    "Conic",
    "EllipseParams",
    "EllipseDescription",
]
