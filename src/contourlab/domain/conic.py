"""Conic and ellipse representation.

A conic is the symmetric 3x3 matrix of the quadratic form

    a x^2 + b y^2 + 2c xy + 2d x + 2e y + f = 0

acting on homogeneous coordinates (x, y, 1).
"""

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from contourlab.exceptions import InvalidInputError


def _frozen_matrix(matrix: Any) -> NDArray[np.float64]:
    arr = np.array(matrix, dtype=np.float64)
    if arr.shape != (3, 3):
        raise InvalidInputError(f"Expected a 3x3 matrix, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Conic:
    """Symmetric 3x3 conic matrix.

    The stored array is a read-only copy.

    Attributes:
        matrix: 3x3 symmetric matrix
    """

    matrix: NDArray[np.float64]

    def __post_init__(self) -> None:
        arr = _frozen_matrix(self.matrix)
        if not np.allclose(arr, arr.T):
            raise InvalidInputError("Conic matrix must be symmetric")
        object.__setattr__(self, "matrix", arr)

    @classmethod
    def from_coefficients(
        cls, a: float, b: float, c: float, d: float, e: float, f: float
    ) -> "Conic":
        """Build the conic a x^2 + b y^2 + 2c xy + 2d x + 2e y + f = 0."""
        return cls(
            np.array(
                [
                    [a, c, d],
                    [c, b, e],
                    [d, e, f],
                ]
            )
        )

    @property
    def coefficients(self) -> tuple[float, float, float, float, float, float]:
        """Return (a, b, c, d, e, f)."""
        m = self.matrix
        return (
            float(m[0, 0]),
            float(m[1, 1]),
            float(m[0, 1]),
            float(m[0, 2]),
            float(m[1, 2]),
            float(m[2, 2]),
        )

    def evaluate(self, x: float, y: float) -> float:
        """Value of the quadratic form at (x, y)."""
        v = np.array([x, y, 1.0])
        return float(v @ self.matrix @ v)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"matrix": self.matrix.tolist()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Conic":
        """Deserialize from dictionary."""
        return cls(np.array(data["matrix"], dtype=np.float64))


@dataclass(frozen=True, slots=True)
class EllipseParams:
    """Canonical ellipse parameters.

    Attributes:
        center_x: X coordinate of the center
        center_y: Y coordinate of the center
        major: Major semi-axis (major >= minor)
        minor: Minor semi-axis
        angle: Rotation of the major axis, radians
    """

    center_x: float
    center_y: float
    major: float
    minor: float
    angle: float

    def to_tuple(self) -> tuple[float, float, float, float, float]:
        """Convert to (center_x, center_y, major, minor, angle)."""
        return (self.center_x, self.center_y, self.major, self.minor, self.angle)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "center_x": self.center_x,
            "center_y": self.center_y,
            "major": self.major,
            "minor": self.minor,
            "angle": self.angle,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EllipseParams":
        """Deserialize from dictionary."""
        return cls(
            center_x=float(data["center_x"]),
            center_y=float(data["center_y"]),
            major=float(data["major"]),
            minor=float(data["minor"]),
            angle=float(data["angle"]),
        )


@dataclass(frozen=True, eq=False)
class EllipseDescription:
    """Result of canonical ellipse analysis.

    Attributes:
        params: Canonical parameters
        transform: Homogeneous transform mapping the ellipse onto the unit
            circle centered at the origin
    """

    params: EllipseParams
    transform: NDArray[np.float64] = field(repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "transform", _frozen_matrix(self.transform))
