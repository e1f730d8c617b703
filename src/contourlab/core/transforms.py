"""Homogeneous 2D transforms.

3x3 matrices acting on homogeneous coordinates (x, y, 1). Transforms are
composed by matrix product, rightmost applied first.
"""

import math

import numpy as np
from numpy.typing import NDArray

from contourlab.domain import Polyline


def desp(dx: float, dy: float) -> NDArray[np.float64]:
    """Translation by (dx, dy)."""
    return np.array(
        [
            [1.0, 0.0, dx],
            [0.0, 1.0, dy],
            [0.0, 0.0, 1.0],
        ]
    )


def scaling(s: float) -> NDArray[np.float64]:
    """Isotropic scaling about the origin."""
    return np.diag([s, s, 1.0])


def rot3(angle: float) -> NDArray[np.float64]:
    """Rotation about the z axis.

    Maps a direction at ``angle`` onto the positive x axis, so it rotates
    points by ``-angle``.
    """
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array(
        [
            [c, s, 0.0],
            [-s, c, 0.0],
            [0.0, 0.0, 1.0],
        ]
    )


def inv_transpose(t: NDArray[np.float64]) -> NDArray[np.float64]:
    """Inverse transpose, the map that carries conics along with ``t``."""
    return np.linalg.inv(t).T


def apply_homogeneous(t: NDArray[np.float64], points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Map (n, 2) points through a homogeneous transform and dehomogenize.

    Args:
        t: 3x3 transform
        points: (n, 2) array of points

    Returns:
        (n, 2) array of transformed points
    """
    pts = np.asarray(points, dtype=np.float64)
    hom = np.column_stack([pts, np.ones(len(pts))]) @ np.asarray(t).T
    return hom[:, :2] / hom[:, 2:3]


def transform_polyline(t: NDArray[np.float64], poly: Polyline) -> Polyline:
    """Map every point of a polyline through a homogeneous transform.

    Args:
        t: 3x3 transform
        poly: Input polyline

    Returns:
        New polyline of the same kind
    """
    return Polyline.from_array(apply_homogeneous(t, poly.to_array()), kind=poly.kind)
