"""Moments of closed contours and moment-based normalization.

First and second moments are exact integrals over either the solid region
enclosed by a closed polyline or its boundary curve, accumulated edge by
edge from closed-form expressions. The normalizing transforms built from
them are homogeneous 3x3 matrices (see contourlab.core.transforms).
"""

import math
from collections.abc import Callable
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from contourlab.core.geometry import bounding_box
from contourlab.core.transforms import desp, rot3, scaling, transform_polyline
from contourlab.domain import Polyline
from contourlab.exceptions import InvalidInputError

# Below this |cxy| the principal direction is decided by comparing variances.
EIG_EPSILON = 1e-12

_Sums = tuple[float, float, float, float, float, float]


class Moments(NamedTuple):
    """Mean and covariance of a contour."""

    mean_x: float
    mean_y: float
    var_x: float
    var_y: float
    covar_xy: float


def _boundary_terms(x1: float, y1: float, x2: float, y2: float) -> _Sums:
    length = math.hypot(x2 - x1, y2 - y1)
    return (
        length,
        length * (x1 + x2) / 2,
        length * (y1 + y2) / 2,
        length * (x1 * x1 + x2 * x2 + x1 * x2) / 3,
        length * (y1 * y1 + y2 * y2 + y1 * y2) / 3,
        length * (2 * x1 * y1 + x2 * y1 + x1 * y2 + 2 * x2 * y2) / 6,
    )


def _solid_terms(x1: float, y1: float, x2: float, y2: float) -> _Sums:
    cross = x1 * y2 - x2 * y1
    return (
        cross / 2,
        (2 * x1 * x2 * (y2 - y1) - x2**2 * (2 * y1 + y2) + x1**2 * (2 * y2 + y1)) / 12,
        (-2 * y1 * y2 * (x2 - x1) + y2**2 * (2 * x1 + x2) - y1**2 * (2 * x2 + x1)) / 12,
        ((x1**2 * x2 + x1 * x2**2) * (y2 - y1) + (x1**3 - x2**3) * (y1 + y2)) / 12,
        (-(y1**2 * y2 + y1 * y2**2) * (x2 - x1) - (y1**3 - y2**3) * (x1 + x2)) / 12,
        (cross * (x1 * (2 * y1 + y2) + x2 * (y1 + 2 * y2))) / 24,
    )


def _moments(poly: Polyline, terms: Callable[[float, float, float, float], _Sums]) -> Moments:
    if not poly.is_closed:
        raise InvalidInputError("Moments are defined for closed polylines only")

    s = sx = sy = sx2 = sy2 = sxy = 0.0
    for a, b in poly.edges():
        ds, dsx, dsy, dsx2, dsy2, dsxy = terms(a.x, a.y, b.x, b.y)
        s += ds
        sx += dsx
        sy += dsy
        sx2 += dsx2
        sy2 += dsy2
        sxy += dsxy

    if s == 0.0:
        raise InvalidInputError("Degenerate contour: zero total mass")

    mx = sx / s
    my = sy / s
    return Moments(
        mean_x=mx,
        mean_y=my,
        var_x=sx2 / s - mx * mx,
        var_y=sy2 / s - my * my,
        covar_xy=sxy / s - mx * my,
    )


def moments_contour(poly: Polyline) -> Moments:
    """Mean and covariance of the solid region enclosed by a closed polyline.

    The result does not depend on the traversal direction.

    Args:
        poly: Closed polyline

    Returns:
        Moments (mean_x, mean_y, var_x, var_y, covar_xy)

    Raises:
        InvalidInputError: If the polyline is open or encloses no area
    """
    return _moments(poly, _solid_terms)


def moments_boundary(poly: Polyline) -> Moments:
    """Mean and covariance of the boundary curve of a closed polyline.

    Each edge is weighted by its length.

    Args:
        poly: Closed polyline

    Returns:
        Moments (mean_x, mean_y, var_x, var_y, covar_xy)

    Raises:
        InvalidInputError: If the polyline is open or has zero perimeter
    """
    return _moments(poly, _boundary_terms)


def eig_2x2_dir(cxx: float, cyy: float, cxy: float) -> tuple[float, float, float]:
    """Eigenstructure of a 2x2 covariance matrix.

    Args:
        cxx: Variance along x
        cyy: Variance along y
        cxy: Covariance

    Returns:
        (l1, l2, angle): eigenvalues with l1 >= l2 and the angle of the
        dominant eigenvector. When cxy is negligible and cyy > cxx the angle
        is exactly pi/2.
    """
    ra = math.sqrt(abs(cxx * cxx + 4 * cxy * cxy - 2 * cxx * cyy + cyy * cyy))
    l1 = 0.5 * (cxx + cyy + ra)
    l2 = 0.5 * (cxx + cyy - ra)
    if abs(cxy) < EIG_EPSILON and cyy > cxx:
        angle = math.pi / 2
    else:
        angle = math.atan2(2 * cxy, cxx - cyy + ra)
    return l1, l2, angle


def _principal_axes(poly: Polyline) -> tuple[Moments, float, float, float]:
    m = moments_contour(poly)
    l1, l2, angle = eig_2x2_dir(m.var_x, m.var_y, m.covar_xy)
    if l2 <= 0.0:
        raise InvalidInputError("Degenerate contour: singular covariance")
    return m, l1, l2, angle


def center_shape(poly: Polyline) -> Polyline:
    """Translate a closed polyline so that its region centroid is the origin."""
    m = moments_contour(poly)
    return transform_polyline(desp(-m.mean_x, -m.mean_y), poly)


def normal_shape(poly: Polyline) -> Polyline:
    """Center a closed polyline and scale it to unit maximum standard deviation."""
    m = moments_contour(poly)
    h = scaling(1 / math.sqrt(max(m.var_x, m.var_y))) @ desp(-m.mean_x, -m.mean_y)
    return transform_polyline(h, poly)


def box_shape(poly: Polyline) -> Polyline:
    """Center at the bounding-box middle and scale to bounding-box height 2.

    Raises:
        InvalidInputError: If the bounding box has zero height
    """
    x1, y1, x2, y2 = bounding_box(poly)
    if y2 == y1:
        raise InvalidInputError("Bounding box has zero height")
    h = scaling(2 / (y2 - y1)) @ desp(-(x1 + x2) / 2, -(y1 + y2) / 2)
    return transform_polyline(h, poly)


def equalize_contour(poly: Polyline) -> Polyline:
    """Equalize the covariance eigenvalues of a closed polyline.

    The dominant principal axis is shrunk about the centroid until both
    eigenvalues match. Position and orientation are preserved.

    Raises:
        InvalidInputError: If the polyline is open or degenerate
    """
    m, l1, l2, angle = _principal_axes(poly)
    t = (
        desp(m.mean_x, m.mean_y)
        @ rot3(-angle)
        @ np.diag([math.sqrt(l2 / l1), 1.0, 1.0])
        @ rot3(angle)
        @ desp(-m.mean_x, -m.mean_y)
    )
    return transform_polyline(t, poly)


def whitener(poly: Polyline) -> NDArray[np.float64]:
    """Affine transform mapping the contour covariance to the identity.

    Translates the centroid to the origin, aligns the dominant axis with x
    and scales each principal axis by the inverse standard deviation. The
    result is affine invariant up to a residual rotation.

    Args:
        poly: Closed polyline

    Returns:
        3x3 homogeneous transform

    Raises:
        InvalidInputError: If the polyline is open or degenerate
    """
    m, l1, l2, angle = _principal_axes(poly)
    return (
        np.diag([1 / math.sqrt(l1), 1 / math.sqrt(l2), 1.0])
        @ rot3(angle)
        @ desp(-m.mean_x, -m.mean_y)
    )


def whiten_contour(poly: Polyline) -> Polyline:
    """Apply whitener(poly) to poly."""
    return transform_polyline(whitener(poly), poly)
