"""Conic fitting, canonical ellipse parameters and ellipse intersection.

Conics are symmetric 3x3 matrices C with points satisfying p^T C p = 0 in
homogeneous coordinates. When points are mapped by a transform T the conic
is carried by inv_transpose(T) @ C @ inv(T).
"""

import math
from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray

from contourlab.core.transforms import apply_homogeneous, desp, inv_transpose, rot3, scaling
from contourlab.domain import Conic, EllipseDescription, EllipseParams, Point
from contourlab.exceptions import IllConditionedInputError, InvalidInputError, NumericFailure

# Relative size of the linear term below which the reduced conics share a center.
COMMON_CENTER_TOLERANCE = 1e-6
# Relative imaginary part below which a quartic root is taken as real.
REAL_ROOT_TOLERANCE = 1e-6
# Leading quartic coefficients below this fraction of the largest one are dropped.
LEADING_COEF_TOLERANCE = 1e-12
# Smallest usable conic eigenvalue, relative to the largest one.
EIGENVALUE_TOLERANCE = 1e-12


def _matrix(conic: Conic | NDArray[np.float64]) -> NDArray[np.float64]:
    if isinstance(conic, Conic):
        return np.array(conic.matrix)
    return Conic(conic).matrix.copy()


def _carry(t: NDArray[np.float64], m: NDArray[np.float64]) -> NDArray[np.float64]:
    """Conic m expressed in the frame of points mapped by t."""
    r = inv_transpose(t) @ m @ np.linalg.inv(t)
    return 0.5 * (r + r.T)


def estimate_conic_raw(points: Iterable[Point]) -> Conic:
    """Least-squares conic through a set of points.

    Each point contributes the row [x^2, y^2, 2xy, 2x, 2y, 1] of a
    homogeneous system. The solution is the right singular vector of the
    smallest singular value, so the result has unit Frobenius-like norm and
    an arbitrary sign.

    Args:
        points: At least 5 points

    Returns:
        Fitted conic

    Raises:
        InvalidInputError: If fewer than 5 points are given
        NumericFailure: If the SVD does not converge
    """
    pts = [p.to_tuple() for p in points]
    if len(pts) < 5:
        raise InvalidInputError(f"Conic fitting needs at least 5 points, got {len(pts)}")

    xy = np.array(pts, dtype=np.float64)
    x = xy[:, 0]
    y = xy[:, 1]
    eqs = np.column_stack([x * x, y * y, 2 * x * y, 2 * x, 2 * y, np.ones(len(x))])

    try:
        _, _, vt = np.linalg.svd(eqs)
    except np.linalg.LinAlgError as e:
        raise NumericFailure("estimate_conic_raw", str(e)) from e

    a, b, c, d, e, f = vt[-1]
    return Conic.from_coefficients(a, b, c, d, e, f)


def _align(m: NDArray[np.float64]) -> tuple[float, NDArray[np.float64], NDArray[np.float64]]:
    """Rotate away the cross term and equalize the quadratic coefficients.

    The pre-scale uses the magnitude of the coefficient ratio, so an
    indefinite quadratic part (a hyperbola produced by a projective
    reduction) is aligned too.

    Returns:
        (phi, t1, t2) with t1 the rotation and t2 the anisotropic pre-scale

    Raises:
        IllConditionedInputError: If a rotated quadratic coefficient vanishes
    """
    a = m[0, 0]
    b = m[1, 1]
    c = m[0, 1]
    phi = 0.5 * math.atan2(2 * c, b - a)
    t1 = rot3(-phi)
    m1 = t1 @ m @ t1.T
    a1 = m1[0, 0]
    b1 = m1[1, 1]
    if a1 == 0.0 or b1 == 0.0:
        raise IllConditionedInputError("Conic has a degenerate quadratic part")
    t2 = np.diag([math.sqrt(abs(a1 / b1)), 1.0, 1.0])
    return phi, t1, t2


def _center_and_angle(m: NDArray[np.float64]) -> tuple[float, float, float]:
    """Center and axis angle of a central conic, without the scale term."""
    phi, t1, t2 = _align(m)
    m2 = _carry(t2, t1 @ m @ t1.T)
    m2 = m2 / m2[0, 0]
    center = np.linalg.inv(t2 @ t1) @ np.array([-m2[0, 2], -m2[1, 2], 1.0])
    angle = -phi if t2[0, 0] < 1.0 else -phi - math.pi / 2
    return float(center[0] / center[2]), float(center[1] / center[2]), angle


def analyze_ellipse(conic: Conic | NDArray[np.float64]) -> EllipseDescription:
    """Canonical parameters of an ellipse given by its conic matrix.

    The conic is rotated to remove the cross term, pre-scaled along x so
    both quadratic coefficients match, translated to remove the linear terms
    and uniformly scaled to absorb the constant term. The composition of
    these steps maps the ellipse onto the unit circle.

    Args:
        conic: Conic of a real ellipse (any overall scale and sign)

    Returns:
        EllipseDescription with (center, major >= minor, angle) and the
        normalizing transform

    Raises:
        IllConditionedInputError: If the conic is not a real ellipse
    """
    m = _matrix(conic)
    phi, t1, t2 = _align(m)
    m1 = t1 @ m @ t1.T
    if m1[0, 0] * m1[1, 1] <= 0.0:
        raise IllConditionedInputError("Conic is not an ellipse: quadratic part is not definite")

    m2 = _carry(t2, m1)
    m2 = m2 / m2[0, 0]
    d2 = m2[0, 2]
    e2 = m2[1, 2]
    f2 = m2[2, 2]
    sc2 = d2 * d2 + e2 * e2 - f2
    if sc2 <= 0.0:
        raise IllConditionedInputError("Conic is not a real ellipse: non-positive scale term")
    sc = math.sqrt(sc2)

    t3 = scaling(1 / sc) @ desp(d2, e2)
    t = t3 @ t2 @ t1

    center = np.linalg.inv(t) @ np.array([0.0, 0.0, 1.0])
    sx = sc / t2[0, 0]
    sy = sc / t2[1, 1]
    if sx > sy:
        major, minor, angle = sx, sy, -phi
    else:
        major, minor, angle = sy, sx, -phi - math.pi / 2

    params = EllipseParams(
        center_x=float(center[0] / center[2]),
        center_y=float(center[1] / center[2]),
        major=float(major),
        minor=float(minor),
        angle=float(angle),
    )
    return EllipseDescription(params=params, transform=t)


def conic_from_ellipse(params: EllipseParams) -> Conic:
    """Conic matrix of an ellipse given by canonical parameters.

    Args:
        params: Center, semi-axes and angle of the major axis

    Returns:
        Conic whose zero set is the ellipse

    Raises:
        InvalidInputError: If a semi-axis is not positive
    """
    if params.major <= 0.0 or params.minor <= 0.0:
        raise InvalidInputError("Ellipse semi-axes must be positive")
    t = (
        np.diag([1 / params.major, 1 / params.minor, 1.0])
        @ rot3(params.angle)
        @ desp(-params.center_x, -params.center_y)
    )
    m = t.T @ np.diag([1.0, 1.0, -1.0]) @ t
    return Conic(0.5 * (m + m.T))


def _choose_rotation(mx: float, my: float, angle: float) -> NDArray[np.float64]:
    """Axis-aligning rotation that puts most of the center offset on x."""
    mx1, my1, _ = rot3(angle) @ np.array([mx, my, 1.0])
    if abs(mx1) > abs(my1):
        return rot3(angle)
    return rot3(angle + math.pi / 2)


def reduce_conics(
    c1: Conic | NDArray[np.float64], c2: Conic | NDArray[np.float64]
) -> tuple[NDArray[np.float64], Conic]:
    """Simultaneous reduction of two conics.

    Finds a transform w that maps c1 onto the unit circle (using a signed
    inverse square root of its eigenvalues, so the overall sign of c1 does
    not matter) and aligns the axes of c2 with the coordinate axes.

    Args:
        c1: First conic (an ellipse)
        c2: Second conic (an ellipse)

    Returns:
        (w, c2') where c2' is c2 expressed in the reduced frame

    Raises:
        IllConditionedInputError: If c1 is degenerate or c2 has no center in
            the reduced frame
        NumericFailure: If the eigendecomposition fails
    """
    m1 = _matrix(c1)
    m2 = _matrix(c2)

    try:
        s, v = np.linalg.eigh(m1)
    except np.linalg.LinAlgError as e:
        raise NumericFailure("reduce_conics", str(e)) from e
    # eigh returns ascending eigenvalues
    s = s[::-1]
    v = v[:, ::-1]

    if np.min(np.abs(s)) <= EIGENVALUE_TOLERANCE * np.max(np.abs(s)):
        raise IllConditionedInputError("First conic is degenerate")

    sg = np.sign(s)
    p = np.flipud(np.eye(3)) if sg[1] < 0 else np.eye(3)
    w1 = inv_transpose(p @ np.diag(sg / np.sqrt(np.abs(s))) @ v.T)

    mx, my, angle = _center_and_angle(_carry(w1, m2))
    w = _choose_rotation(mx, my, angle) @ w1
    return w, Conic(_carry(w, m2))


def _reduced_coefficients(m: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """(a, b, e, f) of the reduced conic a x^2 + b y^2 + x + e y + f = 0."""
    m = m / (2 * m[0, 2])
    return float(m[0, 0]), float(m[1, 1]), float(2 * m[1, 2]), float(m[2, 2])


def _intersection_reduced(m: NDArray[np.float64]) -> list[tuple[float, float]]:
    """Intersections of the unit circle with an off-center reduced conic.

    Substituting x^2 = 1 - y^2 makes the conic linear in x, and the circle
    equation becomes a quartic in y.
    """
    a, b, e, f = _reduced_coefficients(m)
    coefs = [
        -1 + a * a + 2 * a * f + f * f,
        2 * a * e + 2 * e * f,
        1 - 2 * a * a + 2 * a * b + e * e - 2 * a * f + 2 * b * f,
        -2 * a * e + 2 * b * e,
        a * a - 2 * a * b + b * b,
    ]
    if not all(math.isfinite(k) for k in coefs):
        raise NumericFailure("intersection_ellipses", "non-finite quartic coefficients")

    scale = max(abs(k) for k in coefs)
    if scale == 0.0:
        raise IllConditionedInputError("Conics coincide")
    while len(coefs) > 1 and abs(coefs[-1]) < LEADING_COEF_TOLERANCE * scale:
        coefs.pop()

    try:
        roots = np.roots(coefs[::-1])
    except np.linalg.LinAlgError as err:
        raise NumericFailure("intersection_ellipses", str(err)) from err

    solutions = []
    for r in roots:
        if abs(r.imag) >= REAL_ROOT_TOLERANCE * max(1.0, abs(r)):
            continue
        y = float(r.real)
        x = -a - f - e * y + (a - b) * y * y
        if abs(x * x + y * y - 1) < REAL_ROOT_TOLERANCE:
            solutions.append((x, y))
    return solutions


def _intersection_common_center(a: float, b: float) -> list[tuple[float, float]]:
    """Intersections of the unit circle with a x^2 + b y^2 + 1 = 0."""
    if abs(b - a) <= EIGENVALUE_TOLERANCE * max(abs(a), abs(b), 1.0):
        raise IllConditionedInputError("Concentric conics with equal reduced axes")
    p2 = (b + 1) / (b - a)
    q2 = (-1 - a) / (b - a)
    if p2 < 0.0 or q2 < 0.0:
        return []
    p = math.sqrt(p2)
    q = math.sqrt(q2)
    return [(-p, -q), (-p, q), (p, -q), (p, q)]


def intersection_ellipses(
    c1: Conic | NDArray[np.float64], c2: Conic | NDArray[np.float64]
) -> list[Point]:
    """Real intersection points of two ellipses.

    Both conics are reduced with reduce_conics. If the reduced second conic
    is centered at the origin the four symmetric solutions have a closed
    form; otherwise the real roots of a quartic are back-substituted. The
    solutions are mapped back to the original frame.

    Args:
        c1: First ellipse conic
        c2: Second ellipse conic

    Returns:
        Intersection points (typically 0, 2 or 4). A tangency is reported
        once per root found.

    Raises:
        IllConditionedInputError: If the input is degenerate, or the ellipses
            are concentric with coinciding reduced axes
        NumericFailure: If a numeric routine fails
    """
    w, reduced = reduce_conics(c1, c2)
    m = np.array(reduced.matrix)
    a = m[0, 0]
    b = m[1, 1]
    d = m[0, 2]
    f = m[2, 2]

    if abs(d / a) > COMMON_CENTER_TOLERANCE:
        solutions = _intersection_reduced(m)
    else:
        if f == 0.0:
            raise IllConditionedInputError("Reduced conic passes through the common center")
        solutions = _intersection_common_center(a / f, b / f)

    if not solutions:
        return []

    pts = apply_homogeneous(np.linalg.inv(w), np.array(solutions, dtype=np.float64))
    return [Point(float(x), float(y)) for x, y in pts]
