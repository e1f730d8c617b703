"""Higher-order moment descriptors of closed contours.

Third and fourth order moments along the x axis of the solid region
enclosed by a closed polyline, and the fourth order moment as a function of
the rotation angle. Its critical angles give independent-component-like
orientations of a shape without iterative optimization.

The per-edge terms are closed-form integrals (Green's theorem) of
polynomials of degree up to six in the edge coordinates. Values are not
normalized by area; the sign follows the traversal sense like
oriented_area.
"""

import math

import numpy as np

from contourlab.domain import Polyline
from contourlab.exceptions import InvalidInputError, NumericFailure

# Largest imaginary part (radians) of an accepted critical angle.
REAL_ANGLE_TOLERANCE = 0.1 * math.pi / 180
# Leading derivative coefficients below this fraction of the largest one are zero.
LEADING_COEF_TOLERANCE = 1e-12

_Coefs = list[float]


def _require_closed(poly: Polyline, operation: str) -> None:
    if not poly.is_closed:
        raise InvalidInputError(f"{operation} is defined for closed polylines only")


def _kurt_term(x1: float, y1: float, x2: float, y2: float) -> float:
    return (
        x1**4 * x2 * (y1 - y2)
        + x1**3 * x2**2 * (y1 - y2)
        + x1**2 * x2**3 * (y1 - y2)
        + x1 * x2**4 * (y1 - y2)
        - x1**5 * (2 * y1 + y2)
        + x2**5 * (y1 + 2 * y2)
    ) / 30


def _skew_term(x1: float, y1: float, x2: float, y2: float) -> float:
    return (
        2 * x1**3 * x2 * (y1 - y2)
        + 2 * x1**2 * x2**2 * (y1 - y2)
        + 2 * x1 * x2**3 * (y1 - y2)
        - x1**4 * (3 * y1 + 2 * y2)
        + x2**4 * (2 * y1 + 3 * y2)
    ) / 40


def kurtosis_x(poly: Polyline) -> float:
    """Fourth order moment along x of the region enclosed by a closed polyline.

    Raises:
        InvalidInputError: If the polyline is open
    """
    _require_closed(poly, "kurtosis_x")
    return sum(_kurt_term(a.x, a.y, b.x, b.y) for a, b in poly.edges())


def skew_x(poly: Polyline) -> float:
    """Third order moment along x of the region enclosed by a closed polyline.

    Raises:
        InvalidInputError: If the polyline is open
    """
    _require_closed(poly, "skew_x")
    return sum(_skew_term(a.x, a.y, b.x, b.y) for a, b in poly.edges())


def _kc0(x1: float, y1: float, x2: float, y2: float) -> float:
    return (
        (2 * x1 + x2) * y1**5
        + (-x1 + x2) * y1**4 * y2
        + (-x1 + x2) * y1**3 * y2**2
        + (-x1 + x2) * y1**2 * y2**3
        + (-x1 + x2) * y1 * y2**4
        - (x1 + 2 * x2) * y2**5
    ) / 30


def _kc1(x1: float, y1: float, x2: float, y2: float) -> float:
    return (
        -2 * y1**6
        + 2 * y2**6
        + x1**2 * (y1 - y2) * (10 * y1**3 + 6 * y1**2 * y2 + 3 * y1 * y2**2 + y2**3)
        + x2**2 * (y1 - y2) * (y1**3 + 3 * y1**2 * y2 + 6 * y1 * y2**2 + 10 * y2**3)
        + 2 * x1 * x2 * (2 * y1**4 + y1**3 * y2 - y1 * y2**3 - 2 * y2**4)
    ) / 30


def _kc2(x1: float, y1: float, x2: float, y2: float) -> float:
    return (
        y1**3 * (20 * x1**3 + 6 * x1**2 * x2 + 3 * x1 * x2**2 + x2**3 - 10 * x1 * y1**2 + x2 * y1**2)
        - (x1 - x2) * y1**2 * (6 * x1**2 + 6 * x1 * x2 + 3 * x2**2 + y1**2) * y2
        - (x1 - x2) * y1 * (3 * x1**2 + 6 * x1 * x2 + 6 * x2**2 + y1**2) * y2**2
        - (x1**3 + 3 * x1**2 * x2 + 6 * x1 * x2**2 + 20 * x2**3 + (x1 - x2) * y1**2) * y2**3
        + (-x1 + x2) * y1 * y2**4
        - (x1 - 10 * x2) * y2**5
    ) / 30


def _kc3(x1: float, y1: float, x2: float, y2: float) -> float:
    return (
        2 * x1**3 * x2 * (y1 - y2) * (2 * y1 + y2)
        + x1**4 * (20 * y1**2 - 4 * y1 * y2 - y2**2)
        + x1**2
        * (
            3 * x2**2 * y1**2
            - 20 * y1**4
            - 4 * y1**3 * y2
            - 3 * (x2**2 + y1**2) * y2**2
            - 2 * y1 * y2**3
            - y2**4
        )
        + x2**2
        * (
            y1**4
            + 2 * y1**3 * y2
            + 3 * y1**2 * y2**2
            + 4 * y1 * y2**3
            + 20 * y2**4
            + x2**2 * (y1**2 + 4 * y1 * y2 - 20 * y2**2)
        )
        + 2
        * x1
        * x2
        * (y1 - y2)
        * (x2**2 * (y1 + 2 * y2) + (y1 + y2) * (2 * y1**2 + y1 * y2 + 2 * y2**2))
    ) / 30


def _kc4(x1: float, y1: float, x2: float, y2: float) -> float:
    return (
        x1**4 * x2 * (y1 - y2)
        + x1**5 * (10 * y1 - y2)
        + x1**2 * x2 * (y1 - y2) * (x2**2 + 6 * y1**2 + 6 * y1 * y2 + 3 * y2**2)
        + x1 * x2**2 * (y1 - y2) * (x2**2 + 3 * y1**2 + 6 * y1 * y2 + 6 * y2**2)
        + x1**3 * (x2**2 * y1 - 20 * y1**3 - x2**2 * y2 - 6 * y1**2 * y2 - 3 * y1 * y2**2 - y2**3)
        + x2**3 * (y1**3 + x2**2 * (y1 - 10 * y2) + 3 * y1**2 * y2 + 6 * y1 * y2**2 + 20 * y2**3)
    ) / 30


def _kc5(x1: float, y1: float, x2: float, y2: float) -> float:
    return (
        2 * x1**6
        + 2 * x1**3 * x2 * (y1 - y2) * (2 * y1 + y2)
        + 2 * x1 * x2**3 * (y1 - y2) * (y1 + 2 * y2)
        + 3 * x1**2 * x2**2 * (y1**2 - y2**2)
        - x1**4 * (10 * y1**2 + 4 * y1 * y2 + y2**2)
        + x2**4 * (-2 * x2**2 + y1**2 + 4 * y1 * y2 + 10 * y2**2)
    ) / 30


_COEFFICIENT_TERMS = (_kc0, _kc1, _kc2, _kc3, _kc4, _kc5, _kurt_term)


def kurt_coefs(poly: Polyline) -> _Coefs:
    """Coefficients of the x-axis kurtosis as a function of rotation.

    The fourth order moment along the direction at angle alpha is

        sum_k coefs[k] * cos(alpha)^k * sin(alpha)^(6 - k)

    (see kurt_alpha). coefs[6] equals kurtosis_x(poly).

    Args:
        poly: Closed polyline

    Returns:
        Seven coefficients, index 0..6

    Raises:
        InvalidInputError: If the polyline is open
    """
    _require_closed(poly, "kurt_coefs")
    coefs = [0.0] * len(_COEFFICIENT_TERMS)
    for a, b in poly.edges():
        for k, term in enumerate(_COEFFICIENT_TERMS):
            coefs[k] += term(a.x, a.y, b.x, b.y)
    return coefs


def kurt_alpha(coefs: _Coefs, alpha: float) -> float:
    """Evaluate the kurtosis profile at rotation angle alpha."""
    c = math.cos(alpha)
    s = math.sin(alpha)
    return sum(coef * c**k * s ** (6 - k) for k, coef in enumerate(coefs))


def deriv_coefs(coefs: _Coefs) -> _Coefs:
    """Polynomial whose roots in cot(alpha) are the critical angles of the profile.

    Args:
        coefs: Seven kurtosis coefficients

    Returns:
        Seven coefficients of a degree-6 polynomial, ascending powers

    Raises:
        InvalidInputError: If coefs does not have seven entries
    """
    if len(coefs) != 7:
        raise InvalidInputError(f"Expected 7 kurtosis coefficients, got {len(coefs)}")
    c0, c1, c2, c3, c4, c5, c6 = coefs
    return [
        -c1,
        6 * c0 - 2 * c2,
        5 * c1 - 3 * c3,
        4 * c2 - 4 * c4,
        3 * c3 - 5 * c5,
        2 * c4 - 6 * c6,
        c5,
    ]


def _root_to_angle(r: complex) -> complex:
    if r == 0:
        return complex(math.pi / 2)
    return complex(np.arctan(1 / r))


def ica_angles(poly: Polyline) -> list[float]:
    """Critical angles of the kurtosis profile, most peaked first.

    Solves the derivative polynomial in cot(alpha), maps every root to an
    angle with atan(1/r) and keeps the angles whose imaginary part is within
    0.1 degrees of zero. A vanishing leading coefficient means a root at
    infinity, which is the angle 0.

    Args:
        poly: Closed polyline

    Returns:
        Angles in radians sorted by decreasing kurt_alpha. Empty when no root
        is real enough.

    Raises:
        InvalidInputError: If the polyline is open
        NumericFailure: If the root solver fails
    """
    coefs = kurt_coefs(poly)
    poly_coefs = np.array(deriv_coefs(coefs), dtype=np.float64)
    if not np.all(np.isfinite(poly_coefs)):
        raise NumericFailure("ica_angles", "non-finite polynomial coefficients")

    scale = float(np.max(np.abs(poly_coefs)))
    degree = len(poly_coefs) - 1
    while degree > 0 and abs(poly_coefs[degree]) <= LEADING_COEF_TOLERANCE * scale:
        degree -= 1

    try:
        # numpy.roots takes the highest power first
        roots = np.roots(poly_coefs[degree::-1])
    except np.linalg.LinAlgError as e:
        raise NumericFailure("ica_angles", str(e)) from e

    angles = [_root_to_angle(r) for r in roots]
    real_angles = [float(a.real) for a in angles if abs(a.imag) < REAL_ANGLE_TOLERANCE]
    if scale > 0.0 and degree < len(poly_coefs) - 1:
        real_angles.append(0.0)
    return sorted(real_angles, key=lambda a: -kurt_alpha(coefs, a))
