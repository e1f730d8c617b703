"""Exact Fourier descriptors of closed piecewise-linear curves.

A closed polyline parameterized by the fraction of arc length t in [0, 1)
is a continuous periodic function z(t) = x(t) + i y(t). Its Fourier series

    z(t) = sum_w c_w exp(2 pi i w t)

has coefficients with a closed form, because z is linear between vertices.
Integrating by parts twice leaves only the jumps of the slope at the
vertices:

    c_w = 1 / (2 pi w)^2 * sum_j exp(-2 pi i w t_j) (alpha_{j-1} - alpha_j)

where alpha_j is the slope dz/dt of edge j. c_0 is the mean position.
"""

import cmath
import math
from collections.abc import Callable
from functools import lru_cache

import numpy as np
from numpy.typing import NDArray

from contourlab.core.geometry import perimeter
from contourlab.core.moments import whiten_contour
from contourlab.domain import Point, Polyline
from contourlab.exceptions import InvalidInputError

DEFAULT_CACHE_SIZE = 1024


class FourierDescriptor:
    """A function from integer frequency to complex Fourier coefficient.

    Coefficients are computed on demand and memoized in a bounded cache that
    belongs to this descriptor only.

    Example:
        f = fourier_pl(contour)
        f(0)          # mean position
        f(1), f(-1)   # fundamental ellipse
        f.window(5)   # coefficients -5..5
    """

    def __init__(
        self,
        coefficient: Callable[[int], complex],
        cache_size: int | None = DEFAULT_CACHE_SIZE,
    ) -> None:
        """Initialize the descriptor.

        Args:
            coefficient: Pure function computing the coefficient of frequency w
            cache_size: Maximum number of memoized coefficients (None = unbounded)
        """
        self._coefficient = lru_cache(maxsize=cache_size)(coefficient)

    def __call__(self, w: int) -> complex:
        return self._coefficient(int(w))

    def window(self, w: int) -> NDArray[np.complex128]:
        """Coefficients for frequencies -w..w, in increasing order."""
        return np.array([self(k) for k in range(-w, w + 1)], dtype=np.complex128)


def _prepare(poly: Polyline) -> tuple[NDArray[np.complex128], NDArray[np.float64]]:
    """Complex vertices (closed by repeating the first) and arc-length parameters.

    Zero-length edges are removed since they do not change the curve.
    """
    if not poly.is_closed:
        raise InvalidInputError("Fourier descriptors are defined for closed polylines only")

    zs = [poly.points[0].to_complex()]
    for _, b in poly.edges():
        z = b.to_complex()
        if z != zs[-1]:
            zs.append(z)

    if len(zs) < 3:
        raise InvalidInputError("Degenerate contour: zero perimeter")

    z = np.array(zs, dtype=np.complex128)
    lengths = np.abs(np.diff(z))
    acc = np.concatenate([[0.0], np.cumsum(lengths)])
    return z, acc / acc[-1]


def fourier_pl(poly: Polyline, cache_size: int | None = DEFAULT_CACHE_SIZE) -> FourierDescriptor:
    """Exact Fourier series of a closed piecewise-linear curve.

    Args:
        poly: Closed polyline
        cache_size: Memo bound of the returned descriptor

    Returns:
        FourierDescriptor mapping frequency w to coefficient c_w

    Raises:
        InvalidInputError: If the polyline is open or has zero perimeter
    """
    z, t = _prepare(poly)

    c0 = complex(0.5 * np.sum((z[1:] + z[:-1]) * np.diff(t)))

    alphas = np.diff(z) / np.diff(t)
    # slope jump at the end of each edge, cyclic
    jumps = alphas - np.roll(alphas, -1)
    ends = t[1:]

    def coefficient(w: int) -> complex:
        if w == 0:
            return c0
        k = 1.0 / (2 * math.pi * w) ** 2
        return complex(k * np.sum(np.exp(-2j * math.pi * w * ends) * jumps))

    return FourierDescriptor(coefficient, cache_size=cache_size)


def inv_fou(n: int, w: int, fourier: Callable[[int], complex]) -> Polyline:
    """Reconstruct an n-point closed polygon from frequencies -w..w.

    The remaining entries of the n-length spectrum are zero; the inverse
    discrete Fourier transform samples the truncated series at t = k / n.

    Args:
        n: Number of output points
        w: Highest frequency used
        fourier: Coefficient function (e.g. from fourier_pl)

    Returns:
        Closed polyline with n points

    Raises:
        InvalidInputError: If n < 2w + 1 or w < 0
    """
    if w < 0 or n < 2 * w + 1:
        raise InvalidInputError(f"Cannot place frequencies -{w}..{w} in {n} samples")

    spectrum = np.zeros(n, dtype=np.complex128)
    for k in range(w + 1):
        spectrum[k] = fourier(k)
    for k in range(1, w + 1):
        spectrum[n - k] = fourier(-k)

    samples = np.fft.ifft(n * spectrum)
    return Polyline.closed(Point(float(s.real), float(s.imag)) for s in samples)


def shift_start(r: float, fourier: Callable[[int], complex]) -> FourierDescriptor:
    """Move the parameterization origin: c_w -> exp(i w r) c_w."""
    return FourierDescriptor(lambda w: cmath.exp(1j * w * r) * fourier(w))


def normalize_start(fourier: Callable[[int], complex]) -> FourierDescriptor:
    """Fix the start point so that f(1) - conj(f(-1)) has zero phase.

    Descriptors of the same shape traced from different starting points
    become identical after normalization.
    """
    t = cmath.phase(fourier(1) - fourier(-1).conjugate())
    return shift_start(-t, fourier)


def norm2_cont(poly: Polyline) -> float:
    """Average squared distance to the origin over the arc-length parameterization.

    Equal to the sum of |c_w|^2 over all frequencies of fourier_pl(poly).

    Raises:
        InvalidInputError: If the polyline is open or has zero perimeter
    """
    if not poly.is_closed:
        raise InvalidInputError("norm2_cont is defined for closed polylines only")

    total_length = perimeter(poly)
    if total_length == 0.0:
        raise InvalidInputError("Degenerate contour: zero perimeter")

    total = 0.0
    for a, b in poly.edges():
        total += a.distance_to(b) * (
            a.x * a.x + b.x * b.x + a.x * b.x + a.y * a.y + b.y * b.y + a.y * b.y
        )
    return total / 3 / total_length


def is_ellipse(tol_per_mille: float, poly: Polyline) -> bool:
    """Check whether a closed polyline is very similar to an ellipse.

    The contour is whitened, so any ellipse becomes a circle whose energy
    lies in the w = +-1 coefficients. The shape is accepted when the relative
    difference between the total non-DC amplitude and the fundamental
    amplitude is below tol_per_mille / 1000.

    Args:
        tol_per_mille: Tolerance per 1000 of the total amplitude (e.g. 10)
        poly: Closed polyline

    Returns:
        True if the contour is ellipse-like

    Raises:
        InvalidInputError: If the polyline is open or degenerate
    """
    wc = whiten_contour(poly)
    f = fourier_pl(wc)
    f0 = abs(f(0))
    f1 = math.sqrt(abs(f(-1)) ** 2 + abs(f(1)) ** 2)
    ft = math.sqrt(max(norm2_cont(wc) - f0**2, 0.0))
    if ft == 0.0:
        raise InvalidInputError("Degenerate contour: no energy outside the mean")
    return (ft - f1) / ft < tol_per_mille / 1000
