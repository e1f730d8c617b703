"""Core geometric algorithms for contourlab.

This module contains the core algorithms for:

- Polyline metrics (perimeter, oriented area, bounding boxes)
- Simplification (Douglas-Peucker, polygon reduction)
- Moments and moment-based normalization (centering, whitening)
- Exact Fourier descriptors of closed polygons
- Higher-order moment descriptors (skewness, kurtosis, ICA angles)
- Convex hulls
- Ellipse algebra (conic fitting, canonical form, intersection)

All functions are:
- Stateless (safe for use in worker processes)
- Pure (inputs are never modified)

Key classes:
- FourierDescriptor: Memoized coefficient function of a closed polyline
- ContourProcessor: Parallel batch orchestrator
"""

from contourlab.core.catalog import flip_x, pentominoes
from contourlab.core.ellipses import (
    analyze_ellipse,
    conic_from_ellipse,
    estimate_conic_raw,
    intersection_ellipses,
    reduce_conics,
)
from contourlab.core.fourier import (
    FourierDescriptor,
    fourier_pl,
    inv_fou,
    is_ellipse,
    norm2_cont,
    normalize_start,
    shift_start,
)
from contourlab.core.geometry import (
    area,
    bounding,
    bounding_box,
    line_intersection,
    oriented_area,
    perimeter,
)
from contourlab.core.hull import convex_hull
from contourlab.core.kurtosis import (
    deriv_coefs,
    ica_angles,
    kurt_alpha,
    kurt_coefs,
    kurtosis_x,
    skew_x,
)
from contourlab.core.moments import (
    Moments,
    box_shape,
    center_shape,
    eig_2x2_dir,
    equalize_contour,
    moments_boundary,
    moments_contour,
    normal_shape,
    whiten_contour,
    whitener,
)
from contourlab.core.processor import ContourProcessor, describe_polyline, process_polyline
from contourlab.core.simplify import (
    clean_polygon,
    douglas_peucker,
    douglas_peucker_closed,
    longest_segments,
    longest_segments_polygon,
    select_polygons,
    simplify,
)
from contourlab.core.transforms import (
    apply_homogeneous,
    desp,
    inv_transpose,
    rot3,
    scaling,
    transform_polyline,
)

__all__ = [
    # Processor classes
    "ContourProcessor",
    # Fourier classes
    "FourierDescriptor",
    "Moments",
    "analyze_ellipse",
    "apply_homogeneous",
    "area",
    "bounding",
    "bounding_box",
    "box_shape",
    "center_shape",
    "clean_polygon",
    "conic_from_ellipse",
    "convex_hull",
    "deriv_coefs",
    "describe_polyline",
    "desp",
    "douglas_peucker",
    "douglas_peucker_closed",
    "eig_2x2_dir",
    "equalize_contour",
    "estimate_conic_raw",
    "flip_x",
    "fourier_pl",
    "ica_angles",
    "intersection_ellipses",
    "inv_fou",
    "inv_transpose",
    "is_ellipse",
    "kurt_alpha",
    "kurt_coefs",
    "kurtosis_x",
    "line_intersection",
    "longest_segments",
    "longest_segments_polygon",
    "moments_boundary",
    "moments_contour",
    "norm2_cont",
    "normal_shape",
    "normalize_start",
    "oriented_area",
    "pentominoes",
    "perimeter",
    "process_polyline",
    "reduce_conics",
    "rot3",
    "scaling",
    "select_polygons",
    "shift_start",
    "simplify",
    "skew_x",
    "transform_polyline",
    "whiten_contour",
    "whitener",
]
