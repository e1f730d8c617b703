"""Contourlab - Geometric analysis of polylines extracted from images.

Contourlab is a library of pure geometric transforms for closed and open
polylines (contours): metrics, simplification, moment-based normalization,
exact Fourier descriptors, higher-moment orientation descriptors, convex hulls
and ellipse algebra. A small CLI runs the descriptor suite over batches of
contours stored as JSON.

Example:
    $ contourlab analyze contours.json

This will create contours-descriptors.json with one descriptor record per
polyline.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
