"""Input errors raised before any downsampling work starts."""

from __future__ import annotations


class DownsampleError(ValueError):
    """Base class for rejected matrices and thresholds."""


class InvalidMatrixShape(DownsampleError):
    pass


class InvalidCounts(DownsampleError):
    pass


class InvalidThreshold(DownsampleError):
    pass


class DegenerateDistribution(DownsampleError):
    """Derived threshold is not positive, so outliers would be scaled to zero."""
