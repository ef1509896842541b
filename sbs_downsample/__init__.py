"""Downsampling of hypermutated samples in SBS96 mutation-count matrices."""

from sbs_downsample.downsampler import DownsampleDiagnostics, downsample
from sbs_downsample.errors import (
    DegenerateDistribution,
    DownsampleError,
    InvalidCounts,
    InvalidMatrixShape,
    InvalidThreshold,
)
from sbs_downsample.matrix import CountMatrix

__all__ = [
    "CountMatrix",
    "DegenerateDistribution",
    "DownsampleDiagnostics",
    "DownsampleError",
    "InvalidCounts",
    "InvalidMatrixShape",
    "InvalidThreshold",
    "downsample",
]
