"""
stats_utils.py

Quartiles and box-plot fences for per-sample mutation totals.
"""

from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np


def _as_finite_1d(values: Iterable[float] | np.ndarray) -> np.ndarray:
    arr = np.asarray(list(values), dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"values must be 1D, got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError("values must not be empty")
    if not np.isfinite(arr).all():
        raise ValueError("values must be finite")
    return arr


def quartiles(values: Iterable[float] | np.ndarray) -> Tuple[float, float]:
    """
    First and third quartile using linear interpolation between order
    statistics (Hyndman & Fan type 7, R's default ``quantile``).
    """
    arr = _as_finite_1d(values)
    q1, q3 = np.quantile(arr, [0.25, 0.75], method="linear")
    return float(q1), float(q3)


def tukey_upper_fence(
    values: Iterable[float] | np.ndarray,
    k: float = 1.5,
) -> Tuple[float, float, float]:
    """
    Upper box-plot whisker limit Q3 + k * (Q3 - Q1).
    Returns (fence, q1, q3).
    """
    if not np.isfinite(k) or k < 0:
        raise ValueError("k must be a non-negative finite number")
    q1, q3 = quartiles(values)
    return q3 + k * (q3 - q1), q1, q3
