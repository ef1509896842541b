"""
downsampler.py

Threshold-based downsampling of hypermutated samples in a mutation count matrix.

Samples whose total mutation count lies above the upper box-plot fence of the
cohort (Q3 + 1.5 * IQR, or a caller-supplied threshold) have every count scaled
by threshold / total and rounded half to even, so their totals end up close to
the threshold. All other samples are copied unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from sbs_downsample.errors import DegenerateDistribution, InvalidThreshold
from sbs_downsample.matrix import CountMatrix
from sbs_downsample.stats_utils import tukey_upper_fence

LOGGER_NAME = "sbs_downsample"
FENCE_K = 1.5

logger = logging.getLogger(LOGGER_NAME)


@dataclass(frozen=True)
class DownsampleDiagnostics:
    threshold: float
    threshold_source: str  # "tukey" or "manual"
    n_samples: int
    outlier_samples: List[Hashable] = field(default_factory=list)
    outlier_totals: Dict[Hashable, float] = field(default_factory=dict)
    factors: Dict[Hashable, float] = field(default_factory=dict)
    downsampled_totals: Dict[Hashable, float] = field(default_factory=dict)
    # only set when the threshold was derived
    q1: Optional[float] = None
    q3: Optional[float] = None

    @property
    def n_outliers(self) -> int:
        return len(self.outlier_samples)

    def totals_range(self) -> Optional[Tuple[float, float]]:
        if not self.outlier_totals:
            return None
        values = list(self.outlier_totals.values())
        return min(values), max(values)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view; sample ids become strings."""
        out = asdict(self)
        out["outlier_samples"] = [str(s) for s in self.outlier_samples]
        for key in ("outlier_totals", "factors", "downsampled_totals"):
            out[key] = {str(k): float(v) for k, v in out[key].items()}
        out["n_outliers"] = self.n_outliers
        return out


def _fmt_num(x: float) -> str:
    return f"{x:,.2f}".rstrip("0").rstrip(".")


def _validate_threshold(threshold: object) -> float:
    if isinstance(threshold, (bool, np.bool_)) or not isinstance(
        threshold, (int, float, np.integer, np.floating)
    ):
        raise InvalidThreshold(f"Threshold must be a real number, got {threshold!r}.")
    value = float(threshold)
    if not np.isfinite(value) or value <= 0:
        raise InvalidThreshold(f"Threshold must be positive and finite, got {threshold!r}.")
    return value


def _scale_column(col: pd.Series, factor: float) -> pd.Series:
    scaled = pd.Series(np.round(col.to_numpy(dtype=float) * factor), index=col.index, name=col.name)
    if pd.api.types.is_integer_dtype(col):
        scaled = scaled.astype(col.dtype)
    return scaled


def downsample(
    matrix: Union[pd.DataFrame, CountMatrix],
    threshold: Optional[float] = None,
) -> Tuple[Union[pd.DataFrame, CountMatrix], DownsampleDiagnostics]:
    """
    Downsample samples whose total mutation count exceeds the threshold.

    matrix:
      SigProfiler-layout DataFrame (first column = mutation type, remaining
      columns = per-sample counts) or a CountMatrix. The result has the same
      type, shape, row order and column order; the input is not modified.
    threshold:
      Optional positive cutoff. When omitted it is derived from the sample
      totals as Q3 + 1.5 * (Q3 - Q1) with type-7 quartiles.

    A sample is downsampled only if its total is strictly greater than the
    threshold. Identical totals therefore never trigger downsampling.

    Raises InvalidMatrixShape, InvalidCounts, InvalidThreshold, or
    DegenerateDistribution when a derived threshold is not positive while
    some sample lies above it.
    """
    as_frame = not isinstance(matrix, CountMatrix)
    cm = CountMatrix.from_frame(matrix) if as_frame else matrix

    totals = cm.sample_totals().astype(float)
    q1: Optional[float] = None
    q3: Optional[float] = None
    if threshold is not None:
        thresh = _validate_threshold(threshold)
        source = "manual"
    else:
        thresh, q1, q3 = tukey_upper_fence(totals.to_numpy(), k=FENCE_K)
        source = "tukey"
        logger.info("The suggested threshold for downsampling is %s", _fmt_num(thresh))
        # all-zero cohorts fall through to the empty outlier set
        if thresh <= 0 and (totals > thresh).any():
            raise DegenerateDistribution(
                f"Derived threshold is {thresh:g} (Q1={q1:g}, Q3={q3:g}); "
                "most samples have no mutations. Supply a threshold explicitly."
            )

    above = totals[totals > thresh]
    if above.empty:
        logger.info(
            "There are 0 samples to be downsampled (threshold %s, %d samples)",
            _fmt_num(thresh),
            len(totals),
        )
    else:
        logger.info(
            "There are %d samples to be downsampled, with mutation counts between %s and %s",
            len(above),
            _fmt_num(float(above.min())),
            _fmt_num(float(above.max())),
        )

    factors = thresh / above
    counts = cm.counts.copy()
    downsampled_totals: Dict[Hashable, float] = {}
    for sample, factor in factors.items():
        logger.debug(
            "Downsampling sample %s (total=%s, factor=%.6f)",
            sample,
            _fmt_num(float(above[sample])),
            factor,
        )
        counts[sample] = _scale_column(cm.counts[sample], float(factor))
        downsampled_totals[sample] = float(counts[sample].sum())

    result = CountMatrix(labels=cm.labels.copy(), counts=counts)
    diagnostics = DownsampleDiagnostics(
        threshold=thresh,
        threshold_source=source,
        n_samples=len(totals),
        outlier_samples=list(above.index),
        outlier_totals={s: float(v) for s, v in above.items()},
        factors={s: float(v) for s, v in factors.items()},
        downsampled_totals=downsampled_totals,
        q1=q1,
        q3=q3,
    )
    return (result.to_frame() if as_frame else result), diagnostics
