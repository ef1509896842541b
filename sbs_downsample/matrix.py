"""
matrix.py

Typed wrapper around a SigProfiler-style mutation count matrix.

Layout on disk and in pandas
----------------------------
MutationType  SAMPLE_1  SAMPLE_2  ...
A[C>A]A       12        3
A[C>A]C       7         0
...

The first column holds the mutation-type labels and is carried through
untouched; every other column is one sample's counts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Hashable, List

import numpy as np
import pandas as pd

from sbs_downsample.contexts import is_sbs96_layout
from sbs_downsample.errors import InvalidCounts, InvalidMatrixShape

logger = logging.getLogger("sbs_downsample")


def _check_counts(counts: pd.DataFrame) -> None:
    for sample in counts.columns:
        col = counts[sample]
        if pd.api.types.is_bool_dtype(col) or not pd.api.types.is_numeric_dtype(col):
            raise InvalidCounts(f"Sample '{sample}' has non-numeric counts (dtype {col.dtype}).")
    values = counts.to_numpy(dtype=float, na_value=np.nan)
    if not np.isfinite(values).all():
        bad = [str(s) for s, ok in zip(counts.columns, np.isfinite(values).all(axis=0)) if not ok]
        raise InvalidCounts(f"Non-finite counts in samples: {', '.join(bad)}")
    if (values < 0).any():
        bad = [str(s) for s, ok in zip(counts.columns, (values >= 0).all(axis=0)) if not ok]
        raise InvalidCounts(f"Negative counts in samples: {', '.join(bad)}")


@dataclass(frozen=True)
class CountMatrix:
    labels: pd.Series
    counts: pd.DataFrame

    def __post_init__(self) -> None:
        if not isinstance(self.labels, pd.Series):
            object.__setattr__(self, "labels", pd.Series(list(self.labels), name="MutationType"))
        if not isinstance(self.counts, pd.DataFrame):
            raise InvalidMatrixShape(f"Expected counts as a pandas DataFrame, got {type(self.counts).__name__}.")
        if self.counts.shape[1] < 1:
            raise InvalidMatrixShape("Matrix has no sample columns.")
        if self.counts.shape[0] == 0:
            raise InvalidMatrixShape("Matrix has no mutation-type rows.")
        if len(self.labels) != self.counts.shape[0]:
            raise InvalidMatrixShape(
                f"Got {len(self.labels)} mutation-type labels for {self.counts.shape[0]} count rows."
            )
        dupes = self.counts.columns[self.counts.columns.duplicated()].tolist()
        if dupes:
            raise InvalidMatrixShape(f"Duplicate sample columns: {', '.join(map(str, dupes))}")
        if self.labels.name in set(self.counts.columns):
            raise InvalidMatrixShape(
                f"Mutation-type column '{self.labels.name}' has the same name as a sample column."
            )
        _check_counts(self.counts)
        if pd.api.types.is_numeric_dtype(self.labels):
            logger.warning(
                "Mutation-type column '%s' is numeric (dtype %s); expected text labels.",
                self.labels.name,
                self.labels.dtype,
            )
        if not is_sbs96_layout(self.labels):
            logger.warning(
                "Mutation types are not the canonical SBS96 layout (%d rows); downsampling anyway.",
                len(self.labels),
            )

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "CountMatrix":
        """
        Split a frame whose first column is the mutation type and whose
        remaining columns are sample counts.
        """
        if not isinstance(df, pd.DataFrame):
            raise InvalidMatrixShape(f"Expected a pandas DataFrame, got {type(df).__name__}.")
        if df.shape[1] < 2:
            raise InvalidMatrixShape(
                f"Matrix needs a mutation-type column and at least one sample column, got {df.shape[1]} column(s)."
            )
        if df.shape[0] == 0:
            raise InvalidMatrixShape("Matrix has no mutation-type rows.")
        return cls(labels=df.iloc[:, 0], counts=df.iloc[:, 1:])

    @property
    def id_column(self) -> Hashable:
        return self.labels.name

    @property
    def samples(self) -> List[Hashable]:
        return list(self.counts.columns)

    @property
    def n_rows(self) -> int:
        return int(self.counts.shape[0])

    def sample_totals(self) -> pd.Series:
        return self.counts.sum(axis=0)

    def to_frame(self) -> pd.DataFrame:
        frame = self.counts.copy()
        frame.insert(0, self.id_column, self.labels.set_axis(frame.index))
        return frame
