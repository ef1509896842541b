from __future__ import annotations

from typing import Dict, Sequence

import numpy as np
import pandas as pd
import pytest

from sbs_downsample.contexts import SBS96_LABELS


def matrix_with_totals(totals: Sequence[int], seed: int = 0) -> pd.DataFrame:
    """SBS96 matrix with one sample per total; counts drawn multinomially so column sums are exact."""
    rng = np.random.default_rng(seed)
    probs = rng.dirichlet(np.ones(len(SBS96_LABELS)))
    data: Dict[str, object] = {"MutationType": list(SBS96_LABELS)}
    for i, total in enumerate(totals, start=1):
        data[f"S{i}"] = rng.multinomial(int(total), probs).astype(np.int64)
    return pd.DataFrame(data)


@pytest.fixture
def make_matrix():
    return matrix_with_totals
