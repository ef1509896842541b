import logging

import pandas as pd
import pytest

from sbs_downsample.contexts import SBS96_LABELS
from sbs_downsample.errors import InvalidCounts, InvalidMatrixShape
from sbs_downsample.matrix import CountMatrix


def test_from_frame_splits_labels_and_counts(make_matrix):
    df = make_matrix([100, 250, 400])
    cm = CountMatrix.from_frame(df)
    assert cm.id_column == "MutationType"
    assert cm.samples == ["S1", "S2", "S3"]
    assert cm.n_rows == 96
    assert tuple(cm.labels) == SBS96_LABELS
    assert cm.sample_totals().tolist() == [100, 250, 400]


def test_to_frame_restores_layout(make_matrix):
    df = make_matrix([100, 250])
    pd.testing.assert_frame_equal(CountMatrix.from_frame(df).to_frame(), df)


def test_direct_construction_accepts_label_list():
    counts = pd.DataFrame({"S1": [1, 2], "S2": [3, 4]})
    cm = CountMatrix(labels=["x", "y"], counts=counts)
    assert cm.to_frame().columns.tolist() == ["MutationType", "S1", "S2"]


def test_label_count_mismatch():
    counts = pd.DataFrame({"S1": [1, 2, 3]})
    with pytest.raises(InvalidMatrixShape):
        CountMatrix(labels=pd.Series(["x", "y"]), counts=counts)


def test_boolean_counts_rejected():
    counts = pd.DataFrame({"S1": [True, False]})
    with pytest.raises(InvalidCounts):
        CountMatrix(labels=pd.Series(["x", "y"]), counts=counts)


def test_label_column_name_clashing_with_sample():
    counts = pd.DataFrame({"S1": [1, 2], "S2": [3, 4]})
    with pytest.raises(InvalidMatrixShape):
        CountMatrix(labels=pd.Series(["x", "y"], name="S1"), counts=counts)


def test_numeric_labels_warn(caplog):
    caplog.set_level(logging.WARNING, logger="sbs_downsample")
    df = pd.DataFrame({"id": [1, 2], "S1": [5, 6]})
    cm = CountMatrix.from_frame(df)
    assert "is numeric" in caplog.text
    pd.testing.assert_frame_equal(cm.to_frame(), df)
