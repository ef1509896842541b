import json

import pandas as pd
import pytest

from sbs_downsample.errors import InvalidMatrixShape
from sbs_downsample.io_utils import read_matrix, save_json, write_matrix


def test_tsv_round_trip(make_matrix, tmp_path):
    df = make_matrix([100, 250, 4000])
    path = write_matrix(df, tmp_path / "nested" / "matrix.tsv")
    assert path.exists()
    pd.testing.assert_frame_equal(read_matrix(path), df)


def test_csv_by_suffix(make_matrix, tmp_path):
    df = make_matrix([10, 20])
    path = write_matrix(df, tmp_path / "matrix.csv")
    assert path.read_text(encoding="utf-8").splitlines()[0] == "MutationType,S1,S2"
    pd.testing.assert_frame_equal(read_matrix(path), df)


def test_whitespace_delimited(tmp_path):
    path = tmp_path / "matrix.SBS96.all"
    path.write_text(
        "MutationType   S1  S2\n"
        "A[C>A]A  1   20\n"
        "A[C>A]C\t2\t30\n",
        encoding="utf-8",
    )
    df = read_matrix(path, sep="whitespace")
    assert df.columns.tolist() == ["MutationType", "S1", "S2"]
    assert df["MutationType"].tolist() == ["A[C>A]A", "A[C>A]C"]
    assert df["S2"].tolist() == [20, 30]


def test_numeric_looking_labels_stay_text(tmp_path):
    path = tmp_path / "m.tsv"
    path.write_text("id\tS1\n001\t5\n002\t6\n", encoding="utf-8")
    df = read_matrix(path)
    assert df["id"].tolist() == ["001", "002"]


def test_missing_matrix(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_matrix(tmp_path / "nope.tsv")


def test_save_json(tmp_path):
    path = tmp_path / "out" / "diag.json"
    save_json({"threshold": 1575.0}, path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"threshold": 1575.0}


def test_duplicate_header_names_rejected(tmp_path):
    path = tmp_path / "dupes.tsv"
    path.write_text("MutationType\tS1\tS2\tS1\nA[C>A]A\t1\t2\t3\n", encoding="utf-8")
    with pytest.raises(InvalidMatrixShape, match="S1"):
        read_matrix(path)
