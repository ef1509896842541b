"""
io_utils.py

Reading and writing SigProfiler-style count matrices and run artefacts.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from sbs_downsample.errors import InvalidMatrixShape

SEP_ALIASES = {
    "tab": "\t",
    "comma": ",",
    "whitespace": r"\s+",
}


def ensure_dir(p: str | Path) -> Path:
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def save_json(obj: Dict[str, Any], path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")


def _resolve_sep(path: Path, sep: Optional[str]) -> str:
    if sep is not None:
        return SEP_ALIASES.get(sep, sep)
    if path.suffix.lower() == ".csv":
        return ","
    return "\t"


def read_matrix(path: str | Path, sep: Optional[str] = None) -> pd.DataFrame:
    """
    Load a mutation matrix with a header row.

    The first column (mutation type) is read as text; sample columns are
    parsed by pandas. Delimiter defaults to comma for .csv and tab otherwise;
    pass sep="whitespace" for any run of spaces/tabs.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Matrix not found: {path}")
    delim = _resolve_sep(path, sep)
    # pandas silently renames repeated headers (S1, S1.1), so check the raw row
    names = pd.read_csv(path, sep=delim, header=None, nrows=1, dtype=str).iloc[0].tolist()
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        raise InvalidMatrixShape(f"Duplicate column names in {path}: {', '.join(dupes)}")
    return pd.read_csv(path, sep=delim, dtype={names[0]: str})


def write_matrix(df: pd.DataFrame, path: str | Path, sep: Optional[str] = None) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    delim = _resolve_sep(path, sep)
    if delim == r"\s+":
        delim = "\t"
    df.to_csv(path, sep=delim, index=False)
    return path
