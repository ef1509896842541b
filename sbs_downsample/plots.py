"""
plots.py

Before/after views of the per-sample mutation total distribution.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from sbs_downsample.io_utils import ensure_dir

BEFORE_COLOR = "#9DB4C0"
AFTER_COLOR = "#C2847A"
THRESH_COLOR = "#8B0000"


def _plot_histogram(
    before: np.ndarray, after: np.ndarray, threshold: float, out_png: Path
) -> None:
    fig, axes = plt.subplots(1, 2, figsize=(10.0, 4.0), sharey=True)
    for ax, values, color, title in (
        (axes[0], before, BEFORE_COLOR, "Before downsampling"),
        (axes[1], after, AFTER_COLOR, "After downsampling"),
    ):
        ax.hist(values, bins=min(30, max(5, len(values))), color=color, edgecolor="white")
        ax.axvline(threshold, color=THRESH_COLOR, linestyle="--", linewidth=1.5)
        ax.set_xlabel("total mutations per sample")
        ax.set_title(title)
    axes[0].set_ylabel("samples")
    fig.tight_layout()
    fig.savefig(out_png, dpi=200)
    plt.close(fig)


def _plot_boxplot(
    before: np.ndarray, after: np.ndarray, threshold: float, out_png: Path
) -> None:
    fig, ax = plt.subplots(figsize=(5.0, 4.5))
    parts = ax.boxplot([before, after], patch_artist=True, widths=0.5)
    ax.set_xticks([1, 2], ["before", "after"])
    for patch, color in zip(parts["boxes"], (BEFORE_COLOR, AFTER_COLOR)):
        patch.set_facecolor(color)
    ax.axhline(threshold, color=THRESH_COLOR, linestyle="--", linewidth=1.0)
    ax.set_ylabel("total mutations per sample")
    ax.grid(axis="y", alpha=0.25, linewidth=0.6)
    fig.tight_layout()
    fig.savefig(out_png, dpi=200)
    plt.close(fig)


def plot_total_distributions(
    before: pd.Series,
    after: pd.Series,
    threshold: float,
    out_dir: str | Path,
    prefix: str = "sample_totals",
) -> Dict[str, Path]:
    """
    Write <prefix>_histogram.png and <prefix>_boxplot.png comparing sample
    totals before and after downsampling, with the threshold marked.
    """
    out_dir = ensure_dir(out_dir)
    b = np.asarray(before, dtype=float)
    a = np.asarray(after, dtype=float)
    paths = {
        "histogram": out_dir / f"{prefix}_histogram.png",
        "boxplot": out_dir / f"{prefix}_boxplot.png",
    }
    _plot_histogram(b, a, threshold, paths["histogram"])
    _plot_boxplot(b, a, threshold, paths["boxplot"])
    return paths
