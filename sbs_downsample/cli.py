"""CLI entrypoint: downsample hypermutated samples in an SBS96 matrix."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, Optional, Sequence

from sbs_downsample.downsampler import LOGGER_NAME, downsample
from sbs_downsample.io_utils import read_matrix, save_json, write_matrix
from sbs_downsample.logging_utils import (
    log_kv,
    log_section,
    setup_rich_logging,
    summarise_run,
    timed,
)
from sbs_downsample.matrix import CountMatrix


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Downsample samples with outlying total mutation counts in an SBS96 matrix."
    )
    parser.add_argument(
        "--in",
        dest="in_path",
        required=True,
        help="Input matrix (first column = mutation type, remaining columns = sample counts)",
    )
    parser.add_argument("--out", dest="out_path", required=True, help="Output matrix path")
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Downsample samples above this total. Default: Q3 + 1.5*IQR of sample totals",
    )
    parser.add_argument(
        "--sep",
        type=str,
        default=None,
        choices=["tab", "comma", "whitespace"],
        help="Column delimiter (default: comma for .csv, tab otherwise)",
    )
    parser.add_argument(
        "--diagnostics-json",
        type=str,
        default=None,
        help="Write threshold, outlier samples, totals and factors to this JSON file",
    )
    parser.add_argument(
        "--plot-dir",
        type=str,
        default=None,
        help="Write histogram/boxplot of sample totals before and after to this directory",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging (one line per sample)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = setup_rich_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        logger_name=LOGGER_NAME,
        force=True,
    )

    log_section(logger, "Inputs")
    log_kv(logger, "matrix", args.in_path)
    log_kv(logger, "threshold", "auto" if args.threshold is None else str(args.threshold))

    try:
        df = read_matrix(args.in_path, sep=args.sep)
        with timed(logger, "Downsampling"):
            ds_df, diagnostics = downsample(df, threshold=args.threshold)
    except (ValueError, FileNotFoundError) as e:
        parser.exit(2, f"error: {e}\n")

    out_paths: Dict[str, str] = {"matrix": str(write_matrix(ds_df, args.out_path, sep=args.sep))}

    if args.diagnostics_json:
        save_json(diagnostics.to_dict(), args.diagnostics_json)
        out_paths["diagnostics"] = args.diagnostics_json
    else:
        out_paths["diagnostics"] = "skipped"

    if args.plot_dir:
        from sbs_downsample.plots import plot_total_distributions

        plot_paths = plot_total_distributions(
            CountMatrix.from_frame(df).sample_totals(),
            CountMatrix.from_frame(ds_df).sample_totals(),
            diagnostics.threshold,
            args.plot_dir,
        )
        out_paths.update({k: str(v) for k, v in plot_paths.items()})
    else:
        out_paths["plots"] = "skipped"

    summarise_run(logger, diagnostics, out_paths)
    return 0


if __name__ == "__main__":
    sys.exit(main())
