from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator

from sbs_downsample.downsampler import LOGGER_NAME, DownsampleDiagnostics


def setup_rich_logging(
    *,
    level: int = logging.INFO,
    logger_name: str = LOGGER_NAME,
    force: bool = True,
) -> logging.Logger:
    """
    Configure logging for compact console output without colors.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="[%X]",
        force=force,
    )

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    return logger


def _fmt_num(x: float) -> str:
    if float(x).is_integer():
        return f"{int(x):,}"
    return f"{x:,.2f}"


def _fmt_s(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.1f}s"
    m = int(seconds // 60)
    s = seconds - 60 * m
    return f"{m}m{s:04.1f}s"


def log_section(logger: logging.Logger, title: str) -> None:
    logger.info("%s", title)


def log_kv(logger: logging.Logger, key: str, value: str) -> None:
    logger.info("  %-20s %s", f"{key}:", value)


@contextmanager
def timed(logger: logging.Logger, label: str) -> Iterator[None]:
    t0 = time.perf_counter()
    logger.info("START %s ...", label)
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        logger.info("DONE %s (%s)", label, _fmt_s(dt))


def summarise_run(
    logger: logging.Logger,
    diagnostics: DownsampleDiagnostics,
    out_paths: Dict[str, str],
) -> None:
    log_section(logger, "Run summary")
    log_kv(logger, "samples", _fmt_num(diagnostics.n_samples))
    log_kv(logger, "threshold", f"{_fmt_num(diagnostics.threshold)} ({diagnostics.threshold_source})")
    if diagnostics.q1 is not None and diagnostics.q3 is not None:
        log_kv(logger, "quartiles", f"Q1={_fmt_num(diagnostics.q1)} Q3={_fmt_num(diagnostics.q3)}")
    log_kv(logger, "downsampled", _fmt_num(diagnostics.n_outliers))

    rows = [
        (
            str(sample),
            _fmt_num(diagnostics.outlier_totals[sample]),
            f"{diagnostics.factors[sample]:.4f}",
            _fmt_num(diagnostics.downsampled_totals[sample]),
        )
        for sample in diagnostics.outlier_samples
    ]
    if rows:
        headers = ("Sample", "Total", "Factor", "After")
        widths = [max(len(headers[i]), *(len(r[i]) for r in rows)) for i in range(4)]
        logger.info("  %s", "  ".join(h.ljust(w) for h, w in zip(headers, widths)))
        logger.info("  %s", "  ".join("-" * w for w in widths))
        for row in rows:
            logger.info("  %s", "  ".join(v.ljust(w) for v, w in zip(row, widths)))

    log_section(logger, "Outputs")
    for key, value in out_paths.items():
        if value == "skipped":
            logger.info("  %s skipped", key)
            continue
        logger.info("  %s saved", Path(value).name)
