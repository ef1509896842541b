"""
contexts.py

Canonical SBS96 mutation-type labels (SigProfiler order).
"""

from __future__ import annotations

from typing import Iterable, Tuple

BASES = ("A", "C", "G", "T")
SUBSTITUTIONS = ("C>A", "C>G", "C>T", "T>A", "T>C", "T>G")


def sbs96_labels() -> list[str]:
    """
    Labels ordered by substitution, then 5' base, then 3' base:
    A[C>A]A, A[C>A]C, ..., T[T>G]T.
    """
    return [
        f"{five}[{sub}]{three}"
        for sub in SUBSTITUTIONS
        for five in BASES
        for three in BASES
    ]


SBS96_LABELS: Tuple[str, ...] = tuple(sbs96_labels())


def is_sbs96_layout(labels: Iterable[object]) -> bool:
    return tuple(str(x) for x in labels) == SBS96_LABELS
