"""Typed benchmark records and summary helpers.

Defines the ``TypedDict`` shape of a single timed sweep and turns a list of
them into a per-(size, mode) summary table with pandas.
"""
from __future__ import annotations

from typing import List, TypedDict

import numpy as np
import pandas as pd


class SweepRecord(TypedDict):
    side_size: int
    mode: str
    run: int
    solutions: int
    seconds: float


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps expected. Values <= 0 are coerced to 1 to avoid
        division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def records_to_frame(records: List[SweepRecord]) -> pd.DataFrame:
    columns = ["side_size", "mode", "run", "solutions", "seconds"]
    return pd.DataFrame.from_records(records, columns=columns)


def summarize_records(records: List[SweepRecord]) -> pd.DataFrame:
    """Aggregate timings per board size and search mode.

    Returns
    -------
    pandas.DataFrame
        One row per (side_size, mode) with columns ``solutions``, ``runs``,
        ``mean``, ``median``, ``std``, ``min``, ``max`` (seconds) and
        ``speedup``: sequential mean divided by this row's mean, NaN when the
        size has no sequential runs. Empty input yields an empty frame with
        the same columns.
    """
    columns = ["side_size", "mode", "solutions", "runs", "mean", "median", "std", "min", "max", "speedup"]
    frame = records_to_frame(records)
    if frame.empty:
        return pd.DataFrame(columns=columns)

    summary = (
        frame.groupby(["side_size", "mode"])
        .agg(
            solutions=("solutions", "max"),
            runs=("run", "count"),
            mean=("seconds", "mean"),
            median=("seconds", "median"),
            std=("seconds", "std"),
            min=("seconds", "min"),
            max=("seconds", "max"),
        )
        .reset_index()
    )
    # Single runs have no sample deviation.
    summary["std"] = summary["std"].fillna(0.0)

    sequential_mean = summary[summary["mode"] == "sequential"].set_index("side_size")["mean"]
    baseline = summary["side_size"].map(sequential_mean).to_numpy(dtype=float)
    means = summary["mean"].to_numpy(dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        summary["speedup"] = np.where(means > 0, baseline / means, np.nan)
    return summary[columns]
