"""Timing chart for benchmark summaries.

Charts are built as matplotlib figures and shown interactively by the CLI;
they are never saved to disk.
"""
from __future__ import annotations

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns


def plot_sweep_timings(summary: pd.DataFrame):
    """Build a line chart of mean sweep time per board size and search mode.

    Parameters
    ----------
    summary : pandas.DataFrame
        Output of ``stats.summarize_records``.

    Returns
    -------
    matplotlib.figure.Figure
        The figure, ready for ``plt.show()``.

    Raises
    ------
    ValueError
        If ``summary`` has no rows.
    """
    if summary.empty:
        raise ValueError("Nothing to plot: the benchmark summary is empty.")

    sns.set_theme(style="whitegrid")
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.lineplot(data=summary, x="side_size", y="mean", hue="mode", marker="o", linewidth=2, ax=ax)

    # Annotate solution counts once per size
    counts = summary.drop_duplicates("side_size")
    for _, row in counts.iterrows():
        ax.annotate(
            f"{int(row['solutions'])}",
            (row["side_size"], row["mean"]),
            textcoords="offset points",
            xytext=(0, 8),
            ha="center",
            fontsize=9,
        )

    ax.set_yscale("log")
    ax.set_xticks(sorted(summary["side_size"].unique()))
    ax.set_xlabel("N (board size)", fontsize=12)
    ax.set_ylabel("Mean time to enumerate all solutions [s]", fontsize=12)
    ax.set_title("Full enumeration time vs board size\n(labels: number of solutions)", fontsize=14)
    fig.tight_layout()
    return fig
