"""Tick history writers."""

from __future__ import annotations

import csv
from pathlib import Path

import matplotlib

matplotlib.use("Agg", force=True)
import matplotlib.pyplot as plt
import numpy as np

HISTORY_FIELDS = [
    "tick",
    "time_s",
    "count",
    "mean_temperature",
    "max_temperature",
    "mean_speed",
    "max_penetration",
    "culled",
]


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_history_csv(history: list[dict[str, float]], outdir: str | Path, filename: str = "history.csv") -> Path:
    """Save recorded tick rows into CSV."""
    path = _ensure_outdir(outdir) / filename
    fieldnames: list[str] = []
    for row in history:
        for key in row.keys():
            if key not in fieldnames:
                fieldnames.append(key)
    if not fieldnames:
        fieldnames = list(HISTORY_FIELDS)

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in history:
            writer.writerow(row)
    return path


def save_history_png(history: list[dict[str, float]], outdir: str | Path, filename: str = "history.png") -> Path:
    """Plot count, temperature and penetration against simulated time."""
    if not history:
        raise ValueError("History is empty; nothing to plot.")

    def column(key: str) -> np.ndarray:
        return np.asarray([float(row.get(key, np.nan)) for row in history], dtype=float)

    t = column("time_s")
    path = _ensure_outdir(outdir) / filename
    fig, axes = plt.subplots(nrows=3, ncols=1, figsize=(7.2, 6.0), dpi=140, sharex=True)

    axes[0].plot(t, column("count"), color="#1f77b4", lw=1.8)
    axes[0].set_ylabel("particles")
    axes[0].grid(alpha=0.3)

    axes[1].plot(t, column("mean_temperature"), color="#d62728", lw=1.6, label="mean")
    axes[1].plot(t, column("max_temperature"), color="#ff7f0e", lw=1.0, ls="--", label="max")
    axes[1].set_ylabel("temperature")
    axes[1].legend(loc="best", fontsize=8)
    axes[1].grid(alpha=0.3)

    axes[2].plot(t, column("max_penetration"), color="#2ca02c", lw=1.6)
    axes[2].set_ylabel("max penetration")
    axes[2].set_xlabel("time [s]")
    axes[2].grid(alpha=0.3)

    fig.suptitle("Solver history", y=0.995)
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path
