"""Export manager orchestrating format-specific writers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..physics.solver import Solver
from .history_writer import save_history_csv, save_history_png
from .png_writer import save_snapshot_png

VALID_FORMATS = {"png", "history"}


def export_results(
    solver: Solver,
    outdir: str | Path,
    formats: Iterable[str],
    history: list[dict[str, float]] | None = None,
    plot_cfg: dict | None = None,
) -> list[Path]:
    """Export diagnostics based on requested formats.

    ``png`` renders the current population; ``history`` writes the recorded
    tick rows as CSV (plus a plot when there is anything to draw).
    """
    out = Path(outdir)
    out.mkdir(parents=True, exist_ok=True)
    requested = {str(fmt).lower() for fmt in formats}
    unknown = requested - VALID_FORMATS
    if unknown:
        raise ValueError(f"Unsupported export format(s): {sorted(unknown)}")

    written: list[Path] = []
    if "png" in requested:
        written.append(save_snapshot_png(solver, out, filename="snapshot.png", plot_cfg=plot_cfg))

    if "history" in requested:
        rows = list(history or [])
        written.append(save_history_csv(rows, out, filename="history.csv"))
        if rows:
            written.append(save_history_png(rows, out, filename="history.png"))
    return written
