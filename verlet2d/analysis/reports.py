"""Metric report generation and persistence helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..export.metrics_writer import save_metrics_csv, save_metrics_json
from ..physics.solver import Solver
from .metrics import centroid, overlap_stats, radius_stats, speed_stats, temperature_stats


@dataclass(frozen=True)
class AnalyzeArtifacts:
    """Report payload and persisted artifact paths."""

    report: dict[str, Any]
    written: list[Path]


def build_metrics_report(solver: Solver, *, substep_dt: float) -> dict[str, Any]:
    """Build metrics report dictionary for the solver's current state."""
    particles = solver.particles
    cfg = solver.config
    solver.grid.set_bounds(cfg.width, cfg.height)
    solver.grid.rebuild(particles)

    stats = solver.stats
    return {
        "particle_count": len(particles),
        "bounds": {"width": float(cfg.width), "height": float(cfg.height)},
        "grid": solver.grid_info(),
        "radius": radius_stats(particles),
        "temperature": temperature_stats(particles),
        "speed": speed_stats(particles, substep_dt),
        "overlap": overlap_stats(particles, solver.grid),
        "centroid": centroid(particles),
        "counters": {
            "substeps": stats.substeps,
            "elapsed_s": float(stats.elapsed),
            "spawned": stats.spawned,
            "removed": stats.removed,
            "culled_out_of_bounds": stats.culled_out_of_bounds,
            "culled_non_finite": stats.culled_non_finite,
        },
    }


def run_metrics_analysis(
    solver: Solver,
    *,
    substep_dt: float,
    outdir: str | Path,
    save_json: bool,
    save_csv: bool,
) -> AnalyzeArtifacts:
    """Run metrics analysis and persist requested artifacts."""
    report = build_metrics_report(solver, substep_dt=substep_dt)
    written: list[Path] = []
    if save_json:
        written.append(save_metrics_json(report, outdir, filename="metrics.json"))
    if save_csv:
        written.append(save_metrics_csv(report, outdir, filename="metrics.csv"))
    return AnalyzeArtifacts(report=report, written=written)
