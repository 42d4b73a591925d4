"""Headless tick driver with optional history recording."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from .collision import penetration_depth
from .solver import Solver


@dataclass(frozen=True)
class TickConfig:
    """Tick loop settings.

    ``dt_min``/``dt_max`` clamp each tick's delta before it is split into
    substeps. ``record_every`` of 0 disables history.
    """

    ticks: int = 60
    dt: float = 1.0 / 60.0
    substeps: int = 8
    dt_min: float | None = None
    dt_max: float | None = None
    record_every: int = 0


def clamp_dt(dt: float, dt_min: float | None, dt_max: float | None) -> float:
    """Clamp a frame delta to the configured window."""
    out = float(dt)
    if dt_min is not None:
        out = max(out, float(dt_min))
    if dt_max is not None:
        out = min(out, float(dt_max))
    return out


def max_penetration(solver: Solver) -> float:
    """Largest remaining overlap among current grid neighbors.

    Rebuilds the grid from current positions; does not move anything.
    """
    particles = solver.particles
    solver.grid.set_bounds(solver.config.width, solver.config.height)
    solver.grid.rebuild(particles)
    worst = 0.0
    for i, j in solver.grid.iter_neighbor_pairs():
        pen = penetration_depth(particles[i], particles[j])
        if pen > worst:
            worst = pen
    return worst


def snapshot_row(solver: Solver, tick: int, dt: float) -> dict[str, float]:
    """One history row describing the current solver state."""
    particles = solver.particles
    count = len(particles)
    if count:
        temps = np.fromiter((p.temperature for p in particles), dtype=float, count=count)
        speeds = np.fromiter((p.velocity.length() for p in particles), dtype=float, count=count)
        speeds = speeds / dt if dt > 0.0 else np.zeros_like(speeds)
        mean_t, max_t = float(np.mean(temps)), float(np.max(temps))
        mean_v = float(np.mean(speeds))
    else:
        mean_t = max_t = mean_v = 0.0

    return {
        "tick": float(tick),
        "time_s": float(solver.stats.elapsed),
        "count": float(count),
        "mean_temperature": mean_t,
        "max_temperature": max_t,
        "mean_speed": mean_v,
        "max_penetration": max_penetration(solver) if count else 0.0,
        "culled": float(solver.stats.culled_out_of_bounds + solver.stats.culled_non_finite),
    }


def run_ticks(
    solver: Solver,
    tick: TickConfig,
    *,
    on_tick: Callable[[Solver, int], None] | None = None,
) -> list[dict[str, float]]:
    """Drive ``tick.ticks`` external ticks and return recorded history.

    History rows are taken after tick 0 state (before stepping) and then
    every ``record_every`` ticks, plus the final tick.
    """
    if tick.ticks < 0:
        raise ValueError(f"ticks must be >= 0, got {tick.ticks}.")
    if tick.substeps < 1:
        raise ValueError(f"substeps must be >= 1, got {tick.substeps}.")

    dt = clamp_dt(tick.dt, tick.dt_min, tick.dt_max)
    sub_dt = dt / tick.substeps
    record = tick.record_every > 0
    history: list[dict[str, float]] = []
    if record:
        history.append(snapshot_row(solver, 0, sub_dt))

    for n in range(1, tick.ticks + 1):
        solver.update_with_substeps(dt, tick.substeps)
        if on_tick is not None:
            on_tick(solver, n)
        if record and (n % tick.record_every == 0 or n == tick.ticks):
            history.append(snapshot_row(solver, n, sub_dt))
    return history
