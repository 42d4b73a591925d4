"""Quantitative metrics for a particle population.

Speeds are reported in length units per second: the implied Verlet
displacement divided by the substep length that produced it.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..physics.collision import penetration_depth
from ..physics.grid import SpatialGrid
from ..physics.particle import Particle


def _summary(values: np.ndarray) -> dict[str, float]:
    if values.size == 0:
        return {"mean": 0.0, "min": 0.0, "max": 0.0}
    return {
        "mean": float(np.mean(values)),
        "min": float(np.min(values)),
        "max": float(np.max(values)),
    }


def temperature_stats(particles: Sequence[Particle]) -> dict[str, float]:
    temps = np.fromiter((p.temperature for p in particles), dtype=float, count=len(particles))
    return _summary(temps)


def speed_stats(particles: Sequence[Particle], substep_dt: float) -> dict[str, float]:
    """Implied speed summary; all zero when no substep has run yet."""
    disp = np.fromiter((p.velocity.length() for p in particles), dtype=float, count=len(particles))
    if substep_dt <= 0.0:
        disp = np.zeros_like(disp)
    else:
        disp = disp / substep_dt
    return _summary(disp)


def radius_stats(particles: Sequence[Particle]) -> dict[str, float]:
    radii = np.fromiter((p.radius for p in particles), dtype=float, count=len(particles))
    return _summary(radii)


def overlap_stats(particles: Sequence[Particle], grid: SpatialGrid) -> dict[str, float | int]:
    """Remaining overlaps among grid candidate pairs.

    ``grid`` must already be built from ``particles``.
    """
    checked = 0
    overlapping = 0
    total = 0.0
    worst = 0.0
    for i, j in grid.iter_neighbor_pairs():
        checked += 1
        pen = penetration_depth(particles[i], particles[j])
        if pen > 0.0:
            overlapping += 1
            total += pen
            worst = max(worst, pen)
    return {
        "pairs_checked": checked,
        "overlapping_pairs": overlapping,
        "max_penetration": float(worst),
        "mean_penetration": float(total / overlapping) if overlapping else 0.0,
    }


def centroid(particles: Sequence[Particle]) -> dict[str, float] | None:
    """Mean particle center, or None for an empty population."""
    if not particles:
        return None
    pos = np.array([(p.position_current.x, p.position_current.y) for p in particles], dtype=float)
    cx, cy = np.mean(pos, axis=0)
    return {"x": float(cx), "y": float(cy)}
