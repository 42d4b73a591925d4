"""Safe spawn placement for the population controller."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .particle import Particle
from .vector import Vector2


def _axis_range(extent: float, radius: float) -> tuple[float, float]:
    lo, hi = radius, extent - radius
    if hi < lo:
        mid = 0.5 * extent
        return mid, mid
    return lo, hi


def safe_spawn_positions(
    particles: Sequence[Particle],
    count: int,
    *,
    width: float,
    height: float,
    radius: float,
    safety_factor: float,
    iterations: int,
    rng: np.random.Generator,
) -> list[Vector2]:
    """Sample ``count`` spawn points inside ``[radius, extent - radius]``.

    A candidate is rejected while it lies closer than
    ``(r_existing + radius) * safety_factor`` to any existing or already
    placed particle. After ``iterations`` draws the last candidate is kept
    anyway, so exactly ``count`` points are always returned.
    """
    if count <= 0:
        return []

    n = len(particles)
    pos = np.empty((n + count, 2), dtype=float)
    rad = np.empty(n + count, dtype=float)
    for i, p in enumerate(particles):
        pos[i] = (p.position_current.x, p.position_current.y)
        rad[i] = p.radius

    x_lo, x_hi = _axis_range(width, radius)
    y_lo, y_hi = _axis_range(height, radius)
    low = np.array([x_lo, y_lo])
    high = np.array([x_hi, y_hi])
    tries = max(1, int(iterations))

    out: list[Vector2] = []
    for k in range(count):
        filled = n + k
        candidate = rng.uniform(low, high)
        for _ in range(tries - 1):
            if filled == 0:
                break
            dist = np.hypot(pos[:filled, 0] - candidate[0], pos[:filled, 1] - candidate[1])
            if np.all(dist >= (rad[:filled] + radius) * safety_factor):
                break
            candidate = rng.uniform(low, high)
        pos[filled] = candidate
        rad[filled] = radius
        out.append(Vector2(float(candidate[0]), float(candidate[1])))
    return out


def indices_near(particles: Sequence[Particle], position: Vector2) -> list[int]:
    """Indices of particles whose own radius covers ``position``."""
    return [
        i
        for i, p in enumerate(particles)
        if (p.position_current - position).length() < p.radius
    ]
