"""Constraint-based Verlet particle solver.

One pipeline pass (substep) runs, in order:

1. bootstrap population enforcement when empty (stop if still empty)
2. gravity and buoyancy accumulation
3. boundary constraints, wall heat, heat loss, out-of-bounds culling
4. grid rebuild and neighbor-pair collision resolution
5. Verlet integration, non-finite culling
6. population enforcement

Particle indices are only meaningful inside a single pass.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .boundary import constrain_particle, is_lost
from .collision import resolve_collision
from .grid import SpatialGrid
from .particle import Particle
from .population import indices_near, safe_spawn_positions
from .settings import SolverConfig
from .thermal import apply_heat_loss, buoyancy_acceleration, inject_wall_heat
from .vector import Vector2


@dataclass
class SolverStats:
    """Running counters, reset only by :meth:`Solver.reset_stats`."""

    substeps: int = 0
    elapsed: float = 0.0
    culled_out_of_bounds: int = 0
    culled_non_finite: int = 0
    spawned: int = 0
    removed: int = 0
    last_pair_checks: int = 0
    last_max_penetration: float = 0.0


class Solver:
    """Owns the particle collection, the grid, and all tunables."""

    def __init__(self, config: SolverConfig | None = None, *, rng: np.random.Generator | None = None) -> None:
        self.config = config if config is not None else SolverConfig()
        self.particles: list[Particle] = []
        self.grid = SpatialGrid(self.config.width, self.config.height)
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.stats = SolverStats()

    @property
    def particle_count(self) -> int:
        return len(self.particles)

    def reset_stats(self) -> None:
        self.stats = SolverStats()

    def reseed(self, seed: int | None) -> None:
        """Replace the random stream used by batch spawns and random shakes."""
        self.config.seed = seed
        self.rng = np.random.default_rng(seed)

    # ------------------------------------------------------------------
    # Tick entry points
    # ------------------------------------------------------------------

    def update_with_substeps(self, dt: float, substeps: int) -> None:
        """Run the full pipeline ``substeps`` times with ``dt / substeps``."""
        if substeps < 1:
            raise ValueError(f"substeps must be >= 1, got {substeps}.")
        if not math.isfinite(dt) or dt < 0.0:
            raise ValueError(f"dt must be a finite value >= 0, got {dt}.")
        sub_dt = dt / substeps
        for _ in range(substeps):
            self.update(sub_dt)

    def update(self, dt: float) -> None:
        """One pipeline pass."""
        if not self.particles:
            self.enforce_population_bounds()
            if not self.particles:
                return

        self.apply_forces()
        self.apply_constraints()
        self.apply_thermal(dt)
        self.cull()
        self.solve_collisions()
        self.integrate(dt)
        self.enforce_population_bounds()

        self.stats.substeps += 1
        self.stats.elapsed += dt

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    def apply_forces(self) -> None:
        """Accumulate gravity and, if enabled, buoyancy into every particle."""
        cfg = self.config
        gravity = cfg.gravity
        for p in self.particles:
            p.accelerate(gravity)
            if cfg.buoyancy_enabled:
                p.accelerate(buoyancy_acceleration(gravity, p.temperature, cfg.buoyancy_power))

    def apply_constraints(self) -> None:
        cfg = self.config
        constrain = cfg.constrain.as_dict()
        bounce = cfg.bounce.as_dict()
        for p in self.particles:
            constrain_particle(p, cfg.width, cfg.height, constrain, bounce, cfg.restitution)

    def apply_thermal(self, dt: float) -> None:
        """Wall injection, then decay."""
        cfg = self.config
        inject_wall_heat(
            self.particles,
            cfg.heat_injection.active(),
            cfg.heat_injection_rate,
            cfg.width,
            cfg.height,
        )
        if cfg.heat_loss > 0.0:
            apply_heat_loss(self.particles, cfg.heat_loss, dt)

    def cull(self) -> int:
        """Drop non-finite particles and ones lost through an open side."""
        cfg = self.config
        constrain = cfg.constrain.as_dict()
        keep: list[Particle] = []
        lost = 0
        broken = 0
        for p in self.particles:
            if not p.is_finite():
                broken += 1
            elif is_lost(p, cfg.width, cfg.height, constrain):
                lost += 1
            else:
                keep.append(p)

        if lost or broken:
            self.particles[:] = keep
            self.stats.culled_out_of_bounds += lost
            self.stats.culled_non_finite += broken
            if lost and cfg.stabilize_on_oob:
                self.stabilize()
        return lost + broken

    def solve_collisions(self) -> int:
        """Rebuild the grid and relax every overlapping neighbor pair once.

        The grid buckets hold indices only and are not touched while pairs
        are resolved, so position updates cannot corrupt the scan.
        """
        cfg = self.config
        particles = self.particles
        self.grid.set_bounds(cfg.width, cfg.height)
        self.grid.rebuild(particles)

        transfer = cfg.heat_transfer
        checks = 0
        max_pen = 0.0
        for i, j in self.grid.iter_neighbor_pairs():
            checks += 1
            pen = resolve_collision(particles[i], particles[j], transfer)
            if pen > max_pen:
                max_pen = pen

        self.stats.last_pair_checks = checks
        self.stats.last_max_penetration = max_pen
        return checks

    def integrate(self, dt: float) -> None:
        for p in self.particles:
            p.integrate(dt)
        if any(not p.is_finite() for p in self.particles):
            before = len(self.particles)
            self.particles[:] = [p for p in self.particles if p.is_finite()]
            self.stats.culled_non_finite += before - len(self.particles)

    # ------------------------------------------------------------------
    # Population control
    # ------------------------------------------------------------------

    def spawn(self, position: Vector2, radius: float | None = None) -> Particle:
        """Append a particle at rest."""
        r = self.config.spawn_radius if radius is None else radius
        particle = Particle.at_rest(position, r)
        self.particles.append(particle)
        self.stats.spawned += 1
        return particle

    def spawn_batch(self, count: int, radius: float | None = None) -> list[Particle]:
        """Spawn exactly ``count`` particles at best-effort safe positions."""
        cfg = self.config
        r = cfg.spawn_radius if radius is None else radius
        if not r > 0.0:
            raise ValueError(f"radius must be > 0, got {r}.")
        if count <= 0:
            return []
        if cfg.stabilize_on_spawn:
            self.stabilize()

        positions = safe_spawn_positions(
            self.particles,
            count,
            width=cfg.width,
            height=cfg.height,
            radius=r,
            safety_factor=cfg.spawn_safety_radius_factor,
            iterations=cfg.spawn_safety_iterations,
            rng=self.rng,
        )
        return [self.spawn(pos, r) for pos in positions]

    def remove(self, index: int) -> Particle:
        """Remove one particle; out-of-range indices raise IndexError."""
        particle = self.particles.pop(index)
        self.stats.removed += 1
        return particle

    def remove_near(self, position: Vector2) -> int:
        """Remove every particle whose radius covers ``position``."""
        hit = set(indices_near(self.particles, position))
        if hit:
            self.particles[:] = [p for i, p in enumerate(self.particles) if i not in hit]
            self.stats.removed += len(hit)
        return len(hit)

    def remove_batch(self, count: int) -> int:
        """Remove up to ``count`` of the oldest particles."""
        n = min(max(0, int(count)), len(self.particles))
        if n:
            del self.particles[:n]
            self.stats.removed += n
        return n

    def clear(self) -> int:
        n = len(self.particles)
        self.particles.clear()
        self.stats.removed += n
        return n

    def enforce_population_bounds(self) -> int:
        """Spawn a deficit or trim a surplus; returns the signed count change."""
        cfg = self.config
        count = len(self.particles)
        if cfg.enforce_min and count < cfg.min_count:
            deficit = cfg.min_count - count
            self.spawn_batch(deficit)
            return deficit
        if cfg.enforce_max and count > cfg.max_count:
            return -self.remove_batch(count - cfg.max_count)
        return 0

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def stabilize(self) -> None:
        """Zero every particle's implied velocity."""
        for p in self.particles:
            p.stabilize()

    def accelerate_all(self, intensity: float, direction: float | None = None) -> Vector2:
        """Add the same acceleration to every particle.

        ``direction`` is an angle in radians (0 = +x, pi/2 = down); None
        picks a random direction.
        """
        if direction is None:
            direction = float(self.rng.uniform(0.0, 2.0 * math.pi))
        force = Vector2.from_angle(direction, intensity)
        for p in self.particles:
            p.accelerate(force)
        return force

    def grid_info(self) -> dict[str, float | int]:
        return self.grid.describe()
