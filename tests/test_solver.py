"""Solver pipeline behavior."""

from __future__ import annotations

import math

import pytest

from verlet2d.physics.particle import Particle
from verlet2d.physics.settings import SideFlags, SolverConfig
from verlet2d.physics.solver import Solver
from verlet2d.physics.vector import Vector2


pytestmark = pytest.mark.unit


def test_collision_pass_separates_pair_exactly() -> None:
    solver = Solver()
    a = solver.spawn(Vector2(100.0, 100.0), 10.0)
    b = solver.spawn(Vector2(115.0, 100.0), 10.0)

    checks = solver.solve_collisions()

    assert checks == 1
    assert (a.position_current - b.position_current).length() == 20.0
    assert a.position_current == Vector2(97.5, 100.0)
    assert b.position_current == Vector2(117.5, 100.0)
    assert solver.stats.last_max_penetration == 5.0


def test_stabilize_twice_matches_once() -> None:
    solver = Solver()
    for x in (50.0, 80.0, 110.0):
        p = solver.spawn(Vector2(x, 40.0), 5.0)
        p.position_old = Vector2(x - 3.0, 41.0)

    solver.stabilize()
    once = [(p.position_current, p.position_old) for p in solver.particles]
    solver.stabilize()

    assert [(p.position_current, p.position_old) for p in solver.particles] == once


def test_gravity_pulls_particles_down() -> None:
    solver = Solver()
    p = solver.spawn(Vector2(400.0, 100.0), 5.0)

    solver.update_with_substeps(1.0 / 60.0, 8)

    assert p.position_current.y > 100.0
    assert p.position_current.x == 400.0
    assert solver.stats.substeps == 8
    assert solver.stats.elapsed == pytest.approx(1.0 / 60.0)


def test_non_finite_particles_are_culled() -> None:
    solver = Solver()
    solver.spawn(Vector2(100.0, 100.0), 5.0)
    broken = solver.spawn(Vector2(200.0, 100.0), 5.0)
    broken.position_current = Vector2(float("nan"), 100.0)

    solver.update(1.0 / 60.0)

    assert solver.particle_count == 1
    assert all(p.is_finite() for p in solver.particles)
    assert solver.stats.culled_non_finite == 1


def test_particles_leaving_open_side_are_culled() -> None:
    cfg = SolverConfig(constrain=SideFlags(bottom=False), stabilize_on_oob=True)
    solver = Solver(cfg)
    solver.spawn(Vector2(100.0, 700.0), 10.0)
    keeper = solver.spawn(Vector2(300.0, 300.0), 10.0)
    keeper.position_old = Vector2(298.0, 300.0)

    solver.update(1.0 / 60.0)

    assert solver.particles == [keeper]
    assert solver.stats.culled_out_of_bounds == 1
    assert keeper.position_current.x == 300.0


def test_empty_solver_bootstraps_population() -> None:
    solver = Solver(SolverConfig(min_count=5, enforce_min=True, seed=4))

    solver.update(1.0 / 60.0)

    assert solver.particle_count == 5


def test_empty_solver_without_enforcement_is_a_no_op() -> None:
    solver = Solver()
    solver.update(1.0 / 60.0)
    assert solver.particle_count == 0
    assert solver.stats.substeps == 0


def test_buoyancy_cancels_gravity_at_unit_factor() -> None:
    solver = Solver(SolverConfig(buoyancy_enabled=True, buoyancy_power=1.0))
    hot = solver.spawn(Vector2(100.0, 100.0), 5.0)
    hot.temperature = 1.0
    cold = solver.spawn(Vector2(300.0, 100.0), 5.0)

    solver.apply_forces()

    assert hot.acceleration == Vector2(0.0, 0.0)
    assert cold.acceleration == Vector2(0.0, 1000.0)


def test_accelerate_all_fixed_and_random_direction() -> None:
    solver = Solver(SolverConfig(seed=9))
    particles = [solver.spawn(Vector2(100.0 + 30.0 * i, 100.0), 5.0) for i in range(3)]

    force = solver.accelerate_all(100.0, 0.0)
    assert force == Vector2(100.0, 0.0)
    assert all(p.acceleration == Vector2(100.0, 0.0) for p in particles)

    random_force = solver.accelerate_all(50.0)
    assert random_force.length() == pytest.approx(50.0)


def test_heat_transfer_during_collisions() -> None:
    solver = Solver(SolverConfig(heat_transfer=1.0))
    a = solver.spawn(Vector2(100.0, 100.0), 10.0)
    b = solver.spawn(Vector2(110.0, 100.0), 10.0)
    b.temperature = 1.0

    solver.solve_collisions()

    assert a.temperature == 0.5
    assert b.temperature == 0.5


@pytest.mark.parametrize(("dt", "substeps"), [(1.0 / 60.0, 0), (math.nan, 4), (-1.0, 4)])
def test_update_with_substeps_rejects_bad_arguments(dt: float, substeps: int) -> None:
    with pytest.raises(ValueError):
        Solver().update_with_substeps(dt, substeps)


def test_particle_order_is_stable_across_passes() -> None:
    solver = Solver()
    created = [solver.spawn(Vector2(50.0 + 40.0 * i, 500.0), 10.0) for i in range(5)]
    solver.update_with_substeps(1.0 / 60.0, 4)
    assert all(a is b for a, b in zip(solver.particles, created))
    assert isinstance(solver.particles[0], Particle)
