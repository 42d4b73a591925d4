from __future__ import annotations

import pytest

from verlet2d.physics.settings import SolverConfig
from verlet2d.physics.solver import Solver
from verlet2d.physics.stepping import TickConfig, clamp_dt, max_penetration, run_ticks
from verlet2d.physics.vector import Vector2


pytestmark = pytest.mark.unit


def test_clamp_dt_window() -> None:
    assert clamp_dt(0.5, None, None) == 0.5
    assert clamp_dt(0.5, None, 0.1) == 0.1
    assert clamp_dt(0.001, 0.01, 0.1) == 0.01


@pytest.mark.parametrize(("ticks", "every", "expected"), [(10, 5, [0, 5, 10]), (7, 5, [0, 5, 7]), (3, 1, [0, 1, 2, 3])])
def test_history_rows_follow_record_interval(ticks: int, every: int, expected: list[int]) -> None:
    solver = Solver(SolverConfig(seed=0))
    solver.spawn_batch(10, 5.0)

    history = run_ticks(solver, TickConfig(ticks=ticks, substeps=2, record_every=every))

    assert [int(row["tick"]) for row in history] == expected
    assert history[-1]["count"] == 10.0
    assert history[-1]["time_s"] == pytest.approx(solver.stats.elapsed)


def test_no_history_when_recording_disabled() -> None:
    solver = Solver()
    solver.spawn(Vector2(100.0, 100.0), 5.0)
    calls: list[int] = []

    history = run_ticks(solver, TickConfig(ticks=4, substeps=3), on_tick=lambda s, n: calls.append(n))

    assert history == []
    assert calls == [1, 2, 3, 4]
    assert solver.stats.substeps == 12


def test_dt_max_limits_simulated_time() -> None:
    solver = Solver()
    solver.spawn(Vector2(100.0, 100.0), 5.0)

    run_ticks(solver, TickConfig(ticks=5, dt=1.0, substeps=4, dt_max=0.01))

    assert solver.stats.elapsed == pytest.approx(0.05)


def test_max_penetration_reports_remaining_overlap() -> None:
    solver = Solver()
    solver.spawn(Vector2(100.0, 100.0), 10.0)
    solver.spawn(Vector2(112.0, 100.0), 10.0)

    assert max_penetration(solver) == 8.0
    assert solver.particles[0].position_current == Vector2(100.0, 100.0)


def test_run_ticks_rejects_bad_tick_config() -> None:
    with pytest.raises(ValueError, match="substeps"):
        run_ticks(Solver(), TickConfig(ticks=1, substeps=0))
