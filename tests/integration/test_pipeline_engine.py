"""Integration tests for pipeline/service execution path."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from verlet2d.domain import build_initial_state
from verlet2d.domain.state import ScenarioState
from verlet2d.errors import ScenarioError
from verlet2d.physics.settings import SolverConfig
from verlet2d.physics.vector import Vector2
from verlet2d.pipeline.engine import run
from verlet2d.pipeline.registry import StepRegistry
from verlet2d.services import UnsupportedStepTypeError, build_default_simulation_service, build_simulation_service


pytestmark = pytest.mark.integration


def _deck(*steps: dict[str, Any]) -> dict[str, Any]:
    return {
        "solver": {"width": 200.0, "height": 150.0, "spawn": {"radius": 5.0}, "seed": 1},
        "steps": list(steps),
    }


def test_service_run_payload_smoke(tmp_path: Path) -> None:
    deck = _deck(
        {"type": "spawn", "count": 20},
        {"type": "run", "ticks": 5, "substeps": 4},
        {"type": "analyze"},
        {"type": "export", "outdir": "outputs/it_engine", "formats": ["png"]},
    )

    service = build_default_simulation_service()
    state = service.run_payload(deck, deck_path=tmp_path / "inmem.yaml", out_override=tmp_path / "out")

    assert state.solver.particle_count == 20
    assert state.ticks == 5
    assert state.metrics is not None and state.metrics["particle_count"] == 20
    assert (tmp_path / "out" / "snapshot.png").exists()
    assert (tmp_path / "out" / "metrics.json").exists()
    report = json.loads((tmp_path / "out" / "metrics.json").read_text(encoding="utf-8"))
    assert report["counters"]["substeps"] == 20


def test_default_outdir_resolves_beside_deck(tmp_path: Path) -> None:
    deck = _deck(
        {"type": "spawn", "positions": [[50, 50]]},
        {"type": "export", "outdir": "results", "formats": ["png"]},
    )

    state = build_default_simulation_service().run_payload(deck, deck_path=tmp_path / "deck.yaml")

    assert state.exports == [tmp_path / "results" / "snapshot.png"]


def test_step_sequence_mutates_population(tmp_path: Path) -> None:
    deck = _deck(
        {"type": "spawn", "positions": [[20, 20], [100, 100], [180, 20]], "radius": 8},
        {"type": "remove", "near": [100, 100]},
        {"type": "remove", "index": 0},
        {"type": "spawn", "count": 4},
        {"type": "remove", "count": 2},
        {"type": "shake", "intensity": 10.0, "direction_deg": 0},
        {"type": "stabilize"},
    )

    state = build_default_simulation_service().run_payload(deck, deck_path=tmp_path / "d.yaml")
    particles = state.solver.particles

    assert len(particles) == 3
    assert all(p.acceleration == Vector2(10.0, 0.0) for p in particles)
    assert all(p.velocity == Vector2.zero() for p in particles)


def test_configure_step_updates_live_config(tmp_path: Path) -> None:
    deck = _deck(
        {"type": "configure", "solver": {"gravity": [0, 0], "population": {"min": 6, "enforce_min": True}}},
        {"type": "run", "ticks": 1, "substeps": 1},
        {"type": "clear"},
    )

    state = build_default_simulation_service().run_payload(deck, deck_path=tmp_path / "d.yaml")

    assert state.solver.config.gravity == Vector2(0.0, 0.0)
    assert state.solver.config.min_count == 6
    assert state.solver.particle_count == 0
    assert state.solver.stats.spawned == 6


def test_unknown_step_rejected_before_anything_runs(tmp_path: Path) -> None:
    deck = _deck(
        {"type": "export", "formats": ["png"]},
        {"type": "teleport"},
    )

    with pytest.raises(ScenarioError, match="'teleport' is not supported"):
        build_default_simulation_service().run_payload(deck, deck_path=tmp_path / "d.yaml")
    assert not (tmp_path / "outputs").exists()


def test_runtime_failures_are_wrapped_with_step_context(tmp_path: Path) -> None:
    deck = _deck({"type": "remove", "index": 3})

    with pytest.raises(ScenarioError, match=r"steps\[0\] \(remove\).index 3 is out of range"):
        build_default_simulation_service().run_payload(deck, deck_path=tmp_path / "d.yaml")


def test_engine_wraps_unexpected_runner_errors(tmp_path: Path) -> None:
    def explode(state: ScenarioState, step: dict[str, Any], idx: int) -> None:
        raise RuntimeError("boom")

    service = build_simulation_service({"explode": explode})
    state = build_initial_state(config=SolverConfig(), deck_path=tmp_path / "d.yaml", steps=[], out_override=None)

    with pytest.raises(ScenarioError, match=r"Step 0 \('explode'\) failed: boom"):
        run([{"type": "EXPLODE"}], state, StepRegistry({"explode": explode}))

    with pytest.raises(UnsupportedStepTypeError):
        service.run_step(state=state, step_type="spawn", step={}, idx=0)


def test_configure_step_validated_against_deck_solver_section(tmp_path: Path) -> None:
    deck = {
        "solver": {"population": {"max": 5000}},
        "steps": [
            {"type": "configure", "solver": {"population": {"min": 1500, "enforce_min": True, "enforce_max": True}}},
        ],
    }

    state = build_default_simulation_service().run_payload(deck, deck_path=tmp_path / "d.yaml")

    cfg = state.solver.config
    assert (cfg.min_count, cfg.max_count, cfg.enforce_min, cfg.enforce_max) == (1500, 5000, True, True)


def test_bad_record_flag_rejected_before_ticking(tmp_path: Path) -> None:
    deck = _deck(
        {"type": "spawn", "count": 3},
        {"type": "run", "ticks": 2, "record": {"enable": True, "save_csv": "yes"}},
    )

    with pytest.raises(ScenarioError, match=r"steps\[1\].record.save_csv must be true or false"):
        build_default_simulation_service().run_payload(deck, deck_path=tmp_path / "d.yaml")
