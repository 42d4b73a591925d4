"""Removal step runners."""

from __future__ import annotations

from typing import Any

from ...config.parser import parse_remove_step
from ...domain.state import ScenarioState
from ...errors import ScenarioError
from ...physics.vector import Vector2
from .common import parsed


def run_remove_step(state: ScenarioState, step: dict[str, Any], idx: int) -> None:
    context = f"steps[{idx}] (remove)"
    cfg = parsed(parse_remove_step, step, context)
    solver = state.solver
    if cfg.mode == "count":
        solver.remove_batch(cfg.count)
    elif cfg.mode == "index":
        try:
            solver.remove(cfg.index)
        except IndexError as exc:
            raise ScenarioError(
                f"{context}.index {cfg.index} is out of range for {solver.particle_count} particles."
            ) from exc
    else:
        x, y = cfg.near
        solver.remove_near(Vector2(x, y))


def run_clear_step(state: ScenarioState, step: dict[str, Any], idx: int) -> None:
    state.solver.clear()


def run_stabilize_step(state: ScenarioState, step: dict[str, Any], idx: int) -> None:
    state.solver.stabilize()
