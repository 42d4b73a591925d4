"""Spawn step runner."""

from __future__ import annotations

from typing import Any

from ...config.parser import parse_spawn_step
from ...domain.state import ScenarioState
from ...physics.vector import Vector2
from .common import parsed


def run_spawn_step(state: ScenarioState, step: dict[str, Any], idx: int) -> None:
    """Place explicit positions first, then ``count`` safe random spawns."""
    cfg = parsed(parse_spawn_step, step, f"steps[{idx}] (spawn)")
    solver = state.solver
    for x, y in cfg.positions:
        solver.spawn(Vector2(x, y), cfg.radius)
    if cfg.count:
        solver.spawn_batch(cfg.count, cfg.radius)
