"""Shake step runner."""

from __future__ import annotations

from typing import Any

from ...config.parser import direction_from_degrees, parse_shake_step
from ...domain.state import ScenarioState
from .common import parsed


def run_shake_step(state: ScenarioState, step: dict[str, Any], idx: int) -> None:
    """Queue one uniform acceleration for the next substep.

    Without ``direction_deg`` the direction is drawn from the solver RNG.
    """
    cfg = parsed(parse_shake_step, step, f"steps[{idx}] (shake)")
    state.solver.accelerate_all(cfg.intensity, direction_from_degrees(cfg.direction_deg))
