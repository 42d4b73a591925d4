"""Configure step runner: mutate solver tunables between ticks."""

from __future__ import annotations

import copy
from typing import Any

from ...config.parser import apply_solver_overrides, validate_solver_config
from ...domain.state import ScenarioState
from .common import opt_mapping, parsed


def run_configure_step(state: ScenarioState, step: dict[str, Any], idx: int) -> None:
    """Apply the ``solver`` overrides of this step to the live config.

    Overrides are validated on a copy, so a rejected step leaves the running
    configuration untouched.
    """
    context = f"steps[{idx}] (configure).solver"
    raw = opt_mapping(step.get("solver"), context)
    candidate = copy.deepcopy(state.solver.config)
    parsed(apply_solver_overrides, candidate, raw, context)
    parsed(validate_solver_config, candidate, context)

    solver = state.solver
    solver.config = candidate
    if "seed" in raw:
        solver.reseed(candidate.seed)
