"""Simulation service built on top of pipeline primitives."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..config import parse_solver_config, parse_step_configs, parse_steps
from ..domain import build_initial_state
from ..domain.state import ScenarioState
from ..errors import ScenarioError
from ..pipeline.engine import run as run_pipeline
from ..pipeline.registry import StepRegistry, create_step_registry
from ..pipeline.step_base import StepRunner
from ..pipeline.steps import build_default_step_handlers


class UnsupportedStepTypeError(KeyError):
    """Raised by :meth:`SimulationService.run_step` for unknown step types."""


@dataclass(slots=True)
class SimulationService:
    """Execute scenario steps through the configured registry."""

    registry: StepRegistry

    def run_step(self, *, state: ScenarioState, step_type: str, step: dict[str, Any], idx: int) -> None:
        runner = self.registry.resolve(step_type)
        if runner is None:
            raise UnsupportedStepTypeError(step_type)
        runner(state, step, idx)

    def run_steps(self, *, state: ScenarioState, steps: list[dict[str, Any]]) -> ScenarioState:
        return run_pipeline(steps, state, self.registry)

    def run_payload(
        self,
        deck: dict[str, Any],
        *,
        deck_path: str | Path | None = None,
        out_override: str | Path | None = None,
    ) -> ScenarioState:
        """Validate an in-memory deck, build a fresh solver and run every step.

        The whole deck is checked before the first step runs, so a typo in a
        late step fails without producing partial outputs.
        """
        path = Path("__in_memory_deck__.yaml") if deck_path is None else Path(deck_path)
        if not path.is_absolute():
            path = (Path.cwd() / path).resolve()

        if not isinstance(deck, dict):
            raise ScenarioError("deck must be a mapping.")

        try:
            config = parse_solver_config(deck)
            parse_step_configs(deck, config)
            steps = parse_steps(deck)
        except (TypeError, ValueError) as exc:
            raise ScenarioError(str(exc)) from exc

        state = build_initial_state(config=config, deck_path=path, steps=steps, out_override=out_override)
        return self.run_steps(state=state, steps=steps)


def build_simulation_service(handlers: dict[str, StepRunner]) -> SimulationService:
    """Create SimulationService from explicit step handlers."""
    return SimulationService(registry=create_step_registry(handlers))


def build_default_simulation_service() -> SimulationService:
    """Create SimulationService using the built-in step handlers."""
    return build_simulation_service(build_default_step_handlers())
