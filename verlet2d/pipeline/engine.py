"""Sequential step execution."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..domain.state import ScenarioState
from ..errors import ScenarioError
from .registry import StepRegistry


def run(steps: Iterable[Mapping[str, Any]], state: ScenarioState, registry: StepRegistry) -> ScenarioState:
    """Run deck steps in order against ``state``.

    Runner failures other than :class:`ScenarioError` are wrapped with the
    step index and type; a ``ScenarioError`` passes through unchanged.
    """
    for idx, step in enumerate(steps):
        if not isinstance(step, Mapping):
            raise ScenarioError(f"steps[{idx}] must be a mapping.")
        if "type" not in step:
            raise ScenarioError(f"Missing required key 'type' in steps[{idx}].")

        stype = str(step["type"]).lower()
        runner = registry.resolve(stype)
        if runner is None:
            raise ScenarioError(
                f"steps[{idx}].type '{stype}' is not supported. "
                f"Use one of: {', '.join(registry.supported_types())}."
            )

        try:
            runner(state, dict(step), idx)
        except ScenarioError:
            raise
        except Exception as exc:
            raise ScenarioError(f"Step {idx} ('{stype}') failed: {exc}") from exc

    return state
