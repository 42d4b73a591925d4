"""Step registry for scenario execution."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

StateT = TypeVar("StateT")
StepRunner = Callable[[StateT, dict[str, Any], int], None]


class StepRegistry(Generic[StateT]):
    """Maps lower-cased step types to runner callables."""

    def __init__(self, handlers: dict[str, StepRunner[StateT]] | None = None) -> None:
        self._runners: dict[str, StepRunner[StateT]] = {}
        for step_type, runner in (handlers or {}).items():
            self.register(step_type, runner)

    @staticmethod
    def _key(step_type: str) -> str:
        return str(step_type).strip().lower()

    def register(self, step_type: str, runner: StepRunner[StateT]) -> None:
        if not callable(runner):
            raise TypeError(f"Runner for step type '{step_type}' must be callable.")
        self._runners[self._key(step_type)] = runner

    def resolve(self, step_type: str) -> StepRunner[StateT] | None:
        return self._runners.get(self._key(step_type))

    def supported_types(self) -> tuple[str, ...]:
        return tuple(self._runners)


def create_step_registry(handlers: dict[str, StepRunner[StateT]]) -> StepRegistry[StateT]:
    return StepRegistry(handlers=handlers)
