"""Scenario runtime state and initialization helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..physics.settings import SolverConfig
from ..physics.solver import Solver


def resolve_outdir(
    deck_path: Path,
    outdir_step: str | None,
    out_override: str | Path | None,
) -> Path:
    """Resolve output directory from override/step/default values."""
    if out_override is not None:
        path = Path(out_override)
        if not path.is_absolute():
            path = path.resolve()
        return path

    path = Path("outputs/run") if outdir_step is None else Path(outdir_step)
    if not path.is_absolute():
        path = (deck_path.parent / path).resolve()
    return path


def default_export_outdir_step(steps: list[dict[str, Any]]) -> str | None:
    """Find default outdir from first export step, if present."""
    for step in steps:
        if str(step.get("type", "")).lower() == "export":
            if "outdir" in step:
                return str(step["outdir"])
            return None
    return None


@dataclass
class ScenarioState:
    """In-memory scenario state shared across step runners."""

    deck_path: Path
    solver: Solver
    out_override: str | Path | None = None
    default_export_outdir_step: str | None = None
    ticks: int = 0
    last_substep_dt: float = 0.0
    metrics: dict[str, Any] | None = None
    history: list[dict[str, float]] = field(default_factory=list)
    exports: list[Path] = field(default_factory=list)

    def resolve_outdir(self, outdir_step: str | None = None) -> Path:
        """Resolve outdir using state deck path/defaults/override."""
        target = outdir_step if outdir_step is not None else self.default_export_outdir_step
        return resolve_outdir(self.deck_path, target, self.out_override)


def build_initial_state(
    *,
    config: SolverConfig,
    deck_path: Path,
    steps: list[dict[str, Any]],
    out_override: str | Path | None,
) -> ScenarioState:
    """Construct scenario state around a fresh solver."""
    return ScenarioState(
        deck_path=deck_path,
        solver=Solver(config),
        out_override=out_override,
        default_export_outdir_step=default_export_outdir_step(steps),
    )
