from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .deck import run_deck_data
from .domain.state import ScenarioState


@dataclass
class RunResult:
    state: ScenarioState
    metrics: dict[str, Any]
    history: list[dict[str, float]]
    exports: dict[str, str]


def run_deck_mapping(
    deck: dict[str, Any],
    *,
    base_dir: Path | None = None,
    out_override: Path | None = None,
) -> RunResult:
    base = Path.cwd() if base_dir is None else Path(base_dir)
    base = base.resolve()
    out_path = Path(out_override).resolve() if out_override is not None else None

    state = run_deck_data(deck, deck_path=base / "_inline_deck.yaml", out_override=out_path)

    exports = {path.name: str(path) for path in state.exports}
    return RunResult(
        state=state,
        metrics=dict(state.metrics or {}),
        history=list(state.history),
        exports=exports,
    )
