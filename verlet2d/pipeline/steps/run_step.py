"""Run step runner: advance the solver by external ticks."""

from __future__ import annotations

from typing import Any

from ...config.parser import parse_run_step
from ...domain.state import ScenarioState
from ...export.history_writer import save_history_csv, save_history_png
from ...physics.stepping import clamp_dt, run_ticks
from .common import parsed


def run_run_step(state: ScenarioState, step: dict[str, Any], idx: int) -> None:
    """Tick the solver and append recorded rows to the scenario history.

    Tick numbers continue across consecutive run steps; a step's tick-0 row
    replaces an earlier row carrying the same tick number.
    """
    cfg = parsed(parse_run_step, step, f"steps[{idx}] (run)")
    tick = cfg.tick
    history = run_ticks(state.solver, tick)

    offset = state.ticks
    for h_idx, row in enumerate(history):
        merged = dict(row)
        merged["tick"] = float(row["tick"]) + offset
        if h_idx == 0 and state.history and state.history[-1]["tick"] == merged["tick"]:
            state.history[-1] = merged
        else:
            state.history.append(merged)

    state.ticks += tick.ticks
    state.last_substep_dt = clamp_dt(tick.dt, tick.dt_min, tick.dt_max) / tick.substeps

    if tick.record_every > 0 and history:
        outdir = state.resolve_outdir(outdir_step=cfg.record_outdir)
        if cfg.save_csv:
            state.exports.append(save_history_csv(state.history, outdir, filename="history.csv"))
        if cfg.save_png:
            state.exports.append(save_history_png(state.history, outdir, filename="history.png"))
