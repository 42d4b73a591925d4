"""Analyze step runner."""

from __future__ import annotations

from typing import Any

from ...analysis.reports import run_metrics_analysis
from ...config.parser import parse_analyze_step
from ...domain.state import ScenarioState
from .common import parsed


def run_analyze_step(state: ScenarioState, step: dict[str, Any], idx: int) -> None:
    """Build the metrics report and persist the requested formats."""
    cfg = parsed(parse_analyze_step, step, f"steps[{idx}] (analyze)")
    outdir = state.resolve_outdir(outdir_step=step.get("outdir"))
    artifacts = run_metrics_analysis(
        state.solver,
        substep_dt=state.last_substep_dt,
        outdir=outdir,
        save_json=cfg.save_json,
        save_csv=cfg.save_csv,
    )
    state.metrics = artifacts.report
    state.exports.extend(artifacts.written)
