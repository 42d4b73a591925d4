"""Export step runner."""

from __future__ import annotations

from typing import Any

from ...config.parser import parse_export_step
from ...domain.state import ScenarioState
from ...errors import ScenarioError
from ...export.manager import export_results
from .common import opt_mapping, parsed


def run_export_step(state: ScenarioState, step: dict[str, Any], idx: int) -> None:
    context = f"steps[{idx}] (export)"
    cfg = parsed(parse_export_step, step, context)
    plot_cfg = opt_mapping(step.get("plot"), f"{context}.plot")
    outdir = state.resolve_outdir(outdir_step=step.get("outdir"))
    try:
        written = export_results(
            state.solver,
            outdir,
            cfg.formats,
            history=state.history,
            plot_cfg=plot_cfg,
        )
    except ValueError as exc:
        raise ScenarioError(f"{context} failed: {exc}") from exc
    state.exports.extend(written)
