"""Domain-layer run state."""

from .state import ScenarioState, build_initial_state, default_export_outdir_step, resolve_outdir

__all__ = ["ScenarioState", "build_initial_state", "default_export_outdir_step", "resolve_outdir"]
