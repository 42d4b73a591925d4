"""Default step runner registry mapping."""

from __future__ import annotations

from ..step_base import StepRunner
from .analyze_step import run_analyze_step
from .configure_step import run_configure_step
from .export_step import run_export_step
from .remove_step import run_clear_step, run_remove_step, run_stabilize_step
from .run_step import run_run_step
from .shake_step import run_shake_step
from .spawn_step import run_spawn_step


def build_default_step_handlers() -> dict[str, StepRunner]:
    """Return default step-type -> runner mapping."""
    return {
        "spawn": run_spawn_step,
        "run": run_run_step,
        "shake": run_shake_step,
        "remove": run_remove_step,
        "clear": run_clear_step,
        "stabilize": run_stabilize_step,
        "configure": run_configure_step,
        "analyze": run_analyze_step,
        "export": run_export_step,
    }


__all__ = ["build_default_step_handlers"]
