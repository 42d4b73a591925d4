"""Typed config models and parsers."""

from .models import (
    AnalyzeStepConfig,
    ExportStepConfig,
    RemoveStepConfig,
    RunStepConfig,
    ShakeStepConfig,
    SideFlags,
    SideLevels,
    SimpleStepConfig,
    SolverConfig,
    SpawnStepConfig,
    TickConfig,
)
from .parser import (
    apply_solver_overrides,
    direction_from_degrees,
    parse_analyze_step,
    parse_export_step,
    parse_remove_step,
    parse_run_step,
    parse_shake_step,
    parse_solver_config,
    parse_spawn_step,
    parse_step_configs,
    parse_steps,
    parse_tick_config,
    validate_solver_config,
)
from .validators import (
    as_mapping,
    ensure_choice,
    ensure_positive,
    opt_mapping,
    required,
    to_bool,
    to_float,
    to_int,
    to_pair,
)

__all__ = [
    "AnalyzeStepConfig",
    "ExportStepConfig",
    "RemoveStepConfig",
    "RunStepConfig",
    "ShakeStepConfig",
    "SideFlags",
    "SideLevels",
    "SimpleStepConfig",
    "SolverConfig",
    "SpawnStepConfig",
    "TickConfig",
    "apply_solver_overrides",
    "as_mapping",
    "direction_from_degrees",
    "ensure_choice",
    "ensure_positive",
    "opt_mapping",
    "parse_analyze_step",
    "parse_export_step",
    "parse_remove_step",
    "parse_run_step",
    "parse_shake_step",
    "parse_solver_config",
    "parse_spawn_step",
    "parse_step_configs",
    "parse_steps",
    "parse_tick_config",
    "required",
    "to_bool",
    "to_float",
    "to_int",
    "to_pair",
    "validate_solver_config",
]
