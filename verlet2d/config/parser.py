"""Config parsing and translation utilities."""

from __future__ import annotations

import copy
import math
from typing import Any, Mapping

from ..physics.settings import SideFlags, SideLevels, SolverConfig
from ..physics.stepping import TickConfig
from ..physics.vector import Vector2
from .models import (
    AnalyzeStepConfig,
    ExportStepConfig,
    RemoveStepConfig,
    RunStepConfig,
    ShakeStepConfig,
    SimpleStepConfig,
    SpawnStepConfig,
    StepConfig,
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

SIDE_NAMES = ("top", "bottom", "left", "right")
STEP_TYPES = ("spawn", "run", "shake", "remove", "clear", "stabilize", "configure", "analyze", "export")
EXPORT_FORMATS = ("png", "history")


def parse_steps(deck: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Parse and normalize deck steps."""
    raw_steps = required(deck, "steps", "deck")
    if not isinstance(raw_steps, list) or not raw_steps:
        raise ValueError("deck.steps must be a non-empty list.")

    steps: list[dict[str, Any]] = []
    for idx, raw in enumerate(raw_steps):
        steps.append(as_mapping(raw, f"steps[{idx}]"))
    return steps


def _apply_side_flags(flags: SideFlags, raw: Any, context: str) -> None:
    cfg = as_mapping(raw, context)
    for side, value in cfg.items():
        ensure_choice(f"{context} key", side, SIDE_NAMES)
        setattr(flags, side, to_bool(value, side, context))


def _apply_side_levels(levels: SideLevels, raw: Any, context: str) -> None:
    cfg = as_mapping(raw, context)
    for side, value in cfg.items():
        ensure_choice(f"{context} key", side, SIDE_NAMES)
        setattr(levels, side, None if value is None else to_float(value, side, context))


def apply_solver_overrides(cfg: SolverConfig, raw: Mapping[str, Any], context: str = "solver") -> SolverConfig:
    """Write every key present in ``raw`` onto ``cfg`` in place.

    Absent keys keep their current values, so the same routine serves the
    initial ``solver:`` section and later ``configure`` steps.
    """
    if "width" in raw:
        cfg.width = to_float(raw["width"], "width", context)
    if "height" in raw:
        cfg.height = to_float(raw["height"], "height", context)
    if "gravity" in raw:
        gx, gy = to_pair(raw["gravity"], "gravity", context)
        cfg.gravity = Vector2(gx, gy)
    if "constrain" in raw:
        _apply_side_flags(cfg.constrain, raw["constrain"], f"{context}.constrain")
    if "bounce" in raw:
        _apply_side_flags(cfg.bounce, raw["bounce"], f"{context}.bounce")
    if "restitution" in raw:
        cfg.restitution = to_float(raw["restitution"], "restitution", context)
    if "stabilize_on_oob" in raw:
        cfg.stabilize_on_oob = to_bool(raw["stabilize_on_oob"], "stabilize_on_oob", context)
    if "seed" in raw:
        cfg.seed = None if raw["seed"] is None else to_int(raw["seed"], "seed", context)

    thermal = opt_mapping(raw.get("thermal"), f"{context}.thermal")
    t_ctx = f"{context}.thermal"
    if "transfer" in thermal:
        cfg.heat_transfer = to_float(thermal["transfer"], "transfer", t_ctx)
    if "loss" in thermal:
        cfg.heat_loss = to_float(thermal["loss"], "loss", t_ctx)
    if "injection_rate" in thermal:
        cfg.heat_injection_rate = to_float(thermal["injection_rate"], "injection_rate", t_ctx)
    if "injection" in thermal:
        _apply_side_levels(cfg.heat_injection, thermal["injection"], f"{t_ctx}.injection")

    buoyancy = opt_mapping(raw.get("buoyancy"), f"{context}.buoyancy")
    if "enable" in buoyancy:
        cfg.buoyancy_enabled = to_bool(buoyancy["enable"], "enable", f"{context}.buoyancy")
    if "power" in buoyancy:
        cfg.buoyancy_power = to_float(buoyancy["power"], "power", f"{context}.buoyancy")

    spawn = opt_mapping(raw.get("spawn"), f"{context}.spawn")
    s_ctx = f"{context}.spawn"
    if "radius" in spawn:
        cfg.spawn_radius = to_float(spawn["radius"], "radius", s_ctx)
    if "safety_radius_factor" in spawn:
        cfg.spawn_safety_radius_factor = to_float(spawn["safety_radius_factor"], "safety_radius_factor", s_ctx)
    if "safety_iterations" in spawn:
        cfg.spawn_safety_iterations = to_int(spawn["safety_iterations"], "safety_iterations", s_ctx)
    if "stabilize" in spawn:
        cfg.stabilize_on_spawn = to_bool(spawn["stabilize"], "stabilize", s_ctx)

    population = opt_mapping(raw.get("population"), f"{context}.population")
    p_ctx = f"{context}.population"
    if "min" in population:
        cfg.min_count = to_int(population["min"], "min", p_ctx)
    if "enforce_min" in population:
        cfg.enforce_min = to_bool(population["enforce_min"], "enforce_min", p_ctx)
    if "max" in population:
        cfg.max_count = to_int(population["max"], "max", p_ctx)
    if "enforce_max" in population:
        cfg.enforce_max = to_bool(population["enforce_max"], "enforce_max", p_ctx)

    return cfg


def validate_solver_config(cfg: SolverConfig, context: str = "solver") -> SolverConfig:
    """Range checks that the solver itself does not repeat every pass."""
    ensure_positive(f"{context}.width", cfg.width)
    ensure_positive(f"{context}.height", cfg.height)
    if not cfg.gravity.is_finite():
        raise ValueError(f"{context}.gravity must be finite.")
    ensure_positive(f"{context}.restitution", cfg.restitution, allow_zero=True)
    ensure_positive(f"{context}.thermal.transfer", cfg.heat_transfer, allow_zero=True)
    if cfg.heat_transfer > 1.0:
        raise ValueError(f"{context}.thermal.transfer must be <= 1, got {cfg.heat_transfer}.")
    ensure_positive(f"{context}.thermal.loss", cfg.heat_loss, allow_zero=True)
    ensure_positive(f"{context}.thermal.injection_rate", cfg.heat_injection_rate, allow_zero=True)
    if cfg.heat_injection_rate > 1.0:
        raise ValueError(f"{context}.thermal.injection_rate must be <= 1, got {cfg.heat_injection_rate}.")
    ensure_positive(f"{context}.spawn.radius", cfg.spawn_radius)
    ensure_positive(f"{context}.spawn.safety_radius_factor", cfg.spawn_safety_radius_factor, allow_zero=True)
    ensure_positive(f"{context}.spawn.safety_iterations", cfg.spawn_safety_iterations)
    ensure_positive(f"{context}.population.min", cfg.min_count, allow_zero=True)
    ensure_positive(f"{context}.population.max", cfg.max_count, allow_zero=True)
    if cfg.enforce_min and cfg.enforce_max and cfg.min_count > cfg.max_count:
        raise ValueError(
            f"{context}.population.min ({cfg.min_count}) must be <= population.max ({cfg.max_count})."
        )
    return cfg


def parse_solver_config(deck: Mapping[str, Any]) -> SolverConfig:
    """Build a validated SolverConfig from the optional ``solver`` section."""
    raw = opt_mapping(deck.get("solver"), "deck.solver")
    cfg = apply_solver_overrides(SolverConfig(), raw, "solver")
    return validate_solver_config(cfg)


def parse_tick_config(step: Mapping[str, Any], context: str) -> TickConfig:
    """Parse the tick settings of a ``run`` step."""
    ticks = to_int(required(step, "ticks", context), "ticks", context)
    dt = to_float(step.get("dt", 1.0 / 60.0), "dt", context)
    substeps = to_int(step.get("substeps", 8), "substeps", context)
    ensure_positive(f"{context}.ticks", ticks, allow_zero=True)
    ensure_positive(f"{context}.dt", dt, allow_zero=True)
    ensure_positive(f"{context}.substeps", substeps)

    dt_min = dt_max = None
    if step.get("dt_min") is not None:
        dt_min = ensure_positive(f"{context}.dt_min", to_float(step["dt_min"], "dt_min", context), allow_zero=True)
    if step.get("dt_max") is not None:
        dt_max = ensure_positive(f"{context}.dt_max", to_float(step["dt_max"], "dt_max", context), allow_zero=True)
    if dt_min is not None and dt_max is not None and dt_min > dt_max:
        raise ValueError(f"{context}.dt_min must be <= dt_max.")

    record_cfg = opt_mapping(step.get("record"), f"{context}.record")
    record_every = 0
    if to_bool(record_cfg.get("enable", False), "enable", f"{context}.record"):
        record_every = to_int(record_cfg.get("every", 1), "every", f"{context}.record")
        ensure_positive(f"{context}.record.every", record_every)

    return TickConfig(
        ticks=ticks,
        dt=dt,
        substeps=substeps,
        dt_min=dt_min,
        dt_max=dt_max,
        record_every=record_every,
    )


def parse_run_step(step: Mapping[str, Any], context: str) -> RunStepConfig:
    """Tick settings plus the history files written once the step finishes."""
    tick = parse_tick_config(step, context)
    record_cfg = opt_mapping(step.get("record"), f"{context}.record")
    r_ctx = f"{context}.record"
    outdir = record_cfg.get("outdir")
    return RunStepConfig(
        tick=tick,
        save_csv=to_bool(record_cfg.get("save_csv", False), "save_csv", r_ctx),
        save_png=to_bool(record_cfg.get("save_png", False), "save_png", r_ctx),
        record_outdir=None if outdir is None else str(outdir),
    )


def parse_remove_step(step: Mapping[str, Any], context: str) -> RemoveStepConfig:
    """Exactly one of ``count``, ``index`` or ``near`` selects the removal mode."""
    modes = [key for key in ("count", "index", "near") if key in step]
    if len(modes) != 1:
        raise ValueError(f"{context} needs exactly one of: count, index, near.")
    mode = modes[0]
    if mode == "count":
        count = to_int(step["count"], "count", context)
        ensure_positive(f"{context}.count", count, allow_zero=True)
        return RemoveStepConfig(mode="count", count=count)
    if mode == "index":
        return RemoveStepConfig(mode="index", index=to_int(step["index"], "index", context))
    return RemoveStepConfig(mode="near", near=to_pair(step["near"], "near", context))


def parse_spawn_step(step: Mapping[str, Any], context: str) -> SpawnStepConfig:
    """``count`` random safe spawns and/or explicit ``positions``."""
    positions_raw = step.get("positions", [])
    if not isinstance(positions_raw, list):
        raise ValueError(f"{context}.positions must be a list of [x, y] pairs.")
    positions = [list(to_pair(item, f"positions[{p_idx}]", context)) for p_idx, item in enumerate(positions_raw)]
    count = to_int(step.get("count", 0), "count", context)
    ensure_positive(f"{context}.count", count, allow_zero=True)
    if not positions and count == 0:
        raise ValueError(f"{context} needs a positive count or a positions list.")
    radius = None
    if step.get("radius") is not None:
        radius = ensure_positive(f"{context}.radius", to_float(step["radius"], "radius", context))
    return SpawnStepConfig(count=count, radius=radius, positions=positions)


def parse_shake_step(step: Mapping[str, Any], context: str) -> ShakeStepConfig:
    intensity = to_float(required(step, "intensity", context), "intensity", context)
    direction = None
    if step.get("direction_deg") is not None:
        direction = to_float(step["direction_deg"], "direction_deg", context)
    return ShakeStepConfig(intensity=intensity, direction_deg=direction)


def parse_analyze_step(step: Mapping[str, Any], context: str) -> AnalyzeStepConfig:
    save = opt_mapping(step.get("save"), f"{context}.save")
    return AnalyzeStepConfig(
        save_json=to_bool(save.get("json", True), "json", f"{context}.save"),
        save_csv=to_bool(save.get("csv", True), "csv", f"{context}.save"),
    )


def parse_export_step(step: Mapping[str, Any], context: str) -> ExportStepConfig:
    formats_raw = step.get("formats", ["png"])
    if not isinstance(formats_raw, list) or not formats_raw:
        raise ValueError(f"{context}.formats must be a non-empty list.")
    formats = [ensure_choice(f"{context}.formats", str(fmt).lower(), EXPORT_FORMATS) for fmt in formats_raw]
    return ExportStepConfig(outdir=str(step.get("outdir", "outputs/run")), formats=formats)


def parse_step_configs(deck: Mapping[str, Any], config: SolverConfig | None = None) -> list[StepConfig]:
    """Parse deck steps into coarse typed step configs.

    ``configure`` steps are checked in order against a running copy of
    ``config`` (the parsed ``solver`` section when omitted), so each one sees
    the settings the earlier steps leave behind.
    """
    live = copy.deepcopy(config) if config is not None else parse_solver_config(deck)
    typed: list[StepConfig] = []
    for idx, step in enumerate(parse_steps(deck)):
        stype = str(required(step, "type", f"steps[{idx}]")).lower()
        context = f"steps[{idx}]"

        if stype == "spawn":
            typed.append(parse_spawn_step(step, context))
        elif stype == "run":
            typed.append(parse_run_step(step, context))
        elif stype == "shake":
            typed.append(parse_shake_step(step, context))
        elif stype == "remove":
            typed.append(parse_remove_step(step, context))
        elif stype == "configure":
            raw = opt_mapping(step.get("solver"), f"{context}.solver")
            apply_solver_overrides(live, raw, f"{context}.solver")
            validate_solver_config(live, f"{context}.solver")
            typed.append(SimpleStepConfig(type="configure"))
        elif stype in ("clear", "stabilize"):
            typed.append(SimpleStepConfig(type=stype))
        elif stype == "analyze":
            typed.append(parse_analyze_step(step, context))
        elif stype == "export":
            typed.append(parse_export_step(step, context))
        else:
            raise ValueError(
                f"steps[{idx}].type '{stype}' is not supported. "
                f"Use one of: {', '.join(STEP_TYPES)}."
            )
    return typed


def direction_from_degrees(direction_deg: float | None) -> float | None:
    """Degrees (deck/UI convention) to radians (solver convention)."""
    if direction_deg is None:
        return None
    return math.radians(direction_deg)
