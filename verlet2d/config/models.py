"""Typed models for scenario deck configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from ..physics.settings import SideFlags, SideLevels, SolverConfig
from ..physics.stepping import TickConfig


@dataclass(frozen=True)
class SpawnStepConfig:
    """Typed spawn step config."""

    type: Literal["spawn"] = "spawn"
    count: int = 0
    radius: float | None = None
    positions: list[list[float]] = field(default_factory=list)


@dataclass(frozen=True)
class RunStepConfig:
    """Typed run step config."""

    type: Literal["run"] = "run"
    tick: TickConfig = field(default_factory=TickConfig)
    save_csv: bool = False
    save_png: bool = False
    record_outdir: str | None = None


@dataclass(frozen=True)
class ShakeStepConfig:
    """Typed shake step config."""

    type: Literal["shake"] = "shake"
    intensity: float = 0.0
    direction_deg: float | None = None


@dataclass(frozen=True)
class RemoveStepConfig:
    """Typed remove step config."""

    type: Literal["remove"] = "remove"
    mode: Literal["count", "index", "near"] = "count"
    count: int = 0
    index: int = 0
    near: tuple[float, float] | None = None


@dataclass(frozen=True)
class SimpleStepConfig:
    """Steps that carry no typed payload (clear, stabilize, configure)."""

    type: Literal["clear", "stabilize", "configure"] = "clear"


@dataclass(frozen=True)
class AnalyzeStepConfig:
    """Typed analyze step config."""

    type: Literal["analyze"] = "analyze"
    save_json: bool = True
    save_csv: bool = True


@dataclass(frozen=True)
class ExportStepConfig:
    """Typed export step config."""

    type: Literal["export"] = "export"
    outdir: str = "outputs/run"
    formats: list[str] = field(default_factory=lambda: ["png"])


StepConfig = (
    SpawnStepConfig
    | RunStepConfig
    | ShakeStepConfig
    | RemoveStepConfig
    | SimpleStepConfig
    | AnalyzeStepConfig
    | ExportStepConfig
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
    "StepConfig",
    "TickConfig",
]
