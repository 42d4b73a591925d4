"""Solver tunables."""

from __future__ import annotations

from dataclasses import dataclass, field, fields

from .vector import Vector2


@dataclass(slots=True)
class SideFlags:
    """One boolean per boundary side."""

    top: bool = True
    bottom: bool = True
    left: bool = True
    right: bool = True

    def as_dict(self) -> dict[str, bool]:
        return {f.name: bool(getattr(self, f.name)) for f in fields(self)}


@dataclass(slots=True)
class SideLevels:
    """Optional temperature level per boundary side (None = no injection)."""

    top: float | None = None
    bottom: float | None = None
    left: float | None = None
    right: float | None = None

    def active(self) -> dict[str, float]:
        """Sides with a configured level."""
        out: dict[str, float] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                out[f.name] = float(value)
        return out


@dataclass(slots=True)
class SolverConfig:
    """Tunables owned by a Solver.

    Front-ends may write these fields between ticks; the solver reads them
    on every pass.
    """

    width: float = 800.0
    height: float = 600.0
    gravity: Vector2 = field(default_factory=lambda: Vector2(0.0, 1000.0))

    constrain: SideFlags = field(default_factory=SideFlags)
    bounce: SideFlags = field(default_factory=lambda: SideFlags(False, False, False, False))
    restitution: float = 1.0

    heat_injection: SideLevels = field(default_factory=SideLevels)
    heat_injection_rate: float = 0.1
    heat_transfer: float = 0.0
    heat_loss: float = 0.0
    buoyancy_enabled: bool = False
    buoyancy_power: float = 1.0

    spawn_radius: float = 10.0
    spawn_safety_radius_factor: float = 1.0
    spawn_safety_iterations: int = 10
    stabilize_on_spawn: bool = False
    stabilize_on_oob: bool = False

    min_count: int = 0
    enforce_min: bool = False
    max_count: int = 1000
    enforce_max: bool = False

    seed: int | None = None
