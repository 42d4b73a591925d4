"""Temperature model: contact exchange, decay, wall injection, buoyancy."""

from __future__ import annotations

import math
from collections.abc import Iterable

from .particle import Particle
from .vector import Vector2

WALL_CONTACT_TOLERANCE = 0.05


def exchange_heat(a: Particle, b: Particle, factor: float) -> float:
    """Move the pair's temperatures toward each other; total is conserved.

    ``dT = (T_b - T_a) * factor * 0.5`` is added to ``a`` and taken from ``b``.
    """
    dT = (b.temperature - a.temperature) * factor * 0.5
    a.temperature += dT
    b.temperature -= dT
    return dT


def apply_heat_loss(particles: Iterable[Particle], loss: float, dt: float) -> None:
    """Exponential-style decay toward zero: ``T *= max(0, 1 - loss * dt)``."""
    keep = max(0.0, 1.0 - loss * dt)
    for p in particles:
        p.temperature *= keep


def wall_gap(p: Particle, side: str, width: float, height: float) -> float:
    """Distance from the particle center to one boundary side."""
    pos = p.position_current
    if side == "top":
        return pos.y
    if side == "bottom":
        return height - pos.y
    if side == "left":
        return pos.x
    if side == "right":
        return width - pos.x
    raise ValueError(f"Unknown side '{side}'.")


def touches_wall(p: Particle, side: str, width: float, height: float) -> bool:
    return wall_gap(p, side, width, height) <= p.radius * (1.0 + WALL_CONTACT_TOLERANCE)


def inject_wall_heat(
    particles: Iterable[Particle],
    levels: dict[str, float],
    rate: float,
    width: float,
    height: float,
) -> int:
    """Pull temperatures of wall-touching particles toward that wall's level.

    Returns the number of particle/side contacts that were heated.
    """
    touched = 0
    if not levels or rate <= 0.0:
        return touched
    for p in particles:
        for side, level in levels.items():
            if touches_wall(p, side, width, height):
                p.temperature += (level - p.temperature) * rate
                touched += 1
    return touched


def buoyancy_factor(temperature: float, power: float) -> float:
    """``max(0, (T + 1)^power - 1)`` with the base floored at zero.

    Overflow and a zero base under a negative power both saturate to infinity.
    """
    base = max(0.0, temperature + 1.0)
    try:
        lifted = base**power - 1.0
    except (OverflowError, ZeroDivisionError):
        return math.inf
    return lifted if lifted > 0.0 else 0.0


def buoyancy_acceleration(gravity: Vector2, temperature: float, power: float) -> Vector2:
    """Acceleration opposing gravity, ``|g| * factor`` in magnitude."""
    factor = buoyancy_factor(temperature, power)
    if factor == 0.0:
        return Vector2.zero()
    return gravity * -factor
