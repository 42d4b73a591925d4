"""Rectangular boundary constraints and out-of-bounds detection."""

from __future__ import annotations

from .particle import Particle
from .vector import Vector2

SIDES = ("top", "bottom", "left", "right")


def _reflect_old(old: float, current_before: float, current_after: float, into_wall: bool, restitution: float) -> float:
    """Return a new old-coordinate that turns the normal velocity around.

    ``into_wall`` tells whether the implied velocity points at the wall.
    """
    velocity = current_before - old
    if not into_wall:
        return old + (current_after - current_before)
    return current_after + velocity * restitution


def constrain_particle(
    p: Particle,
    width: float,
    height: float,
    constrain: dict[str, bool],
    bounce: dict[str, bool],
    restitution: float = 1.0,
) -> bool:
    """Apply every enabled side constraint to one particle.

    Clamp mode moves the center to exactly ``radius`` from the wall. Bounce
    mode does the same and also rewrites ``position_old`` so the implied
    normal velocity is reversed and scaled by ``restitution``. Returns True
    if the particle was touched.
    """
    r = p.radius
    x, y = p.position_current.x, p.position_current.y
    ox, oy = p.position_old.x, p.position_old.y
    moved = False

    if constrain["left"] and x < r:
        if bounce["left"]:
            ox = _reflect_old(ox, x, r, x - ox < 0.0, restitution)
        x = r
        moved = True
    elif constrain["right"] and x > width - r:
        if bounce["right"]:
            ox = _reflect_old(ox, x, width - r, x - ox > 0.0, restitution)
        x = width - r
        moved = True

    if constrain["top"] and y < r:
        if bounce["top"]:
            oy = _reflect_old(oy, y, r, y - oy < 0.0, restitution)
        y = r
        moved = True
    elif constrain["bottom"] and y > height - r:
        if bounce["bottom"]:
            oy = _reflect_old(oy, y, height - r, y - oy > 0.0, restitution)
        y = height - r
        moved = True

    if moved:
        p.position_current = Vector2(x, y)
        p.position_old = Vector2(ox, oy)
    return moved


def is_lost(p: Particle, width: float, height: float, constrain: dict[str, bool]) -> bool:
    """True once a particle has fully left through a side without a constraint."""
    r = p.radius
    pos = p.position_current
    if not constrain["left"] and pos.x < -r:
        return True
    if not constrain["right"] and pos.x > width + r:
        return True
    if not constrain["top"] and pos.y < -r:
        return True
    if not constrain["bottom"] and pos.y > height + r:
        return True
    return False
