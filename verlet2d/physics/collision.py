"""Narrow-phase circle overlap resolution."""

from __future__ import annotations

from .particle import Particle
from .thermal import exchange_heat
from .vector import Vector2

FALLBACK_AXIS = Vector2(1.0, 0.0)


def penetration_depth(a: Particle, b: Particle) -> float:
    """Overlap of two circles (0 when separated)."""
    dist = (a.position_current - b.position_current).length()
    overlap = a.radius + b.radius - dist
    return overlap if overlap > 0.0 else 0.0


def resolve_collision(a: Particle, b: Particle, heat_transfer: float = 0.0) -> float:
    """Push an overlapping pair apart by half the penetration each.

    Single relaxation step with an equal split. Coincident centers are
    separated along ``FALLBACK_AXIS``. Returns the penetration that was
    corrected (0 if the pair did not overlap).
    """
    delta = a.position_current - b.position_current
    dist = delta.length()
    combined_radius = a.radius + b.radius
    if not dist < combined_radius:
        return 0.0

    normal = delta / dist if dist > 0.0 else FALLBACK_AXIS
    penetration = combined_radius - dist
    correction = normal * (0.5 * penetration)
    a.position_current = a.position_current + correction
    b.position_current = b.position_current - correction

    if heat_transfer > 0.0:
        exchange_heat(a, b, heat_transfer)
    return penetration
