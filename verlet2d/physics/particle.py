"""Verlet particle state."""

from __future__ import annotations

from dataclasses import dataclass, field

from .vector import Vector2


@dataclass(slots=True)
class Particle:
    """A simulated circle.

    Velocity is implicit: ``position_current - position_old`` per step.
    ``acceleration`` accumulates forces for the current substep and is
    reset by :meth:`integrate`.
    """

    position_current: Vector2
    position_old: Vector2
    radius: float
    acceleration: Vector2 = field(default_factory=Vector2.zero)
    temperature: float = 0.0

    @classmethod
    def at_rest(cls, position: Vector2, radius: float, temperature: float = 0.0) -> "Particle":
        """Create a particle with zero implied velocity at ``position``."""
        if not radius > 0.0:
            raise ValueError(f"radius must be > 0, got {radius}.")
        return cls(
            position_current=position,
            position_old=position,
            radius=float(radius),
            temperature=float(temperature),
        )

    @property
    def velocity(self) -> Vector2:
        """Displacement over the last step."""
        return self.position_current - self.position_old

    def accelerate(self, force: Vector2) -> None:
        self.acceleration = self.acceleration + force

    def integrate(self, dt: float) -> None:
        """Verlet position update, then clear the accumulator."""
        velocity = self.position_current - self.position_old
        self.position_old = self.position_current
        self.position_current = self.position_current + velocity + self.acceleration * (dt * dt)
        self.acceleration = Vector2.zero()

    def stabilize(self) -> None:
        """Drop implied velocity."""
        self.position_old = self.position_current

    def is_finite(self) -> bool:
        return self.position_current.is_finite() and self.position_old.is_finite()
