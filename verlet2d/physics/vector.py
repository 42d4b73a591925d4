"""2D vector value type."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D vector.

    Division by zero is not guarded here; callers check the divisor.
    """

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def zero(cls) -> "Vector2":
        return cls(0.0, 0.0)

    @classmethod
    def from_angle(cls, angle_rad: float, magnitude: float = 1.0) -> "Vector2":
        """Vector of given magnitude pointing at ``angle_rad`` (0 = +x, pi/2 = +y)."""
        return cls(math.cos(angle_rad) * magnitude, math.sin(angle_rad) * magnitude)

    def add(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def subtract(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def scale(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def divide(self, scalar: float) -> "Vector2":
        return Vector2(self.x / scalar, self.y / scalar)

    def length(self) -> float:
        """Euclidean norm."""
        return math.hypot(self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    __add__ = add
    __sub__ = subtract
    __mul__ = scale
    __rmul__ = scale
    __truediv__ = divide

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)
