from __future__ import annotations

import math

import pytest

from verlet2d.physics.vector import Vector2


pytestmark = pytest.mark.unit


def test_arithmetic_matches_named_operations() -> None:
    a = Vector2(3.0, 4.0)
    b = Vector2(1.0, -2.0)

    assert a.add(b) == a + b == Vector2(4.0, 2.0)
    assert a.subtract(b) == a - b == Vector2(2.0, 6.0)
    assert a.scale(2.0) == a * 2.0 == 2.0 * a == Vector2(6.0, 8.0)
    assert a.divide(2.0) == a / 2.0 == Vector2(1.5, 2.0)
    assert -a == Vector2(-3.0, -4.0)


def test_length_and_zero() -> None:
    assert Vector2(3.0, 4.0).length() == 5.0
    assert Vector2.zero() == Vector2(0.0, 0.0)
    assert Vector2.zero().length() == 0.0


def test_from_angle_uses_screen_convention() -> None:
    down = Vector2.from_angle(math.pi / 2.0, 2.0)
    assert down.x == pytest.approx(0.0, abs=1e-12)
    assert down.y == pytest.approx(2.0)


def test_is_finite() -> None:
    assert Vector2(1.0, 2.0).is_finite()
    assert not Vector2(float("nan"), 0.0).is_finite()
    assert not Vector2(0.0, float("inf")).is_finite()
