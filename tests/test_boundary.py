from __future__ import annotations

import pytest

from verlet2d.physics.boundary import constrain_particle, is_lost
from verlet2d.physics.particle import Particle
from verlet2d.physics.settings import SideFlags
from verlet2d.physics.vector import Vector2


pytestmark = pytest.mark.unit

W, H = 200.0, 100.0
NO_BOUNCE = SideFlags(False, False, False, False).as_dict()


def test_left_clamp_moves_center_to_radius() -> None:
    p = Particle.at_rest(Vector2(3.0, 50.0), 10.0)

    moved = constrain_particle(p, W, H, SideFlags().as_dict(), NO_BOUNCE)

    assert moved
    assert p.position_current == Vector2(10.0, 50.0)


def test_disabled_side_leaves_particle_in_place() -> None:
    p = Particle.at_rest(Vector2(3.0, 50.0), 10.0)
    constrain = SideFlags(left=False).as_dict()

    moved = constrain_particle(p, W, H, constrain, NO_BOUNCE)

    assert not moved
    assert p.position_current == Vector2(3.0, 50.0)
    assert not is_lost(p, W, H, constrain)


def test_lost_only_beyond_radius_margin_on_open_side() -> None:
    constrain = SideFlags(bottom=False).as_dict()
    inside_margin = Particle.at_rest(Vector2(50.0, H + 9.0), 10.0)
    beyond = Particle.at_rest(Vector2(50.0, H + 11.0), 10.0)

    assert not is_lost(inside_margin, W, H, constrain)
    assert is_lost(beyond, W, H, constrain)
    assert not is_lost(beyond, W, H, SideFlags().as_dict())


@pytest.mark.parametrize(("restitution", "expected_old_x"), [(1.0, 8.0), (0.5, 9.0), (0.0, 10.0)])
def test_bounce_reverses_normal_velocity(restitution: float, expected_old_x: float) -> None:
    p = Particle(position_current=Vector2(3.0, 50.0), position_old=Vector2(5.0, 49.0), radius=10.0)
    bounce = SideFlags(False, False, True, False).as_dict()

    constrain_particle(p, W, H, SideFlags().as_dict(), bounce, restitution)

    assert p.position_current.x == 10.0
    assert p.position_old.x == expected_old_x
    assert p.position_old.y == 49.0


def test_bounce_keeps_velocity_when_already_leaving_wall() -> None:
    p = Particle(position_current=Vector2(3.0, 50.0), position_old=Vector2(1.0, 50.0), radius=10.0)
    bounce = SideFlags(False, False, True, False).as_dict()

    constrain_particle(p, W, H, SideFlags().as_dict(), bounce, 1.0)

    assert p.position_current.x == 10.0
    assert p.velocity.x == 2.0


def test_bottom_clamp_uses_screen_coordinates() -> None:
    p = Particle.at_rest(Vector2(50.0, 99.0), 5.0)

    constrain_particle(p, W, H, SideFlags().as_dict(), NO_BOUNCE)

    assert p.position_current == Vector2(50.0, 95.0)
