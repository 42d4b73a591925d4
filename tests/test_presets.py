from __future__ import annotations

import pytest

from verlet2d.config import parse_solver_config, parse_step_configs
from verlet2d.errors import ScenarioError
from verlet2d.presets import get_preset, preset_names


pytestmark = pytest.mark.unit


@pytest.mark.parametrize("name", ["rain", "convection", "pile"])
def test_presets_are_valid_decks(name: str) -> None:
    deck = get_preset(name)
    assert parse_step_configs(deck)
    parse_solver_config(deck)


def test_preset_copies_are_independent() -> None:
    first = get_preset("pile")
    first["steps"].clear()
    assert get_preset("PILE")["steps"]


def test_unknown_preset() -> None:
    assert preset_names() == ("rain", "convection", "pile")
    with pytest.raises(ScenarioError, match="Unknown preset 'snow'"):
        get_preset("snow")
