"""Deck file and in-memory payload runs share one service and one RNG stream."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from verlet2d.deck import run_deck, run_deck_data

pytestmark = pytest.mark.integration


def _deck() -> dict:
    return {
        "solver": {
            "width": 160.0,
            "height": 120.0,
            "spawn": {"radius": 5.0},
            "thermal": {"transfer": 0.3, "injection": {"bottom": 1.0}},
            "buoyancy": {"enable": True, "power": 1.0},
            "seed": 21,
        },
        "steps": [
            {"type": "spawn", "count": 25},
            {"type": "shake", "intensity": 500.0},
            {"type": "run", "ticks": 8, "substeps": 4, "record": {"enable": True, "every": 4}},
        ],
    }


def _positions(state) -> list[tuple[float, float, float]]:
    return [(p.position_current.x, p.position_current.y, p.temperature) for p in state.solver.particles]


def test_file_and_payload_runs_match(tmp_path: Path) -> None:
    deck_path = tmp_path / "deck.yaml"
    deck_path.write_text(yaml.safe_dump(_deck(), sort_keys=False), encoding="utf-8")

    from_file = run_deck(deck_path)
    from_payload = run_deck_data(_deck(), deck_path=deck_path)

    assert _positions(from_file) == _positions(from_payload)
    assert from_file.history == from_payload.history


def test_seed_changes_outcome(tmp_path: Path) -> None:
    other = _deck()
    other["solver"]["seed"] = 22

    a = run_deck_data(_deck(), deck_path=tmp_path / "a.yaml")
    b = run_deck_data(other, deck_path=tmp_path / "b.yaml")

    assert _positions(a) != _positions(b)
