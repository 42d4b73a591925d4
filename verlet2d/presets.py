"""Built-in ready-to-run scenario decks."""

from __future__ import annotations

import copy
from typing import Any, Callable

from .errors import ScenarioError


def rain_deck() -> dict[str, Any]:
    """Open floor with a population floor: drops fall out and are respawned."""
    return {
        "solver": {
            "width": 800.0,
            "height": 600.0,
            "constrain": {"top": True, "bottom": False, "left": True, "right": True},
            "spawn": {"radius": 6.0, "safety_radius_factor": 1.2, "safety_iterations": 20},
            "population": {"min": 150, "enforce_min": True, "max": 400, "enforce_max": True},
            "seed": 7,
        },
        "steps": [
            {"type": "run", "ticks": 180, "substeps": 8, "record": {"enable": True, "every": 10}},
            {"type": "analyze", "save": {"json": True, "csv": False}},
            {"type": "export", "outdir": "outputs/rain", "formats": ["png", "history"]},
        ],
    }


def convection_deck() -> dict[str, Any]:
    """Closed box heated from below and cooled from above."""
    return {
        "solver": {
            "width": 600.0,
            "height": 600.0,
            "thermal": {
                "transfer": 0.2,
                "loss": 0.05,
                "injection_rate": 0.1,
                "injection": {"bottom": 1.0, "top": 0.0},
            },
            "buoyancy": {"enable": True, "power": 1.5},
            "spawn": {"radius": 8.0},
            "seed": 11,
        },
        "steps": [
            {"type": "spawn", "count": 250},
            {"type": "run", "ticks": 240, "substeps": 8, "record": {"enable": True, "every": 20}},
            {"type": "analyze"},
            {"type": "export", "outdir": "outputs/convection", "formats": ["png", "history"]},
        ],
    }


def pile_deck() -> dict[str, Any]:
    """Particles settle into a resting pile, then get shaken once."""
    return {
        "solver": {
            "width": 500.0,
            "height": 400.0,
            "spawn": {"radius": 7.0, "stabilize": True},
            "seed": 3,
        },
        "steps": [
            {"type": "spawn", "count": 300},
            {"type": "run", "ticks": 120, "substeps": 8, "record": {"enable": True, "every": 10}},
            {"type": "shake", "intensity": 40000.0, "direction_deg": -90.0},
            {"type": "run", "ticks": 120, "substeps": 8, "record": {"enable": True, "every": 10}},
            {"type": "stabilize"},
            {"type": "analyze"},
            {"type": "export", "outdir": "outputs/pile", "formats": ["png", "history"]},
        ],
    }


PRESETS: dict[str, Callable[[], dict[str, Any]]] = {
    "rain": rain_deck,
    "convection": convection_deck,
    "pile": pile_deck,
}


def preset_names() -> tuple[str, ...]:
    return tuple(PRESETS)


def get_preset(name: str) -> dict[str, Any]:
    """Return a fresh copy of a named preset deck."""
    key = str(name).strip().lower()
    if key not in PRESETS:
        raise ScenarioError(f"Unknown preset '{name}'. Use one of: {', '.join(PRESETS)}.")
    return copy.deepcopy(PRESETS[key]())
