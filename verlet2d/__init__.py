"""verlet2d: constraint-based 2D Verlet particle solver with scenario decks."""

from .deck import ScenarioError, load_deck, run_deck, run_deck_data
from .physics import Particle, Solver, SolverConfig, TickConfig, Vector2, run_ticks

__all__ = [
    "Particle",
    "ScenarioError",
    "Solver",
    "SolverConfig",
    "TickConfig",
    "Vector2",
    "load_deck",
    "run_deck",
    "run_deck_data",
    "run_ticks",
]

__version__ = "0.1.0"
