"""Particle physics core."""

from .grid import CELL_FACTOR, SpatialGrid
from .particle import Particle
from .settings import SideFlags, SideLevels, SolverConfig
from .solver import Solver, SolverStats
from .stepping import TickConfig, clamp_dt, max_penetration, run_ticks
from .vector import Vector2

__all__ = [
    "CELL_FACTOR",
    "Particle",
    "SideFlags",
    "SideLevels",
    "Solver",
    "SolverConfig",
    "SolverStats",
    "SpatialGrid",
    "TickConfig",
    "Vector2",
    "clamp_dt",
    "max_penetration",
    "run_ticks",
]
