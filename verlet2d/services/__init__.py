"""Service-layer entry points for verlet2d."""

from .simulation_service import (
    SimulationService,
    UnsupportedStepTypeError,
    build_default_simulation_service,
    build_simulation_service,
)

__all__ = [
    "SimulationService",
    "UnsupportedStepTypeError",
    "build_default_simulation_service",
    "build_simulation_service",
]
