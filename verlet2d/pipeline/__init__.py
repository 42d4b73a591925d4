"""Step registry and sequential engine."""

from .engine import run
from .registry import StepRegistry, create_step_registry
from .step_base import StepRunner

__all__ = ["StepRegistry", "StepRunner", "create_step_registry", "run"]
