"""Runner signature shared by every step module."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..domain.state import ScenarioState

StepRunner = Callable[[ScenarioState, dict[str, Any], int], None]

__all__ = ["StepRunner"]
