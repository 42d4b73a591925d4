"""Helpers shared by step runners."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from ...config.validators import opt_mapping as _opt_mapping
from ...errors import ScenarioError

T = TypeVar("T")


def parsed(parser: Callable[..., T], *args: Any) -> T:
    """Call a config parser and re-raise its ValueError as ScenarioError."""
    try:
        return parser(*args)
    except ValueError as exc:
        raise ScenarioError(str(exc)) from exc


def opt_mapping(value: Any, context: str) -> dict[str, Any]:
    return parsed(_opt_mapping, value, context)
