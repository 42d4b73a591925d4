"""Shared config validation helpers."""

from __future__ import annotations

import math
from typing import Any, Mapping, Sequence


def as_mapping(value: Any, context: str) -> dict[str, Any]:
    """Require mapping value."""
    if not isinstance(value, dict):
        raise ValueError(f"{context} must be a mapping.")
    return value


def opt_mapping(value: Any, context: str) -> dict[str, Any]:
    """Return mapping or empty mapping for None."""
    if value is None:
        return {}
    return as_mapping(value, context)


def required(mapping: Mapping[str, Any], key: str, context: str) -> Any:
    """Require mapping key existence."""
    if not isinstance(mapping, Mapping):
        raise ValueError(f"{context} must be a mapping.")
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context}.")
    return mapping[key]


def to_float(value: Any, key: str, context: str) -> float:
    """Convert value to a finite float with contextual error message."""
    try:
        out = float(value)
    except Exception as exc:
        raise ValueError(f"{context}.{key} must be a number, got {value!r}.") from exc
    if not math.isfinite(out):
        raise ValueError(f"{context}.{key} must be finite, got {value!r}.")
    return out


def to_int(value: Any, key: str, context: str) -> int:
    """Convert value to int with contextual error message."""
    if isinstance(value, bool):
        raise ValueError(f"{context}.{key} must be an integer, got {value!r}.")
    try:
        return int(value)
    except Exception as exc:
        raise ValueError(f"{context}.{key} must be an integer, got {value!r}.") from exc


def to_bool(value: Any, key: str, context: str) -> bool:
    """Accept YAML booleans only; strings like 'no' are already parsed by YAML."""
    if isinstance(value, bool):
        return value
    raise ValueError(f"{context}.{key} must be true or false, got {value!r}.")


def to_pair(value: Any, key: str, context: str) -> tuple[float, float]:
    """Convert a two-element list into a float pair."""
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{context}.{key} must be a [x, y] pair, got {value!r}.")
    return (to_float(value[0], f"{key}[0]", context), to_float(value[1], f"{key}[1]", context))


def ensure_choice(name: str, value: str, allowed: Sequence[str]) -> str:
    """Validate str choice and return normalized value."""
    val = str(value)
    if val not in allowed:
        joined = ", ".join(allowed)
        raise ValueError(f"{name} must be one of: {joined}. Got '{val}'.")
    return val


def ensure_positive(name: str, value: float, *, allow_zero: bool = False) -> float:
    """Validate that a scalar is positive (or non-negative if allow_zero)."""
    x = float(value)
    if allow_zero:
        if x < 0.0:
            raise ValueError(f"{name} must be >= 0, got {value}.")
    elif x <= 0.0:
        raise ValueError(f"{name} must be > 0, got {value}.")
    return x
