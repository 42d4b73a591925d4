"""Shared error types for verlet2d orchestration layers."""

from __future__ import annotations


class ScenarioError(ValueError):
    """Raised when a scenario deck is invalid or execution fails."""
