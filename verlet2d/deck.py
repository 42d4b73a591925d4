"""YAML scenario deck loading and execution."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .domain.state import ScenarioState
from .errors import ScenarioError
from .services import build_default_simulation_service

__all__ = ["ScenarioError", "ScenarioState", "load_deck", "run_deck", "run_deck_data"]


def load_deck(deck_path: str | Path) -> dict[str, Any]:
    """Load YAML deck from file."""
    path = Path(deck_path)
    if not path.exists():
        raise ScenarioError(f"Deck file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ScenarioError(f"Failed to parse YAML deck: {path}") from exc

    if payload is None:
        raise ScenarioError(f"Deck is empty: {path}")
    if not isinstance(payload, dict):
        raise ScenarioError("deck must be a mapping.")
    return payload


def run_deck_data(
    deck: dict[str, Any],
    *,
    deck_path: str | Path | None = None,
    out_override: str | Path | None = None,
) -> ScenarioState:
    """Run a deck that is already in memory."""
    service = build_default_simulation_service()
    return service.run_payload(deck, deck_path=deck_path, out_override=out_override)


def run_deck(deck_path: str | Path, out_override: str | Path | None = None) -> ScenarioState:
    """Run all steps from a YAML deck; relative outdirs resolve beside it."""
    path = Path(deck_path).resolve()
    deck = load_deck(path)
    return run_deck_data(deck, deck_path=path, out_override=out_override)
