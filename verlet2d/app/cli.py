"""Application-layer CLI adapter."""

from __future__ import annotations

import argparse
from pathlib import Path

from ..deck import ScenarioError, ScenarioState, run_deck, run_deck_data
from ..presets import get_preset, preset_names
from ..selfcheck import run_selfcheck


def build_parser() -> argparse.ArgumentParser:
    """Create CLI parser."""
    parser = argparse.ArgumentParser(prog="verlet2d", description="verlet2d particle solver")
    sub = parser.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Run a YAML scenario deck")
    run_p.add_argument("deck", type=str, help="Path to deck YAML")
    run_p.add_argument("--out", type=str, default=None, help="Override output directory")

    preset_p = sub.add_parser("preset", help="Run a built-in scenario")
    preset_p.add_argument("name", type=str, choices=preset_names(), help="Preset name")
    preset_p.add_argument("--out", type=str, default=None, help="Override output directory")

    selfcheck_p = sub.add_parser("selfcheck", help="Run dependency and smoke self-check")
    selfcheck_p.add_argument(
        "--no-smoke",
        action="store_true",
        help="Run import checks only (skip smoke simulation).",
    )

    return parser


def _print_summary(state: ScenarioState) -> None:
    print(f"Done. Particles={state.solver.particle_count}, exports={len(state.exports)}")
    for outdir in sorted({str(Path(p).parent) for p in state.exports}):
        print(f"Output: {outdir}")


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in ("run", "preset"):
        try:
            if args.command == "run":
                state = run_deck(args.deck, out_override=args.out)
            else:
                state = run_deck_data(get_preset(args.name), out_override=args.out)
        except ScenarioError as exc:
            parser.exit(2, f"Error: {exc}\n")
        _print_summary(state)
        return 0

    if args.command == "selfcheck":
        report = run_selfcheck(smoke=not bool(args.no_smoke))
        print(report.to_text())
        return 0 if report.ok else 1

    parser.exit(2, "Unknown command\n")
    return 2
