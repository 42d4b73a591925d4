"""Run-step history integration tests."""

from __future__ import annotations

import csv

import pytest
import yaml

from verlet2d.deck import run_deck


pytestmark = pytest.mark.integration


def test_run_history_csv_created_and_monotonic(tmp_path) -> None:
    deck = {
        "solver": {
            "width": 200.0,
            "height": 200.0,
            "spawn": {"radius": 6.0},
            "thermal": {"injection": {"bottom": 1.0}, "injection_rate": 0.2},
            "seed": 3,
        },
        "steps": [
            {"type": "spawn", "count": 15},
            {
                "type": "run",
                "ticks": 6,
                "substeps": 2,
                "record": {"enable": True, "every": 2},
            },
            {
                "type": "run",
                "ticks": 4,
                "substeps": 2,
                "record": {"enable": True, "every": 2, "save_csv": True, "save_png": False},
            },
            {"type": "export", "outdir": "outputs/test_history", "formats": ["png"]},
        ],
    }
    deck_path = tmp_path / "deck_history.yaml"
    deck_path.write_text(yaml.safe_dump(deck, sort_keys=False), encoding="utf-8")

    outdir = tmp_path / "out"
    state = run_deck(deck_path, out_override=outdir)

    history_csv = outdir / "history.csv"
    assert history_csv.exists()
    assert not (outdir / "history.png").exists()
    assert [int(row["tick"]) for row in state.history] == [0, 2, 4, 6, 8, 10]

    with history_csv.open("r", encoding="utf-8", newline="") as f:
        rows = list(csv.DictReader(f))

    assert len(rows) == len(state.history)
    assert "mean_temperature" in rows[0]
    assert "max_penetration" in rows[0]

    times = [float(r["time_s"]) for r in rows]
    for i in range(len(times) - 1):
        assert times[i] <= times[i + 1] + 1e-15
    assert all(float(r["count"]) == 15.0 for r in rows)


def test_history_export_format_writes_csv_and_plot(tmp_path) -> None:
    deck = {
        "solver": {"width": 150.0, "height": 150.0, "spawn": {"radius": 5.0}, "seed": 8},
        "steps": [
            {"type": "spawn", "count": 10},
            {"type": "run", "ticks": 4, "substeps": 2, "record": {"enable": True, "every": 1}},
            {"type": "export", "formats": ["history"]},
        ],
    }
    deck_path = tmp_path / "deck.yaml"
    deck_path.write_text(yaml.safe_dump(deck, sort_keys=False), encoding="utf-8")

    state = run_deck(deck_path, out_override=tmp_path / "out")

    assert (tmp_path / "out" / "history.csv").exists()
    assert (tmp_path / "out" / "history.png").exists()
    assert len(state.exports) == 2
