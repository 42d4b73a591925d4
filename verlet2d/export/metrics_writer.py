"""Metrics report writers."""

from __future__ import annotations

import csv
import json
from pathlib import Path


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def flatten_metrics(metrics: dict, prefix: str = "") -> list[tuple[str, str]]:
    """Dotted key/value rows for nested report dictionaries."""
    rows: list[tuple[str, str]] = []
    for key, value in metrics.items():
        name = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            rows.extend(flatten_metrics(value, name))
        elif isinstance(value, list):
            rows.append((name, json.dumps(value, ensure_ascii=False)))
        else:
            rows.append((name, f"{value}"))
    return rows


def save_metrics_json(metrics: dict, outdir: str | Path, filename: str = "metrics.json") -> Path:
    """Save analysis metrics in JSON format."""
    path = _ensure_outdir(outdir) / filename
    with path.open("w", encoding="utf-8") as f:
        json.dump(metrics, f, ensure_ascii=False, indent=2)
    return path


def save_metrics_csv(metrics: dict, outdir: str | Path, filename: str = "metrics.csv") -> Path:
    """Save analysis metrics in flattened key-value CSV format."""
    path = _ensure_outdir(outdir) / filename
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["key", "value"])
        for key, value in flatten_metrics(metrics):
            writer.writerow([key, value])
    return path
