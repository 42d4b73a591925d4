from __future__ import annotations

import importlib
import tempfile
from dataclasses import dataclass
from pathlib import Path

from .engine import run_deck_mapping

SMOKE_DECK = {
    "solver": {
        "width": 200.0,
        "height": 200.0,
        "spawn": {"radius": 5.0},
        "thermal": {"transfer": 0.1, "injection": {"bottom": 1.0}},
        "seed": 0,
    },
    "steps": [
        {"type": "spawn", "count": 40},
        {"type": "run", "ticks": 10, "substeps": 4, "record": {"enable": True, "every": 5}},
        {"type": "analyze", "save": {"json": True, "csv": True}},
        {"type": "export", "outdir": "outputs/selfcheck", "formats": ["png", "history"]},
    ],
}


@dataclass
class CheckRow:
    name: str
    ok: bool
    detail: str


@dataclass
class SelfCheckReport:
    rows: list[CheckRow]

    @property
    def ok(self) -> bool:
        return all(row.ok for row in self.rows)

    def to_text(self) -> str:
        lines = [f"[{'OK' if row.ok else 'FAIL'}] {row.name}: {row.detail}" for row in self.rows]
        lines.append(f"overall: {'OK' if self.ok else 'FAIL'}")
        return "\n".join(lines)


def run_selfcheck(*, smoke: bool = True) -> SelfCheckReport:
    rows: list[CheckRow] = []

    for module_name in ("numpy", "yaml", "matplotlib"):
        try:
            mod = importlib.import_module(module_name)
            rows.append(CheckRow(module_name, True, f"version={getattr(mod, '__version__', 'unknown')}"))
        except Exception as exc:
            rows.append(CheckRow(module_name, False, str(exc)))

    if smoke and all(row.ok for row in rows):
        try:
            with tempfile.TemporaryDirectory(prefix="verlet2d-selfcheck-") as tmp:
                outdir = Path(tmp) / "out"
                result = run_deck_mapping(SMOKE_DECK, base_dir=Path(tmp), out_override=outdir)
                expected = ["snapshot.png", "history.csv", "history.png", "metrics.json", "metrics.csv"]
                missing = [name for name in expected if not (outdir / name).exists()]
                if missing:
                    rows.append(CheckRow("smoke", False, f"missing artifacts: {', '.join(missing)}"))
                else:
                    rows.append(
                        CheckRow(
                            "smoke",
                            True,
                            f"particles={result.state.solver.particle_count}, exports={len(result.state.exports)}",
                        )
                    )
        except Exception as exc:
            rows.append(CheckRow("smoke", False, str(exc)))

    return SelfCheckReport(rows=rows)
