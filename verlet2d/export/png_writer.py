"""PNG snapshot of the particle population."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg", force=True)
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.collections import PatchCollection
from matplotlib.patches import Circle

from ..physics.solver import Solver


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_snapshot_png(
    solver: Solver,
    outdir: str | Path,
    filename: str = "snapshot.png",
    plot_cfg: dict | None = None,
) -> Path:
    """Draw every particle as a circle coloured by temperature.

    The y axis is inverted so the picture matches screen coordinates.
    """
    cfg = dict(plot_cfg or {})
    cmap = str(cfg.get("cmap", "inferno"))
    vmin = cfg.get("vmin")
    vmax = cfg.get("vmax")

    width = float(solver.config.width)
    height = float(solver.config.height)
    particles = solver.particles

    path = _ensure_outdir(outdir) / filename
    aspect = height / width if width > 0.0 else 1.0
    fig, ax = plt.subplots(figsize=(7.2, max(2.0, 7.2 * aspect)), dpi=140)
    ax.set_facecolor("black")

    if particles:
        patches = [Circle((p.position_current.x, p.position_current.y), p.radius) for p in particles]
        temps = np.fromiter((p.temperature for p in particles), dtype=float, count=len(particles))
        coll = PatchCollection(patches, cmap=cmap, alpha=0.85, linewidths=0.0)
        coll.set_array(temps)
        coll.set_clim(
            float(vmin) if vmin is not None else float(np.min(temps)),
            float(vmax) if vmax is not None else float(np.max(temps)),
        )
        ax.add_collection(coll)
        cbar = fig.colorbar(coll, ax=ax, fraction=0.046, pad=0.04)
        cbar.set_label("temperature")

    ax.set_xlim(0.0, width)
    ax.set_ylim(height, 0.0)
    ax.set_aspect("equal")
    ax.set_title(f"{len(particles)} particles")
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path
