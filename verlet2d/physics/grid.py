"""Uniform spatial grid for broad-phase collision culling.

The grid is disposable: it is rebuilt from particle positions on every
collision pass. Bucket storage is kept between passes and only ever grows.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator, Sequence

import numpy as np

from .particle import Particle
from .vector import Vector2

CELL_FACTOR = 4.0
MAX_CELLS_PER_AXIS = 1024


class SpatialGrid:
    """Index buckets over a ``width x height`` region.

    Coordinates follow screen convention:
    - x: left to right, column index ``cx``
    - y: top to bottom, row index ``cy``
    """

    def __init__(self, width: float, height: float, *, cell_factor: float = CELL_FACTOR) -> None:
        self.width = float(width)
        self.height = float(height)
        self.cell_factor = float(cell_factor)
        self.cell_size = 0.0
        self.cols = 0
        self.rows = 0
        self._cells: list[list[int]] = []

    @property
    def shape(self) -> tuple[int, int]:
        """Active grid shape as (rows, cols)."""
        return (self.rows, self.cols)

    @property
    def size(self) -> int:
        """Number of active cells."""
        return self.rows * self.cols

    @property
    def capacity(self) -> int:
        """Number of allocated buckets (high-water mark)."""
        return len(self._cells)

    def set_bounds(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)

    def flat_index(self, cx: int, cy: int) -> int:
        return cy * self.cols + cx

    def cell_of(self, position: Vector2) -> tuple[int, int] | None:
        """Cell coordinates containing ``position``, or None outside the grid."""
        if self.cell_size <= 0.0 or not position.is_finite():
            return None
        cx = math.floor(position.x / self.cell_size)
        cy = math.floor(position.y / self.cell_size)
        if 0 <= cx < self.cols and 0 <= cy < self.rows:
            return (cx, cy)
        return None

    def bucket(self, cx: int, cy: int) -> tuple[int, ...]:
        """Snapshot of the particle indices stored in one cell."""
        return tuple(self._cells[self.flat_index(cx, cy)])

    def _resize(self, max_radius: float) -> None:
        floor_size = max(self.width, self.height) / MAX_CELLS_PER_AXIS
        self.cell_size = max(max_radius * self.cell_factor, floor_size)
        self.cols = max(1, math.ceil(self.width / self.cell_size))
        self.rows = max(1, math.ceil(self.height / self.cell_size))

        needed = self.cols * self.rows
        if needed > len(self._cells):
            self._cells.extend([] for _ in range(needed - len(self._cells)))
        for cell in self._cells[:needed]:
            cell.clear()

    def rebuild(self, particles: Sequence[Particle]) -> None:
        """Re-bucket every particle index by its current position.

        Indices that fall outside the grid (or are non-finite) are skipped.
        """
        if not particles:
            self.cell_size = 0.0
            self.cols = 0
            self.rows = 0
            return

        self._resize(max(p.radius for p in particles))

        pos = np.array(
            [(p.position_current.x, p.position_current.y) for p in particles],
            dtype=float,
        )
        with np.errstate(invalid="ignore"):
            cells = np.floor(pos / self.cell_size)
        valid = np.all(np.isfinite(cells), axis=1)
        valid &= (cells[:, 0] >= 0) & (cells[:, 0] < self.cols)
        valid &= (cells[:, 1] >= 0) & (cells[:, 1] < self.rows)

        indices = np.nonzero(valid)[0]
        flat = cells[valid, 1].astype(np.int64) * self.cols + cells[valid, 0].astype(np.int64)
        buckets = self._cells
        for idx, cell in zip(indices.tolist(), flat.tolist()):
            buckets[cell].append(idx)

    def iter_neighbor_pairs(self) -> Iterator[tuple[int, int]]:
        """Yield every unordered candidate pair once.

        Each cell is paired with the cells of its 3x3 block whose flat index
        is not lower than its own, so a pair spanning two cells is emitted
        only from the lower cell. Order is deterministic (row-major cells,
        ascending bucket position).
        """
        cols, rows = self.cols, self.rows
        buckets = self._cells
        for cy in range(rows):
            for cx in range(cols):
                flat = cy * cols + cx
                cell = buckets[flat]
                if not cell:
                    continue
                for ny in (cy - 1, cy, cy + 1):
                    if ny < 0 or ny >= rows:
                        continue
                    for nx in (cx - 1, cx, cx + 1):
                        if nx < 0 or nx >= cols:
                            continue
                        n_flat = ny * cols + nx
                        if n_flat < flat:
                            continue
                        if n_flat == flat:
                            for a in range(len(cell)):
                                i = cell[a]
                                for b in range(a + 1, len(cell)):
                                    yield (i, cell[b])
                            continue
                        other = buckets[n_flat]
                        for i in cell:
                            for j in other:
                                yield (i, j)

    def for_each_neighbor_pair(self, callback: Callable[[int, int], object]) -> int:
        """Invoke ``callback(i, j)`` for every candidate pair; return pair count."""
        count = 0
        for i, j in self.iter_neighbor_pairs():
            callback(i, j)
            count += 1
        return count

    def describe(self) -> dict[str, float | int]:
        """Grid diagnostics for display and reports."""
        return {
            "cols": self.cols,
            "rows": self.rows,
            "cell_size": float(self.cell_size),
            "capacity": self.capacity,
        }
