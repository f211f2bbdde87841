"""core/board.py — Static map model: tile grid + fixed waypoint path.

The board never changes after construction.  Every Field shares the
same ``Board`` instance; only towers and enemies are per-Field.

    board = default_board()
    board.is_buildable(4, 1)          # → True
    x, y = board.position_at(2.5)     # world point halfway along seg 2

Coordinates are ``(col, row)`` cells; world positions are cell centres
scaled by ``TILE_SIZE`` (see ``core.constants``).
"""

from __future__ import annotations
import math
from dataclasses import dataclass

from core.constants import (
    TILE_SIZE, GRID_COLS, GRID_ROWS,
    TILE_BUILDABLE, TILE_BLOCKED, TILE_PATH,
)


# Authored route (col, row).  Not computed — there is no pathfinding.
DEFAULT_PATH: tuple[tuple[int, int], ...] = (
    (0, 3), (1, 3), (2, 3), (3, 3), (4, 3), (5, 3),
    (5, 4), (5, 5),
    (6, 5), (7, 5), (8, 5), (9, 5), (10, 5), (11, 5), (12, 5), (13, 5),
)

DEFAULT_BLOCKED: frozenset[tuple[int, int]] = frozenset({
    (2, 1), (3, 1), (9, 2), (9, 3), (11, 1), (12, 1),
})


def cell_to_world(cx: float, cy: float) -> tuple[float, float]:
    """Centre of (possibly fractional) cell *cx, cy* in world units."""
    return (cx * TILE_SIZE + TILE_SIZE / 2, cy * TILE_SIZE + TILE_SIZE / 2)


def world_to_cell(x: float, y: float) -> tuple[int, int]:
    return (math.floor(x / TILE_SIZE), math.floor(y / TILE_SIZE))


@dataclass(frozen=True)
class Board:
    """Rectangular tile grid plus the ordered enemy route."""
    cols: int
    rows: int
    tiles: tuple[tuple[int, ...], ...]     # tiles[row][col]
    path: tuple[tuple[int, int], ...]

    @classmethod
    def build(cls, cols: int, rows: int,
              path: tuple[tuple[int, int], ...],
              blocked: frozenset[tuple[int, int]] = frozenset()) -> "Board":
        """Derive the tile grid: path cells, blocked cells, rest buildable."""
        if len(path) < 2:
            raise ValueError("path needs at least two waypoints")
        path_set = set(path)
        rows_out = []
        for r in range(rows):
            row = []
            for c in range(cols):
                if (c, r) in path_set:
                    row.append(TILE_PATH)
                elif (c, r) in blocked:
                    row.append(TILE_BLOCKED)
                else:
                    row.append(TILE_BUILDABLE)
            rows_out.append(tuple(row))
        return cls(cols=cols, rows=rows, tiles=tuple(rows_out), path=tuple(path))

    # ── Tile queries ─────────────────────────────────────────────────

    def in_bounds(self, cx: int, cy: int) -> bool:
        return 0 <= cx < self.cols and 0 <= cy < self.rows

    def tile(self, cx: int, cy: int) -> int | None:
        if not self.in_bounds(cx, cy):
            return None
        return self.tiles[cy][cx]

    def is_buildable(self, cx: int, cy: int) -> bool:
        return self.tile(cx, cy) == TILE_BUILDABLE

    # ── Path queries ─────────────────────────────────────────────────

    @property
    def segment_count(self) -> int:
        return len(self.path) - 1

    def clamp_progress(self, progress: float) -> float:
        return min(max(progress, 0.0), float(self.segment_count))

    def position_at(self, progress: float) -> tuple[float, float]:
        """World point at *progress* segments along the route.

        Linear interpolation between waypoint ``floor(progress)`` and the
        next one.  Progress is clamped into ``[0, segment_count]``.
        """
        p = self.clamp_progress(progress)
        seg = min(int(math.floor(p)), self.segment_count - 1)
        t = p - seg
        ax, ay = self.path[seg]
        bx, by = self.path[seg + 1]
        return cell_to_world(ax + (bx - ax) * t, ay + (by - ay) * t)

    @property
    def spawn_point(self) -> tuple[float, float]:
        return cell_to_world(*self.path[0])


_DEFAULT: Board | None = None


def default_board() -> Board:
    """The shared authored map (built once, then cached)."""
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = Board.build(GRID_COLS, GRID_ROWS, DEFAULT_PATH, DEFAULT_BLOCKED)
    return _DEFAULT
