"""logic/targeting.py — Target acquisition for towers.

Pure queries over a Field's enemy list — no mutations, no side effects.
Each target mode is one entry in ``SELECTORS``; on ties the enemy seen
first in list order (spawn order) wins, because ``max`` / ``min`` keep
the first extreme they meet.
"""

from __future__ import annotations
import math
from typing import Callable, Iterable

from components import Enemy, Tower


Candidate = tuple[Enemy, float]     # (enemy, distance to tower)


def enemies_in_range(enemies: Iterable[Enemy], x: float, y: float,
                     radius: float) -> list[Candidate]:
    """Live enemies within Euclidean *radius* of (x, y), in list order."""
    out: list[Candidate] = []
    for enemy in enemies:
        if not enemy.alive:
            continue
        dist = math.hypot(enemy.x - x, enemy.y - y)
        if dist <= radius:
            out.append((enemy, dist))
    return out


SELECTORS: dict[str, Callable[[list[Candidate]], Candidate]] = {
    "first":     lambda cs: max(cs, key=lambda c: c[0].progress),
    "last":      lambda cs: min(cs, key=lambda c: c[0].progress),
    "nearest":   lambda cs: min(cs, key=lambda c: c[1]),
    "strongest": lambda cs: max(cs, key=lambda c: c[0].hp),
    "weakest":   lambda cs: min(cs, key=lambda c: c[0].hp),
}


def pick_target(candidates: list[Candidate], mode: str) -> Enemy | None:
    """Choose one candidate by *mode*; unknown modes behave like ``first``."""
    if not candidates:
        return None
    selector = SELECTORS.get(mode, SELECTORS["first"])
    return selector(candidates)[0]


def acquire_target(tower: Tower, enemies: Iterable[Enemy],
                   radius: float) -> Enemy | None:
    """In-range lookup + mode selection for a single tower."""
    return pick_target(enemies_in_range(enemies, tower.x, tower.y, radius),
                       tower.target_mode)
