"""components.enemy — Enemies walking the path."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Enemy:
    """One live enemy inside a Field.

    ``progress`` is measured in path segments: the integer part is the
    segment index, the fraction is how far along it the enemy is.
    ``x`` / ``y`` are derived from ``progress`` by the movement system
    and cached here so targeting never recomputes them.

    ``hp`` may dip below zero from overkill; ``alive`` is the single
    guard that makes death (and its reward) happen exactly once.
    """
    id: int
    type: str
    hp: float
    max_hp: float
    speed: float               # world units / s
    reward: int                # gold on death
    progress: float = 0.0      # segments
    alive: bool = True
    x: float = 0.0
    y: float = 0.0

    @property
    def hp_ratio(self) -> float:
        if self.max_hp <= 0:
            return 0.0
        return min(max(self.hp / self.max_hp, 0.0), 1.0)
