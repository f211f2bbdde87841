"""components.effects — Short-lived visual records.

Purely observational: produced by combat, read by the renderer, never
persisted and never consumed by another simulation rule.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class ShotEffect:
    """Tracer line from a tower to the enemy it hit."""
    tower_id: int
    enemy_id: int
    x1: float
    y1: float
    x2: float
    y2: float
    life: float                 # real seconds remaining
    max_life: float = 0.06

    @property
    def alpha(self) -> float:
        """0..1 fade factor for the renderer."""
        if self.max_life <= 0:
            return 0.0
        return max(self.life / self.max_life, 0.0)
