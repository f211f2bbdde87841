"""components.tower — Player-built towers."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Tower:
    """A tower occupying one buildable cell.

    ``type`` keys into ``core.catalog.TOWER_DEFS``; level-dependent stats
    are derived (see ``logic.combat``), never stored.  ``cooldown`` may
    sit at or below zero while the tower waits for a target.
    """
    id: int
    type: str
    cell_x: int
    cell_y: int
    x: float                    # world centre of the cell
    y: float
    level: int = 1
    target_mode: str = "first"
    cooldown: float = 0.0       # s until next shot
