"""components — Plain dataclasses for the per-Field live collections.

Submodules
----------
enemy          Enemy
tower          Tower
effects        ShotEffect

All public names are re-exported here so callers can write
``from components import Enemy``.
"""

from components.enemy import Enemy
from components.tower import Tower
from components.effects import ShotEffect

__all__ = ["Enemy", "Tower", "ShotEffect"]
