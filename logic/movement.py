"""logic/movement.py — Enemy locomotion along the fixed path.

Enemies only ever move forward along the route: no steering, no
lateral offset, no enemy-vs-enemy collision.  Reaching the last
waypoint costs the base one HP and takes the enemy out of play.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from core.constants import TILE_SIZE
from core.events import EnemyLeaked

if TYPE_CHECKING:
    from simulation.field import Field


def movement_system(field: "Field", dt: float) -> None:
    """Advance every live enemy by ``speed * dt`` world units.

    Base HP may go negative here when several enemies leak in one tick;
    ``logic.tick.status_system`` clamps it.
    """
    board = field.board
    total = board.segment_count
    for enemy in field.enemies:
        if not enemy.alive:
            continue

        enemy.progress += (enemy.speed * dt) / TILE_SIZE

        if enemy.progress >= total:
            enemy.progress = float(total)
            enemy.alive = False
            field.base_hp -= 1
            field.bus.emit(EnemyLeaked(enemy_id=enemy.id, base_hp=field.base_hp))
            continue

        enemy.x, enemy.y = board.position_at(enemy.progress)
