"""logic/economy.py — Build / upgrade / sell pricing and commands.

Pricing (``C`` = catalog cost, ``L`` = current level)::

    upgrade cost  = floor(C * (0.8 + L * 0.45))
    sell refund   = floor((C + (L - 1) * floor(C * 0.9)) * 0.7)

The refund deliberately approximates cumulative upgrade spend with a
flat ``floor(C * 0.9)`` per level instead of summing the real upgrade
prices; keep it that way.

Commands validate against the Field and return ``True`` when applied.
Invalid requests (bad cell, occupied cell, short on gold, nothing
selected) change nothing and return ``False`` — they never raise.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from components import Tower
from core.board import cell_to_world
from core.catalog import TOWER_DEFS, TARGET_MODES
from core.constants import (
    UPGRADE_BASE_FACTOR, UPGRADE_LEVEL_FACTOR,
    SELL_UPGRADE_FACTOR, SELL_REFUND_RATIO,
    BUILD_JITTER_MIN, BUILD_JITTER_MAX, DEFAULT_TARGET_MODE,
)
from core.events import TowerBuilt, TowerUpgraded, TowerSold
from core.tuning import get as _tun

if TYPE_CHECKING:
    from simulation.field import Field


# ── Pricing ──────────────────────────────────────────────────────────

def build_cost(tower_type: str) -> int:
    return TOWER_DEFS[tower_type].cost


def upgrade_cost(tower_type: str, level: int) -> int:
    base = TOWER_DEFS[tower_type].cost
    return math.floor(base * (UPGRADE_BASE_FACTOR + level * UPGRADE_LEVEL_FACTOR))


def total_spend(tower_type: str, level: int) -> int:
    base = TOWER_DEFS[tower_type].cost
    return base + max(0, level - 1) * math.floor(base * SELL_UPGRADE_FACTOR)


def sell_refund(tower_type: str, level: int) -> int:
    return math.floor(total_spend(tower_type, level) * SELL_REFUND_RATIO)


# ── Placement checks ─────────────────────────────────────────────────

def tower_at(field: "Field", cx: int, cy: int) -> Tower | None:
    for tower in field.towers:
        if tower.cell_x == cx and tower.cell_y == cy:
            return tower
    return None


def can_place(field: "Field", cx: int, cy: int) -> bool:
    """Cell is on the board, buildable, and free of towers."""
    return field.board.is_buildable(cx, cy) and tower_at(field, cx, cy) is None


def can_build_at(field: "Field", cx: int, cy: int,
                 tower_type: str | None = None) -> bool:
    """Placement-preview check: free buildable cell *and* enough gold."""
    tower_type = tower_type or field.selected_tower_type
    if tower_type not in TOWER_DEFS:
        return False
    return can_place(field, cx, cy) and field.gold >= build_cost(tower_type)


# ── Commands ─────────────────────────────────────────────────────────

def build_tower(field: "Field", cx: int, cy: int, tower_type: str) -> Tower | None:
    """Place a level-1 tower and select it.  Returns the tower or None."""
    if not can_build_at(field, cx, cy, tower_type):
        return None

    cost = build_cost(tower_type)
    field.gold -= cost

    jitter_lo = float(_tun("towers", "build_jitter_min", BUILD_JITTER_MIN))
    jitter_hi = float(_tun("towers", "build_jitter_max", BUILD_JITTER_MAX))
    x, y = cell_to_world(cx, cy)
    tower = Tower(
        id=field.next_tower_id,
        type=tower_type,
        cell_x=cx,
        cell_y=cy,
        x=x,
        y=y,
        level=1,
        target_mode=DEFAULT_TARGET_MODE,
        cooldown=field.rng.uniform(jitter_lo, jitter_hi),
    )
    field.next_tower_id += 1
    field.towers.append(tower)
    field.selected_tower_id = tower.id
    field.bus.emit(TowerBuilt(tower_id=tower.id, tower_type=tower_type,
                              cell_x=cx, cell_y=cy, cost=cost))
    return tower


def upgrade_selected(field: "Field") -> bool:
    tower = field.selected_tower
    if tower is None:
        return False
    cost = upgrade_cost(tower.type, tower.level)
    if field.gold < cost:
        return False
    field.gold -= cost
    tower.level += 1
    field.bus.emit(TowerUpgraded(tower_id=tower.id, level=tower.level, cost=cost))
    return True


def sell_selected(field: "Field") -> bool:
    tower = field.selected_tower
    if tower is None:
        return False
    refund = sell_refund(tower.type, tower.level)
    field.gold += refund
    field.towers = [t for t in field.towers if t.id != tower.id]
    field.selected_tower_id = None
    field.bus.emit(TowerSold(tower_id=tower.id, refund=refund))
    return True


def cycle_target_mode(field: "Field") -> bool:
    tower = field.selected_tower
    if tower is None:
        return False
    try:
        idx = TARGET_MODES.index(tower.target_mode)
    except ValueError:
        idx = -1
    tower.target_mode = TARGET_MODES[(idx + 1) % len(TARGET_MODES)]
    return True
