"""logic/combat.py — Tower stats by level and the per-tick firing system.

Level scaling (``L`` = level, level 1 = catalog stats)::

    range     = base_range  * (1 + 0.12 * (L - 1))
    damage    = base_damage * (1 + 0.30 * (L - 1))
    fire rate = base_rate   * (1 + 0.08 * (L - 1)) * FIRE_RATE_SCALE

A kill is recorded the moment a hit takes HP to zero or below.  The
``alive`` check in front of the reward makes overkill (several towers
on one enemy in the same tick) pay out exactly once.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import Tower, Enemy, ShotEffect
from core.catalog import TOWER_DEFS
from core.constants import (
    FIRE_RATE_SCALE, RANGE_PER_LEVEL, DAMAGE_PER_LEVEL, FIRE_RATE_PER_LEVEL,
    SHOT_EFFECT_LIFE,
)
from core.events import EnemyKilled
from core.tuning import get as _tun
from logic.targeting import acquire_target

if TYPE_CHECKING:
    from simulation.field import Field


# ── Derived stats ────────────────────────────────────────────────────

def tower_range(tower: Tower) -> float:
    return TOWER_DEFS[tower.type].range * (1 + RANGE_PER_LEVEL * (tower.level - 1))


def tower_damage(tower: Tower) -> float:
    return TOWER_DEFS[tower.type].damage * (1 + DAMAGE_PER_LEVEL * (tower.level - 1))


def tower_fire_rate(tower: Tower) -> float:
    """Shots per second, global ``FIRE_RATE_SCALE`` included."""
    base = TOWER_DEFS[tower.type].fire_rate
    return base * (1 + FIRE_RATE_PER_LEVEL * (tower.level - 1)) * FIRE_RATE_SCALE


def tower_cooldown(tower: Tower) -> float:
    """Seconds between shots at the tower's current level."""
    return 1.0 / tower_fire_rate(tower)


# ── Hit resolution ───────────────────────────────────────────────────

def apply_hit(field: "Field", tower: Tower, target: Enemy) -> bool:
    """Damage *target*, leave a tracer, pay the reward on a kill.

    Returns True if this hit killed the enemy.
    """
    target.hp -= tower_damage(tower)

    life = float(_tun("effects", "shot_life", SHOT_EFFECT_LIFE))
    field.effects.append(ShotEffect(
        tower_id=tower.id, enemy_id=target.id,
        x1=tower.x, y1=tower.y, x2=target.x, y2=target.y,
        life=life, max_life=life,
    ))

    if target.hp <= 0 and target.alive:
        target.alive = False
        field.gold += target.reward
        field.bus.emit(EnemyKilled(enemy_id=target.id, tower_id=tower.id,
                                   reward=target.reward))
        return True
    return False


def combat_system(field: "Field", dt: float) -> None:
    """Tick every tower's cooldown and fire the ready ones.

    A ready tower with nothing in range stays ready (no cooldown reset on
    a whiff) and re-checks next tick.
    """
    for tower in field.towers:
        tower.cooldown -= dt
        if tower.cooldown > 0:
            continue

        target = acquire_target(tower, field.enemies, tower_range(tower))
        if target is None:
            continue

        apply_hit(field, tower, target)
        tower.cooldown = tower_cooldown(tower)


def effects_system(field: "Field", dt: float) -> None:
    """Age tracers by real time and drop expired ones."""
    if not field.effects:
        return
    alive: list[ShotEffect] = []
    for fx in field.effects:
        fx.life -= dt
        if fx.life > 0:
            alive.append(fx)
    field.effects = alive
