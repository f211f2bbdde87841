"""logic/waves.py — Endless wave scaling and the per-Field spawn scheduler.

Wave *N* reuses row ``N mod len(BASE_WAVES)`` of the base table and
scales it by how many full passes ("cycles") came before it::

    get_wave_def(0)   # → base row 0, cycle 0
    get_wave_def(4)   # → base row 1, cycle 1 (more, tankier, faster)

Which archetype each spawn becomes is a cumulative-probability roll
against the tier for the wave index (wave 0, wave 1, wave ≥ 2).
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from components import Enemy
from core.catalog import BASE_WAVES, ARCHETYPES, SPAWN_TIERS, WaveDef
from core.constants import (
    CYCLE_COUNT_GROWTH, CYCLE_HP_GROWTH, CYCLE_SPEED_GROWTH,
    CYCLE_REWARD_GROWTH, CYCLE_INTERVAL_SHRINK, MIN_INTERVAL_FACTOR,
    INTER_WAVE_DELAY,
)
from core.events import EnemySpawned, WaveStarted
from core.tuning import get as _tun

if TYPE_CHECKING:
    from core.board import Board
    from simulation.field import Field


# ── Pure tables ──────────────────────────────────────────────────────

def get_wave_def(wave_index: int) -> WaveDef:
    """Concrete parameters for *wave_index* (unbounded, never negative)."""
    wave_index = max(0, int(wave_index))
    base = BASE_WAVES[wave_index % len(BASE_WAVES)]
    cycle = wave_index // len(BASE_WAVES)
    return WaveDef(
        count=math.floor(base.count * (1 + CYCLE_COUNT_GROWTH * cycle)),
        hp=math.floor(base.hp * (1 + CYCLE_HP_GROWTH * cycle)),
        speed=base.speed * (1 + CYCLE_SPEED_GROWTH * cycle),
        reward=max(1, math.floor(base.reward * (1 + CYCLE_REWARD_GROWTH * cycle))),
        spawn_interval=base.spawn_interval * max(MIN_INTERVAL_FACTOR,
                                                 1 - CYCLE_INTERVAL_SHRINK * cycle),
    )


def spawn_tier(wave_index: int) -> tuple[tuple[str, float], ...]:
    return SPAWN_TIERS[min(max(wave_index, 0), len(SPAWN_TIERS) - 1)]


def pick_archetype(wave_index: int, roll: float) -> str:
    """First archetype whose cumulative bound exceeds *roll* (0 ≤ roll < 1)."""
    tier = spawn_tier(wave_index)
    for enemy_type, bound in tier:
        if roll < bound:
            return enemy_type
    # roll ≥ last bound only through float edge cases
    return tier[-1][0]


def make_enemy(enemy_id: int, enemy_type: str, wave: WaveDef,
               board: "Board") -> Enemy:
    """Build an enemy at the path start with archetype multipliers applied."""
    arch = ARCHETYPES[enemy_type]
    hp = max(1, math.floor(wave.hp * arch.hp_mult))
    x, y = board.spawn_point
    return Enemy(
        id=enemy_id,
        type=enemy_type,
        hp=float(hp),
        max_hp=float(hp),
        speed=wave.speed * arch.speed_mult,
        reward=max(1, math.floor(wave.reward * arch.reward_mult)),
        progress=0.0,
        alive=True,
        x=x,
        y=y,
    )


# ── Scheduler system ─────────────────────────────────────────────────

def spawn_enemy(field: "Field", wave: WaveDef) -> Enemy:
    enemy_type = pick_archetype(field.current_wave_index, field.rng.random())
    enemy = make_enemy(field.next_enemy_id, enemy_type, wave, field.board)
    field.next_enemy_id += 1
    field.enemies.append(enemy)
    field.bus.emit(EnemySpawned(enemy_id=enemy.id, enemy_type=enemy_type,
                                wave_index=field.current_wave_index))
    return enemy


def wave_system(field: "Field", dt: float) -> None:
    """Advance spawning for one tick of scaled time *dt*.

    The interval is *subtracted* (not reset) so a long frame or a high
    speed multiplier spawns several enemies without losing the overrun.
    Once the whole wave is out and dead, the break timer runs down and
    the next wave index begins.
    """
    wave = get_wave_def(field.current_wave_index)

    if field.spawned_in_wave < wave.count:
        field.spawn_timer += dt
        while (field.spawn_timer >= wave.spawn_interval
               and field.spawned_in_wave < wave.count):
            field.spawn_timer -= wave.spawn_interval
            spawn_enemy(field, wave)
            field.spawned_in_wave += 1
        return

    if any(e.alive for e in field.enemies):
        return

    field.inter_wave_timer -= dt
    if field.inter_wave_timer <= 0:
        field.current_wave_index += 1
        field.spawned_in_wave = 0
        field.spawn_timer = 0.0
        field.inter_wave_timer = float(_tun("field", "inter_wave_delay", INTER_WAVE_DELAY))
        field.bus.emit(WaveStarted(wave_index=field.current_wave_index))
