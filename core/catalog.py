"""core/catalog.py — Static definition tables.

Towers, the base wave table and enemy archetypes are closed tagged
variants: every per-type number lives in a table keyed by the tag and
systems dispatch through the lookup, never through subclasses.

    from core.catalog import TOWER_DEFS
    cost = TOWER_DEFS["gunner"].cost
"""

from __future__ import annotations
from dataclasses import dataclass


# ── Towers ───────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class TowerDef:
    """Level-1 stats for one tower type."""
    name: str
    color: tuple[int, int, int]
    cost: int
    range: float        # world units
    damage: float       # HP per shot
    fire_rate: float    # shots / s before FIRE_RATE_SCALE


TOWER_DEFS: dict[str, TowerDef] = {
    "gunner":  TowerDef("Gunner",  (82, 195, 255),  50, 130.0, 14.0, 1.2),
    "blaster": TowerDef("Blaster", (255, 159, 67),  75,  95.0, 26.0, 0.75),
    "sniper":  TowerDef("Sniper",  (214, 241, 111), 110, 215.0, 58.0, 0.35),
}

TOWER_TYPES: tuple[str, ...] = tuple(TOWER_DEFS)


# ── Targeting ────────────────────────────────────────────────────────

# Cycle order for the target-mode command.
TARGET_MODES: tuple[str, ...] = ("first", "last", "nearest", "strongest", "weakest")


# ── Waves ────────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class WaveDef:
    """Concrete parameters for one wave (base row or scaled output)."""
    count: int
    hp: int
    speed: float            # world units / s
    reward: int
    spawn_interval: float   # s between spawns


# Reused cyclically; each full pass scales difficulty up.
BASE_WAVES: tuple[WaveDef, ...] = (
    WaveDef(count=12, hp=55,  speed=84.0,  reward=8,  spawn_interval=0.72),
    WaveDef(count=18, hp=90,  speed=95.0,  reward=10, spawn_interval=0.58),
    WaveDef(count=22, hp=125, speed=108.0, reward=12, spawn_interval=0.52),
)


# ── Enemy archetypes ─────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class EnemyArchetype:
    """Multipliers applied to a wave's base hp / speed / reward."""
    name: str
    color: tuple[int, int, int]
    hp_mult: float = 1.0
    speed_mult: float = 1.0
    reward_mult: float = 1.0


ARCHETYPES: dict[str, EnemyArchetype] = {
    "grunt":  EnemyArchetype("Grunt",  (203, 93, 116)),
    "runner": EnemyArchetype("Runner", (240, 200, 90), hp_mult=0.65, speed_mult=1.45, reward_mult=0.9),
    "brute":  EnemyArchetype("Brute",  (150, 90, 200), hp_mult=1.9, speed_mult=0.72, reward_mult=1.6),
}

# Cumulative spawn probabilities by wave tier: wave 0, wave 1, wave >= 2.
# The first entry whose bound exceeds the roll wins.
SPAWN_TIERS: tuple[tuple[tuple[str, float], ...], ...] = (
    (("grunt", 1.0),),
    (("grunt", 0.7), ("runner", 1.0)),
    (("grunt", 0.55), ("runner", 0.8), ("brute", 1.0)),
)
