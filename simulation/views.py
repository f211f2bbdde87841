"""simulation/views.py — Read-only snapshots for renderers and HUDs.

Everything here is a frozen copy taken at call time; holding on to a
view never lets a caller mutate the Field behind it.

    view = field_view(field)
    for e in view.enemies:
        draw_enemy(e.x, e.y, e.hp_ratio)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.catalog import TOWER_DEFS
from logic.combat import tower_range, tower_damage, tower_fire_rate
from logic.economy import upgrade_cost, sell_refund, build_cost

if TYPE_CHECKING:
    from simulation.field import Field


@dataclass(frozen=True, slots=True)
class EnemyView:
    id: int
    type: str
    x: float
    y: float
    hp_ratio: float


@dataclass(frozen=True, slots=True)
class TowerView:
    id: int
    type: str
    cell_x: int
    cell_y: int
    x: float
    y: float
    level: int
    range: float
    target_mode: str
    selected: bool


@dataclass(frozen=True, slots=True)
class EffectView:
    x1: float
    y1: float
    x2: float
    y2: float
    alpha: float


@dataclass(frozen=True, slots=True)
class TowerInfo:
    """Stats panel for the selected tower."""
    id: int
    name: str
    level: int
    damage: float
    range: float
    fire_rate: float
    target_mode: str
    upgrade_cost: int
    sell_value: int


@dataclass(frozen=True, slots=True)
class FieldView:
    id: str
    name: str
    gold: int
    base_hp: int
    max_base_hp: int
    wave_index: int
    game_speed: int
    paused: bool
    game_over: bool
    victory: bool
    selected_tower_type: str
    selected_tower_cost: int
    alive_enemies: int
    enemies: tuple[EnemyView, ...]
    towers: tuple[TowerView, ...]
    effects: tuple[EffectView, ...]
    selected: TowerInfo | None


@dataclass(frozen=True, slots=True)
class RosterEntry:
    """One line of the session switcher."""
    index: int
    id: str
    name: str
    status: str
    wave_index: int
    active: bool


def tower_info(field: "Field") -> TowerInfo | None:
    tower = field.selected_tower
    if tower is None:
        return None
    return TowerInfo(
        id=tower.id,
        name=TOWER_DEFS[tower.type].name,
        level=tower.level,
        damage=tower_damage(tower),
        range=tower_range(tower),
        fire_rate=tower_fire_rate(tower),
        target_mode=tower.target_mode,
        upgrade_cost=upgrade_cost(tower.type, tower.level),
        sell_value=sell_refund(tower.type, tower.level),
    )


def field_view(field: "Field") -> FieldView:
    return FieldView(
        id=field.id,
        name=field.name,
        gold=field.gold,
        base_hp=field.base_hp,
        max_base_hp=field.max_base_hp,
        wave_index=field.current_wave_index,
        game_speed=field.game_speed,
        paused=field.paused,
        game_over=field.game_over,
        victory=field.victory,
        selected_tower_type=field.selected_tower_type,
        selected_tower_cost=build_cost(field.selected_tower_type),
        alive_enemies=field.alive_enemy_count,
        enemies=tuple(
            EnemyView(e.id, e.type, e.x, e.y, e.hp_ratio)
            for e in field.enemies if e.alive
        ),
        towers=tuple(
            TowerView(t.id, t.type, t.cell_x, t.cell_y, t.x, t.y, t.level,
                      tower_range(t), t.target_mode,
                      t.id == field.selected_tower_id)
            for t in field.towers
        ),
        effects=tuple(
            EffectView(fx.x1, fx.y1, fx.x2, fx.y2, fx.alpha)
            for fx in field.effects
        ),
        selected=tower_info(field),
    )
