"""simulation/field.py — One independent game session ("Field").

A Field is the aggregate root of a single run: economy, wave progress,
towers, enemies, tracers and status flags.  The map is shared; all
other state is private to the Field.

    field = Field("field-1", "Field 1", rng=random.Random(7))
    field.build_tower(4, 1, "gunner")
    field.tick(1 / 60)

Commands return ``True`` / the created object when applied and ``False``
/ ``None`` when rejected.  They never raise for bad input.

Restarting never mutates a Field in place: ``Field.fresh_like(old)``
builds a new one with the same id and name.
"""

from __future__ import annotations
import random

from components import Enemy, Tower, ShotEffect
from core.board import Board, default_board
from core.catalog import TOWER_DEFS
from core.constants import (
    STARTING_GOLD, BASE_HP, FIRST_WAVE_BREAK, DEFAULT_TOWER_TYPE, GAME_SPEEDS,
)
from core.events import EventBus
from core.tuning import get as _tun
from logic import economy
from logic.tick import tick_field


class Field:
    """Complete state of one tower-defense run."""

    def __init__(self, field_id: str, name: str, *,
                 board: Board | None = None,
                 rng: random.Random | None = None):
        self.id = field_id
        self.name = name
        self.board = board or default_board()
        self.rng = rng or random.Random()
        self.bus = EventBus()

        # Economy
        self.gold: int = int(_tun("field", "starting_gold", STARTING_GOLD))
        self.max_base_hp: int = int(_tun("field", "base_hp", BASE_HP))
        self.base_hp: int = self.max_base_hp

        # Wave progress
        self.current_wave_index: int = 0
        self.spawned_in_wave: int = 0
        self.spawn_timer: float = 0.0
        self.inter_wave_timer: float = float(_tun("field", "first_wave_break", FIRST_WAVE_BREAK))

        # Id counters (persisted so restored ids never collide)
        self.next_enemy_id: int = 1
        self.next_tower_id: int = 1

        # Controls / status
        self.game_speed: int = 1
        self.paused: bool = False
        self.game_over: bool = False
        self.victory: bool = False      # reserved; endless mode never wins

        self.selected_tower_type: str = DEFAULT_TOWER_TYPE
        self.selected_tower_id: int | None = None

        # Live collections
        self.towers: list[Tower] = []
        self.enemies: list[Enemy] = []
        self.effects: list[ShotEffect] = []

    @classmethod
    def fresh_like(cls, other: "Field", *,
                   rng: random.Random | None = None) -> "Field":
        """A brand-new Field sharing *other*'s identity and map."""
        return cls(other.id, other.name, board=other.board, rng=rng)

    # ── Simulation ───────────────────────────────────────────────────

    def tick(self, dt: float) -> None:
        tick_field(self, dt)

    # ── Queries ──────────────────────────────────────────────────────

    @property
    def status(self) -> str:
        """``"lost"``, ``"won"``, ``"paused"`` or ``"running"``."""
        if self.game_over:
            return "won" if self.victory else "lost"
        if self.paused:
            return "paused"
        return "running"

    @property
    def selected_tower(self) -> Tower | None:
        if self.selected_tower_id is None:
            return None
        for tower in self.towers:
            if tower.id == self.selected_tower_id:
                return tower
        return None

    def tower_at(self, cx: int, cy: int) -> Tower | None:
        return economy.tower_at(self, cx, cy)

    def can_build_at(self, cx: int, cy: int) -> bool:
        return economy.can_build_at(self, cx, cy)

    @property
    def alive_enemy_count(self) -> int:
        return sum(1 for e in self.enemies if e.alive)

    # ── Commands ─────────────────────────────────────────────────────

    def build_tower(self, cx: int, cy: int, tower_type: str | None = None) -> Tower | None:
        return economy.build_tower(self, cx, cy, tower_type or self.selected_tower_type)

    def select_tower_type(self, tower_type: str) -> bool:
        if tower_type not in TOWER_DEFS:
            return False
        self.selected_tower_type = tower_type
        self.selected_tower_id = None
        return True

    def select_tower(self, tower_id: int | None) -> bool:
        """Select by id; ``None`` clears.  Unknown ids are rejected."""
        if tower_id is None:
            self.selected_tower_id = None
            return True
        if not any(t.id == tower_id for t in self.towers):
            return False
        self.selected_tower_id = tower_id
        return True

    def select_tower_at(self, cx: int, cy: int) -> bool:
        """Select the tower on a cell, or clear the selection if empty."""
        tower = self.tower_at(cx, cy)
        self.selected_tower_id = tower.id if tower else None
        return tower is not None

    def click_cell(self, cx: int, cy: int) -> bool:
        """Primary pointer action: select the tower there, else build.

        Ignored while paused or over.
        """
        if self.paused or self.game_over:
            return False
        if self.tower_at(cx, cy) is not None:
            return self.select_tower_at(cx, cy)
        return self.build_tower(cx, cy) is not None

    def select_cell(self, cx: int, cy: int) -> bool:
        """Secondary pointer action: select only, never build.

        Ignored while paused or over, like ``click_cell``.
        """
        if self.paused or self.game_over:
            return False
        return self.select_tower_at(cx, cy)

    def upgrade_selected(self) -> bool:
        return economy.upgrade_selected(self)

    def sell_selected(self) -> bool:
        return economy.sell_selected(self)

    def cycle_target_mode(self) -> bool:
        return economy.cycle_target_mode(self)

    def set_speed(self, multiplier: int) -> bool:
        if multiplier not in GAME_SPEEDS:
            return False
        self.game_speed = multiplier
        return True

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return True

    def __repr__(self) -> str:
        return (f"Field({self.id!r}, wave={self.current_wave_index}, "
                f"gold={self.gold}, hp={self.base_hp}/{self.max_base_hp}, "
                f"status={self.status})")
