"""simulation/sessions.py — The fixed roster of concurrently running Fields.

Every Field ticks every frame, whichever one is on screen.  The active
index only decides where commands go and whose game-over state raises
the restart prompt:

    manager = SessionManager.restore(FileStore())
    manager.tick(dt)                       # all fields advance
    manager.build_tower(4, 1, "gunner")    # active field only
    manager.set_active_session(2)          # refused while a loss is pending

Autosave runs on real time: every ``autosave_interval`` seconds the
whole roster is encoded and handed to the store.  The simulation never
looks at whether that write worked.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import Tower
from core.board import Board, default_board
from core.constants import SESSION_COUNT, AUTOSAVE_INTERVAL
from core.tuning import get as _tun
from simulation.field import Field
from simulation.snapshot import decode_roster, dumps_roster, default_field
from simulation.views import FieldView, RosterEntry, field_view

if TYPE_CHECKING:
    from core.events import FieldLost, WaveStarted
    from core.save import SnapshotStore


class SessionManager:
    """Owns the roster, the active index and the autosave cadence."""

    def __init__(self, fields: list[Field] | None = None, active_index: int = 0, *,
                 store: "SnapshotStore | None" = None,
                 board: Board | None = None,
                 autosave_interval: float | None = None):
        self.board = board or default_board()
        fields = list(fields or [])[:SESSION_COUNT]
        for i in range(len(fields), SESSION_COUNT):
            fields.append(default_field(i, self.board))
        self.fields: list[Field] = fields
        self.active_index = min(max(int(active_index), 0), SESSION_COUNT - 1)

        self.store = store
        if autosave_interval is None:
            autosave_interval = float(_tun("sessions", "autosave_interval", AUTOSAVE_INTERVAL))
        self.autosave_interval = autosave_interval
        self._save_timer = 0.0

        for field in self.fields:
            self._watch(field)

    @classmethod
    def restore(cls, store: "SnapshotStore | None", *,
                board: Board | None = None,
                autosave_interval: float | None = None) -> "SessionManager":
        """Build a manager from whatever the store holds (or a fresh roster)."""
        text = store.read() if store is not None else None
        fields, active = decode_roster(text, board=board)
        return cls(fields, active, store=store, board=board,
                   autosave_interval=autosave_interval)

    # ── Event hooks ──────────────────────────────────────────────────

    def _watch(self, field: Field) -> None:
        field.bus.subscribe("FieldLost", self._on_field_lost)
        field.bus.subscribe("WaveStarted",
                            lambda evt, f=field: self._on_wave_started(f, evt))

    def _on_field_lost(self, evt: "FieldLost") -> None:
        print(f"[FIELD] {evt.field_id} lost on wave {evt.wave_index + 1}")

    def _on_wave_started(self, field: Field, evt: "WaveStarted") -> None:
        print(f"[FIELD] {field.id} wave {evt.wave_index + 1}")

    # ── Queries ──────────────────────────────────────────────────────

    @property
    def active(self) -> Field:
        return self.fields[self.active_index]

    @property
    def pending_game_over(self) -> bool:
        """True while the active Field is lost and awaiting a restart."""
        return self.active.game_over

    def view(self, index: int | None = None) -> FieldView:
        field = self.active if index is None else self.fields[index]
        return field_view(field)

    def roster(self) -> list[RosterEntry]:
        return [
            RosterEntry(index=i, id=f.id, name=f.name, status=f.status,
                        wave_index=f.current_wave_index,
                        active=(i == self.active_index))
            for i, f in enumerate(self.fields)
        ]

    # ── Tick ─────────────────────────────────────────────────────────

    def tick(self, dt: float) -> None:
        """Advance every Field by *dt* real seconds, then maybe autosave."""
        if dt <= 0:
            return
        for field in self.fields:
            field.tick(dt)

        if self.store is None or self.autosave_interval <= 0:
            return
        self._save_timer += dt
        if self._save_timer >= self.autosave_interval:
            self._save_timer = 0.0
            self.save_now()

    def save_now(self) -> bool:
        """Encode the roster and write it.  Failures are printed, not raised."""
        if self.store is None:
            return False
        try:
            text = dumps_roster(self.fields, self.active_index)
            return bool(self.store.write(text))
        except Exception as ex:
            print(f"[SAVE] Autosave failed: {ex}")
            return False

    # ── Roster commands ──────────────────────────────────────────────

    def set_active_session(self, index: int) -> bool:
        if not 0 <= index < len(self.fields):
            return False
        if self.pending_game_over:
            return False
        if index != self.active_index:
            self.active_index = index
            print(f"[SESSION] Switched to {self.active.name}")
        return True

    def restart_session(self, index: int) -> bool:
        if not 0 <= index < len(self.fields):
            return False
        fresh = Field.fresh_like(self.fields[index])
        self.fields[index] = fresh
        self._watch(fresh)
        print(f"[FIELD] {fresh.id} restarted")
        return True

    def confirm_game_over(self) -> bool:
        """Answer the loss prompt: restart the active Field."""
        if not self.pending_game_over:
            return False
        return self.restart_session(self.active_index)

    # ── Field commands (routed to the active Field) ─────────────────

    def build_tower(self, cx: int, cy: int, tower_type: str | None = None) -> Tower | None:
        return self.active.build_tower(cx, cy, tower_type)

    def click_cell(self, cx: int, cy: int) -> bool:
        return self.active.click_cell(cx, cy)

    def select_cell(self, cx: int, cy: int) -> bool:
        return self.active.select_cell(cx, cy)

    def select_tower_type(self, tower_type: str) -> bool:
        return self.active.select_tower_type(tower_type)

    def select_tower_at(self, cx: int, cy: int) -> bool:
        return self.active.select_tower_at(cx, cy)

    def select_tower(self, tower_id: int | None) -> bool:
        return self.active.select_tower(tower_id)

    def upgrade_selected(self) -> bool:
        return self.active.upgrade_selected()

    def sell_selected(self) -> bool:
        return self.active.sell_selected()

    def cycle_target_mode(self) -> bool:
        return self.active.cycle_target_mode()

    def set_speed(self, multiplier: int) -> bool:
        return self.active.set_speed(multiplier)

    def toggle_pause(self) -> bool:
        return self.active.toggle_pause()

    def __repr__(self) -> str:
        return f"SessionManager(active={self.active_index}, fields={self.fields!r})"
