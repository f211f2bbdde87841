"""logic/tick.py — Per-Field system pipeline.

One call advances one Field by one frame.  The order is fixed:

    effects (real dt) → [paused / over? stop] →
    spawn → move → combat → cleanup → status → drain events

Usage::

    from logic.tick import tick_field
    tick_field(field, dt)
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from core.events import FieldLost
from logic.waves import wave_system
from logic.movement import movement_system
from logic.combat import combat_system, effects_system

if TYPE_CHECKING:
    from simulation.field import Field


def cleanup_system(field: "Field") -> int:
    """Drop enemies flagged dead this tick.  Returns how many were removed."""
    before = len(field.enemies)
    field.enemies = [e for e in field.enemies if e.alive]
    return before - len(field.enemies)


def status_system(field: "Field") -> None:
    """Clamp base HP and flip to game over when it is gone.

    Endless mode has no win condition; ``victory`` is never set here.
    """
    if field.base_hp > 0:
        return
    field.base_hp = 0
    if field.game_over:
        return
    field.game_over = True
    field.victory = False
    field.bus.emit(FieldLost(field_id=field.id, wave_index=field.current_wave_index))


def tick_field(field: "Field", dt: float) -> None:
    """Run all systems for one frame of real time *dt* (seconds)."""
    if dt <= 0:
        return

    # Tracers fade on real time, even while paused or over
    effects_system(field, dt)

    if field.paused or field.game_over:
        field.bus.drain()
        return

    scaled = dt * field.game_speed
    wave_system(field, scaled)
    movement_system(field, scaled)
    combat_system(field, scaled)
    cleanup_system(field)
    status_system(field)

    field.bus.drain()
