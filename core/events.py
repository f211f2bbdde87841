"""core/events.py — Lightweight event bus.

Decouples the systems that *signal* something from observers that
*react* to it.  Each Field owns one bus::

    from core.events import EventBus, EnemyKilled
    field.bus.emit(EnemyKilled(enemy_id=42, reward=8))

Consumers subscribe with a callable::

    field.bus.subscribe("EnemyKilled", my_handler)

And the Field drains once per tick::

    field.bus.drain()    # calls all handlers for pending events

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends).
  - ``drain()`` processes all queued events in FIFO order.
  - Handlers may emit new events; the same drain picks them up.
  - No simulation rule depends on a handler having run.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable
from collections import defaultdict


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class EnemySpawned:
    enemy_id: int
    enemy_type: str = ""
    wave_index: int = 0


@dataclass
class EnemyKilled:
    """An enemy's HP dropped to zero and its reward was paid."""
    enemy_id: int
    tower_id: int | None = None
    reward: int = 0


@dataclass
class EnemyLeaked:
    """An enemy reached the end of the path and hit the base."""
    enemy_id: int
    base_hp: int = 0


@dataclass
class WaveStarted:
    wave_index: int


@dataclass
class TowerBuilt:
    tower_id: int
    tower_type: str = ""
    cell_x: int = 0
    cell_y: int = 0
    cost: int = 0


@dataclass
class TowerUpgraded:
    tower_id: int
    level: int = 1
    cost: int = 0


@dataclass
class TowerSold:
    tower_id: int
    refund: int = 0


@dataclass
class FieldLost:
    """Base HP reached zero."""
    field_id: str
    wave_index: int = 0


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Fire-and-forget event bus owned by a Field."""

    def __init__(self):
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable]] = defaultdict(list)

    # ── Public API ───────────────────────────────────────────────────

    def emit(self, event) -> None:
        """Queue an event for processing on next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register *handler* to receive events of *event_type*.

        *event_type* is the class name, e.g. ``"EnemyKilled"``.
        """
        self._subs[event_type].append(handler)

    def drain(self) -> int:
        """Process all queued events.  Returns number processed.

        Handlers may emit new events — those are processed in the
        same drain pass (breadth-first).
        """
        processed = 0
        safety = 1000  # prevent infinite loops
        while self._queue and safety > 0:
            batch = self._queue[:]
            self._queue.clear()
            for event in batch:
                name = type(event).__name__
                for handler in self._subs.get(name, []):
                    try:
                        handler(event)
                    except Exception as exc:
                        print(f"[EVENT] handler error for {name}: {exc}")
            processed += len(batch)
            safety -= 1
        return processed

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._subs)})"
