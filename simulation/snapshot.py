"""simulation/snapshot.py — Versioned save format for the session roster.

Document layout (JSON)::

    {
      "version": 1,
      "savedAt": "2026-10-18T12:00:00+00:00",
      "activeFieldIndex": 0,
      "fields": [FieldSnapshot, ...]
    }

A FieldSnapshot carries economy, wave counters, controls, status flags,
every tower, and only the *alive* enemies.  Tracers are never saved.

Loading is forgiving on purpose:

- Parse error, wrong ``version`` or an empty ``fields`` list → a fresh
  roster (printed as ``[SAVE]``), never an exception.
- Per field, numbers are clamped into range and unknown enum values fall
  back to defaults (speed → 1×, target mode → ``first``).
- Towers of unknown type, on a non-buildable cell, or on a cell another
  restored tower already holds are dropped.  So are enemies of unknown
  type, dead enemies and enemies with unusable stats.
- Enemy positions are re-derived from (re-clamped) ``progress``.
- The roster is padded / trimmed to ``SESSION_COUNT``.
"""

from __future__ import annotations
import json
import math
from datetime import datetime, timezone
from typing import Any

from components import Enemy, Tower
from core.board import Board, cell_to_world, default_board
from core.catalog import TOWER_DEFS, ARCHETYPES, TARGET_MODES
from core.tuning import get as _tun
from core.constants import (
    SNAPSHOT_VERSION, SESSION_COUNT, GAME_SPEEDS,
    STARTING_GOLD, BASE_HP, FIRST_WAVE_BREAK, INTER_WAVE_DELAY,
    DEFAULT_TOWER_TYPE, DEFAULT_TARGET_MODE,
)
from logic.combat import tower_cooldown
from logic.waves import get_wave_def
from simulation.field import Field


# ── Roster defaults ──────────────────────────────────────────────────

def default_field(index: int, board: Board | None = None) -> Field:
    return Field(f"field-{index + 1}", f"Field {index + 1}", board=board)


def fresh_roster(board: Board | None = None) -> list[Field]:
    board = board or default_board()
    return [default_field(i, board) for i in range(SESSION_COUNT)]


# ═══════════════════════════════════════════════════════════════════
#  Encode
# ═══════════════════════════════════════════════════════════════════

def encode_tower(tower: Tower) -> dict[str, Any]:
    return {
        "id": tower.id,
        "type": tower.type,
        "cellX": tower.cell_x,
        "cellY": tower.cell_y,
        "level": tower.level,
        "targetMode": tower.target_mode,
        "cooldown": tower.cooldown,
    }


def encode_enemy(enemy: Enemy) -> dict[str, Any]:
    return {
        "id": enemy.id,
        "type": enemy.type,
        "hp": enemy.hp,
        "maxHp": enemy.max_hp,
        "speed": enemy.speed,
        "reward": enemy.reward,
        "progress": enemy.progress,
        "alive": True,
    }


def encode_field(field: Field) -> dict[str, Any]:
    return {
        "id": field.id,
        "name": field.name,
        "nextEnemyId": field.next_enemy_id,
        "nextTowerId": field.next_tower_id,
        "currentWaveIndex": field.current_wave_index,
        "spawnedInWave": field.spawned_in_wave,
        "spawnTimer": field.spawn_timer,
        "interWaveTimer": field.inter_wave_timer,
        "selectedTowerType": field.selected_tower_type,
        "selectedTowerId": field.selected_tower_id,
        "gold": field.gold,
        "baseHp": field.base_hp,
        "maxBaseHp": field.max_base_hp,
        "gameSpeed": field.game_speed,
        "paused": field.paused,
        "gameOver": field.game_over,
        "victory": field.victory,
        "towers": [encode_tower(t) for t in field.towers],
        "enemies": [encode_enemy(e) for e in field.enemies if e.alive],
    }


def encode_roster(fields: list[Field], active_index: int, *,
                  saved_at: str | None = None) -> dict[str, Any]:
    if saved_at is None:
        saved_at = datetime.now(timezone.utc).isoformat()
    return {
        "version": SNAPSHOT_VERSION,
        "savedAt": saved_at,
        "activeFieldIndex": active_index,
        "fields": [encode_field(f) for f in fields],
    }


def dumps_roster(fields: list[Field], active_index: int, *,
                 saved_at: str | None = None) -> str:
    return json.dumps(encode_roster(fields, active_index, saved_at=saved_at),
                      separators=(",", ":"))


# ═══════════════════════════════════════════════════════════════════
#  Coercion helpers
# ═══════════════════════════════════════════════════════════════════

def _clamp(value, lo=None, hi=None):
    if lo is not None and value < lo:
        value = lo
    if hi is not None and value > hi:
        value = hi
    return value


def _as_float(value, default: float | None, lo: float | None = None,
              hi: float | None = None) -> float | None:
    """Finite real number clamped into [lo, hi], else *default*.

    ``bool`` is rejected even though it subclasses ``int``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    value = float(value)
    if not math.isfinite(value):
        return default
    return _clamp(value, lo, hi)


def _as_int(value, default: int | None, lo: int | None = None,
            hi: int | None = None) -> int | None:
    f = _as_float(value, None)
    if f is None:
        return default
    return _clamp(math.floor(f), lo, hi)


def _as_bool(value, default: bool = False) -> bool:
    return value if isinstance(value, bool) else default


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


# ═══════════════════════════════════════════════════════════════════
#  Decode
# ═══════════════════════════════════════════════════════════════════

def decode_tower(raw: Any, board: Board, occupied: set[tuple[int, int]],
                 seen_ids: set[int]) -> Tower | None:
    if not isinstance(raw, dict):
        return None
    tower_type = raw.get("type")
    if tower_type not in TOWER_DEFS:
        return None
    tower_id = _as_int(raw.get("id"), None)
    if tower_id is None or tower_id < 1 or tower_id in seen_ids:
        return None
    cx = _as_int(raw.get("cellX"), None)
    cy = _as_int(raw.get("cellY"), None)
    if cx is None or cy is None:
        return None
    if not board.is_buildable(cx, cy) or (cx, cy) in occupied:
        return None

    mode = raw.get("targetMode")
    x, y = cell_to_world(cx, cy)
    tower = Tower(
        id=tower_id,
        type=tower_type,
        cell_x=cx,
        cell_y=cy,
        x=x,
        y=y,
        level=_as_int(raw.get("level"), 1, lo=1),
        target_mode=mode if mode in TARGET_MODES else DEFAULT_TARGET_MODE,
    )
    tower.cooldown = _as_float(raw.get("cooldown"), 0.0, 0.0, tower_cooldown(tower))
    occupied.add((cx, cy))
    seen_ids.add(tower_id)
    return tower


def decode_enemy(raw: Any, board: Board, seen_ids: set[int]) -> Enemy | None:
    if not isinstance(raw, dict):
        return None
    if raw.get("alive", True) is not True:
        return None
    enemy_type = raw.get("type")
    if enemy_type not in ARCHETYPES:
        return None
    enemy_id = _as_int(raw.get("id"), None)
    if enemy_id is None or enemy_id < 1 or enemy_id in seen_ids:
        return None

    max_hp = _as_float(raw.get("maxHp"), None)
    hp = _as_float(raw.get("hp"), None)
    speed = _as_float(raw.get("speed"), None, lo=0.0)
    if max_hp is None or max_hp <= 0 or hp is None or hp <= 0 or speed is None:
        return None

    progress = board.clamp_progress(_as_float(raw.get("progress"), 0.0))
    x, y = board.position_at(progress)
    seen_ids.add(enemy_id)
    return Enemy(
        id=enemy_id,
        type=enemy_type,
        hp=min(hp, max_hp),
        max_hp=max_hp,
        speed=speed,
        reward=_as_int(raw.get("reward"), 1, lo=1),
        progress=progress,
        alive=True,
        x=x,
        y=y,
    )


def _claim_id(wanted: Any, index: int, taken_ids: set[str]) -> str:
    """First of *wanted*, ``field-N``, ``field-N-2``, ... not yet taken."""
    if isinstance(wanted, str) and wanted and wanted not in taken_ids:
        field_id = wanted
    else:
        field_id = f"field-{index + 1}"
        suffix = 2
        while field_id in taken_ids:
            field_id = f"field-{index + 1}-{suffix}"
            suffix += 1
    taken_ids.add(field_id)
    return field_id


def decode_field(raw: Any, index: int, board: Board | None = None,
                 taken_ids: set[str] | None = None) -> Field:
    """Rebuild one Field, repairing whatever can be repaired."""
    board = board or default_board()
    taken_ids = taken_ids if taken_ids is not None else set()
    if not isinstance(raw, dict):
        print(f"[SAVE] Field {index + 1}: not an object — starting fresh")
        field = default_field(index, board)
        field.id = _claim_id(None, index, taken_ids)
        return field

    field_id = _claim_id(raw.get("id"), index, taken_ids)
    name = raw.get("name")
    if not isinstance(name, str) or not name:
        name = f"Field {index + 1}"
    field = Field(field_id, name, board=board)

    # Economy
    field.max_base_hp = _as_int(raw.get("maxBaseHp"),
                                int(_tun("field", "base_hp", BASE_HP)), lo=1)
    field.base_hp = _as_int(raw.get("baseHp"), field.max_base_hp, 0, field.max_base_hp)
    field.gold = _as_int(raw.get("gold"),
                         int(_tun("field", "starting_gold", STARTING_GOLD)), lo=0)

    # Wave progress
    field.current_wave_index = _as_int(raw.get("currentWaveIndex"), 0, lo=0)
    wave = get_wave_def(field.current_wave_index)
    field.spawned_in_wave = _as_int(raw.get("spawnedInWave"), 0, 0, wave.count)
    field.spawn_timer = _as_float(raw.get("spawnTimer"), 0.0, 0.0, wave.spawn_interval)
    first_break = float(_tun("field", "first_wave_break", FIRST_WAVE_BREAK))
    later_break = float(_tun("field", "inter_wave_delay", INTER_WAVE_DELAY))
    field.inter_wave_timer = _as_float(raw.get("interWaveTimer"), first_break, 0.0,
                                       max(first_break, later_break))

    # Controls
    speed = _as_float(raw.get("gameSpeed"), 1.0)
    field.game_speed = int(speed) if speed in GAME_SPEEDS else 1
    field.paused = _as_bool(raw.get("paused"))
    sel_type = raw.get("selectedTowerType")
    field.selected_tower_type = sel_type if sel_type in TOWER_DEFS else DEFAULT_TOWER_TYPE

    # Towers — first claim on a cell wins
    occupied: set[tuple[int, int]] = set()
    tower_ids: set[int] = set()
    for raw_tower in _as_list(raw.get("towers")):
        tower = decode_tower(raw_tower, board, occupied, tower_ids)
        if tower is not None:
            field.towers.append(tower)

    enemy_ids: set[int] = set()
    for raw_enemy in _as_list(raw.get("enemies")):
        enemy = decode_enemy(raw_enemy, board, enemy_ids)
        if enemy is not None:
            field.enemies.append(enemy)

    # Counters must stay ahead of every restored id
    field.next_tower_id = max(_as_int(raw.get("nextTowerId"), 1, lo=1),
                              max(tower_ids, default=0) + 1)
    field.next_enemy_id = max(_as_int(raw.get("nextEnemyId"), 1, lo=1),
                              max(enemy_ids, default=0) + 1)

    sel_id = _as_int(raw.get("selectedTowerId"), None)
    field.selected_tower_id = sel_id if sel_id in tower_ids else None

    # Status: a loss needs an empty base; a win is only honoured while
    # the base still stands.
    raw_over = _as_bool(raw.get("gameOver"))
    raw_victory = _as_bool(raw.get("victory"))
    field.victory = raw_over and raw_victory and field.base_hp > 0
    field.game_over = field.base_hp <= 0 or field.victory
    return field


def decode_roster(text: str | None, *,
                  board: Board | None = None) -> tuple[list[Field], int]:
    """Return ``(fields, active_index)``; never raises."""
    board = board or default_board()
    if text is None:
        return fresh_roster(board), 0

    try:
        doc = json.loads(text)
    except (ValueError, TypeError, RecursionError) as ex:
        print(f"[SAVE] Unreadable snapshot ({ex}) — starting fresh")
        return fresh_roster(board), 0

    if not isinstance(doc, dict):
        print("[SAVE] Snapshot is not an object — starting fresh")
        return fresh_roster(board), 0
    version = doc.get("version")
    if isinstance(version, bool) or version != SNAPSHOT_VERSION:
        print(f"[SAVE] Snapshot version {version!r} != {SNAPSHOT_VERSION} — starting fresh")
        return fresh_roster(board), 0
    raw_fields = doc.get("fields")
    if not isinstance(raw_fields, list) or not raw_fields:
        print("[SAVE] Snapshot has no fields — starting fresh")
        return fresh_roster(board), 0

    fields: list[Field] = []
    taken_ids: set[str] = set()
    for i, raw in enumerate(raw_fields[:SESSION_COUNT]):
        fields.append(decode_field(raw, i, board, taken_ids))
    for i in range(len(fields), SESSION_COUNT):
        field = default_field(i, board)
        field.id = _claim_id(None, i, taken_ids)
        fields.append(field)

    active = _as_int(doc.get("activeFieldIndex"), 0, 0, SESSION_COUNT - 1)
    print(f"[SAVE] Restored {len(raw_fields[:SESSION_COUNT])} field(s), active={active}")
    return fields, active
