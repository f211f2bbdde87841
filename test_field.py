"""test_field.py — Movement, combat, targeting and economy on one Field.

Each test builds a small, fully controlled situation: a fresh Field
with a seeded RNG, enemies placed by hand at known progress, towers on
known cells.  Systems are called directly where the exact order of
events matters.

Run:  python test_field.py
"""
from __future__ import annotations
import sys, math, random, traceback

from components import Enemy, Tower
from core.board import default_board, cell_to_world
from core.catalog import TARGET_MODES
from core.constants import BUILD_JITTER_MIN, BUILD_JITTER_MAX
from logic.combat import apply_hit, combat_system, tower_cooldown, tower_damage
from logic.economy import upgrade_cost, sell_refund
from logic.movement import movement_system
from logic.targeting import acquire_target
from logic.waves import get_wave_def, make_enemy
from simulation.field import Field


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")


BOARD = default_board()


def _field(seed: int = 1) -> Field:
    return Field("field-t", "Test", rng=random.Random(seed))


def _enemy(eid: int, progress: float, hp: float = 55.0,
           enemy_type: str = "grunt") -> Enemy:
    e = make_enemy(eid, enemy_type, get_wave_def(0), BOARD)
    e.hp = e.max_hp = hp
    e.progress = progress
    e.x, e.y = BOARD.position_at(progress)
    return e


def _tower(tid: int, cx: int, cy: int, tower_type: str = "gunner",
           mode: str = "first") -> Tower:
    x, y = cell_to_world(cx, cy)
    return Tower(id=tid, type=tower_type, cell_x=cx, cell_y=cy, x=x, y=y,
                 target_mode=mode)


# ═══════════════════════════════════════════════════════════════════
#  Board / movement
# ═══════════════════════════════════════════════════════════════════

def test_position_interpolates_between_waypoints():
    print("\n=== Board: interpolation ===")
    assert BOARD.segment_count == len(BOARD.path) - 1 == 15
    assert BOARD.position_at(0.0) == BOARD.spawn_point
    x, y = BOARD.position_at(5.5)               # (5,3) → (5,4)
    assert math.isclose(x, 5 * 56 + 28) and math.isclose(y, 3.5 * 56 + 28)
    assert BOARD.position_at(-2.0) == BOARD.position_at(0.0)
    assert BOARD.position_at(99.0) == cell_to_world(*BOARD.path[-1])
    ok("half-way along segment 5 lies between its waypoints")


def test_enemy_progress_stays_in_bounds():
    print("\n=== Movement: progress bounds ===")
    f = _field()
    e = _enemy(1, 0.0)
    f.enemies.append(e)
    movement_system(f, 0.5)
    assert 0.0 < e.progress < BOARD.segment_count and e.alive
    assert math.isclose(e.progress, e.speed * 0.5 / 56)
    ok("progress advances by speed·dt / tile size")

    movement_system(f, 1000.0)
    assert e.progress == BOARD.segment_count
    assert not e.alive
    assert f.base_hp == f.max_base_hp - 1
    ok("overshoot clamps to the last waypoint and leaks one HP")


def test_leaks_end_the_field():
    print("\n=== Movement: game over ===")
    f = _field()
    lost: list[str] = []
    f.bus.subscribe("FieldLost", lambda evt: lost.append(evt.field_id))
    f.base_hp = 1
    f.enemies.extend([_enemy(1, 14.99), _enemy(2, 14.98)])

    f.tick(0.2)
    assert f.base_hp == 0
    assert f.game_over and not f.victory
    assert f.status == "lost"
    assert lost == ["field-t"]
    ok("two leaks on 1 HP → base clamped to 0, FieldLost once")

    gold, wave = f.gold, f.current_wave_index
    spawned = f.spawned_in_wave
    f.tick(5.0)
    assert (f.gold, f.current_wave_index, f.spawned_in_wave) == (gold, wave, spawned)
    assert lost == ["field-t"]
    ok("a lost field stops simulating")


# ═══════════════════════════════════════════════════════════════════
#  Combat
# ═══════════════════════════════════════════════════════════════════

def test_reward_paid_exactly_once():
    print("\n=== Combat: single reward ===")
    f = _field()
    kills: list[int] = []
    f.bus.subscribe("EnemyKilled", lambda evt: kills.append(evt.enemy_id))
    e = _enemy(1, 2.0, hp=55.0)
    f.enemies.append(e)
    t1 = _tower(1, 4, 2)
    t2 = _tower(2, 3, 2)
    start = f.gold

    for _ in range(3):
        assert apply_hit(f, t1, e) is False
    assert math.isclose(e.hp, 55 - 3 * 14) and e.alive
    assert apply_hit(f, t1, e) is True          # 55 - 56 = -1
    assert not e.alive and e.hp < 0
    assert apply_hit(f, t2, e) is False         # overkill, same tick
    assert f.gold == start + e.reward
    f.bus.drain()
    assert kills == [1]
    assert len(f.effects) == 5
    ok("four gunner hits kill a 55 HP grunt; overkill pays nothing")


def test_tower_fires_and_waits():
    print("\n=== Combat: cooldown ===")
    f = _field()
    t = _tower(1, 4, 2)
    f.towers.append(t)

    combat_system(f, 0.1)
    assert t.cooldown <= 0
    ok("no target → tower stays ready")

    e = _enemy(1, 4.0, hp=500.0)
    f.enemies.append(e)
    combat_system(f, 0.0)
    assert math.isclose(e.hp, 500.0 - tower_damage(t))
    assert math.isclose(t.cooldown, tower_cooldown(t))
    assert math.isclose(tower_cooldown(t), 1 / (1.2 * 1.25))
    ok("ready tower fires and re-arms at 1 / fire rate")

    combat_system(f, 0.1)
    assert math.isclose(e.hp, 500.0 - tower_damage(t))
    ok("no second shot inside the cooldown")


def test_tracers_fade_on_real_time():
    print("\n=== Combat: tracers ===")
    f = _field()
    t = _tower(1, 4, 2)
    e = _enemy(1, 4.0, hp=500.0)
    f.enemies.append(e)
    apply_hit(f, t, e)
    f.paused = True
    f.tick(0.03)
    assert len(f.effects) == 1 and 0.0 < f.effects[0].alpha < 1.0
    f.tick(0.05)
    assert f.effects == []
    ok("tracers expire even while paused")


# ═══════════════════════════════════════════════════════════════════
#  Targeting
# ═══════════════════════════════════════════════════════════════════

def test_target_modes():
    print("\n=== Targeting: modes ===")
    t = _tower(1, 4, 2)
    mid = _enemy(1, 3.0, hp=50.0)
    lead = _enemy(2, 5.0, hp=80.0)
    tail = _enemy(3, 1.0, hp=20.0)
    enemies = [mid, lead, tail]

    def pick(mode: str) -> Enemy | None:
        t.target_mode = mode
        return acquire_target(t, enemies, 10_000.0)

    assert pick("first") is lead
    assert pick("last") is tail
    assert pick("strongest") is lead
    assert pick("weakest") is tail
    dists = {e.id: math.hypot(e.x - t.x, e.y - t.y) for e in enemies}
    assert pick("nearest").id == min(dists, key=dists.get)
    ok("first / last / nearest / strongest / weakest")

    twin = _enemy(4, 5.0, hp=80.0)
    enemies.append(twin)
    assert pick("first") is lead
    assert pick("strongest") is lead
    ok("ties go to the enemy listed first")

    assert acquire_target(t, enemies, 1.0) is None
    for e in enemies:
        e.alive = False
    assert pick("first") is None
    ok("out of range or dead → no target")


# ═══════════════════════════════════════════════════════════════════
#  Economy
# ═══════════════════════════════════════════════════════════════════

def test_build_spends_gold_and_rejects():
    print("\n=== Economy: build ===")
    f = _field()
    assert f.gold == 180
    for cx in range(3):
        tower = f.build_tower(cx, 0, "gunner")
        assert tower is not None
        assert BUILD_JITTER_MIN <= tower.cooldown <= BUILD_JITTER_MAX
        assert f.selected_tower_id == tower.id
    assert f.gold == 30
    ok("three gunners: 180 → 30 gold")

    assert f.build_tower(3, 0, "gunner") is None
    assert f.gold == 30 and len(f.towers) == 3
    assert not f.can_build_at(3, 0)
    ok("fourth gunner refused for lack of gold")

    f.gold = 1000
    assert f.build_tower(0, 0, "gunner") is None        # occupied
    assert f.build_tower(0, 3, "gunner") is None        # path
    assert f.build_tower(2, 1, "gunner") is None        # blocked
    assert f.build_tower(-1, 0, "gunner") is None
    assert f.build_tower(14, 0, "gunner") is None
    assert f.build_tower(4, 0, "laser") is None
    assert f.gold == 1000 and len(f.towers) == 3
    ok("occupied / path / blocked / off-board / unknown type refused")


def test_sell_sniper_refund():
    print("\n=== Economy: sell ===")
    f = _field()
    tower = f.build_tower(4, 2, "sniper")
    assert tower is not None and f.gold == 70
    assert sell_refund("sniper", 1) == 77
    assert f.sell_selected()
    assert f.gold == 147
    assert f.towers == [] and f.selected_tower_id is None
    assert not f.sell_selected()
    ok("level-1 sniper sells for 77")


def test_upgrade_costs_and_scales():
    print("\n=== Economy: upgrade ===")
    f = _field()
    tower = f.build_tower(4, 2, "gunner")
    assert upgrade_cost("gunner", 1) == 62
    assert f.upgrade_selected()
    assert f.gold == 180 - 50 - 62
    assert tower.level == 2
    assert math.isclose(tower_damage(tower), 14 * 1.3)
    ok("gunner L1 → L2 costs 62, damage ×1.3")

    assert sell_refund("gunner", 2) == 66
    f.gold = 0
    assert not f.upgrade_selected()
    assert tower.level == 2
    ok("upgrade refused without gold")

    f.select_tower(None)
    assert not f.upgrade_selected()
    assert not f.cycle_target_mode()
    ok("nothing selected → commands refused")


def test_cycle_target_mode():
    print("\n=== Economy: target mode ===")
    f = _field()
    tower = f.build_tower(4, 2, "gunner")
    seen = [tower.target_mode]
    for _ in range(len(TARGET_MODES)):
        assert f.cycle_target_mode()
        seen.append(tower.target_mode)
    assert seen == list(TARGET_MODES) + [TARGET_MODES[0]]
    ok("first → last → nearest → strongest → weakest → first")


# ═══════════════════════════════════════════════════════════════════
#  Controls
# ═══════════════════════════════════════════════════════════════════

def test_controls_and_pointer():
    print("\n=== Controls ===")
    f = _field()
    assert not f.set_speed(3) and f.game_speed == 1
    assert f.set_speed(4) and f.game_speed == 4
    assert not f.select_tower_type("laser")
    assert f.select_tower_type("blaster")
    ok("speed only 1/2/4; tower type must exist")

    f.toggle_pause()
    assert f.status == "paused"
    assert not f.click_cell(4, 2)
    assert f.towers == []
    f.toggle_pause()
    assert f.click_cell(4, 2)
    assert f.towers[0].type == "blaster"
    ok("pointer build ignored while paused")

    f.select_tower(None)
    assert f.click_cell(4, 2)
    assert f.selected_tower_id == f.towers[0].id
    assert len(f.towers) == 1
    assert not f.select_tower_at(0, 0) and f.selected_tower_id is None
    assert not f.select_tower(99)
    ok("clicking a tower selects it instead of building")

    f.toggle_pause()
    assert not f.select_cell(4, 2)
    f.toggle_pause()
    assert f.select_cell(4, 2)
    assert f.selected_tower_id == f.towers[0].id
    assert not f.select_cell(0, 0) and len(f.towers) == 1
    ok("secondary click selects only, and not while paused")


if __name__ == "__main__":
    tests = [
        test_position_interpolates_between_waypoints,
        test_enemy_progress_stays_in_bounds,
        test_leaks_end_the_field,
        test_reward_paid_exactly_once,
        test_tower_fires_and_waits,
        test_tracers_fade_on_real_time,
        test_target_modes,
        test_build_spends_gold_and_rejects,
        test_sell_sniper_refund,
        test_upgrade_costs_and_scales,
        test_cycle_target_mode,
        test_controls_and_pointer,
    ]
    for fn in tests:
        try:
            fn()
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {fn.__name__}:")
            traceback.print_exc()

    print(f"\n{'=' * 50}")
    print(f"  Field Tests: {_passed} passed, {_failed} failed")
    print(f"{'=' * 50}")
    sys.exit(1 if _failed else 0)
