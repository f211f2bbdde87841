"""test_waves.py — Wave scaling, archetype rolls and the spawn scheduler.

Everything here is deterministic: pure table lookups plus a Field with a
seeded RNG.  No tuning file is loaded, so code defaults apply.

Run:  python test_waves.py
"""
from __future__ import annotations
import sys, math, random, traceback

from core.board import default_board
from core.catalog import BASE_WAVES, ARCHETYPES
from core.constants import MIN_INTERVAL_FACTOR, FIRST_WAVE_BREAK, INTER_WAVE_DELAY
from logic.waves import get_wave_def, pick_archetype, make_enemy, wave_system
from simulation.field import Field


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")


def _field(seed: int = 1) -> Field:
    return Field("field-t", "Test", rng=random.Random(seed))


# ═══════════════════════════════════════════════════════════════════
#  Wave table
# ═══════════════════════════════════════════════════════════════════

def test_base_rows_unchanged_in_first_cycle():
    print("\n=== Wave table: first cycle ===")
    for i, base in enumerate(BASE_WAVES):
        w = get_wave_def(i)
        assert (w.count, w.hp, w.reward) == (base.count, base.hp, base.reward), w
        assert math.isclose(w.speed, base.speed)
        assert math.isclose(w.spawn_interval, base.spawn_interval)
    w0 = get_wave_def(0)
    assert (w0.count, w0.hp, w0.reward) == (12, 55, 8)
    ok("waves 0-2 are the base rows verbatim")


def test_later_cycles_are_harder():
    print("\n=== Wave table: cycle scaling ===")
    n = len(BASE_WAVES)
    for row in range(n):
        a = get_wave_def(row)
        b = get_wave_def(row + n)
        c = get_wave_def(row + 2 * n)
        assert a.count < b.count < c.count
        assert a.hp < b.hp < c.hp
        assert a.speed < b.speed < c.speed
        assert a.reward <= b.reward <= c.reward
        assert a.spawn_interval > b.spawn_interval > c.spawn_interval
    ok("count / hp / speed grow and interval shrinks per cycle")

    base = BASE_WAVES[0]
    far = get_wave_def(3 * 200)
    assert far.spawn_interval >= base.spawn_interval * MIN_INTERVAL_FACTOR - 1e-9
    assert far.reward >= 1 and far.count >= base.count
    ok("interval never drops below the floor factor")


def test_wave_def_is_pure():
    print("\n=== Wave table: purity ===")
    assert get_wave_def(7) == get_wave_def(7)
    assert get_wave_def(-3) == get_wave_def(0)
    ok("same index → same definition; negative clamps to 0")


# ═══════════════════════════════════════════════════════════════════
#  Archetypes
# ═══════════════════════════════════════════════════════════════════

def test_archetype_roll_tiers():
    print("\n=== Archetype roll ===")
    assert pick_archetype(0, 0.0) == "grunt"
    assert pick_archetype(0, 0.999) == "grunt"
    ok("wave 0 is all grunts")

    assert pick_archetype(1, 0.69) == "grunt"
    assert pick_archetype(1, 0.70) == "runner"
    assert pick_archetype(1, 0.99) == "runner"
    ok("wave 1 mixes in runners")

    assert pick_archetype(2, 0.54) == "grunt"
    assert pick_archetype(2, 0.55) == "runner"
    assert pick_archetype(2, 0.79) == "runner"
    assert pick_archetype(2, 0.80) == "brute"
    assert pick_archetype(40, 0.95) == "brute"
    ok("wave ≥ 2 uses the full tier")


def test_make_enemy_applies_multipliers():
    print("\n=== make_enemy ===")
    board = default_board()
    wave = get_wave_def(2)
    brute = make_enemy(9, "brute", wave, board)
    arch = ARCHETYPES["brute"]
    assert brute.hp == brute.max_hp == math.floor(wave.hp * arch.hp_mult)
    assert math.isclose(brute.speed, wave.speed * arch.speed_mult)
    assert brute.reward == math.floor(wave.reward * arch.reward_mult)
    assert brute.progress == 0.0 and brute.alive
    assert (brute.x, brute.y) == board.spawn_point
    ok("brute: hp / speed / reward scaled, placed at spawn")

    grunt = make_enemy(1, "grunt", get_wave_def(0), board)
    assert (grunt.hp, grunt.reward) == (55, 8)
    ok("grunt keeps the base row stats")


# ═══════════════════════════════════════════════════════════════════
#  Scheduler
# ═══════════════════════════════════════════════════════════════════

def test_long_frame_spawns_several():
    print("\n=== Scheduler: overrun ===")
    f = _field()
    interval = get_wave_def(0).spawn_interval
    wave_system(f, interval * 3 + 0.01)
    assert f.spawned_in_wave == 3
    assert len(f.enemies) == 3
    assert 0.0 <= f.spawn_timer < interval
    assert [e.id for e in f.enemies] == [1, 2, 3]
    assert f.next_enemy_id == 4
    ok("3 intervals in one frame → 3 spawns, remainder kept")


def test_speed_multiplier_spawns_more():
    print("\n=== Scheduler: game speed ===")
    f = _field()
    f.set_speed(4)
    f.tick(0.5)                      # 2.0 s of game time
    assert f.spawned_in_wave == 2
    ok("x4 speed over 0.5 s spawns two grunts")


def test_wave_stops_at_count():
    print("\n=== Scheduler: count cap ===")
    f = _field()
    wave_system(f, 1000.0)
    assert f.spawned_in_wave == get_wave_def(0).count == len(f.enemies)
    assert f.current_wave_index == 0
    ok("never spawns more than the wave count")


def test_break_waits_for_clear_field():
    print("\n=== Scheduler: inter-wave break ===")
    f = _field()
    started: list[int] = []
    f.bus.subscribe("WaveStarted", lambda evt: started.append(evt.wave_index))

    wave_system(f, 1000.0)
    wave_system(f, 10.0)
    assert f.current_wave_index == 0
    assert math.isclose(f.inter_wave_timer, FIRST_WAVE_BREAK)
    ok("break timer frozen while enemies are alive")

    for e in f.enemies:
        e.alive = False
    wave_system(f, 1.0)
    assert f.current_wave_index == 0
    assert math.isclose(f.inter_wave_timer, FIRST_WAVE_BREAK - 1.0)
    wave_system(f, 1.0)
    assert f.current_wave_index == 1
    assert f.spawned_in_wave == 0 and f.spawn_timer == 0.0
    assert math.isclose(f.inter_wave_timer, INTER_WAVE_DELAY)
    f.bus.drain()
    assert started == [1]
    ok("cleared field → break → wave 1 begins, WaveStarted emitted")


def test_spawn_roll_is_seeded():
    print("\n=== Scheduler: determinism ===")
    def types(seed: int) -> list[str]:
        f = _field(seed)
        f.current_wave_index = 2
        wave_system(f, 100.0)
        return [e.type for e in f.enemies]
    assert types(11) == types(11)
    assert set(types(11)) <= {"grunt", "runner", "brute"}
    ok("same seed → same archetype sequence")


if __name__ == "__main__":
    tests = [
        test_base_rows_unchanged_in_first_cycle,
        test_later_cycles_are_harder,
        test_wave_def_is_pure,
        test_archetype_roll_tiers,
        test_make_enemy_applies_multipliers,
        test_long_frame_spawns_several,
        test_speed_multiplier_spawns_more,
        test_wave_stops_at_count,
        test_break_waits_for_clear_field,
        test_spawn_roll_is_seeded,
    ]
    for fn in tests:
        try:
            fn()
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {fn.__name__}:")
            traceback.print_exc()

    print(f"\n{'=' * 50}")
    print(f"  Wave Tests: {_passed} passed, {_failed} failed")
    print(f"{'=' * 50}")
    sys.exit(1 if _failed else 0)
