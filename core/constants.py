"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.

Unit System
-----------
Gameplay distances are measured in **world units**, where:

    1 tile = TILE_SIZE world units   (56)

Standard units used throughout the codebase:

    Distance / position     u       (world units, board-relative)
    Speed                   u/s     (world units per second)
    Progress                seg     (path segments, 1 seg = 1 tile)
    Time                    s       (seconds, scaled by game speed)
    Health                  HP      (hit points)
    Gold                    g       (integer)

World position of cell ``(c, r)`` is its centre::

    x = c * TILE_SIZE + TILE_SIZE / 2

The renderer adds its own board offset; no simulation code knows it.

Balance Levers
~~~~~~~~~~~~~~
``FIRE_RATE_SCALE`` multiplies every tower's fire rate on top of its
level scaling.
"""

# ── Board ───────────────────────────────────────────────────────────
TILE_SIZE = 56
GRID_COLS = 14
GRID_ROWS = 8

# Tile IDs
TILE_BUILDABLE = 0
TILE_BLOCKED   = 1
TILE_PATH      = 2

# ── Combat ──────────────────────────────────────────────────────────
FIRE_RATE_SCALE = 1.25

RANGE_PER_LEVEL     = 0.12
DAMAGE_PER_LEVEL    = 0.30
FIRE_RATE_PER_LEVEL = 0.08

# ── Economy ─────────────────────────────────────────────────────────
UPGRADE_BASE_FACTOR  = 0.8
UPGRADE_LEVEL_FACTOR = 0.45
SELL_UPGRADE_FACTOR  = 0.9
SELL_REFUND_RATIO    = 0.7

# ── Wave scaling (per completed cycle of the base table) ────────────
CYCLE_COUNT_GROWTH    = 0.12
CYCLE_HP_GROWTH       = 0.20
CYCLE_SPEED_GROWTH    = 0.05
CYCLE_REWARD_GROWTH   = 0.12
CYCLE_INTERVAL_SHRINK = 0.05
MIN_INTERVAL_FACTOR   = 0.45

# ── Field defaults ──────────────────────────────────────────────────
STARTING_GOLD       = 180
BASE_HP             = 20
FIRST_WAVE_BREAK    = 1.6   # s break after wave 0
INTER_WAVE_DELAY    = 2.0   # s between waves
DEFAULT_TOWER_TYPE  = "gunner"
DEFAULT_TARGET_MODE = "first"

# Tower cooldown jitter on build (s)
BUILD_JITTER_MIN = 0.05
BUILD_JITTER_MAX = 0.22

# Shot tracer lifetime (real seconds)
SHOT_EFFECT_LIFE = 0.06

# ── Sessions / persistence ──────────────────────────────────────────
SESSION_COUNT     = 3
GAME_SPEEDS       = (1, 2, 4)
SNAPSHOT_VERSION  = 1
AUTOSAVE_INTERVAL = 5.0     # real seconds
