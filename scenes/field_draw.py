"""scenes/field_draw.py — Rendering helpers for the field scene.

All pure-draw functions live here so that FieldScene.draw() stays thin.
Every function takes views (``simulation.views``) and a screen offset;
nothing here can reach back into a live Field.
"""

from __future__ import annotations
import pygame
from core.app import App
from core.board import Board
from core.catalog import TOWER_DEFS, ARCHETYPES, TOWER_TYPES
from core.constants import TILE_SIZE, TILE_BUILDABLE, TILE_BLOCKED, TILE_PATH
from simulation.views import FieldView, RosterEntry

TILE_COLORS: dict[int, tuple[int, int, int]] = {
    TILE_BUILDABLE: (38, 52, 44),
    TILE_BLOCKED:   (70, 66, 60),
    TILE_PATH:      (120, 98, 70),
}

_HUD = (200, 200, 200)
_DIM = (110, 110, 110)
_GOLD = (255, 210, 90)
_BAD = (230, 70, 70)
_OK = (90, 220, 120)

_STATUS_COLORS = {
    "running": _OK,
    "paused":  _GOLD,
    "lost":    _BAD,
    "won":     (120, 200, 255),
}


# ── Board ───────────────────────────────────────────────────────────

def draw_tiles(surface: pygame.Surface, board: Board, ox: int, oy: int,
               hover: tuple[int, int] | None = None,
               hover_ok: bool = False):
    for row in range(board.rows):
        for col in range(board.cols):
            color = TILE_COLORS.get(board.tiles[row][col], (255, 0, 255))
            rect = pygame.Rect(ox + col * TILE_SIZE, oy + row * TILE_SIZE,
                               TILE_SIZE, TILE_SIZE)
            pygame.draw.rect(surface, color, rect)
            pygame.draw.rect(surface, (30, 36, 32), rect, 1)

    if hover is not None and board.in_bounds(*hover):
        rect = pygame.Rect(ox + hover[0] * TILE_SIZE, oy + hover[1] * TILE_SIZE,
                           TILE_SIZE, TILE_SIZE)
        pygame.draw.rect(surface, _OK if hover_ok else _BAD, rect, 2)


# ── Towers / enemies / tracers ─────────────────────────────────────

def draw_towers(surface: pygame.Surface, app: App, view: FieldView,
                ox: int, oy: int):
    for t in view.towers:
        cx, cy = ox + int(t.x), oy + int(t.y)
        color = TOWER_DEFS[t.type].color
        if t.selected:
            pygame.draw.circle(surface, (255, 255, 255), (cx, cy), int(t.range), 1)
        pygame.draw.circle(surface, color, (cx, cy), TILE_SIZE // 3)
        pygame.draw.circle(surface, (20, 20, 20), (cx, cy), TILE_SIZE // 3, 2)
        app.draw_text(surface, str(t.level), cx - 4, cy - 8,
                      color=(20, 20, 20), font=app.font)


def draw_enemies(surface: pygame.Surface, view: FieldView, ox: int, oy: int):
    radius = TILE_SIZE // 5
    for e in view.enemies:
        sx, sy = ox + int(e.x), oy + int(e.y)
        pygame.draw.circle(surface, ARCHETYPES[e.type].color, (sx, sy), radius)

        # Health bar
        bar_w = radius * 2 + 6
        bar_h = 3
        bar_x = sx - bar_w // 2
        bar_y = sy - radius - 7
        ratio = max(0.0, e.hp_ratio)
        pygame.draw.rect(surface, (40, 40, 40), (bar_x, bar_y, bar_w, bar_h))
        if ratio > 0.5:
            fill = (50, 200, 50)
        elif ratio > 0.25:
            fill = (220, 200, 50)
        else:
            fill = (220, 50, 50)
        pygame.draw.rect(surface, fill, (bar_x, bar_y, max(1, int(bar_w * ratio)), bar_h))


def draw_effects(surface: pygame.Surface, view: FieldView, ox: int, oy: int):
    for fx in view.effects:
        shade = int(120 + 135 * fx.alpha)
        pygame.draw.line(surface, (shade, shade, 200),
                         (ox + int(fx.x1), oy + int(fx.y1)),
                         (ox + int(fx.x2), oy + int(fx.y2)), 2)


# ── Sidebar ────────────────────────────────────────────────────────

def draw_hud(surface: pygame.Surface, app: App, view: FieldView, x: int, y: int) -> int:
    """Gold, base HP, wave and speed.  Returns the next free y."""
    app.draw_text(surface, view.name, x, y, color=(255, 255, 255), font=app.font_lg)
    y += 26
    app.draw_text(surface, f"Gold  {view.gold}", x, y, color=_GOLD)
    y += 18
    hp_color = _BAD if view.base_hp <= view.max_base_hp // 4 else _HUD
    app.draw_text(surface, f"Base  {view.base_hp}/{view.max_base_hp}", x, y, color=hp_color)
    y += 18
    app.draw_text(surface, f"Wave  {view.wave_index + 1}  ({view.alive_enemies} alive)", x, y, color=_HUD)
    y += 18
    speed = "paused" if view.paused else f"x{view.game_speed}"
    app.draw_text(surface, f"Speed {speed}", x, y, color=_HUD)
    y += 26

    for i, tower_type in enumerate(TOWER_TYPES):
        d = TOWER_DEFS[tower_type]
        marker = ">" if tower_type == view.selected_tower_type else " "
        color = d.color if view.gold >= d.cost else _DIM
        app.draw_text(surface, f"{marker}[{i + 1}] {d.name:<8}{d.cost:>4}g",
                      x, y, color=color)
        y += 16
    return y + 10


def draw_tower_info(surface: pygame.Surface, app: App, view: FieldView,
                    x: int, y: int) -> int:
    info = view.selected
    if info is None:
        app.draw_text(surface, "LMB build / select", x, y, color=_DIM, font=app.font_sm)
        return y + 16

    app.draw_text(surface, f"{info.name}  L{info.level}", x, y, color=(255, 255, 255))
    y += 18
    lines = (
        f"dmg {info.damage:.1f}  rng {info.range:.0f}",
        f"rate {info.fire_rate:.2f}/s",
        f"[T] target: {info.target_mode}",
        f"[U] upgrade {info.upgrade_cost}g",
        f"[S] sell    +{info.sell_value}g",
    )
    for line in lines:
        app.draw_text(surface, line, x, y, color=_HUD, font=app.font_sm)
        y += 14
    return y + 10


def draw_roster(surface: pygame.Surface, app: App, roster: list[RosterEntry],
                x: int, y: int) -> int:
    for entry in roster:
        marker = ">" if entry.active else " "
        color = _STATUS_COLORS.get(entry.status, _HUD)
        app.draw_text(surface,
                      f"{marker}F{entry.index + 1} {entry.name:<8} w{entry.wave_index + 1} {entry.status}",
                      x, y, color=color, font=app.font_sm)
        y += 14
    return y + 6


def draw_game_over(surface: pygame.Surface, app: App, view: FieldView,
                   cx: int, cy: int):
    title = "VICTORY" if view.victory else "BASE DESTROYED"
    app.draw_text_bg(surface, title, cx - 70, cy - 24, color=_BAD, font=app.font_lg, pad=6)
    app.draw_text_bg(surface, f"Reached wave {view.wave_index + 1}",
                     cx - 70, cy + 4, color=_HUD, pad=4)
    app.draw_text_bg(surface, "[Enter] restart this field",
                     cx - 70, cy + 24, color=_HUD, pad=4)
