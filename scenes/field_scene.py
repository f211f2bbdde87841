"""
scenes/field_scene.py — The one gameplay screen

Shows the active Field of a SessionManager: board on the left, HUD,
tower panel and session roster on the right.  Every Field keeps ticking
while it is off screen; this scene only chooses which one it draws and
where commands go.

Controls:
  1 / 2 / 3      select gunner / blaster / sniper
  LMB            select the tower under the cursor, else build there
  RMB            select the tower under the cursor (never builds)
  U / S / T      upgrade / sell / cycle target mode of the selection
  Q / W / E      speed x1 / x2 / x4
  Space          pause
  R              restart this field
  F1 - F3        switch field
  F5             re-read data/tuning.toml (applies to new fields and waves)
  Enter          restart after the base is destroyed
"""

from __future__ import annotations
import pygame
from core import tuning
from core.app import App
from core.board import world_to_cell
from core.scene import Scene
from core.catalog import TOWER_TYPES
from core.constants import TILE_SIZE
from logic.input_manager import InputManager, InputContext
from simulation.sessions import SessionManager
from scenes.field_draw import (
    draw_tiles, draw_towers, draw_enemies, draw_effects,
    draw_hud, draw_tower_info, draw_roster, draw_game_over,
)

# Screen offset of the board's top-left corner
BOARD_OX = 20
BOARD_OY = 20
SIDEBAR_GAP = 20

_BG = (18, 22, 20)

_BUILD_INTENTS = {f"build_{t}": t for t in TOWER_TYPES}
_SPEED_INTENTS = {"speed_1": 1, "speed_2": 2, "speed_4": 4}
_SESSION_INTENTS = {"session_1": 0, "session_2": 1, "session_3": 2}


class FieldScene(Scene):
    def __init__(self, manager: SessionManager):
        self.manager = manager
        self.input = InputManager()
        self.hover_cell: tuple[int, int] | None = None

    # -- lifecycle --

    def on_exit(self, app: App):
        self.manager.save_now()

    # -- input --

    def handle_event(self, event: pygame.event.Event, app: App):
        if event.type == pygame.MOUSEMOTION:
            self.hover_cell = self._screen_to_cell(event.pos)
        self.input.feed(event)

    def _screen_to_cell(self, pos: tuple[int, int]) -> tuple[int, int] | None:
        cell = world_to_cell(pos[0] - BOARD_OX, pos[1] - BOARD_OY)
        return cell if self.manager.board.in_bounds(*cell) else None

    def _apply_intents(self):
        mgr = self.manager
        inp = self.input

        if inp.context == InputContext.PROMPT:
            if inp.just("confirm"):
                mgr.confirm_game_over()
            return

        for intent, tower_type in _BUILD_INTENTS.items():
            if inp.just(intent):
                mgr.select_tower_type(tower_type)
        for intent, speed in _SPEED_INTENTS.items():
            if inp.just(intent):
                mgr.set_speed(speed)
        for intent, index in _SESSION_INTENTS.items():
            if inp.just(intent):
                mgr.set_active_session(index)

        if inp.just("upgrade"):
            mgr.upgrade_selected()
        if inp.just("sell"):
            mgr.sell_selected()
        if inp.just("target_mode"):
            mgr.cycle_target_mode()
        if inp.just("pause"):
            mgr.toggle_pause()
        if inp.just("restart"):
            mgr.restart_session(mgr.active_index)
        if inp.just("reload_tuning"):
            tuning.reload()

        if inp.just("click_primary") and inp.click_pos is not None:
            cell = self._screen_to_cell(inp.click_pos)
            if cell is not None:
                mgr.click_cell(*cell)
        if inp.just("click_secondary") and inp.click_pos is not None:
            cell = self._screen_to_cell(inp.click_pos)
            if cell is not None:
                mgr.select_cell(*cell)

    # -- update --

    def update(self, dt: float, app: App):
        self._apply_intents()
        self.input.begin_frame()

        self.manager.tick(dt)

        # The loss prompt swallows every other binding until answered
        self.input.context = (InputContext.PROMPT if self.manager.pending_game_over
                              else InputContext.GAMEPLAY)

    # -- draw --

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill(_BG)
        mgr = self.manager
        board = mgr.board
        view = mgr.view()

        hover_ok = False
        if self.hover_cell is not None and not view.game_over:
            hover_ok = mgr.active.can_build_at(*self.hover_cell)

        draw_tiles(surface, board, BOARD_OX, BOARD_OY,
                   hover=self.hover_cell, hover_ok=hover_ok)
        draw_towers(surface, app, view, BOARD_OX, BOARD_OY)
        draw_enemies(surface, view, BOARD_OX, BOARD_OY)
        draw_effects(surface, view, BOARD_OX, BOARD_OY)

        sx = BOARD_OX + board.cols * TILE_SIZE + SIDEBAR_GAP
        y = BOARD_OY
        y = draw_hud(surface, app, view, sx, y)
        y = draw_tower_info(surface, app, view, sx, y)
        draw_roster(surface, app, mgr.roster(), sx, y)

        if view.game_over:
            draw_game_over(surface, app, view,
                           BOARD_OX + board.cols * TILE_SIZE // 2,
                           BOARD_OY + board.rows * TILE_SIZE // 2)
