"""logic/input_manager.py — Intent-based input layer.

Sits between raw pygame events and Field commands.  The scene feeds in
raw events; the manager maps them to *intents* based on the current
**input context** (gameplay or the game-over prompt).

The scene reads the intents — it never touches raw keycodes.

Usage (in field_scene):

    self.input = InputManager()
    # each frame:
    self.input.begin_frame()
    for event in events:
        self.input.feed(event)

    if self.input.just("upgrade"):
        manager.upgrade_selected()
    if self.input.just("click_primary"):
        mx, my = self.input.click_pos
"""

from __future__ import annotations
from enum import Enum, auto
import pygame


# ── Input contexts ──────────────────────────────────────────────────

class InputContext(Enum):
    """Determines which key-bindings are active."""
    GAMEPLAY = auto()   # normal play on the active field
    PROMPT   = auto()   # active field lost, waiting for confirmation


# ── Intent names ─────────────────────────────────────────────────────
# Gameplay:  build_gunner  build_blaster  build_sniper
#            upgrade  sell  target_mode
#            speed_1  speed_2  speed_4  pause  restart
#            session_1 .. session_3  reload_tuning
# Prompt:    confirm
# Mouse:     click_primary  click_secondary


# ── Default key bindings ────────────────────────────────────────────

# Each binding is  (pygame key constant, modifier mask or 0)
# For mouse buttons we use negative constants: -1 = LMB, -3 = RMB

_GAMEPLAY_BINDS: dict[str, list[tuple[int, int]]] = {
    "build_gunner":   [(pygame.K_1, 0)],
    "build_blaster":  [(pygame.K_2, 0)],
    "build_sniper":   [(pygame.K_3, 0)],
    "upgrade":        [(pygame.K_u, 0)],
    "sell":           [(pygame.K_s, 0)],
    "target_mode":    [(pygame.K_t, 0)],
    "speed_1":        [(pygame.K_q, 0)],
    "speed_2":        [(pygame.K_w, 0)],
    "speed_4":        [(pygame.K_e, 0)],
    "pause":          [(pygame.K_SPACE, 0)],
    "restart":        [(pygame.K_r, 0)],
    "session_1":      [(pygame.K_F1, 0)],
    "session_2":      [(pygame.K_F2, 0)],
    "session_3":      [(pygame.K_F3, 0)],
    "reload_tuning":  [(pygame.K_F5, 0)],
    "click_primary":  [(-1, 0)],
    "click_secondary":[(-3, 0)],
}

_PROMPT_BINDS: dict[str, list[tuple[int, int]]] = {
    "confirm":        [(pygame.K_RETURN, 0), (pygame.K_KP_ENTER, 0)],
}


# ── InputManager ────────────────────────────────────────────────────

class InputManager:
    """Context-aware input mapper.

    Call ``begin_frame()`` before processing events and ``feed(event)``
    for each pygame event.  Then use ``just(intent)`` for presses.
    """

    def __init__(self):
        self.context: InputContext = InputContext.GAMEPLAY
        # Intents pressed *this frame* (rising edge)
        self._pressed: set[str] = set()
        # Position of the last mouse click this frame (virtual coords)
        self.click_pos: tuple[int, int] | None = None
        # Stash for unhandled raw events the scene still needs (e.g. QUIT)
        self.raw_events: list[pygame.event.Event] = []

    # ── frame lifecycle ─────────────────────────────────────────

    def begin_frame(self):
        """Call at the start of each frame before feeding events."""
        self._pressed.clear()
        self.click_pos = None
        self.raw_events.clear()

    def feed(self, event: pygame.event.Event):
        """Feed a raw pygame event.  Maps it to intents based on context."""
        if event.type == pygame.QUIT:
            self.raw_events.append(event)
            return

        # KEYDOWN → discrete intent
        if event.type == pygame.KEYDOWN:
            binds = self._active_binds()
            mods = pygame.key.get_mods()
            for intent, key_list in binds.items():
                for key, req_mod in key_list:
                    if key < 0:
                        continue  # mouse binding — handled in MOUSEBUTTONDOWN
                    if event.key == key:
                        if req_mod == 0 or (mods & req_mod):
                            self._pressed.add(intent)
                            break

        # MOUSEBUTTONDOWN → discrete intent
        elif event.type == pygame.MOUSEBUTTONDOWN:
            self.click_pos = event.pos
            binds = self._active_binds()
            neg_button = -event.button  # -1 for LMB, -3 for RMB
            for intent, key_list in binds.items():
                for key, _mod in key_list:
                    if key == neg_button:
                        self._pressed.add(intent)
                        break

        else:
            self.raw_events.append(event)

    # ── queries ─────────────────────────────────────────────────

    def just(self, intent: str) -> bool:
        """True if the intent was triggered this frame (rising edge)."""
        return intent in self._pressed

    # ── internal ────────────────────────────────────────────────

    def _active_binds(self) -> dict[str, list[tuple[int, int]]]:
        if self.context == InputContext.GAMEPLAY:
            return _GAMEPLAY_BINDS
        elif self.context == InputContext.PROMPT:
            return _PROMPT_BINDS
        return {}
