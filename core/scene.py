"""
core/scene.py — What App drives each frame

FieldScene is the only implementation.  App calls handle_event for every
pygame event, then update and draw once per frame, and on_exit once when
the window closes (the field scene writes its final save there).
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def handle_event(self, event: pygame.event.Event, app: App):
        pass

    def update(self, dt: float, app: App):
        """*dt* is real seconds, already capped by App.max_dt."""
        pass

    def draw(self, surface: pygame.Surface, app: App):
        pass

    def on_exit(self, app: App):
        pass
