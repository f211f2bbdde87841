"""
core/app.py — Window and frame loop for one Scene

Nothing under logic/ or simulation/ imports this; the tests run the
fields headless.

    app = App("Endless Fields", board_w + sidebar_w, board_h)
    app.run(FieldScene(manager))
"""

from __future__ import annotations
import pygame
from core.scene import Scene

FPS = 60
# A stalled frame (window drag, breakpoint) advances the fields by at most this
MAX_DT = 0.25

_PROMPT_BG = (0, 0, 0, 160)


class App:
    def __init__(self, title: str, width: int, height: int):
        pygame.init()
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.running = True

        # HUD numbers, tower panel / roster lines, field name and prompt title
        self.font = pygame.font.SysFont("monospace", 14)
        self.font_sm = pygame.font.SysFont("monospace", 11)
        self.font_lg = pygame.font.SysFont("monospace", 18)

    def run(self, scene: Scene):
        while self.running:
            dt = min(self.clock.tick(FPS) / 1000.0, MAX_DT)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                else:
                    scene.handle_event(event, self)
            scene.update(dt, self)
            scene.draw(self.screen, self)
            pygame.display.flip()

        scene.on_exit(self)
        pygame.quit()

    # -- text --

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(255, 255, 255), font=None) -> pygame.Rect:
        img = (font or self.font).render(text, True, color)
        return surface.blit(img, (x, y))

    def draw_text_bg(self, surface: pygame.Surface, text: str, x: int, y: int,
                     color=(255, 255, 255), font=None, pad: int = 2) -> pygame.Rect:
        """Text on a translucent plate, for the loss prompt over the board."""
        img = (font or self.font).render(text, True, color)
        w, h = img.get_size()
        plate = pygame.Surface((w + pad * 2, h + pad * 2), pygame.SRCALPHA)
        plate.fill(_PROMPT_BG)
        surface.blit(plate, (x - pad, y - pad))
        return surface.blit(img, (x, y))
