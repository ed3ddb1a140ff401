# ui.py
import pygame

from config import TRIGGER_ENTRANCE_DURATION


class Button:
    """Clickable page button; doubles as the game's start trigger."""

    def __init__(self, rect, text, font_size, color=(100, 100, 100)):
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font_size = font_size
        self.color = color
        self.visible = True
        self.entrance = 0.0   # seconds of entrance animation left
        self._font = None

    @property
    def font(self):
        if self._font is None:
            self._font = pygame.font.SysFont("Arial", self.font_size)
        return self._font

    def hide(self):
        self.visible = False
        self.entrance = 0.0

    def restore(self, animate=True):
        self.visible = True
        if animate:
            self.entrance = TRIGGER_ENTRANCE_DURATION

    def update(self, dt):
        if self.entrance > 0:
            self.entrance = max(0.0, self.entrance - dt)

    def draw(self, surf):
        if not self.visible:
            return
        progress = 1.0 - self.entrance / TRIGGER_ENTRANCE_DURATION
        rect = self.rect
        if progress < 1.0:
            # pop in: grow from 60% size while fading in
            scale = 0.6 + 0.4 * progress
            rect = self.rect.inflate(-int(self.rect.w * (1 - scale)), -int(self.rect.h * (1 - scale)))
        layer = pygame.Surface(rect.size, pygame.SRCALPHA)
        layer.fill((*self.color, 255))
        txt = self.font.render(self.text, True, (255, 255, 255))
        layer.blit(txt, (rect.w / 2 - txt.get_width() / 2, rect.h / 2 - txt.get_height() / 2))
        layer.set_alpha(int(255 * progress))
        surf.blit(layer, rect.topleft)

    def is_hovered(self, pos):
        return self.visible and self.rect.collidepoint(pos)
