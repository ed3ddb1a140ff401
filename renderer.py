"""Full-frame renderer for every session phase.

Nothing here is diffed: each tick repaints the complete overlay on top of the
host page. The only state kept between frames is font handles and the
scanline texture, which is generated once per session and dropped by
``reset()``.
"""

from __future__ import annotations

import math
from typing import Dict, Optional, Tuple

import pygame

from config import (
    CYAN, CYAN_SHADOW, GREEN, GREEN_SHADOW, GREY, LEVEL_BANNER_DURATION,
    LEVEL_BANNER_FADE, NARROW_VIEWPORT, RED, START_HINT_DURATION, WHITE, YELLOW
)
from entities import ship_polygon
from highscores import HighScoreEntry
from state import NAME_ENTRY, READY

FONT_NAME = "Courier New"
SCANLINE_COLOR = (0, 20, 0, 26)
DIM_ALPHA = 217


class Renderer:
    def __init__(self) -> None:
        self._fonts: Dict[Tuple[int, bool], pygame.font.Font] = {}
        self._scanline_tile: Optional[pygame.Surface] = None
        self._scanlines: Optional[pygame.Surface] = None

    # ──────────────────────────────────────────────────────
    # Caches
    def reset(self) -> None:
        """Drop the cached scanline texture (called when a session ends)."""
        self._scanline_tile = None
        self._scanlines = None

    def font(self, size: int, bold: bool = False) -> pygame.font.Font:
        key = (size, bold)
        if key not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            self._fonts[key] = pygame.font.SysFont(FONT_NAME, size, bold=bold)
        return self._fonts[key]

    def scanlines(self, size: Tuple[int, int]) -> pygame.Surface:
        if self._scanline_tile is None:
            tile = pygame.Surface((1, 4), pygame.SRCALPHA)
            tile.fill((0, 0, 0, 0))
            tile.set_at((0, 0), SCANLINE_COLOR)
            self._scanline_tile = tile
        if self._scanlines is None or self._scanlines.get_size() != size:
            w, h = size
            row = pygame.transform.scale(self._scanline_tile, (max(1, w), 4))
            overlay = pygame.Surface((max(1, w), max(1, h)), pygame.SRCALPHA)
            for y in range(0, h, 4):
                overlay.blit(row, (0, y))
            self._scanlines = overlay
        return self._scanlines

    # ──────────────────────────────────────────────────────
    # Primitives
    def text(self, surf, text, size, color, pos, align="center", bold=False, alpha=1.0):
        img = self.font(size, bold).render(text, True, color)
        if alpha < 1.0:
            img.set_alpha(int(255 * max(0.0, alpha)))
        rect = img.get_rect()
        pos = (int(pos[0]), int(pos[1]))
        if align == "left":
            rect.topleft = pos
        elif align == "right":
            rect.topright = pos
        else:
            rect.center = pos
        surf.blit(img, rect)

    def shadow_text(self, surf, text, size, color, shadow, pos, align="center", alpha=1.0):
        x, y = pos
        self.text(surf, text, size, shadow, (x + 2, y + 2), align, True, alpha)
        self.text(surf, text, size, color, (x, y), align, True, alpha)

    @staticmethod
    def dim(surf, alpha=DIM_ALPHA, rect=None):
        rect = pygame.Rect([int(v) for v in rect]) if rect else surf.get_rect()
        layer = pygame.Surface(rect.size, pygame.SRCALPHA)
        layer.fill((0, 0, 0, int(alpha)))
        surf.blit(layer, rect.topleft)

    # ──────────────────────────────────────────────────────
    # Frame
    def draw(self, surf, state, leaderboard, image, touch_device=False):
        if state.phase == READY:
            self.draw_ready(surf, state, touch_device)
            return

        self.draw_hud(surf, state)
        if not state.is_game_over:
            pygame.draw.polygon(surf, CYAN, ship_polygon(
                state.player.x, state.player.y, state.player.width, state.player.height))
        self.draw_enemies(surf, state, image)
        for b in state.bullets:
            pygame.draw.rect(surf, GREEN, (b.x, b.y, b.width, b.height))
        for b in state.enemy_bullets:
            pygame.draw.rect(surf, RED, (b.x, b.y, b.width, b.height))
        self.draw_particles(surf, state)
        surf.blit(self.scanlines(surf.get_size()), (0, 0))
        self.draw_level_banner(surf, state)

        if state.is_game_over:
            self.draw_game_over(surf, state, leaderboard, touch_device)
        elif state.game_time < START_HINT_DURATION:
            self.draw_start_hint(surf, state, touch_device)

    def draw_ready(self, surf, state, touch_device):
        w, h = surf.get_size()
        cx, cy = w / 2, h / 2
        narrow = w < NARROW_VIEWPORT
        self.dim(surf)

        pulse = math.sin(state.ready_time * 3) * 0.2 + 0.8
        self.shadow_text(surf, "READY PLAYER ONE", 30 if narrow else 52, GREEN, GREEN_SHADOW,
                         (cx, cy - 50), alpha=pulse)

        hint = ("DRAG to move - TAP to shoot" if touch_device
                else "ARROWS to move - SPACE to shoot - ESC to quit")
        self.text(surf, hint, 14 if narrow else 20, WHITE, (cx, cy + 15))

        if math.sin(state.ready_time * 4) > 0:
            prompt = "TAP TO START" if touch_device else "PRESS ANY KEY TO START"
            self.text(surf, prompt, 13 if narrow else 18, GREY, (cx, cy + 65))

        surf.blit(self.scanlines((w, h)), (0, 0))

    def draw_hud(self, surf, state):
        w = surf.get_width()
        self.shadow_text(surf, f"SCORE {state.score:06d}", 32, GREEN, GREEN_SHADOW, (20, 20), "left")
        self.shadow_text(surf, f"LEVEL {state.level}", 32, CYAN, CYAN_SHADOW, (w - 20, 20), "right")

    def draw_enemies(self, surf, state, image):
        for e in state.enemies:
            if not e.alive:
                continue
            tile = image.tile(e.source_rect, (e.width, e.height)) if image is not None else None
            if tile is not None:
                surf.blit(tile, (e.x, e.y))
            else:
                pygame.draw.rect(surf, WHITE, (e.x, e.y, e.width, e.height))

    def draw_particles(self, surf, state):
        for p in state.particles:
            size = max(1, int(p.size))
            dot = pygame.Surface((size, size), pygame.SRCALPHA)
            dot.fill((*p.color, int(255 * p.alpha)))
            surf.blit(dot, (p.x, p.y))

    def draw_level_banner(self, surf, state):
        since = state.game_time - state.level_start_time
        if state.level <= 1 or since >= LEVEL_BANNER_DURATION:
            return
        fade_start = LEVEL_BANNER_DURATION - LEVEL_BANNER_FADE
        alpha = 1.0 - (since - fade_start) / LEVEL_BANNER_FADE if since > fade_start else 1.0
        w, h = surf.get_size()
        self.dim(surf, 178 * alpha, (w / 2 - 150, h / 2 - 50, 300, 100))
        self.text(surf, f"LEVEL {state.level}", 48, YELLOW, (w / 2, h / 2), bold=True, alpha=alpha)

    def draw_start_hint(self, surf, state, touch_device):
        t = state.game_time
        alpha = 1.0 - (t - (START_HINT_DURATION - 1)) if t > START_HINT_DURATION - 1 else 1.0
        w, h = surf.get_size()
        self.dim(surf, 178 * alpha, ((w - 400) / 2, (h - 60) / 2, 400, 60))
        hint = ("DRAG to move - TAP to shoot" if touch_device
                else "ARROWS to move - SPACE to shoot - ESC to quit")
        self.text(surf, hint, 18, WHITE, (w / 2, h / 2), bold=True, alpha=alpha)

    def draw_game_over(self, surf, state, leaderboard, touch_device):
        w, h = surf.get_size()
        cx, cy = w / 2, h / 2
        self.dim(surf)

        self.text(surf, "GAME OVER", 48, RED, (cx, cy - 140), bold=True)
        self.text(surf, f"SCORE: {state.score}", 32, WHITE, (cx, cy - 85), bold=True)
        self.text(surf, f"LEVEL {state.level}", 24, CYAN, (cx, cy - 50))

        if state.phase == NAME_ENTRY and state.name_entry is not None:
            self.draw_name_entry(surf, state.name_entry, cx, cy)
            return

        self.text(surf, "HIGH SCORES", 28, YELLOW, (cx, cy - 20), bold=True)
        scores = leaderboard.scores or [HighScoreEntry("---", 0)]
        for i, entry in enumerate(scores[:leaderboard.size]):
            current = state.score_saved and entry.score == state.score
            self.text(surf, f"{i + 1}. {entry.name}  {entry.score:06d}", 24,
                      GREEN if current else WHITE, (cx, cy + 25 + i * 36), bold=True)

        exit_text = "Tap anywhere to return" if touch_device else "Press 'ESC' or 'Q' to return"
        self.text(surf, exit_text, 18, GREY, (cx, cy + 220))

    def draw_name_entry(self, surf, entry, cx, cy):
        self.text(surf, "NEW HIGH SCORE!", 20, YELLOW, (cx, cy - 30))
        self.text(surf, "ENTER YOUR NAME", 16, GREY, (cx, cy))

        spacing = 50
        y = cy + 50
        for i, letter in enumerate(entry.slots):
            x = cx - spacing + i * spacing
            if i == entry.cursor:
                pygame.draw.polygon(surf, GREEN, [(x - 7, y - 24), (x + 7, y - 24), (x, y - 36)])
                pygame.draw.polygon(surf, GREEN, [(x - 7, y + 24), (x + 7, y + 24), (x, y + 36)])
            self.text(surf, letter, 36, GREEN if i == entry.cursor else WHITE, (x, y), bold=True)

        self.text(surf, "LEFT/RIGHT select - UP/DOWN change - ENTER submit", 14, GREY, (cx, cy + 100))
