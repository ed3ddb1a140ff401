# entities_enemy.py
#
# Mosaic invaders: every enemy samples its own tile of one shared source
# image, so clearing a wave visually tears the picture apart.

import math
from dataclasses import dataclass

from config import (
    GRID_TOP, MAX_ENEMY_SIZE, MAX_GRID_WIDTH_RATIO,
    MOSAIC_FALLBACK_SIZE, NARROW_VIEWPORT
)


@dataclass
class Enemy:
    x: float
    y: float
    width: float
    height: float
    row: int
    col: int
    src_x: float = 0.0
    src_y: float = 0.0
    src_w: float = 0.0
    src_h: float = 0.0
    alive: bool = True

    @property
    def source_rect(self):
        return (self.src_x, self.src_y, self.src_w, self.src_h)


def grid_shape(viewport_w):
    """Return (cols, rows, padding) for the current viewport width."""
    if viewport_w < NARROW_VIEWPORT:
        return 4, 5, 6
    return 6, 6, 10


def _source_size(image_size):
    if not image_size or image_size[0] <= 0 or image_size[1] <= 0:
        return MOSAIC_FALLBACK_SIZE, MOSAIC_FALLBACK_SIZE
    return image_size


def generate_enemies(viewport_w, image_size=None):
    """Build a fresh, centred enemy grid that takes at most 60% of the width."""
    cols, rows, padding = grid_shape(viewport_w)
    max_grid_w = viewport_w * MAX_GRID_WIDTH_RATIO
    size = math.floor(min(MAX_ENEMY_SIZE, (max_grid_w - (cols - 1) * padding) / cols))
    size = max(1, size)

    grid_w = cols * size + (cols - 1) * padding
    start_x = (viewport_w - grid_w) / 2

    img_w, img_h = _source_size(image_size)
    src_w, src_h = img_w / cols, img_h / rows

    enemies = []
    for r in range(rows):
        for c in range(cols):
            enemies.append(Enemy(
                x=start_x + c * (size + padding),
                y=GRID_TOP + r * (size + padding),
                width=size,
                height=size,
                row=r,
                col=c,
                src_x=c * src_w,
                src_y=r * src_h,
                src_w=src_w,
                src_h=src_h,
            ))
    return enemies


def resample_enemies(enemies, image_size):
    """Recompute mosaic sample rectangles in place, e.g. once the image has loaded."""
    if not enemies:
        return
    cols = max(e.col for e in enemies) + 1
    rows = max(e.row for e in enemies) + 1
    img_w, img_h = _source_size(image_size)
    src_w, src_h = img_w / cols, img_h / rows
    for e in enemies:
        e.src_x, e.src_y = e.col * src_w, e.row * src_h
        e.src_w, e.src_h = src_w, src_h


def relayout_enemies(enemies, viewport_w, image_size=None):
    """Lay the wave out again for a new viewport width.

    When the grid shape is unchanged, alive flags and the accumulated
    downward drop carry over. Otherwise a fresh wave is returned.
    """
    fresh = generate_enemies(viewport_w, image_size)
    if len(fresh) != len(enemies):
        return fresh
    drop = enemies[0].y - GRID_TOP
    for old, new in zip(enemies, fresh):
        new.alive = old.alive
        new.y += drop
    return fresh
