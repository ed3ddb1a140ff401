"""Shared mosaic source image with a tile cache and a not-ready fallback."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Tuple

import pygame

from config import MOSAIC_FALLBACK_SIZE
from logging_utils import log_debug


class MosaicImage:
    def __init__(self, path: Optional[str] = None, surface: Optional[pygame.Surface] = None) -> None:
        self.path = Path(path) if path else None
        self.surface = surface
        self._tiles: Dict[Tuple, pygame.Surface] = {}

    def load(self) -> bool:
        """Try to load the image from disk; a failure leaves it not ready."""
        if self.surface is not None:
            return True
        if self.path is None:
            return False
        try:
            self.set_surface(pygame.image.load(str(self.path)))
        except (pygame.error, OSError) as exc:
            log_debug(f"MosaicImage.load failed path={self.path}: {exc}")
            return False
        return True

    def set_surface(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self.invalidate()

    @property
    def ready(self) -> bool:
        return self.surface is not None

    @property
    def natural_size(self) -> Tuple[int, int]:
        if self.surface is None:
            return MOSAIC_FALLBACK_SIZE, MOSAIC_FALLBACK_SIZE
        return self.surface.get_size()

    def tile(self, source_rect, size) -> Optional[pygame.Surface]:
        """Scaled copy of one sub-rectangle, or None while the image is missing."""
        if self.surface is None:
            return None
        sx, sy, sw, sh = (int(round(v)) for v in source_rect)
        w, h = max(1, int(size[0])), max(1, int(size[1]))
        key = (sx, sy, sw, sh, w, h)
        tile = self._tiles.get(key)
        if tile is None:
            area = pygame.Rect(sx, sy, max(1, sw), max(1, sh)).clip(self.surface.get_rect())
            if area.width == 0 or area.height == 0:
                return None
            tile = pygame.transform.scale(self.surface.subsurface(area), (w, h))
            self._tiles[key] = tile
        return tile

    def invalidate(self) -> None:
        self._tiles.clear()
