# entities_player.py

from dataclasses import dataclass

from config import PLAYER_BOTTOM_OFFSET, PLAYER_HEIGHT, PLAYER_SPEED, PLAYER_WIDTH


@dataclass
class Player:
    x: float
    y: float
    width: float = PLAYER_WIDTH
    height: float = PLAYER_HEIGHT
    speed: float = PLAYER_SPEED

    @classmethod
    def spawn(cls, viewport_w, viewport_h):
        return cls(x=viewport_w / 2, y=viewport_h - PLAYER_BOTTOM_OFFSET)

    def anchor(self, viewport_h):
        """Re-pin the ship to the bottom of a (possibly resized) viewport."""
        self.y = viewport_h - PLAYER_BOTTOM_OFFSET

    def clamp(self, viewport_w):
        self.x = max(0.0, min(viewport_w - self.width, self.x))

    @property
    def center_x(self):
        return self.x + self.width / 2
