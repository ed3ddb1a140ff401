# entities_bullet.py

from dataclasses import dataclass

from config import (
    ENEMY_BULLET_SIZE, ENEMY_BULLET_SPEED,
    PLAYER_BULLET_SIZE, PLAYER_BULLET_SPEED
)

PLAYER = "player"
ENEMY = "enemy"


@dataclass
class Bullet:
    x: float
    y: float
    width: float
    height: float
    vy: float        # signed: negative travels up the screen
    owner: str

    def update(self, dt):
        self.y += self.vy * dt


def player_bullet(center_x, top):
    w, h = PLAYER_BULLET_SIZE
    return Bullet(center_x - w / 2, top, w, h, -PLAYER_BULLET_SPEED, PLAYER)


def enemy_bullet(center_x, bottom):
    w, h = ENEMY_BULLET_SIZE
    return Bullet(center_x - w / 2, bottom, w, h, ENEMY_BULLET_SPEED, ENEMY)
