# managers.py

from collections import namedtuple

from config import (
    BASE_ENEMY_SPEED, BASE_FIRE_INTERVAL, FIRE_INTERVAL_STEP,
    LEVEL_BONUS, MIN_FIRE_INTERVAL, SPEED_STEP
)
from logging_utils import log_debug

Difficulty = namedtuple("Difficulty", "enemy_speed fire_interval")


def difficulty_for(level, base_speed=BASE_ENEMY_SPEED, base_fire_interval=BASE_FIRE_INTERVAL):
    """Enemy speed grows 20% per level; the fire interval shrinks to a 0.2 s floor."""
    steps = level - 1
    speed = base_speed * (1 + steps * SPEED_STEP)
    interval = max(MIN_FIRE_INTERVAL, base_fire_interval - steps * FIRE_INTERVAL_STEP)
    return Difficulty(speed, interval)


class LevelManager:
    def __init__(self):
        self.reset()

    def reset(self):
        self.level = 1
        self.apply()

    def apply(self):
        self.difficulty = difficulty_for(self.level)
        self.direction = 1

    def advance(self):
        """Move to the next level and return the clear bonus it awards."""
        self.level += 1
        self.apply()
        log_debug(f"LevelManager.advance level={self.level} difficulty={self.difficulty}")
        return LEVEL_BONUS * (self.level - 1)

    @property
    def enemy_speed(self):
        return self.difficulty.enemy_speed

    @property
    def fire_interval(self):
        return self.difficulty.fire_interval
