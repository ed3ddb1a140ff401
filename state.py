"""Session state shared by the simulation, renderer and input router."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from entities import Bullet, Enemy, PageTarget, Particle, Player
from managers import LevelManager

# Phases
READY = "ready"
PLAYING = "playing"
GAME_OVER = "gameover"
NAME_ENTRY = "name_entry"
EXIT = "exit"


@dataclass
class Controls:
    left: bool = False
    right: bool = False
    fire: bool = False          # edge trigger, consumed by the next step

    def clear(self) -> None:
        self.left = self.right = self.fire = False


@dataclass
class TouchState:
    active: bool = False
    x: float = 0.0
    last_tap: float = float("-inf")


@dataclass
class GameState:
    viewport_w: int
    viewport_h: int
    phase: str = READY
    score: int = 0
    level_manager: LevelManager = field(default_factory=LevelManager)
    game_time: float = 0.0
    level_start_time: float = 0.0
    ready_time: float = 0.0
    enemy_fire_timer: float = 0.0
    player: Optional[Player] = None
    bullets: List[Bullet] = field(default_factory=list)
    enemy_bullets: List[Bullet] = field(default_factory=list)
    enemies: List[Enemy] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    targets: List[PageTarget] = field(default_factory=list)
    controls: Controls = field(default_factory=Controls)
    touch: TouchState = field(default_factory=TouchState)
    name_entry: Optional[object] = None
    score_saved: bool = False
    image_size: Optional[tuple] = None

    def __post_init__(self) -> None:
        if self.player is None:
            self.player = Player.spawn(self.viewport_w, self.viewport_h)

    @property
    def level(self) -> int:
        return self.level_manager.level

    @property
    def is_game_over(self) -> bool:
        return self.phase in (GAME_OVER, NAME_ENTRY)

    def alive_enemies(self) -> List[Enemy]:
        return [e for e in self.enemies if e.alive]

    def all_enemies_dead(self) -> bool:
        return bool(self.enemies) and all(not e.alive for e in self.enemies)
