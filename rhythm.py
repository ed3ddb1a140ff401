"""Background march whose tempo follows the level and the wave size."""

from __future__ import annotations

from typing import Callable, Optional, Tuple

import pygame

from config import RHYTHM_BASE_INTERVAL_MS, RHYTHM_MIN_INTERVAL_MS
from logging_utils import log_debug

RHYTHM_EVENT = pygame.USEREVENT + 1


def rhythm_interval_ms(level: int, alive: int, total: int,
                       base_ms: int = RHYTHM_BASE_INTERVAL_MS) -> int:
    total = total or 1
    enemy_factor = 1 - (alive / total) * 0.5
    level_factor = 1 - (level - 1) * 0.1
    return int(max(RHYTHM_MIN_INTERVAL_MS, base_ms * level_factor * enemy_factor))


class RhythmScheduler:
    """Alternate two notes a semitone apart on a one-shot pygame timer.

    Each note re-arms ``RHYTHM_EVENT`` with a freshly computed interval; the
    event loop hands the event back through ``on_timer``. ``tempo_source``
    returns ``(level, alive_enemies, total_enemies)`` and is only called from
    the main thread.
    """

    def __init__(self, sound_manager, tempo_source: Callable[[], Tuple[int, int, int]],
                 event_type: int = RHYTHM_EVENT, set_timer: Optional[Callable] = None) -> None:
        self.sound_manager = sound_manager
        self.tempo_source = tempo_source
        self.event_type = event_type
        self._set_timer = set_timer or pygame.time.set_timer
        self.running = False
        self.pending: Optional[int] = None
        self.note = 0

    def start(self) -> None:
        self.stop()
        self.running = True
        self.note = 0
        log_debug("RhythmScheduler.start")
        self.on_timer()

    def on_timer(self) -> None:
        if not self.running:
            return  # stale event queued before stop()
        self.pending = None
        self.sound_manager.play("rhythm_low" if self.note == 0 else "rhythm_high")
        self.note = 1 - self.note
        interval = rhythm_interval_ms(*self.tempo_source())
        self._set_timer(self.event_type, interval, 1)
        self.pending = interval

    def stop(self) -> None:
        self.running = False
        if self.pending is not None:
            self._set_timer(self.event_type, 0)
            self.pending = None
            log_debug("RhythmScheduler.stop cancelled pending note")
