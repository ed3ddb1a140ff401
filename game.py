# game.py
# ──────────────────────────────────────────────────────────────
# Session controller for the invaders easter egg.
# ready → playing → gameover [→ name_entry → gameover] → exit
# ──────────────────────────────────────────────────────────────

import random
import time

from assets import MosaicImage
from config import HEIGHT, MOSAIC_IMAGE_PATH, WIDTH
from entities import generate_enemies, relayout_enemies, resample_enemies, scan_targets
from highscores import Leaderboard, NameEntry
from input_router import InputRouter
from logging_utils import log_debug
from renderer import Renderer
from rhythm import RhythmScheduler
from simulation import (
    ENEMY_DESTROYED, GAME_OVER_EVENT, LEVEL_UP, SHOOT, advance, fire_bullet
)
from sound_manager import SoundManager
from state import EXIT, GAME_OVER, NAME_ENTRY, PLAYING, READY, GameState
from storage import MemoryStore


class InvadersSession:
    """One explicitly constructed game session, owned by the host page.

    The host supplies the page (target query + retro toggle) and the trigger
    button; everything else has a working default so the session can be
    composed in tests without a window or an audio device.
    """

    def __init__(self, host, trigger=None, sound_manager=None, leaderboard=None,
                 image=None, renderer=None, set_timer=None, rng=random, clock=time.monotonic):
        self.host = host
        self.trigger = trigger
        self.sound = sound_manager if sound_manager is not None else SoundManager(enable_audio=False)
        self.leaderboard = leaderboard if leaderboard is not None else Leaderboard(MemoryStore())
        self.image = image if image is not None else MosaicImage(MOSAIC_IMAGE_PATH)
        self.renderer = renderer if renderer is not None else Renderer()
        self.router = InputRouter(self, clock=clock)
        self.rhythm = RhythmScheduler(self.sound, self._tempo, set_timer=set_timer)
        self.rng = rng

        self.active = False
        self.touch_device = False
        self.state = GameState(WIDTH, HEIGHT)

    # ──────────────────────────────────────────────────────
    # Lifecycle
    def start(self, viewport=(WIDTH, HEIGHT)):
        if self.active:
            log_debug("InvadersSession.start ignored: already active")
            return
        w, h = viewport
        log_debug(f"InvadersSession.start viewport={w}x{h}")

        self.router.attach()
        try:
            if self.trigger is not None:
                self.trigger.hide()
            self.host.set_retro_mode(True)
            self.state = GameState(w, h)
            self.leaderboard.reload()
            self.image.load()
            self._generate_wave()
            self.active = True
            self.sound.play("ready")
        except Exception:
            self.stop()
            raise

    def begin_gameplay(self):
        state = self.state
        if not self.active or state.phase != READY:
            return
        state.phase = PLAYING
        state.targets = scan_targets(self.host.query_targets(), state.viewport_w, state.viewport_h)
        self.rhythm.start()
        log_debug(f"InvadersSession.begin_gameplay targets={len(state.targets)}")

    def stop(self):
        """Tear the session down; safe to call any number of times."""
        was_active = self.active
        self.active = False

        self.rhythm.stop()
        self.sound.stop_all()
        self.router.detach()

        state = self.state
        state.controls.clear()
        state.touch.active = False
        self.renderer.reset()
        self.image.invalidate()

        self.host.set_retro_mode(False)
        for target in state.targets:
            target.restore()
        state.targets = []

        if self.trigger is not None:
            self.trigger.restore(animate=was_active)
        if was_active:
            state.phase = EXIT
            log_debug(f"InvadersSession.stop score={state.score} level={state.level}")

    # ──────────────────────────────────────────────────────
    # Frame callback
    def tick(self, dt, surface=None):
        if not self.active:
            return
        events = advance(self.state, dt, self.rng)
        self._handle_events(events)
        self._sync_mosaic()
        if self.active and surface is not None:
            self.draw(surface)

    def draw(self, surface):
        self.renderer.draw(surface, self.state, self.leaderboard, self.image, self.touch_device)

    def resize(self, width, height):
        state = self.state
        state.viewport_w, state.viewport_h = width, height
        state.player.anchor(height)
        state.player.clamp(width)
        if state.enemies:
            state.enemies = relayout_enemies(state.enemies, width, state.image_size)
        self.renderer.reset()
        log_debug(f"InvadersSession.resize {width}x{height}")

    # ──────────────────────────────────────────────────────
    # Player actions
    def fire(self):
        if fire_bullet(self.state):
            self.sound.play("shoot")

    def submit_name(self):
        state = self.state
        if state.phase != NAME_ENTRY:
            return
        self.leaderboard.add_score(state.name_entry.name, state.score)
        log_debug(f"High score saved name={state.name_entry.name!r} score={state.score}")
        state.name_entry = None
        state.score_saved = True
        state.phase = GAME_OVER

    def skip_name_entry(self):
        state = self.state
        if state.phase != NAME_ENTRY:
            return
        state.name_entry = None
        state.score_saved = False
        state.phase = GAME_OVER

    # ──────────────────────────────────────────────────────
    # Internals
    def _tempo(self):
        state = self.state
        return state.level, len(state.alive_enemies()), len(state.enemies)

    def _generate_wave(self):
        state = self.state
        state.image_size = self.image.natural_size if self.image.ready else None
        state.enemies = generate_enemies(state.viewport_w, state.image_size)

    def _sync_mosaic(self):
        """Resample tiles once the image's real dimensions are known."""
        state = self.state
        if not self.image.ready or not state.enemies:
            return
        size = self.image.natural_size
        if state.image_size != size:
            state.image_size = size
            resample_enemies(state.enemies, size)

    def _handle_events(self, events):
        for event in events:
            if event == SHOOT:
                self.sound.play("shoot")
            elif event == ENEMY_DESTROYED:
                self.sound.play("explosion")
            elif event == GAME_OVER_EVENT:
                self._on_game_over()
            elif event == LEVEL_UP:
                log_debug(f"Level up → {self.state.level}")

    def _on_game_over(self):
        state = self.state
        self.rhythm.stop()
        self.sound.play("game_over")
        if state.score > 0 and self.leaderboard.is_high_score(state.score):
            state.phase = NAME_ENTRY
            state.name_entry = NameEntry()
            state.score_saved = False
        else:
            state.phase = GAME_OVER
            state.score_saved = True
        log_debug(f"Game over score={state.score} phase={state.phase}")
