"""Translate pygame keyboard/touch events into session controls.

The router is attached when a session starts and detached when it stops;
while detached (or while the session is inactive) it consumes nothing and the
host application keeps its own event handling.
"""

from __future__ import annotations

import time

import pygame

from config import TAP_FIRE_DEBOUNCE
from logging_utils import log_debug
from rhythm import RHYTHM_EVENT
from state import NAME_ENTRY, READY

LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)
CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)


class InputRouter:
    def __init__(self, session, clock=time.monotonic):
        self.session = session
        self.attached = False
        self._now = clock
        self._handlers = {
            pygame.KEYDOWN: self._key_down,
            pygame.KEYUP: self._key_up,
            pygame.FINGERDOWN: self._finger_down,
            pygame.FINGERMOTION: self._finger_motion,
            pygame.FINGERUP: self._finger_up,
            pygame.VIDEORESIZE: self._resize,
            RHYTHM_EVENT: self._rhythm,
        }

    def attach(self):
        if not self.attached:
            self.attached = True
            log_debug("InputRouter.attach")

    def detach(self):
        if self.attached:
            self.attached = False
            log_debug("InputRouter.detach")

    def dispatch(self, event) -> bool:
        """Route one event; returns True when the game consumed it."""
        if not self.attached or not self.session.active:
            return False
        handler = self._handlers.get(event.type)
        if handler is None:
            return False
        handler(event)
        return True

    # ──────────────────────────────────────────────────────
    # Keyboard
    def _key_down(self, event):
        s = self.session
        state = s.state
        key = event.key

        if key in QUIT_KEYS:
            if state.phase == NAME_ENTRY:
                s.skip_name_entry()
            else:
                s.stop()
            return

        if state.phase == READY:
            s.begin_gameplay()
            return

        if state.phase == NAME_ENTRY:
            self._name_key(key)
            return

        if key in LEFT_KEYS:
            state.controls.left = True
        elif key in RIGHT_KEYS:
            state.controls.right = True
        elif key == pygame.K_SPACE:
            state.controls.fire = True

    def _key_up(self, event):
        controls = self.session.state.controls
        if event.key in LEFT_KEYS:
            controls.left = False
        elif event.key in RIGHT_KEYS:
            controls.right = False

    def _name_key(self, key):
        entry = self.session.state.name_entry
        if key == pygame.K_UP:
            entry.increment()
        elif key == pygame.K_DOWN:
            entry.decrement()
        elif key == pygame.K_LEFT:
            entry.move_left()
        elif key == pygame.K_RIGHT:
            entry.move_right()
        elif key in CONFIRM_KEYS:
            self.session.submit_name()

    # ──────────────────────────────────────────────────────
    # Touch (finger coordinates arrive normalised to 0..1)
    def _finger_x(self, event):
        return event.x * self.session.state.viewport_w

    def _finger_down(self, event):
        s = self.session
        s.touch_device = True
        state = s.state

        if state.phase == READY:
            s.begin_gameplay()
            return

        if state.is_game_over:
            # a stray tap must not throw away a pending name
            if state.phase != NAME_ENTRY:
                s.stop()
            return

        state.touch.active = True
        state.touch.x = self._finger_x(event)

        now = self._now()
        if now - state.touch.last_tap > TAP_FIRE_DEBOUNCE:
            s.fire()
            state.touch.last_tap = now

    def _finger_motion(self, event):
        touch = self.session.state.touch
        if touch.active:
            touch.x = self._finger_x(event)

    def _finger_up(self, event):
        self.session.state.touch.active = False

    # ──────────────────────────────────────────────────────
    # Window / timers
    def _resize(self, event):
        self.session.resize(event.w, event.h)

    def _rhythm(self, event):
        self.session.rhythm.on_timer()
