import unittest
from unittest.mock import Mock

import pygame

from assets import MosaicImage
from game import InvadersSession
from highscores import Leaderboard
from host import DemoPage
from rhythm import RHYTHM_EVENT
from state import EXIT, GAME_OVER, NAME_ENTRY, PLAYING, READY
from storage import MemoryStore


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def key_down(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=0, unicode="", scancode=0)


def key_up(key):
    return pygame.event.Event(pygame.KEYUP, key=key, mod=0, unicode="", scancode=0)


def finger(kind, x, y=0.5):
    return pygame.event.Event(kind, x=x, y=y, dx=0.0, dy=0.0, touch_id=0, finger_id=0, pressure=1.0)


class InputRouterTests(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.timer_calls = []
        self.session = InvadersSession(
            DemoPage(800, 600),
            sound_manager=Mock(),
            leaderboard=Leaderboard(MemoryStore()),
            image=MosaicImage(),
            set_timer=lambda *args: self.timer_calls.append(args),
            clock=self.clock,
        )
        self.router = self.session.router

    def start_playing(self):
        self.session.start((800, 600))
        self.router.dispatch(key_down(pygame.K_SPACE))
        self.assertEqual(self.session.state.phase, PLAYING)

    def test_inactive_session_consumes_nothing(self):
        self.assertFalse(self.router.dispatch(key_down(pygame.K_LEFT)))
        self.session.start((800, 600))
        self.router.detach()
        self.assertFalse(self.router.dispatch(key_down(pygame.K_LEFT)))

    def test_unhandled_event_types_pass_through(self):
        self.session.start((800, 600))
        event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(1, 1), button=1)
        self.assertFalse(self.router.dispatch(event))

    def test_any_key_starts_play_from_ready(self):
        self.session.start((800, 600))
        self.assertTrue(self.router.dispatch(key_down(pygame.K_x)))
        self.assertEqual(self.session.state.phase, PLAYING)
        self.assertEqual(self.session.state.bullets, [])

    def test_quit_key_leaves_from_ready(self):
        self.session.start((800, 600))
        self.router.dispatch(key_down(pygame.K_ESCAPE))
        self.assertFalse(self.session.active)
        self.assertEqual(self.session.state.phase, EXIT)

    def test_movement_keys_hold_until_released(self):
        self.start_playing()
        controls = self.session.state.controls
        self.router.dispatch(key_down(pygame.K_LEFT))
        self.router.dispatch(key_down(pygame.K_d))
        self.assertTrue(controls.left)
        self.assertTrue(controls.right)
        self.router.dispatch(key_up(pygame.K_LEFT))
        self.router.dispatch(key_up(pygame.K_d))
        self.assertFalse(controls.left)
        self.assertFalse(controls.right)

    def test_space_sets_fire_edge(self):
        self.start_playing()
        self.router.dispatch(key_down(pygame.K_SPACE))
        self.assertTrue(self.session.state.controls.fire)
        self.router.dispatch(key_up(pygame.K_SPACE))
        self.assertTrue(self.session.state.controls.fire)

    def test_q_quits_during_play(self):
        self.start_playing()
        self.router.dispatch(key_down(pygame.K_q))
        self.assertFalse(self.session.active)
        self.assertFalse(self.router.attached)

    def test_tap_starts_play_from_ready(self):
        self.session.start((800, 600))
        self.router.dispatch(finger(pygame.FINGERDOWN, 0.5))
        self.assertEqual(self.session.state.phase, PLAYING)
        self.assertTrue(self.session.touch_device)

    def test_tap_fires_with_debounce(self):
        self.start_playing()
        state = self.session.state

        self.router.dispatch(finger(pygame.FINGERDOWN, 0.25))
        self.assertTrue(state.touch.active)
        self.assertEqual(state.touch.x, 200)
        self.assertEqual(len(state.bullets), 1)

        self.clock.now += 0.1
        self.router.dispatch(finger(pygame.FINGERDOWN, 0.25))
        self.assertEqual(len(state.bullets), 1)

        self.clock.now += 0.1
        self.router.dispatch(finger(pygame.FINGERDOWN, 0.25))
        self.assertEqual(len(state.bullets), 2)

    def test_drag_tracks_finger_until_lifted(self):
        self.start_playing()
        touch = self.session.state.touch
        self.router.dispatch(finger(pygame.FINGERDOWN, 0.5))
        self.router.dispatch(finger(pygame.FINGERMOTION, 0.75))
        self.assertEqual(touch.x, 600)
        self.router.dispatch(finger(pygame.FINGERUP, 0.75))
        self.assertFalse(touch.active)
        self.router.dispatch(finger(pygame.FINGERMOTION, 0.1))
        self.assertEqual(touch.x, 600)

    def test_tap_leaves_game_over_screen(self):
        self.start_playing()
        self.session.state.phase = GAME_OVER
        self.router.dispatch(finger(pygame.FINGERDOWN, 0.5))
        self.assertFalse(self.session.active)

    def test_tap_during_name_entry_is_ignored(self):
        self.start_playing()
        self.session.state.score = 400
        self.session._on_game_over()
        self.assertEqual(self.session.state.phase, NAME_ENTRY)

        self.router.dispatch(finger(pygame.FINGERDOWN, 0.5))

        self.assertTrue(self.session.active)
        self.assertEqual(self.session.state.phase, NAME_ENTRY)

    def test_name_entry_keys(self):
        self.start_playing()
        self.session.state.score = 400
        self.session._on_game_over()
        entry = self.session.state.name_entry

        self.router.dispatch(key_down(pygame.K_UP))
        self.router.dispatch(key_down(pygame.K_RIGHT))
        self.router.dispatch(key_down(pygame.K_DOWN))
        self.router.dispatch(key_down(pygame.K_LEFT))
        self.assertEqual(entry.name, "B A")
        self.assertEqual(entry.cursor, 0)
        self.assertFalse(self.session.state.controls.left)

        self.router.dispatch(key_down(pygame.K_RETURN))
        self.assertEqual(self.session.state.phase, GAME_OVER)
        self.assertEqual(self.session.leaderboard.scores[0].name, "B A")

    def test_escape_skips_name_entry_then_exits(self):
        self.start_playing()
        self.session.state.score = 400
        self.session._on_game_over()

        self.router.dispatch(key_down(pygame.K_ESCAPE))
        self.assertTrue(self.session.active)
        self.assertEqual(self.session.state.phase, GAME_OVER)
        self.assertEqual(self.session.leaderboard.scores, [])

        self.router.dispatch(key_down(pygame.K_ESCAPE))
        self.assertFalse(self.session.active)

    def test_resize_event_reaches_session(self):
        self.start_playing()
        event = pygame.event.Event(pygame.VIDEORESIZE, w=640, h=480, size=(640, 480))
        self.assertTrue(self.router.dispatch(event))
        self.assertEqual(self.session.state.viewport_w, 640)

    def test_rhythm_event_advances_the_beat(self):
        self.start_playing()
        calls = len(self.timer_calls)
        self.router.dispatch(pygame.event.Event(RHYTHM_EVENT))
        self.assertEqual(len(self.timer_calls), calls + 1)
        self.session.sound.play.assert_called_with("rhythm_high")

    def test_attach_detach_are_idempotent(self):
        self.router.attach()
        self.router.attach()
        self.assertTrue(self.router.attached)
        self.router.detach()
        self.router.detach()
        self.assertFalse(self.router.attached)
        self.assertEqual(self.session.state.phase, READY)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
