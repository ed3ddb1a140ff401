import random
import unittest

import pygame

from config import CYAN, ENEMY_DROP_DISTANCE, GREEN
from entities import (
    Enemy, PageTarget, Rect, create_explosion, enemy_bullet,
    generate_enemies, update_particles
)
from entities_bullet import PLAYER, Bullet
from simulation import (
    ENEMY_DESTROYED, GAME_OVER_EVENT, LEVEL_UP, PLAYER_HIT, SHOOT,
    TARGET_DESTROYED, advance, fire_bullet, resolve_bullet_collisions
)
from state import GAME_OVER, NAME_ENTRY, PLAYING, GameState


class FakeHandle:
    def __init__(self, rect):
        self.rect = pygame.Rect(rect)
        self.overlay = False
        self.visible = True

    def set_visible(self, visible):
        self.visible = visible


def playing_state(width=800, height=600):
    state = GameState(width, height)
    state.phase = PLAYING
    return state


def up_bullet(x, y):
    return Bullet(x, y, 4, 10, -600.0, PLAYER)


class BulletCollisionTests(unittest.TestCase):
    def setUp(self):
        self.state = playing_state()
        self.rng = random.Random(3)

    def test_bullet_touching_enemy_destroys_it(self):
        enemy = Enemy(x=100, y=100, width=40, height=40, row=0, col=0)
        self.state.enemies = [enemy]
        self.state.bullets = [up_bullet(140, 100)]   # left edge on enemy's right edge

        events = resolve_bullet_collisions(self.state, self.rng)

        self.assertEqual(events, [ENEMY_DESTROYED])
        self.assertFalse(enemy.alive)
        self.assertEqual(self.state.score, 100)
        self.assertEqual(self.state.bullets, [])
        self.assertEqual(len(self.state.particles), 10)
        self.assertTrue(all(p.color == GREEN for p in self.state.particles))

    def test_enemy_takes_priority_over_target(self):
        enemy = Enemy(x=100, y=100, width=40, height=40, row=0, col=0)
        handle = FakeHandle((90, 90, 200, 60))
        target = PageTarget(handle=handle, rect=Rect(90, 90, 200, 60))
        self.state.enemies = [enemy]
        self.state.targets = [target]
        self.state.bullets = [up_bullet(110, 110)]

        resolve_bullet_collisions(self.state, self.rng)

        self.assertFalse(enemy.alive)
        self.assertTrue(target.alive)
        self.assertTrue(handle.visible)
        self.assertEqual(self.state.score, 100)

    def test_one_hit_per_bullet(self):
        a = Enemy(x=100, y=100, width=40, height=40, row=0, col=0)
        b = Enemy(x=104, y=100, width=40, height=40, row=0, col=1)
        self.state.enemies = [a, b]
        self.state.bullets = [up_bullet(110, 110)]

        resolve_bullet_collisions(self.state, self.rng)

        self.assertEqual(sum(not e.alive for e in (a, b)), 1)
        self.assertEqual(self.state.score, 100)

    def test_target_hit_hides_handle(self):
        handle = FakeHandle((300, 300, 400, 40))
        target = PageTarget(handle=handle, rect=Rect(300, 300, 400, 40))
        self.state.targets = [target]
        self.state.bullets = [up_bullet(320, 310), up_bullet(600, 500)]

        events = resolve_bullet_collisions(self.state, self.rng)

        self.assertEqual(events, [TARGET_DESTROYED])
        self.assertFalse(target.alive)
        self.assertFalse(handle.visible)
        self.assertEqual(self.state.score, 50)
        self.assertEqual(len(self.state.bullets), 1)

    def test_dead_target_is_not_hit_again(self):
        handle = FakeHandle((300, 300, 400, 40))
        target = PageTarget(handle=handle, rect=Rect(300, 300, 400, 40), alive=False)
        self.state.targets = [target]
        self.state.bullets = [up_bullet(320, 310)]

        self.assertEqual(resolve_bullet_collisions(self.state, self.rng), [])
        self.assertEqual(len(self.state.bullets), 1)


class AdvanceTests(unittest.TestCase):
    def setUp(self):
        self.rng = random.Random(7)

    def test_cleared_wave_starts_next_level(self):
        state = playing_state()
        state.enemies = generate_enemies(800)
        for e in state.enemies:
            e.alive = False
        state.bullets = [up_bullet(10, 300)]
        state.score = 300

        events = advance(state, 0.016, self.rng)

        self.assertIn(LEVEL_UP, events)
        self.assertEqual(state.level, 2)
        self.assertEqual(len(state.enemies), 36)
        self.assertTrue(all(e.alive for e in state.enemies))
        self.assertEqual(state.score, 800)
        self.assertEqual(state.bullets, [])
        self.assertEqual(state.level_start_time, state.game_time)

    def test_level_bonus_grows_with_cleared_level(self):
        state = playing_state()
        state.level_manager.advance()
        state.enemies = generate_enemies(800)
        for e in state.enemies:
            e.alive = False

        advance(state, 0.016, self.rng)

        self.assertEqual(state.level, 3)
        self.assertEqual(state.score, 1000)

    def test_empty_wave_does_not_level_up(self):
        state = playing_state()
        self.assertNotIn(LEVEL_UP, advance(state, 0.016, self.rng))
        self.assertEqual(state.level, 1)

    def test_grid_flips_and_drops_at_right_edge(self):
        state = playing_state()
        enemy = Enemy(x=800 - 20 - 40 + 1, y=100, width=40, height=40, row=0, col=0)
        state.enemies = [enemy]

        advance(state, 0.01, self.rng)

        self.assertEqual(state.level_manager.direction, -1)
        self.assertEqual(enemy.y, 100 + ENEMY_DROP_DISTANCE)

    def test_grid_flips_at_left_edge(self):
        state = playing_state()
        state.level_manager.direction = -1
        enemy = Enemy(x=20.5, y=100, width=40, height=40, row=0, col=0)
        state.enemies = [enemy]

        advance(state, 0.01, self.rng)

        self.assertEqual(state.level_manager.direction, 1)
        self.assertEqual(enemy.y, 100 + ENEMY_DROP_DISTANCE)

    def test_player_is_clamped_to_viewport(self):
        state = playing_state()
        state.player.x = 5
        state.controls.left = True
        advance(state, 1.0, self.rng)
        self.assertEqual(state.player.x, 0.0)

        state.controls.left = False
        state.controls.right = True
        advance(state, 5.0, self.rng)
        self.assertEqual(state.player.x, 800 - state.player.width)

    def test_touch_eases_toward_finger(self):
        state = playing_state()
        state.player.x = 100
        state.touch.active = True
        state.touch.x = 700
        advance(state, 0.1, self.rng)
        # 500 px/s * 1.5 * 0.1 s
        self.assertAlmostEqual(state.player.x, 175.0)

    def test_touch_snaps_within_five_pixels(self):
        state = playing_state()
        state.player.x = 678
        state.touch.active = True
        state.touch.x = 700          # ship centre target is x=680
        advance(state, 0.1, self.rng)
        self.assertEqual(state.player.x, 678)

    def test_fire_is_an_edge_trigger(self):
        state = playing_state()
        state.controls.fire = True

        events = advance(state, 0.01, self.rng)
        self.assertEqual(events, [SHOOT])
        self.assertEqual(len(state.bullets), 1)
        self.assertFalse(state.controls.fire)

        advance(state, 0.01, self.rng)
        self.assertEqual(len(state.bullets), 1)

    def test_bullet_leaving_top_is_removed(self):
        state = playing_state()
        state.bullets = [up_bullet(10, 2)]
        advance(state, 0.1, self.rng)
        self.assertEqual(state.bullets, [])

    def test_enemy_fires_from_bottom_centre(self):
        state = playing_state()
        enemy = Enemy(x=300, y=100, width=40, height=40, row=0, col=0)
        state.enemies = [enemy]
        state.enemy_fire_timer = 0.995

        advance(state, 0.01, self.rng)

        self.assertEqual(len(state.enemy_bullets), 1)
        shot = state.enemy_bullets[0]
        self.assertAlmostEqual(shot.x + shot.width / 2, enemy.x + enemy.width / 2)
        self.assertEqual(state.enemy_fire_timer, 0.0)

    def test_enemy_bullet_hitting_player_ends_game(self):
        state = playing_state()
        p = state.player
        state.enemy_bullets = [enemy_bullet(p.center_x, p.y + 2)]

        events = advance(state, 0.001, self.rng)

        self.assertEqual(events, [PLAYER_HIT, GAME_OVER_EVENT])
        self.assertEqual(state.phase, GAME_OVER)
        self.assertEqual(state.enemy_bullets, [])
        self.assertEqual(len(state.particles), 10)
        self.assertTrue(all(p.color == CYAN for p in state.particles))

    def test_enemy_reaching_player_ends_game(self):
        state = playing_state()
        p = state.player
        state.enemies = [Enemy(x=p.x, y=p.y, width=40, height=40, row=0, col=0)]

        events = advance(state, 0.001, self.rng)

        self.assertIn(GAME_OVER_EVENT, events)
        self.assertEqual(state.phase, GAME_OVER)

    def test_game_over_freezes_everything_but_particles(self):
        state = playing_state()
        state.phase = GAME_OVER
        state.bullets = [up_bullet(100, 300)]
        create_explosion(state.particles, 50, 50, GREEN, rng=self.rng)
        before = [(p.x, p.y) for p in state.particles]

        self.assertEqual(advance(state, 0.1, self.rng), [])
        self.assertEqual(state.bullets[0].y, 300)
        self.assertEqual(state.game_time, 0.0)
        self.assertNotEqual(before, [(p.x, p.y) for p in state.particles])

    def test_ready_phase_only_runs_the_title_clock(self):
        state = GameState(800, 600)
        state.controls.fire = True
        self.assertEqual(advance(state, 0.25, self.rng), [])
        self.assertEqual(state.ready_time, 0.25)
        self.assertEqual(state.game_time, 0.0)
        self.assertEqual(state.bullets, [])


class FireBulletTests(unittest.TestCase):
    def test_bullet_spawns_centred_on_ship_nose(self):
        state = playing_state()
        self.assertTrue(fire_bullet(state))
        b = state.bullets[0]
        self.assertEqual(b.x + b.width / 2, state.player.center_x)
        self.assertEqual(b.y, state.player.y)

    def test_refused_outside_play(self):
        for phase in (GAME_OVER, NAME_ENTRY):
            state = playing_state()
            state.phase = phase
            with self.subTest(phase=phase):
                self.assertFalse(fire_bullet(state))
                self.assertEqual(state.bullets, [])
        self.assertFalse(fire_bullet(GameState(800, 600)))


class ParticleTests(unittest.TestCase):
    def test_particles_expire_after_their_life(self):
        particles = []
        create_explosion(particles, 0, 0, GREEN, rng=random.Random(1))
        self.assertEqual(len(particles), 10)
        self.assertEqual(len(update_particles(particles, 0.25)), 10)
        self.assertEqual(update_particles(particles, 0.3), [])

    def test_alpha_tracks_remaining_life(self):
        particles = []
        create_explosion(particles, 0, 0, GREEN, rng=random.Random(1))
        p = particles[0]
        self.assertEqual(p.alpha, 1.0)
        p.update(0.25)
        self.assertAlmostEqual(p.alpha, 0.5)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
