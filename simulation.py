"""Per-frame simulation step.

Every motion is ``speed * dt``, so the step tolerates the variable frame
time coming out of ``Clock.tick``. ``advance`` mutates the state in place and
returns the names of the discrete events that happened during the step; the
session turns those into sound cues and phase bookkeeping.
"""

from __future__ import annotations

import random
from typing import List

from config import (
    CYAN, ENEMY_DROP_DISTANCE, ENEMY_EDGE_MARGIN, ENEMY_POINTS, GREEN,
    PLAYER_EXPLOSION_SIZE, TARGET_EXPLOSION_CAP, TARGET_POINTS,
    TOUCH_SNAP_DISTANCE, TOUCH_SPEED_FACTOR, WHITE
)
from entities import (
    center_of, create_explosion, enemy_bullet, generate_enemies,
    player_bullet, rect_intersect, update_particles
)
from logging_utils import log_debug
from state import GAME_OVER, READY, GameState

SHOOT = "shoot"
ENEMY_DESTROYED = "enemy_destroyed"
TARGET_DESTROYED = "target_destroyed"
PLAYER_HIT = "player_hit"
GAME_OVER_EVENT = "game_over"
LEVEL_UP = "level_up"


def advance(state: GameState, dt: float, rng=random) -> List[str]:
    events: List[str] = []

    if state.phase == READY:
        state.ready_time += dt
        return events

    if state.is_game_over:
        # gameplay is frozen; only the last explosion plays out
        state.particles = update_particles(state.particles, dt)
        return events

    state.game_time += dt

    _move_player(state, dt)

    if state.controls.fire:
        state.controls.fire = False
        if fire_bullet(state):
            events.append(SHOOT)

    for b in state.bullets:
        b.update(dt)
    state.bullets = [b for b in state.bullets if b.y >= 0]

    events.extend(resolve_bullet_collisions(state, rng))

    _move_enemies(state, dt)
    _enemy_fire(state, dt, rng)

    for b in state.enemy_bullets:
        b.update(dt)
    state.enemy_bullets = [b for b in state.enemy_bullets if b.y < state.viewport_h]

    if not state.is_game_over:
        for i in range(len(state.enemy_bullets) - 1, -1, -1):
            if rect_intersect(state.enemy_bullets[i], state.player):
                del state.enemy_bullets[i]
                events.extend(_player_destroyed(state, rng))
                break

    state.particles = update_particles(state.particles, dt)

    if not state.is_game_over:
        for e in state.enemies:
            if e.alive and rect_intersect(e, state.player):
                events.extend(_player_destroyed(state, rng))
                break

    if not state.is_game_over and state.all_enemies_dead():
        start_next_level(state)
        events.append(LEVEL_UP)

    return events


def fire_bullet(state: GameState) -> bool:
    """Spawn a player bullet from the ship's nose; refused once the game is over."""
    if state.is_game_over or state.phase == READY:
        return False
    p = state.player
    state.bullets.append(player_bullet(p.center_x, p.y))
    return True


def resolve_bullet_collisions(state: GameState, rng=random) -> List[str]:
    """Let each player bullet score at most one hit; enemies pre-empt page targets."""
    events: List[str] = []
    for i in range(len(state.bullets) - 1, -1, -1):
        b = state.bullets[i]
        hit = False

        for e in state.enemies:
            if e.alive and rect_intersect(b, e):
                e.alive = False
                hit = True
                state.score += ENEMY_POINTS
                cx, cy = center_of(e)
                create_explosion(state.particles, cx, cy, GREEN, rng=rng)
                events.append(ENEMY_DESTROYED)
                break

        if not hit:
            for t in state.targets:
                if t.alive and rect_intersect(b, t.rect):
                    t.hide()
                    hit = True
                    state.score += TARGET_POINTS
                    cx, cy = center_of(t.rect)
                    create_explosion(state.particles, cx, cy, WHITE,
                                     min(t.rect.width, TARGET_EXPLOSION_CAP), rng=rng)
                    events.append(TARGET_DESTROYED)
                    break

        if hit:
            del state.bullets[i]
    return events


def start_next_level(state: GameState) -> None:
    """Clear the field, raise difficulty, spawn a fresh wave and pay the bonus."""
    state.level_start_time = state.game_time
    state.bullets = []
    state.enemy_bullets = []
    state.enemy_fire_timer = 0.0
    bonus = state.level_manager.advance()
    state.enemies = generate_enemies(state.viewport_w, state.image_size)
    state.score += bonus
    log_debug(f"start_next_level level={state.level} bonus={bonus} score={state.score}")


def _move_player(state: GameState, dt: float) -> None:
    p = state.player
    if state.controls.left:
        p.x -= p.speed * dt
    if state.controls.right:
        p.x += p.speed * dt

    if state.touch.active:
        # ease toward the finger instead of teleporting
        diff = (state.touch.x - p.width / 2) - p.x
        if abs(diff) > TOUCH_SNAP_DISTANCE:
            step = min(abs(diff), p.speed * TOUCH_SPEED_FACTOR * dt)
            p.x += step if diff > 0 else -step

    p.clamp(state.viewport_w)


def _move_enemies(state: GameState, dt: float) -> None:
    lm = state.level_manager
    hit_edge = False
    for e in state.enemies:
        if not e.alive:
            continue
        e.x += lm.enemy_speed * dt * lm.direction
        if lm.direction == 1 and e.x + e.width > state.viewport_w - ENEMY_EDGE_MARGIN:
            hit_edge = True
        elif lm.direction == -1 and e.x < ENEMY_EDGE_MARGIN:
            hit_edge = True

    if hit_edge:
        lm.direction *= -1
        for e in state.enemies:
            e.y += ENEMY_DROP_DISTANCE


def _enemy_fire(state: GameState, dt: float, rng) -> None:
    state.enemy_fire_timer += dt
    if state.enemy_fire_timer < state.level_manager.fire_interval:
        return
    alive = state.alive_enemies()
    if not alive:
        return
    shooter = alive[int(rng.random() * len(alive))]
    state.enemy_bullets.append(enemy_bullet(shooter.x + shooter.width / 2, shooter.y + shooter.height))
    state.enemy_fire_timer = 0.0


def _player_destroyed(state: GameState, rng) -> List[str]:
    p = state.player
    create_explosion(state.particles, p.center_x, p.y + p.height / 2, CYAN,
                     PLAYER_EXPLOSION_SIZE, rng=rng)
    state.phase = GAME_OVER
    log_debug(f"player destroyed score={state.score} level={state.level}")
    return [PLAYER_HIT, GAME_OVER_EVENT]
