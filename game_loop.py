# game_loop.py

import pygame
from config import (
    AUDIO_ENABLED, HEIGHT, HIGH_SCORE_FILE, MOSAIC_IMAGE_PATH, WIDTH, settings_data
)
from assets import MosaicImage
from game import InvadersSession
from highscores import Leaderboard
from host import DemoPage
from sound_manager import SoundManager
from storage import JsonFileStore
from ui import Button

TRIGGER_SIZE = (220, 56)


def place_trigger(trigger, width, height):
    trigger.rect.size = TRIGGER_SIZE
    trigger.rect.bottomright = (width - 30, height - 30)


def process_events(session, page, trigger, screen):
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.VIDEORESIZE:
            # the page reflows even while the game owns the input
            page.layout(event.w, event.h)
            place_trigger(trigger, event.w, event.h)
        if session.router.dispatch(event):
            continue
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if trigger.is_hovered(event.pos):
                session.start(screen.get_size())
    return True


def render_frame(session, page, trigger, screen, dt):
    page.draw(screen)
    trigger.update(dt)
    trigger.draw(screen)
    session.tick(dt, screen)
    pygame.display.flip()


def run_game():
    pygame.init()
    pygame.display.set_caption("Portfolio")
    clock = pygame.time.Clock()
    screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)

    page = DemoPage(WIDTH, HEIGHT)
    trigger = Button((0, 0, *TRIGGER_SIZE), "Play invaders", 22, color=(34, 120, 60))
    place_trigger(trigger, WIDTH, HEIGHT)
    session = InvadersSession(
        page,
        trigger,
        sound_manager=SoundManager(enable_audio=AUDIO_ENABLED),
        leaderboard=Leaderboard(JsonFileStore(HIGH_SCORE_FILE)),
        image=MosaicImage(MOSAIC_IMAGE_PATH),
    )
    running = True

    while running:
        # Re-read FPS each frame
        FPS = settings_data["FPS"]
        dt = clock.tick(FPS) / 1000.0

        running = process_events(session, page, trigger, screen)
        if running:
            render_frame(session, page, trigger, screen, dt)

    session.stop()
    pygame.quit()


if __name__ == "__main__":
    run_game()
