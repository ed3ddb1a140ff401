"""Interactive QA harness for the procedural cues and the march rhythm."""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import pygame

from config import SAMPLE_RATE
from rhythm import RHYTHM_EVENT, RhythmScheduler, rhythm_interval_ms
from sound_manager import SoundManager, build_cues, render_cue

CUE_KEYS = {
    pygame.K_1: "ready",
    pygame.K_2: "shoot",
    pygame.K_3: "explosion",
    pygame.K_4: "game_over",
}
WAVE_SIZE = 36


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Invaders audio QA harness")
    parser.add_argument("--disable-audio", action="store_true", help="Run without pygame audio output")
    parser.add_argument("--report", action="store_true",
                        help="Print cue lengths and rhythm intervals, then exit")
    return parser.parse_args(argv)


def report() -> None:
    for key, tones in build_cues().items():
        samples = render_cue(tones, SAMPLE_RATE).size
        print(f"{key:<12} {samples / SAMPLE_RATE:.3f}s")
    for level in range(1, 6):
        row = [rhythm_interval_ms(level, alive, WAVE_SIZE) for alive in (WAVE_SIZE, WAVE_SIZE // 2, 1)]
        print(f"level {level}: " + " ".join(f"{ms:>4}ms" for ms in row))


def run(args: argparse.Namespace) -> None:
    if args.report:
        report()
        return

    pygame.init()
    screen = pygame.display.set_mode((800, 240))
    pygame.display.set_caption("Invaders Audio QA")
    font = pygame.font.SysFont("Arial", 16)
    clock = pygame.time.Clock()
    sound = SoundManager(enable_audio=not args.disable_audio)

    tempo = {"level": 1, "alive": WAVE_SIZE}
    rhythm = RhythmScheduler(sound, lambda: (tempo["level"], tempo["alive"], WAVE_SIZE))

    instructions = [
        "1-4: ready / shoot / explosion / game_over",
        "R: toggle rhythm",
        "UP/DOWN: level   LEFT/RIGHT: alive enemies",
        "ESC: Quit",
    ]

    while True:
        clock.tick(60)
        for event in pygame.event.get():
            if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                rhythm.stop()
                pygame.quit()
                return
            if event.type == RHYTHM_EVENT:
                rhythm.on_timer()
            if event.type == pygame.KEYDOWN:
                if event.key in CUE_KEYS:
                    sound.play(CUE_KEYS[event.key])
                elif event.key == pygame.K_r:
                    if rhythm.running:
                        rhythm.stop()
                    else:
                        rhythm.start()
                elif event.key == pygame.K_UP:
                    tempo["level"] += 1
                elif event.key == pygame.K_DOWN:
                    tempo["level"] = max(1, tempo["level"] - 1)
                elif event.key == pygame.K_LEFT:
                    tempo["alive"] = max(0, tempo["alive"] - 1)
                elif event.key == pygame.K_RIGHT:
                    tempo["alive"] = min(WAVE_SIZE, tempo["alive"] + 1)

        screen.fill((12, 12, 24))
        for i, line in enumerate(instructions):
            text = font.render(line, True, (200, 200, 220))
            screen.blit(text, (20, 20 + i * 20))
        interval = rhythm_interval_ms(tempo["level"], tempo["alive"], WAVE_SIZE)
        status = (f"level {tempo['level']}  alive {tempo['alive']}/{WAVE_SIZE}  "
                  f"interval {interval}ms  rhythm {'on' if rhythm.running else 'off'}")
        screen.blit(font.render(status, True, (180, 180, 200)), (20, 180))
        pygame.display.flip()


def main(argv: Optional[List[str]] = None) -> None:
    run(parse_args(argv))


if __name__ == "__main__":
    main(sys.argv[1:])
