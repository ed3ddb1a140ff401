"""Procedural sound generation and playback helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import numpy as np
import pygame

from config import (
    ARPEGGIO_GAP, ARPEGGIO_NOTE_LENGTH, READY_ARPEGGIO, RHYTHM_BASE_FREQ,
    SAMPLE_RATE, settings_data
)
from logging_utils import log_debug

SET = "set"
LINEAR = "linear"
EXP = "exp"

RHYTHM_KEYS = ("rhythm_low", "rhythm_high")


@dataclass(frozen=True)
class Tone:
    """One oscillator voice: waveform, pitch ramp and gain automation.

    ``gain`` is a sequence of ``(time, value, ramp)`` points relative to the
    tone start. ``ramp`` describes how the value is reached from the previous
    point: ``"set"`` jumps at ``time``, ``"linear"`` and ``"exp"`` glide.
    """

    waveform: str
    frequency: float
    duration: float
    end_frequency: Optional[float] = None
    gain: Tuple[Tuple[float, float, str], ...] = ((0.0, 0.15, SET),)
    offset: float = 0.0


def _automation(points: Sequence[Tuple[float, float, str]], times: np.ndarray) -> np.ndarray:
    env = np.full(times.shape, points[0][1], dtype=np.float32)
    for (t0, v0, _), (t1, v1, ramp) in zip(points, points[1:]):
        mask = (times >= t0) & (times < t1)
        span = t1 - t0
        if span <= 0:
            continue
        frac = (times[mask] - t0) / span
        if ramp == LINEAR:
            env[mask] = v0 + (v1 - v0) * frac
        elif ramp == EXP and v0 > 0 and v1 > 0:
            env[mask] = v0 * (v1 / v0) ** frac
        else:
            env[mask] = v0
    env[times >= points[-1][0]] = points[-1][1]
    return env


def _oscillator(waveform: str, phase: np.ndarray) -> np.ndarray:
    if waveform == "square":
        return np.where(np.sin(phase) >= 0, 1.0, -1.0)
    cycle = (phase / (2 * np.pi)) % 1
    if waveform == "sawtooth":
        return 2 * cycle - 1
    if waveform == "triangle":
        return 4 * np.abs(cycle - 0.5) - 1
    return np.sin(phase)


def render_tone(tone: Tone, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    sample_count = max(1, int(sample_rate * tone.duration))
    times = np.arange(sample_count, dtype=np.float64) / sample_rate
    if tone.end_frequency:
        freqs = tone.frequency * (tone.end_frequency / tone.frequency) ** (times / tone.duration)
    else:
        freqs = np.full(sample_count, tone.frequency, dtype=np.float64)
    phase = 2 * np.pi * np.cumsum(freqs) / sample_rate
    wave = _oscillator(tone.waveform, phase) * _automation(tone.gain, times)
    return wave.astype(np.float32)


def render_cue(tones: Sequence[Tone], sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Mix tones at their scheduled offsets into one mono buffer."""
    length = max(int(sample_rate * (t.offset + t.duration)) for t in tones)
    mix = np.zeros(max(1, length), dtype=np.float32)
    for tone in tones:
        wave = render_tone(tone, sample_rate)
        start = int(sample_rate * tone.offset)
        end = min(mix.size, start + wave.size)
        mix[start:end] += wave[:end - start]
    return np.clip(mix, -1.0, 1.0)


def _ready_arpeggio() -> Tuple[Tone, ...]:
    note, gap = ARPEGGIO_NOTE_LENGTH, ARPEGGIO_GAP
    envelope = (
        (0.0, 0.0, SET),
        (0.01, 0.15, LINEAR),
        (note - 0.03, 0.15, SET),
        (note, 0.0, LINEAR),
    )
    return tuple(
        Tone("square", freq, note, gain=envelope, offset=i * (note + gap))
        for i, freq in enumerate(READY_ARPEGGIO)
    )


def build_cues() -> Dict[str, Tuple[Tone, ...]]:
    semitone_up = RHYTHM_BASE_FREQ * 2 ** (1 / 12)
    beat = ((0.0, 0.1, SET), (0.08, 0.01, EXP))
    return {
        "ready": _ready_arpeggio(),
        "shoot": (Tone("square", 880, 0.1, end_frequency=110,
                       gain=((0.0, 0.15, SET), (0.1, 0.01, EXP))),),
        "explosion": (Tone("sawtooth", 150, 0.2, end_frequency=30,
                           gain=((0.0, 0.2, SET), (0.2, 0.01, EXP))),),
        "game_over": (Tone("square", 1200, 1.5, end_frequency=40,
                           gain=((0.0, 0.2, SET), (1.2, 0.2, SET), (1.5, 0.01, EXP))),),
        "rhythm_low": (Tone("square", RHYTHM_BASE_FREQ, 0.08, gain=beat),),
        "rhythm_high": (Tone("square", semitone_up, 0.08, gain=beat),),
    }


class SoundManager:
    """Pre-render the cue bank and play cues fire-and-forget.

    When the mixer cannot be opened every method is a silent no-op, so the
    game stays fully playable without audio.
    """

    def __init__(self, enable_audio: bool = True) -> None:
        self.cues = build_cues()
        self.sounds: Dict[str, "pygame.mixer.Sound"] = {}
        self.sample_rate = SAMPLE_RATE
        self.channels = 2
        self.enabled = False

        if enable_audio:
            try:
                init = pygame.mixer.get_init()
                if not init:
                    pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2)
                    init = pygame.mixer.get_init()
                self.sample_rate, _, self.channels = init
                pygame.mixer.set_num_channels(16)
                self.enabled = True
            except (pygame.error, TypeError) as exc:
                log_debug(f"SoundManager mixer init failed: {exc}")
                self.enabled = False
        if self.enabled:
            log_debug("SoundManager rendering procedural cues")
            self._prepare_sounds()
        else:
            log_debug("SoundManager running without audio output")

    def _prepare_sounds(self) -> None:
        for key, tones in self.cues.items():
            try:
                self.sounds[key] = self._create_sound(tones)
            except pygame.error as exc:
                log_debug(f"Failed to prepare sound '{key}': {exc}")
                self.enabled = False
                self.sounds.clear()
                return
        self.apply_volume()

    def _create_sound(self, tones: Sequence[Tone]) -> "pygame.mixer.Sound":
        wave = render_cue(tones, self.sample_rate)
        int_wave = (wave * 32_767).astype(np.int16)
        if self.channels > 1:
            int_wave = np.repeat(int_wave[:, None], self.channels, axis=1)
        return pygame.sndarray.make_sound(np.ascontiguousarray(int_wave))

    def apply_volume(self) -> None:
        sfx = float(settings_data.get("SOUND_SFX_VOLUME", 0.7))
        rhythm = float(settings_data.get("SOUND_RHYTHM_VOLUME", 0.6))
        for key, sound in self.sounds.items():
            sound.set_volume(rhythm if key in RHYTHM_KEYS else sfx)

    def play(self, key: str) -> None:
        if not self.enabled:
            return
        sound = self.sounds.get(key)
        if sound is None:
            log_debug(f"Sound '{key}' not found")
            return
        sound.play()

    def stop_all(self) -> None:
        if not self.enabled:
            return
        pygame.mixer.stop()
