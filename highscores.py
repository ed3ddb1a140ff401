"""Top-five high-score table and the three-letter name entry."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import List

from config import HIGH_SCORE_KEY, MAX_HIGH_SCORES, NAME_ALPHABET, NAME_LENGTH
from logging_utils import log_debug


@dataclass
class HighScoreEntry:
    name: str
    score: int


class Leaderboard:
    """High-score table persisted as a whole on every change.

    The in-memory list is authoritative for the running session; a store
    that refuses writes only costs persistence, never the table itself.
    """

    def __init__(self, store, key: str = HIGH_SCORE_KEY, size: int = MAX_HIGH_SCORES) -> None:
        self.store = store
        self.key = key
        self.size = size
        self.scores: List[HighScoreEntry] = self.load_scores()

    def load_scores(self) -> List[HighScoreEntry]:
        try:
            raw = self.store.load(self.key)
        except OSError as exc:
            log_debug(f"Leaderboard.load_scores storage error: {exc}")
            return []
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            log_debug("Leaderboard.load_scores corrupt payload ignored")
            return []
        if not isinstance(data, list):
            return []

        scores = []
        for item in data:
            if not isinstance(item, dict):
                continue
            try:
                name = str(item.get("name", ""))[:NAME_LENGTH].ljust(NAME_LENGTH)
                scores.append(HighScoreEntry(name, int(item.get("score", 0))))
            except (TypeError, ValueError):
                continue
        return self._ranked(scores)

    def reload(self) -> None:
        self.scores = self.load_scores()

    def _ranked(self, scores):
        # sort is stable, so equal scores keep insertion order
        return sorted(scores, key=lambda e: e.score, reverse=True)[:self.size]

    def is_high_score(self, score: int) -> bool:
        if len(self.scores) < self.size:
            return True
        return score > self.scores[-1].score

    def add_score(self, name: str, score: int) -> None:
        self.scores.append(HighScoreEntry(name, int(score)))
        self.scores = self._ranked(self.scores)
        self.save()

    def save(self) -> bool:
        payload = json.dumps([asdict(e) for e in self.scores])
        try:
            saved = self.store.save(self.key, payload)
        except OSError as exc:
            log_debug(f"Leaderboard.save storage error: {exc}")
            return False
        if not saved:
            log_debug("Leaderboard.save rejected; keeping scores in memory only")
        return bool(saved)


class NameEntry:
    """Three cyclic letter slots plus a cursor clamped to the slots."""

    def __init__(self, alphabet: str = NAME_ALPHABET, length: int = NAME_LENGTH) -> None:
        self.alphabet = alphabet
        self.slots = [alphabet[0]] * length
        self.cursor = 0

    def _shift(self, step: int) -> None:
        idx = self.alphabet.index(self.slots[self.cursor])
        self.slots[self.cursor] = self.alphabet[(idx + step) % len(self.alphabet)]

    def increment(self) -> None:
        self._shift(1)

    def decrement(self) -> None:
        self._shift(-1)

    def move_left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def move_right(self) -> None:
        self.cursor = min(len(self.slots) - 1, self.cursor + 1)

    @property
    def name(self) -> str:
        return "".join(self.slots)
