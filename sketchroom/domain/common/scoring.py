# sketchroom/domain/common/scoring.py
from __future__ import annotations

import math
from typing import List

from sketchroom.store.models import PlayerStore

MAX_POINTS = 120
MIN_POINTS = 20
DECAY_PER_SEC = 1.5
DRAWER_SHARE = 0.4


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def guesser_points(elapsed_sec: float) -> int:
    elapsed = max(0.0, float(elapsed_sec))
    return max(MIN_POINTS, _round_half_up(MAX_POINTS - elapsed * DECAY_PER_SEC))


def drawer_bonus(points: int) -> int:
    return _round_half_up(points * DRAWER_SHARE)


def normalize_guess(text: str) -> str:
    return (text or "").strip().lower()


def is_too_close(guess: str, word: str) -> bool:
    """Partial match that would leak the word: 3+ chars, substring, not equal."""
    g = normalize_guess(guess)
    w = normalize_guess(word)
    return len(g) > 2 and g in w and g != w


def all_guessed(player_ids: List[str], drawer: str, guessed: set) -> bool:
    non_drawers = [pid for pid in player_ids if pid != drawer]
    return bool(non_drawers) and all(pid in guessed for pid in non_drawers)


def leaderboard(players: List[PlayerStore]) -> List[dict]:
    # sorted() is stable: ties keep join order
    ranked = sorted(players, key=lambda p: -p.score)
    return [{"rank": i + 1, "name": p.name, "score": p.score} for i, p in enumerate(ranked)]
