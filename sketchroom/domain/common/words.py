# sketchroom/domain/common/words.py
from __future__ import annotations

import random
from typing import List, Optional, Sequence

WORD_LIST: List[str] = [
    "cat", "dog", "house", "tree", "car", "sun", "moon", "star", "fish", "bird",
    "apple", "banana", "pizza", "cake", "rainbow", "rocket", "castle", "dragon",
    "unicorn", "phone", "book", "ocean", "giraffe", "elephant", "penguin",
    "butterfly", "flower", "heart", "smile", "fire", "plane", "train", "boat",
    "cloud", "mountain", "beach", "forest", "island", "desert", "volcano",
    "bridge", "tower", "church", "school", "hospital", "store", "icecream",
    "cookie", "donut", "burger", "fries", "coffee", "tea", "juice", "earth",
    "mars", "robot", "alien", "spaceship", "sword", "shield", "crown", "diamond",
]

HINT_PLACEHOLDER = "_"


class WordBank:
    def __init__(self, words: Optional[Sequence[str]] = None, rng: Optional[random.Random] = None) -> None:
        # dedupe, keep order
        self.words = list(dict.fromkeys(w.strip() for w in (words or WORD_LIST) if w.strip()))
        self.rng = rng or random.Random()

    def offer(self, k: int = 3) -> List[str]:
        """k distinct words for one round."""
        return self.rng.sample(self.words, min(k, len(self.words)))


def mask_word(word: str) -> str:
    """
    Even positions shown, odd positions masked, spaces kept.
    Characters are joined by a single space: "banana" -> "b _ n _ n _".
    """
    out = []
    for i, ch in enumerate(word):
        if ch == " " or i % 2 == 0:
            out.append(ch)
        else:
            out.append(HINT_PLACEHOLDER)
    return " ".join(out)
