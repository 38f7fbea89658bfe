from __future__ import annotations

from .engine import advance_round, lock_word, run_advance, run_choose_timeout, run_countdown
from .handlers_choose import handle_choose_word

__all__ = [
    "advance_round",
    "lock_word",
    "run_advance",
    "run_choose_timeout",
    "run_countdown",
    "handle_choose_word",
]
