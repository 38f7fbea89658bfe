# sketchroom/domain/common/fsm.py
from __future__ import annotations

from sketchroom.domain.common.types import Phase


def can_transition_phase(current: Phase, target: Phase) -> bool:
    """
    Validate room phase transitions.
    """
    transitions: dict[Phase, list[Phase]] = {
        "WAITING_FOR_PLAYERS": ["CHOOSING_WORD", "GAME_OVER"],
        "CHOOSING_WORD": ["DRAWING", "ROUND_END", "CHOOSING_WORD", "GAME_OVER"],
        "DRAWING": ["ROUND_END", "GAME_OVER"],
        "ROUND_END": ["CHOOSING_WORD", "GAME_OVER"],
        "GAME_OVER": [],
    }
    return target in transitions.get(current, [])
