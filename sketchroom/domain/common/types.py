# sketchroom/domain/common/types.py
from __future__ import annotations

from typing import Literal

Phase = Literal["WAITING_FOR_PLAYERS", "CHOOSING_WORD", "DRAWING", "ROUND_END", "GAME_OVER"]

# phases in which a drawer owns the canvas
ACTIVE_PHASES = ("CHOOSING_WORD", "DRAWING")
