from __future__ import annotations

from typing import Dict, List, Optional, Set
from pydantic import BaseModel, Field

from sketchroom.domain.common.types import Phase


class PlayerStore(BaseModel):
    pid: str
    name: str
    score: int = 0
    joined_at: float = 0

    def public(self) -> dict:
        return {"id": self.pid, "name": self.name, "score": self.score}


class RoomStore(BaseModel):
    code: str
    cap: int = 12
    max_rounds: int = 6
    created_at: float
    last_activity: float

    phase: Phase = "WAITING_FOR_PLAYERS"
    game_started: bool = False
    round_no: int = 0
    drawer_index: int = 0
    current_drawer: Optional[str] = None
    current_word: Optional[str] = None
    word_choices: List[str] = Field(default_factory=list)
    round_start_time: Optional[float] = None
    round_deadline: Optional[float] = None
    guessed: Set[str] = Field(default_factory=set)

    # insertion order is join order
    players: Dict[str, PlayerStore] = Field(default_factory=dict)

    def player_ids(self) -> List[str]:
        return list(self.players.keys())

    def roster(self) -> List[dict]:
        return [p.public() for p in self.players.values()]

    def drawer_name(self) -> str:
        p = self.players.get(self.current_drawer or "")
        return p.name if p else ""
