# sketchroom/transport/protocols.py
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field


# =========================
# Incoming (Client -> Server)
# =========================

class InBase(BaseModel):
    type: str


# ---- Lobby ----

class InCreateRoom(InBase):
    type: Literal["create_room"] = "create_room"
    # empty -> server generates one
    code: str = Field(default="", max_length=16)
    name: str = Field(default="", max_length=64)
    # clamped later; anything non-numeric falls back to the default
    rounds: Optional[Any] = None


class InJoinRoom(InBase):
    type: Literal["join_room"] = "join_room"
    code: str = Field(min_length=1, max_length=16)
    name: str = Field(default="", max_length=64)


# ---- Gameplay ----

class InChooseWord(InBase):
    type: Literal["choose_word"] = "choose_word"
    word: str = Field(min_length=1, max_length=50)


class InDraw(InBase):
    type: Literal["draw"] = "draw"
    x0: float
    y0: float
    x1: float
    y1: float
    color: str = Field(default="#000000", min_length=1, max_length=32)
    size: float = Field(default=4, gt=0, le=100)


class InClearCanvas(InBase):
    type: Literal["clear_canvas"] = "clear_canvas"


class InChatMessage(InBase):
    type: Literal["chat_message"] = "chat_message"
    text: str = Field(min_length=1, max_length=200)


IncomingMessage = Union[
    InCreateRoom,
    InJoinRoom,
    InChooseWord,
    InDraw,
    InClearCanvas,
    InChatMessage,
]


# =========================
# Outgoing (Server -> Client)
# =========================

class OutBase(BaseModel):
    type: str


class OutError(OutBase):
    type: Literal["error"] = "error"
    code: str
    message: str


class OutHello(OutBase):
    type: Literal["hello"] = "hello"
    pid: str


class OutRoomJoined(OutBase):
    type: Literal["room_joined"] = "room_joined"
    code: str
    players: List[Dict[str, Any]]
    max_rounds: int


class OutPlayersUpdated(OutBase):
    type: Literal["players_updated"] = "players_updated"
    players: List[Dict[str, Any]]


class OutMessage(OutBase):
    """Chat line or system/private notice."""
    type: Literal["message"] = "message"
    user: str
    text: str


class OutNewRound(OutBase):
    type: Literal["new_round"] = "new_round"
    round_no: int
    max_rounds: int
    drawer_id: str
    drawer_name: str


class OutYourTurn(OutBase):
    type: Literal["your_turn"] = "your_turn"
    choices: List[str]


class OutWordHint(OutBase):
    type: Literal["word_hint"] = "word_hint"
    hint: str


class OutTimer(OutBase):
    type: Literal["timer"] = "timer"
    seconds_left: int


class OutDraw(OutBase):
    type: Literal["draw"] = "draw"
    x0: float
    y0: float
    x1: float
    y1: float
    color: str
    size: float


class OutClearCanvas(OutBase):
    type: Literal["clear_canvas"] = "clear_canvas"


class OutCorrectGuess(OutBase):
    type: Literal["correct_guess"] = "correct_guess"
    pid: str
    name: str
    points: int
    drawer_bonus: int


class OutWordReveal(OutBase):
    type: Literal["word_reveal"] = "word_reveal"
    word: str


class LeaderboardEntry(BaseModel):
    rank: int
    name: str
    score: int


class OutGameOver(OutBase):
    type: Literal["game_over"] = "game_over"
    leaderboard: List[LeaderboardEntry]


OutgoingEvent = Union[
    OutError,
    OutHello,
    OutRoomJoined,
    OutPlayersUpdated,
    OutMessage,
    OutNewRound,
    OutYourTurn,
    OutWordHint,
    OutTimer,
    OutDraw,
    OutClearCanvas,
    OutCorrectGuess,
    OutWordReveal,
    OutGameOver,
]


def system(text: str) -> OutMessage:
    return OutMessage(user="System", text=text)


def private(text: str) -> OutMessage:
    return OutMessage(user="Private", text=text)


def targeted(event: BaseModel, pids: List[str]) -> Dict[str, Any]:
    """Room event that only the listed pids receive."""
    return {**event.model_dump(), "targets": list(pids)}


def excluding(event: BaseModel, pid: str) -> Dict[str, Any]:
    """Room event for everyone except `pid`."""
    return {**event.model_dump(), "exclude": pid}


# =========================
# Parser helpers
# =========================

_INCOMING_BY_TYPE = {
    "create_room": InCreateRoom,
    "join_room": InJoinRoom,
    "choose_word": InChooseWord,
    "draw": InDraw,
    "clear_canvas": InClearCanvas,
    "chat_message": InChatMessage,
}


def parse_incoming(payload: Dict[str, Any]) -> IncomingMessage:
    """
    Convert raw dict -> validated message model.
    Raises ValueError (pydantic ValidationError included) if invalid.
    """
    if not isinstance(payload, dict):
        raise ValueError("Message must be a JSON object")

    t = payload.get("type")
    if not isinstance(t, str):
        raise ValueError("Missing/invalid type")

    cls = _INCOMING_BY_TYPE.get(t)
    if cls is None:
        raise ValueError(f"Unknown message type: {t}")

    return cls.model_validate(payload)
