import pytest
from pydantic import ValidationError

from sketchroom.transport.protocols import (
    InChatMessage,
    InCreateRoom,
    InDraw,
    OutGameOver,
    OutWordHint,
    excluding,
    parse_incoming,
    targeted,
)


def test_parse_create_room_defaults():
    msg = parse_incoming({"type": "create_room"})
    assert isinstance(msg, InCreateRoom)
    assert msg.code == ""
    assert msg.rounds is None


def test_parse_draw():
    msg = parse_incoming({"type": "draw", "x0": 1, "y0": 2, "x1": 3, "y1": 4, "color": "#ff0000", "size": 6})
    assert isinstance(msg, InDraw)
    assert msg.size == 6


def test_parse_rejects_unknown_type():
    with pytest.raises(ValueError):
        parse_incoming({"type": "launch_rockets"})


def test_parse_rejects_missing_type():
    with pytest.raises(ValueError):
        parse_incoming({"text": "hi"})
    with pytest.raises(ValueError):
        parse_incoming(["chat_message"])


def test_chat_length_limits():
    with pytest.raises(ValidationError):
        InChatMessage(text="")
    with pytest.raises(ValidationError):
        InChatMessage(text="x" * 201)


def test_draw_size_must_be_positive():
    with pytest.raises(ValidationError):
        parse_incoming({"type": "draw", "x0": 0, "y0": 0, "x1": 1, "y1": 1, "size": 0})


def test_routing_helpers():
    e = targeted(OutWordHint(hint="a _ b"), ["p1"])
    assert e == {"type": "word_hint", "hint": "a _ b", "targets": ["p1"]}
    e = excluding(OutWordHint(hint="x"), "p2")
    assert e["exclude"] == "p2"


def test_game_over_shape():
    e = OutGameOver(leaderboard=[{"rank": 1, "name": "Ann", "score": 10}]).model_dump()
    assert e["type"] == "game_over"
    assert e["leaderboard"][0] == {"rank": 1, "name": "Ann", "score": 10}
