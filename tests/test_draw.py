import pytest

from sketchroom.domain.draw import handle_clear_canvas, handle_draw
from sketchroom.domain.round.engine import advance_round
from sketchroom.transport.protocols import InClearCanvas, InDraw
from tests.fakes import seat


def stroke():
    return InDraw(x0=0, y0=0, x1=10, y1=12, color="#ff0000", size=5)


@pytest.mark.asyncio
async def test_lobby_doodles_relay_to_others(app):
    await seat(app)
    to_sender, to_room = await handle_draw(app=app, pid="p2", msg=stroke())
    assert to_sender == []
    assert to_room[0]["type"] == "draw"
    assert to_room[0]["exclude"] == "p2"
    assert (to_room[0]["x1"], to_room[0]["y1"], to_room[0]["color"]) == (10, 12, "#ff0000")


@pytest.mark.asyncio
async def test_only_drawer_draws_during_round(app):
    await seat(app)
    await advance_round(app=app, room_code="ROOM1")

    to_sender, to_room = await handle_draw(app=app, pid="p2", msg=stroke())
    assert to_sender[0].code == "NOT_DRAWER"
    assert to_room == []

    to_sender, to_room = await handle_draw(app=app, pid="p1", msg=stroke())
    assert to_room[0]["exclude"] == "p1"


@pytest.mark.asyncio
async def test_clear_canvas(app):
    await seat(app)
    await advance_round(app=app, room_code="ROOM1")

    to_sender, _ = await handle_clear_canvas(app=app, pid="p2", msg=InClearCanvas())
    assert to_sender[0].code == "NOT_DRAWER"

    _, to_room = await handle_clear_canvas(app=app, pid="p1", msg=InClearCanvas())
    assert to_room == [{"type": "clear_canvas", "exclude": "p1"}]


@pytest.mark.asyncio
async def test_draw_outside_room(app):
    to_sender, to_room = await handle_draw(app=app, pid="nobody", msg=stroke())
    assert to_sender[0].code == "NOT_IN_ROOM"
    assert to_room == []
