# sketchroom/domain/draw/handlers.py
from __future__ import annotations

from typing import List, Optional, Tuple

from sketchroom.transport.protocols import (
    InClearCanvas,
    InDraw,
    OutClearCanvas,
    OutDraw,
    OutError,
    excluding,
)

Outgoing = List[object]
Result = Tuple[Outgoing, Outgoing]


async def _check_can_draw(app, pid: Optional[str]) -> Tuple[Optional[str], Optional[OutError]]:
    """Resolve the sender's room and make sure the canvas is theirs."""
    if not pid:
        return None, OutError(code="NO_PID", message="Missing pid")

    room_code = app.state.registry.room_of(pid)
    if not room_code:
        return None, OutError(code="NOT_IN_ROOM", message="Join a room first")

    room = await app.state.repo.get_room(room_code)
    if room is None:
        return None, OutError(code="ROOM_NOT_FOUND", message="Room not found")

    # lobby doodling is open to everyone; a round's canvas belongs to its drawer
    if room.current_drawer is not None and room.current_drawer != pid:
        return None, OutError(code="NOT_DRAWER", message="Only drawer can draw")

    return room_code, None


async def handle_draw(*, app, pid: Optional[str], msg: InDraw) -> Result:
    room_code, err = await _check_can_draw(app, pid)
    if err is not None:
        return [err], []

    stroke = OutDraw(x0=msg.x0, y0=msg.y0, x1=msg.x1, y1=msg.y1, color=msg.color, size=msg.size)
    return [], [excluding(stroke, pid)]


async def handle_clear_canvas(*, app, pid: Optional[str], msg: InClearCanvas) -> Result:
    room_code, err = await _check_can_draw(app, pid)
    if err is not None:
        return [err], []

    return [], [excluding(OutClearCanvas(), pid)]
