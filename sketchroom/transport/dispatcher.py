# sketchroom/transport/dispatcher.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ValidationError

from sketchroom.domain.draw import handle_clear_canvas, handle_draw
from sketchroom.domain.guess import handle_chat_message
from sketchroom.domain.lobby import handle_create_room, handle_join_room
from sketchroom.domain.round import handle_choose_word
from sketchroom.store.errors import UserInputError
from sketchroom.transport.protocols import (
    InChatMessage,
    InChooseWord,
    InClearCanvas,
    InCreateRoom,
    InDraw,
    InJoinRoom,
    OutError,
    parse_incoming,
)

logger = logging.getLogger(__name__)

DispatchResult = Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]
# (to_sender_events, to_room_events), each event is JSON dict

_HANDLERS = {
    InCreateRoom: handle_create_room,
    InJoinRoom: handle_join_room,
    InChooseWord: handle_choose_word,
    InDraw: handle_draw,
    InClearCanvas: handle_clear_canvas,
    InChatMessage: handle_chat_message,
}


async def dispatch_message(
    *,
    app,
    pid: Optional[str],
    raw: Dict[str, Any],
) -> DispatchResult:
    """
    Transport layer calls this.
    - Parses + validates raw JSON
    - Routes to the correct domain handler
    - Returns (to_sender, to_room) events as JSON dicts

    NOTE: This file contains NO game rules. Room resolution happens in the
    handlers through the connection registry.
    """
    try:
        msg = parse_incoming(raw)
    except (ValidationError, ValueError) as e:
        err = OutError(code="BAD_MESSAGE", message=str(e)).model_dump()
        return [err], []

    handler = _HANDLERS.get(type(msg))
    if handler is None:
        err = OutError(code="NOT_IMPLEMENTED", message=f"Handler not implemented for type={msg.type}").model_dump()
        return [err], []

    try:
        to_sender, to_room = await handler(app=app, pid=pid, msg=msg)
    except UserInputError as e:
        return [OutError(code=e.code, message=e.message).model_dump()], []

    return _dump(to_sender), _dump(to_room)


def _dump(events: List[Any]) -> List[Dict[str, Any]]:
    """
    Convert pydantic events -> JSON dicts (routing dicts pass through).
    """
    return [e.model_dump() if isinstance(e, BaseModel) else e for e in events]
