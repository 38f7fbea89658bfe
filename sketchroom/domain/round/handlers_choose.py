# sketchroom/domain/round/handlers_choose.py
from __future__ import annotations

from typing import List, Optional, Tuple

from sketchroom.domain.common.validation import is_drawer
from sketchroom.domain.round.engine import lock_word
from sketchroom.transport.protocols import InChooseWord, OutError

Outgoing = List[object]
Result = Tuple[Outgoing, Outgoing]


async def handle_choose_word(*, app, pid: Optional[str], msg: InChooseWord) -> Result:
    if not pid:
        return [OutError(code="NO_PID", message="Missing pid")], []

    room_code = app.state.registry.room_of(pid)
    if not room_code:
        return [OutError(code="NOT_IN_ROOM", message="Join a room first")], []

    room = await app.state.repo.get_room(room_code)
    if room is None:
        return [OutError(code="ROOM_NOT_FOUND", message="Room not found")], []
    if not is_drawer(room, pid):
        return [OutError(code="NOT_DRAWER", message="Only the drawer can choose the word")], []
    if room.phase != "CHOOSING_WORD":
        return [OutError(code="NOT_CHOOSING", message="Word already chosen")], []

    wanted = msg.word.strip().lower()
    word = next((w for w in room.word_choices if w.lower() == wanted), None)
    if word is None:
        return [OutError(code="INVALID_WORD", message="Pick one of the offered words")], []

    return [], await lock_word(app=app, room=room, word=word, auto=False)
