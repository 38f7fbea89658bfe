from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sketchroom.domain.common.types import ACTIVE_PHASES
from sketchroom.domain.common.validation import (
    clamp_rounds,
    gen_room_code,
    normalize_name,
    normalize_room_code,
)
from sketchroom.domain.common.words import mask_word
from sketchroom.domain.round.engine import run_advance
from sketchroom.store.errors import DuplicateRoomError, RoomNotFoundError, UserInputError
from sketchroom.store.models import PlayerStore, RoomStore
from sketchroom.transport.protocols import (
    InCreateRoom,
    InJoinRoom,
    OutError,
    OutNewRound,
    OutPlayersUpdated,
    OutRoomJoined,
    OutWordHint,
    system,
)
from sketchroom.util.timeutil import now_ts

logger = logging.getLogger(__name__)

Outgoing = List[object]
# Returns: (to_sender, to_room)
Result = Tuple[Outgoing, Outgoing]


async def _unused_code(repo, attempts: int = 20) -> str:
    for _ in range(attempts):
        code = gen_room_code()
        if not await repo.room_exists(code):
            return code
    raise DuplicateRoomError("Could not allocate a room code, try again")


def _round_catch_up(room: RoomStore) -> Outgoing:
    """What a late joiner needs to follow a round already in progress."""
    if room.phase not in ACTIVE_PHASES or not room.current_drawer:
        return []
    hint = mask_word(room.current_word) if room.current_word else "Waiting for drawer..."
    return [
        OutNewRound(
            round_no=room.round_no,
            max_rounds=room.max_rounds,
            drawer_id=room.current_drawer,
            drawer_name=room.drawer_name(),
        ),
        OutWordHint(hint=hint),
    ]


async def _join(*, app, room: RoomStore, pid: str, name: str) -> Result:
    """
    Add the player, bind the connection, and start the game the first time
    the room reaches two players.
    """
    repo = app.state.repo
    settings = app.state.settings
    ts = now_ts()

    player = PlayerStore(pid=pid, name=normalize_name(name), joined_at=ts)
    await repo.add_player(room.code, player)
    app.state.registry.bind(pid, room.code)
    await repo.update_room_fields(room.code, last_activity=ts)

    if len(room.players) >= 2 and not room.game_started:
        await repo.update_room_fields(room.code, game_started=True)
        app.state.scheduler.schedule(
            room.code, settings.START_DELAY_SEC, run_advance, app, room.code, room.round_no, label="start"
        )
        logger.info("game starting room=%s in %ss", room.code, settings.START_DELAY_SEC)

    to_sender: Outgoing = [
        OutRoomJoined(code=room.code, players=room.roster(), max_rounds=room.max_rounds),
        *_round_catch_up(room),
    ]
    to_room: Outgoing = [
        OutPlayersUpdated(players=room.roster()),
        system(f"{player.name} joined!"),
    ]
    return to_sender, to_room


# -------------------------
# Handlers
# -------------------------

async def handle_create_room(*, app, pid: Optional[str], msg: InCreateRoom) -> Result:
    """
    create_room:
    - code from the client (uppercased); blank -> a fresh 6-char code
    - rounds clamped into [MIN_ROUNDS, MAX_ROUNDS], default on junk input
    - the creator joins as host
    """
    if not pid:
        return [OutError(code="NO_PID", message="Missing pid for this connection")], []
    if app.state.registry.room_of(pid):
        return [OutError(code="ALREADY_IN_ROOM", message="Already in a room")], []

    repo = app.state.repo
    settings = app.state.settings
    ts = now_ts()

    try:
        code = normalize_room_code(msg.code) if msg.code.strip() else await _unused_code(repo)
        room = RoomStore(
            code=code,
            cap=settings.ROOM_CAP,
            max_rounds=clamp_rounds(
                msg.rounds, default=settings.DEFAULT_ROUNDS, lo=settings.MIN_ROUNDS, hi=settings.MAX_ROUNDS
            ),
            created_at=ts,
            last_activity=ts,
        )
        await repo.create_room(room)
        logger.info("room created room=%s max_rounds=%s by=%s", room.code, room.max_rounds, pid)
        return await _join(app=app, room=room, pid=pid, name=msg.name)
    except UserInputError as e:
        return [OutError(code=e.code, message=e.message)], []


async def handle_join_room(*, app, pid: Optional[str], msg: InJoinRoom) -> Result:
    if not pid:
        return [OutError(code="NO_PID", message="Missing pid for this connection")], []
    if app.state.registry.room_of(pid):
        return [OutError(code="ALREADY_IN_ROOM", message="Already in a room")], []

    repo = app.state.repo
    try:
        code = normalize_room_code(msg.code)
        room = await repo.get_room(code)
        if room is None:
            raise RoomNotFoundError("Room not found", room_code=code)
        return await _join(app=app, room=room, pid=pid, name=msg.name)
    except UserInputError as e:
        return [OutError(code=e.code, message=e.message)], []
