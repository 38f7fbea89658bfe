# sketchroom/domain/lifecycle/handlers.py
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sketchroom.domain.common.end_round import end_round
from sketchroom.domain.common.scoring import all_guessed
from sketchroom.domain.common.types import ACTIVE_PHASES
from sketchroom.transport.protocols import OutPlayersUpdated, system

logger = logging.getLogger(__name__)

Outgoing = List[object]


async def handle_disconnect(*, app, pid: Optional[str]) -> Tuple[Optional[str], Outgoing]:
    """
    Called by transport when a socket goes away.
    Returns (room_code, events for the remaining members).
    Unknown or already-removed pids are a no-op.
    """
    if not pid:
        return None, []

    repo = app.state.repo
    settings = app.state.settings

    room_code = app.state.registry.unbind(pid)
    if room_code is None:
        return None, []

    room = await repo.get_room(room_code)
    if room is None:
        return room_code, []

    player = await repo.remove_player(room_code, pid)
    if player is None:
        return room_code, []
    logger.info("player left room=%s pid=%s remaining=%s", room_code, pid, len(room.players))

    if not room.players:
        app.state.scheduler.cancel(room_code)
        await repo.delete_room(room_code)
        app.state.registry.drop_room(room_code)
        logger.info("room deleted room=%s (empty)", room_code)
        return room_code, []

    events: Outgoing = [
        system(f"{player.name} left"),
        OutPlayersUpdated(players=room.roster()),
    ]

    if room.current_drawer == pid and room.phase in ACTIVE_PHASES:
        events.extend(
            await end_round(app=app, room=room, reason="drawer_left", grace=settings.DRAWER_LEFT_GRACE_SEC)
        )
    elif room.phase == "DRAWING" and room.current_drawer and all_guessed(
        room.player_ids(), room.current_drawer, room.guessed
    ):
        # the last holdout left; everyone still here has solved it
        events.extend(
            await end_round(app=app, room=room, reason="all_guessed", grace=settings.ALL_GUESSED_GRACE_SEC)
        )

    return room_code, events
