from __future__ import annotations

import logging
from typing import List

from sketchroom.domain.common.scoring import leaderboard
from sketchroom.store.models import RoomStore
from sketchroom.transport.protocols import LeaderboardEntry, OutGameOver, system, targeted

logger = logging.getLogger(__name__)

Outgoing = List[object]


async def _teardown(app, room: RoomStore) -> List[str]:
    """Cancel timers, unbind members and drop the room. Returns former members."""
    app.state.scheduler.cancel(room.code)
    members = app.state.registry.drop_room(room.code)
    await app.state.repo.update_room_fields(room.code, phase="GAME_OVER")
    await app.state.repo.delete_room(room.code)
    # fall back to the player table if the registry was already cleared
    return members or room.player_ids()


async def finish_game(*, app, room: RoomStore) -> Outgoing:
    board = [LeaderboardEntry(**row) for row in leaderboard(list(room.players.values()))]
    members = await _teardown(app, room)
    logger.info("game over room=%s rounds=%s players=%s", room.code, room.max_rounds, len(board))
    # room is gone; address the former members directly
    return [targeted(OutGameOver(leaderboard=board), members)]


async def close_room(*, app, room: RoomStore, reason: str = "Room closed") -> Outgoing:
    members = await _teardown(app, room)
    logger.info("room closed room=%s reason=%s", room.code, reason)
    return [targeted(system(reason), members)]
