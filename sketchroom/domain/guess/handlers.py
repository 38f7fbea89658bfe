# sketchroom/domain/guess/handlers.py
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sketchroom.domain.common.end_round import end_round
from sketchroom.domain.common.scoring import (
    all_guessed,
    drawer_bonus,
    guesser_points,
    is_too_close,
    normalize_guess,
)
from sketchroom.store.models import PlayerStore, RoomStore
from sketchroom.transport.protocols import (
    InChatMessage,
    OutCorrectGuess,
    OutError,
    OutMessage,
    OutPlayersUpdated,
    private,
    system,
)
from sketchroom.util.timeutil import now_ts

logger = logging.getLogger(__name__)

Outgoing = List[object]
Result = Tuple[Outgoing, Outgoing]


async def handle_chat_message(*, app, pid: Optional[str], msg: InChatMessage) -> Result:
    """
    Chat doubles as the guess box.
    Plain chat unless a word is live and the sender is a guesser who has not
    solved it yet; partial matches are bounced privately so they never leak.
    """
    if not pid:
        return [OutError(code="NO_PID", message="Missing pid")], []

    room_code = app.state.registry.room_of(pid)
    if not room_code:
        return [OutError(code="NOT_IN_ROOM", message="Join a room first")], []

    room = await app.state.repo.get_room(room_code)
    if room is None or pid not in room.players:
        return [OutError(code="NOT_IN_ROOM", message="Join a room first")], []

    player = room.players[pid]
    text = msg.text
    if not text.strip():
        return [], []

    chat = OutMessage(user=player.name, text=text)

    if room.phase != "DRAWING" or not room.current_word:
        return [], [chat]

    if pid == room.current_drawer:
        return [], [chat]

    if pid in room.guessed:
        return [OutError(code="ALREADY_GUESSED", message="You already guessed correctly!")], []

    if normalize_guess(text) == normalize_guess(room.current_word):
        return await _score_correct_guess(app=app, room=room, player=player)

    if is_too_close(text, room.current_word):
        return [OutError(code="TOO_CLOSE", message="Too close!")], []

    return [], [chat]


async def _score_correct_guess(*, app, room: RoomStore, player: PlayerStore) -> Result:
    repo = app.state.repo
    settings = app.state.settings
    ts = now_ts()

    await repo.update_room_fields(room.code, guessed=room.guessed | {player.pid}, last_activity=ts)

    elapsed = ts - (room.round_start_time or ts)
    points = guesser_points(elapsed)
    bonus = drawer_bonus(points)

    await repo.add_score(room.code, player.pid, points)
    drawer = room.current_drawer
    if drawer and drawer in room.players:
        await repo.add_score(room.code, drawer, bonus)

    logger.info(
        "correct guess room=%s round=%s pid=%s points=%s bonus=%s elapsed=%.1fs",
        room.code, room.round_no, player.pid, points, bonus, elapsed,
    )

    to_sender: Outgoing = [private(f"Correct! +{points} pts")]
    to_room: Outgoing = [
        OutCorrectGuess(pid=player.pid, name=player.name, points=points, drawer_bonus=bonus),
        system(f"{player.name} guessed it!"),
        OutPlayersUpdated(players=room.roster()),
    ]

    if drawer and all_guessed(room.player_ids(), drawer, room.guessed):
        to_room.extend(
            await end_round(app=app, room=room, reason="all_guessed", grace=settings.ALL_GUESSED_GRACE_SEC)
        )

    return to_sender, to_room
