# sketchroom/domain/round/engine.py
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from sketchroom.domain.common.end_game import finish_game
from sketchroom.domain.common.end_round import end_round
from sketchroom.domain.common.fsm import can_transition_phase
from sketchroom.domain.common.words import mask_word
from sketchroom.store.models import RoomStore
from sketchroom.transport.protocols import (
    OutClearCanvas,
    OutNewRound,
    OutTimer,
    OutWordHint,
    OutYourTurn,
    excluding,
    private,
    system,
    targeted,
)
from sketchroom.util.timeutil import now_ts

logger = logging.getLogger(__name__)

Outgoing = List[object]

WAITING_HINT = "Waiting for drawer..."


def _is_stale(room: Optional[RoomStore], expected_round: int, *phases: str) -> bool:
    if room is None:
        return True
    if room.round_no != expected_round:
        return True
    return bool(phases) and room.phase not in phases


# -------------------------
# Transitions
# -------------------------

async def advance_round(*, app, room_code: str) -> Outgoing:
    """
    Move the room to its next round (or to game over).
    No-op when the room is gone or has no players left.
    """
    repo = app.state.repo
    settings = app.state.settings
    ts = now_ts()

    room = await repo.get_room(room_code)
    if room is None:
        logger.debug("advance skipped: room %s is gone", room_code)
        return []
    if not room.players:
        logger.debug("advance skipped: room %s is empty", room_code)
        return []

    round_no = room.round_no + 1
    if round_no > room.max_rounds:
        await repo.update_room_fields(room.code, round_no=round_no, last_activity=ts)
        return await finish_game(app=app, room=room)

    if not can_transition_phase(room.phase, "CHOOSING_WORD"):
        logger.warning("advance refused room=%s phase=%s", room.code, room.phase)
        return []

    pids = room.player_ids()
    drawer_id = pids[room.drawer_index % len(pids)]
    choices = app.state.words.offer(settings.WORD_CHOICES)

    await repo.update_room_fields(
        room.code,
        phase="CHOOSING_WORD",
        round_no=round_no,
        last_activity=ts,
        drawer_index=room.drawer_index + 1,
        current_drawer=drawer_id,
        current_word=None,
        word_choices=choices,
        round_start_time=None,
        round_deadline=None,
        guessed=set(),
    )
    app.state.scheduler.schedule(
        room.code, settings.CHOOSE_WORD_SEC, run_choose_timeout, app, room.code, round_no, label="choose_word"
    )
    logger.info("round %s/%s room=%s drawer=%s", round_no, room.max_rounds, room.code, drawer_id)

    return [
        OutNewRound(
            round_no=round_no,
            max_rounds=room.max_rounds,
            drawer_id=drawer_id,
            drawer_name=room.drawer_name(),
        ),
        OutClearCanvas(),
        OutWordHint(hint=WAITING_HINT),
        targeted(OutYourTurn(choices=choices), [drawer_id]),
    ]


async def lock_word(*, app, room: RoomStore, word: str, auto: bool = False) -> Outgoing:
    """CHOOSING_WORD -> DRAWING: stamp the start time, publish the hint, start the countdown."""
    repo = app.state.repo
    settings = app.state.settings
    ts = now_ts()

    if not can_transition_phase(room.phase, "DRAWING"):
        logger.warning("word lock refused room=%s phase=%s", room.code, room.phase)
        return []

    await repo.update_room_fields(
        room.code,
        phase="DRAWING",
        current_word=word,
        word_choices=[],
        round_start_time=ts,
        round_deadline=ts + settings.ROUND_DURATION_SEC,
        guessed=set(),
        last_activity=ts,
    )
    # replaces the choose-word timeout
    app.state.scheduler.schedule(room.code, 0, run_countdown, app, room.code, room.round_no, label="countdown")
    logger.info("word locked room=%s round=%s auto=%s", room.code, room.round_no, auto)

    drawer = room.current_drawer or ""
    events: Outgoing = [OutWordHint(hint=mask_word(word))]
    if auto:
        events.append(targeted(private(f"Time's up! Auto-selected: {word}"), [drawer]))
        events.append(excluding(system("Drawer was AFK - word auto-selected!"), drawer))
    else:
        events.append(targeted(private(f"Your word: {word}"), [drawer]))
        events.append(system("Word chosen! Start guessing!"))
    return events


# -------------------------
# Deferred actions (run by RoomScheduler)
# -------------------------

async def run_advance(app, room_code: str, expected_round: int) -> None:
    room = await app.state.repo.get_room(room_code)
    if _is_stale(room, expected_round, "WAITING_FOR_PLAYERS", "ROUND_END"):
        logger.debug("stale advance room=%s expected_round=%s", room_code, expected_round)
        return
    events = await advance_round(app=app, room_code=room_code)
    await app.state.gateway.deliver(room_code, events)


async def run_choose_timeout(app, room_code: str, expected_round: int) -> None:
    room = await app.state.repo.get_room(room_code)
    if _is_stale(room, expected_round, "CHOOSING_WORD"):
        logger.debug("stale choose timeout room=%s expected_round=%s", room_code, expected_round)
        return
    word = room.word_choices[0] if room.word_choices else app.state.words.offer(1)[0]
    events = await lock_word(app=app, room=room, word=word, auto=True)
    await app.state.gateway.deliver(room_code, events)


async def run_countdown(app, room_code: str, expected_round: int) -> None:
    """Broadcast seconds left every tick, starting one tick after the hint; past 0 close the round."""
    repo = app.state.repo
    settings = app.state.settings
    gateway = app.state.gateway

    remaining = int(settings.ROUND_DURATION_SEC)
    while remaining >= 0:
        await asyncio.sleep(settings.TICK_SEC)
        room = await repo.get_room(room_code)
        if _is_stale(room, expected_round, "DRAWING"):
            return
        await gateway.broadcast(room_code, OutTimer(seconds_left=remaining))
        remaining -= 1

    # the broadcast above may have yielded; re-check before acting
    room = await repo.get_room(room_code)
    if _is_stale(room, expected_round, "DRAWING"):
        return
    events = await end_round(app=app, room=room, reason="timeout", grace=settings.TIMEOUT_GRACE_SEC)
    await gateway.deliver(room_code, events)
