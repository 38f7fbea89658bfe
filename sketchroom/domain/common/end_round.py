from __future__ import annotations

import logging
from typing import List, Literal

from sketchroom.domain.common.fsm import can_transition_phase
from sketchroom.store.models import RoomStore
from sketchroom.transport.protocols import OutWordReveal, system
from sketchroom.util.timeutil import now_ts

logger = logging.getLogger(__name__)

Outgoing = List[object]
EndReason = Literal["timeout", "all_guessed", "drawer_left"]


def schedule_advance(app, room_code: str, delay: float, expected_round: int) -> None:
    """Queue the next round; supersedes whatever the room had pending."""
    from sketchroom.domain.round.engine import run_advance

    app.state.scheduler.schedule(room_code, delay, run_advance, app, room_code, expected_round, label="advance")


async def end_round(*, app, room: RoomStore, reason: EndReason, grace: float) -> Outgoing:
    """
    Close the current round: stop its timer, reveal the word, and queue the
    next round after `grace` seconds. Returns events for the whole room.
    """
    repo = app.state.repo
    ts = now_ts()

    if not can_transition_phase(room.phase, "ROUND_END"):
        logger.warning("round end refused room=%s phase=%s reason=%s", room.code, room.phase, reason)
        return []

    await repo.update_room_fields(room.code, phase="ROUND_END", last_activity=ts)
    # replaces the countdown / choose-word timeout
    schedule_advance(app, room.code, grace, room.round_no)
    logger.info("round ended room=%s round=%s reason=%s", room.code, room.round_no, reason)

    word = room.current_word
    events: Outgoing = []
    if word:
        events.append(OutWordReveal(word=word))
    elif reason == "timeout":
        events.append(OutWordReveal(word="Time ran out"))

    if reason == "timeout":
        events.append(system(f"Time's up! Word was: {word or 'none'}"))
    elif reason == "all_guessed":
        events.append(system(f"Everyone guessed it! The word was: {word}"))
    else:
        events.append(system("The drawer left. Next round starting soon..."))
    return events
