from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from sketchroom.domain.common.end_game import close_room as close_room_state

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/rooms")
async def list_rooms(request: Request):
    """
    List all active rooms (debug/admin).
    """
    repo = request.app.state.repo
    scheduler = request.app.state.scheduler

    rooms = []
    for room in sorted(await repo.list_rooms(), key=lambda r: r.code):
        rooms.append(
            {
                "room_code": room.code,
                "phase": room.phase,
                "cap": room.cap,
                "round_no": room.round_no,
                "max_rounds": room.max_rounds,
                "players": len(room.players),
                "drawer": room.current_drawer,
                "round_deadline": room.round_deadline,
                "pending": scheduler.pending_label(room.code),
                "last_activity": room.last_activity,
                "created_at": room.created_at,
            }
        )

    return {"rooms": rooms}


@router.post("/rooms/{room_code}/close")
async def close_room(room_code: str, request: Request):
    """
    Force close a room (debug/admin). Cancels its timers, tells the members,
    drops the room and closes their websockets.
    """
    app = request.app
    room = await app.state.repo.get_room(room_code)
    if room is None:
        raise HTTPException(status_code=404, detail="Room not found")

    events = await close_room_state(app=app, room=room, reason="Room closed by admin")
    await app.state.gateway.deliver(None, events)

    for e in events:
        for pid in e.get("targets", []):
            await app.state.wsman.close_pid(pid, code=4000)

    return {"ok": True, "room_code": room.code}
