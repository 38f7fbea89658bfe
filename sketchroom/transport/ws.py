# sketchroom/transport/ws.py
from __future__ import annotations

import ipaddress
import logging
import uuid
from urllib.parse import urlparse

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from sketchroom.domain.lifecycle.handlers import handle_disconnect
from sketchroom.transport.dispatcher import dispatch_message
from sketchroom.transport.protocols import OutError, OutHello

logger = logging.getLogger(__name__)

router = APIRouter()


def _is_private_ip(host: str) -> bool:
    """Return True if host is a private IP (192.168.x.x, 10.x.x.x, 172.16-31.x.x)."""
    try:
        ip = ipaddress.ip_address(host)
        return ip.is_private
    except ValueError:
        return False


def origin_allowed(origin: str | None, settings) -> bool:
    if origin is None:
        return True
    allowed = {o.strip() for o in settings.WS_ALLOWED_ORIGINS.split(",") if o.strip()}
    if origin in allowed:
        return True
    if settings.WS_ALLOW_LAN_ORIGINS:
        o = urlparse(origin)
        return _is_private_ip(o.hostname or "") and o.port == 5173
    return False


@router.websocket("/ws")
async def ws_game(websocket: WebSocket):
    app = websocket.app
    if not origin_allowed(websocket.headers.get("origin"), app.state.settings):
        await websocket.close(code=1008)
        return

    await websocket.accept()

    pid = uuid.uuid4().hex[:10]
    wsman = app.state.wsman
    gateway = app.state.gateway
    registry = app.state.registry

    await wsman.add(pid, websocket)
    await websocket.send_json(OutHello(pid=pid).model_dump())
    logger.info("connected pid=%s", pid)

    try:
        while True:
            try:
                raw = await websocket.receive_json()
            except ValueError:
                await websocket.send_json(OutError(code="BAD_MESSAGE", message="Invalid JSON").model_dump())
                continue

            to_sender, to_room = await dispatch_message(app=app, pid=pid, raw=raw)

            # unicast
            for e in to_sender:
                await websocket.send_json(e)

            # room fan-out (sender included unless the event excludes it)
            await gateway.deliver(registry.room_of(pid), to_room)

    except WebSocketDisconnect:
        logger.info("disconnected pid=%s", pid)

    finally:
        await wsman.remove(pid)
        room_code, events = await handle_disconnect(app=app, pid=pid)
        await gateway.deliver(room_code, events)
