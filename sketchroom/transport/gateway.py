# sketchroom/transport/gateway.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel

from sketchroom.store.registry import ConnectionRegistry
from sketchroom.transport.ws_manager import WSManager


def as_dict(event: Any) -> Dict[str, Any]:
    if isinstance(event, BaseModel):
        return event.model_dump()
    return event


class BroadcastGateway:
    """
    Fans events out to sockets.

    Plain events go to every member of the room. Dict events may carry
    "targets" (only these pids) or "exclude" (everyone but this pid);
    the routing key is stripped before sending.
    """

    def __init__(self, wsman: WSManager, registry: ConnectionRegistry) -> None:
        self.wsman = wsman
        self.registry = registry

    async def broadcast(self, room_code: str, event: Any, exclude_pid: Optional[str] = None) -> None:
        payload = as_dict(event)
        for pid in self.registry.members(room_code):
            if exclude_pid and pid == exclude_pid:
                continue
            await self.wsman.send_to_pid(pid, payload)

    async def deliver(self, room_code: Optional[str], events: Iterable[Any]) -> None:
        for e in events:
            e = as_dict(e)
            if "targets" in e:
                targets: List[str] = e.get("targets") or []
                payload = {k: v for k, v in e.items() if k != "targets"}
                await self.wsman.send_many(targets, payload)
                continue
            if room_code is None:
                continue
            if "exclude" in e:
                payload = {k: v for k, v in e.items() if k != "exclude"}
                await self.broadcast(room_code, payload, exclude_pid=e.get("exclude"))
                continue
            await self.broadcast(room_code, e)
