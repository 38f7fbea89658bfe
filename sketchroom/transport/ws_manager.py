# sketchroom/transport/ws_manager.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List

from fastapi import WebSocket

logger = logging.getLogger(__name__)


@dataclass
class Conn:
    pid: str
    ws: WebSocket


class WSManager:
    """
    In-memory socket registry: pid -> websocket.
    Transport-only: room membership lives in ConnectionRegistry.
    """
    def __init__(self) -> None:
        self._conns: Dict[str, Conn] = {}
        self._lock = asyncio.Lock()

    async def add(self, pid: str, ws: WebSocket) -> None:
        async with self._lock:
            self._conns[pid] = Conn(pid=pid, ws=ws)

    async def remove(self, pid: str) -> None:
        async with self._lock:
            self._conns.pop(pid, None)

    async def send_to_pid(self, pid: str, event: dict) -> None:
        async with self._lock:
            conn = self._conns.get(pid)
        if conn is None:
            return
        try:
            await conn.ws.send_json(event)
        except Exception:
            # dead socket; ws.py cleans up on disconnect
            logger.debug("send failed pid=%s type=%s", pid, event.get("type"))

    async def send_many(self, pids: List[str], event: dict) -> None:
        for pid in pids:
            await self.send_to_pid(pid, event)

    async def close_pid(self, pid: str, code: int = 4000) -> None:
        async with self._lock:
            conn = self._conns.pop(pid, None)
        if conn is None:
            return
        try:
            await conn.ws.close(code=code)
        except Exception:
            logger.debug("close failed pid=%s", pid)

    async def size(self) -> int:
        async with self._lock:
            return len(self._conns)
