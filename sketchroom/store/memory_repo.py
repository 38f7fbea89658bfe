from __future__ import annotations

from typing import Any, Dict, List, Optional

from sketchroom.store.errors import DuplicateRoomError, RoomFullError, RoomNotFoundError
from sketchroom.store.models import PlayerStore, RoomStore


class MemoryRepo:
    """
    Process-wide room table.

    Methods are coroutines so handlers read the same as against a remote
    store, but none of them suspends: a handler awaiting a sequence of repo
    calls is never interleaved with another handler.
    """

    def __init__(self) -> None:
        self._rooms: Dict[str, RoomStore] = {}

    # ----------------------------
    # Rooms
    # ----------------------------
    async def room_exists(self, room_code: str) -> bool:
        return room_code.upper() in self._rooms

    async def create_room(self, room: RoomStore) -> RoomStore:
        code = room.code.upper()
        if code in self._rooms:
            raise DuplicateRoomError("Room already exists", room_code=code)
        room.code = code
        self._rooms[code] = room
        return room

    async def get_room(self, room_code: str) -> Optional[RoomStore]:
        return self._rooms.get((room_code or "").upper())

    async def list_rooms(self) -> List[RoomStore]:
        return list(self._rooms.values())

    async def delete_room(self, room_code: str) -> bool:
        return self._rooms.pop((room_code or "").upper(), None) is not None

    async def update_room_fields(self, room_code: str, **fields: Any) -> None:
        room = await self.get_room(room_code)
        if room is None:
            return
        for k, v in fields.items():
            setattr(room, k, v)

    # ----------------------------
    # Players
    # ----------------------------
    async def add_player(self, room_code: str, player: PlayerStore) -> RoomStore:
        room = await self.get_room(room_code)
        if room is None:
            raise RoomNotFoundError("Room not found", room_code=room_code.upper())
        if player.pid not in room.players and len(room.players) >= room.cap:
            raise RoomFullError("Room full", room_code=room.code)
        room.players[player.pid] = player
        return room

    async def remove_player(self, room_code: str, pid: str) -> Optional[PlayerStore]:
        room = await self.get_room(room_code)
        if room is None:
            return None
        return room.players.pop(pid, None)

    async def get_player(self, room_code: str, pid: str) -> Optional[PlayerStore]:
        room = await self.get_room(room_code)
        if room is None:
            return None
        return room.players.get(pid)

    async def list_players(self, room_code: str) -> List[PlayerStore]:
        room = await self.get_room(room_code)
        if room is None:
            return []
        return list(room.players.values())

    async def update_player_fields(self, room_code: str, pid: str, **fields: Any) -> None:
        p = await self.get_player(room_code, pid)
        if p is None:
            return
        for k, v in fields.items():
            setattr(p, k, v)

    async def add_score(self, room_code: str, pid: str, points: int) -> int:
        p = await self.get_player(room_code, pid)
        if p is None:
            return 0
        p.score += max(0, int(points))
        return p.score
