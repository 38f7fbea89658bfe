from __future__ import annotations

from typing import Dict, List, Optional


class ConnectionRegistry:
    """
    Explicit connection -> room index.
    A pid is bound to at most one room; bind/unbind keep both directions in step.
    """

    def __init__(self) -> None:
        self._room_of: Dict[str, str] = {}
        self._members: Dict[str, Dict[str, None]] = {}

    def bind(self, pid: str, room_code: str) -> None:
        self.unbind(pid)
        self._room_of[pid] = room_code
        self._members.setdefault(room_code, {})[pid] = None

    def unbind(self, pid: str) -> Optional[str]:
        room_code = self._room_of.pop(pid, None)
        if room_code is None:
            return None
        members = self._members.get(room_code)
        if members is not None:
            members.pop(pid, None)
            if not members:
                self._members.pop(room_code, None)
        return room_code

    def room_of(self, pid: Optional[str]) -> Optional[str]:
        if not pid:
            return None
        return self._room_of.get(pid)

    def members(self, room_code: str) -> List[str]:
        return list(self._members.get(room_code, {}).keys())

    def drop_room(self, room_code: str) -> List[str]:
        """Unbind every member of a room; returns the pids that were bound."""
        pids = list(self._members.pop(room_code, {}).keys())
        for pid in pids:
            self._room_of.pop(pid, None)
        return pids
