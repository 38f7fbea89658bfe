from __future__ import annotations

from .handlers import handle_create_room, handle_join_room

__all__ = ["handle_create_room", "handle_join_room"]
