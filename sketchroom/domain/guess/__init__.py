from __future__ import annotations

from .handlers import handle_chat_message

__all__ = ["handle_chat_message"]
