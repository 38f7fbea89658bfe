from __future__ import annotations

from .handlers import handle_disconnect

__all__ = ["handle_disconnect"]
