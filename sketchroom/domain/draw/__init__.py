from __future__ import annotations

from .handlers import handle_clear_canvas, handle_draw

__all__ = ["handle_draw", "handle_clear_canvas"]
