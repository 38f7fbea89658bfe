# sketchroom/domain/common/scheduler.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class Pending:
    label: str
    task: asyncio.Task


class RoomScheduler:
    """
    One pending deferred action per room.

    - schedule() supersedes whatever the room had pending (start delay,
      choose-word timeout, countdown, grace before next round)
    - a task that schedules its own successor is not cancelled by it
    - callback errors are logged and absorbed; a broken room must not take
      the event loop down with it
    """

    def __init__(self) -> None:
        self._pending: Dict[str, Pending] = {}

    def schedule(
        self,
        room_code: str,
        delay: float,
        fn: Callable[..., Awaitable[Any]],
        *args: Any,
        label: str = "",
    ) -> asyncio.Task:
        self.cancel(room_code)
        task = asyncio.get_running_loop().create_task(self._run(room_code, delay, fn, args, label or fn.__name__))
        self._pending[room_code] = Pending(label=label or fn.__name__, task=task)
        task.add_done_callback(lambda t, code=room_code: self._forget(code, t))
        logger.debug("scheduled room=%s label=%s delay=%.2fs", room_code, label or fn.__name__, delay)
        return task

    def cancel(self, room_code: str) -> bool:
        pending = self._pending.pop(room_code, None)
        if pending is None:
            return False
        if pending.task is asyncio.current_task():
            # caller is the pending task itself; it finishes on its own
            return False
        if pending.task.done():
            return False
        pending.task.cancel()
        logger.debug("cancelled room=%s label=%s", room_code, pending.label)
        return True

    def cancel_all(self) -> None:
        for code in list(self._pending.keys()):
            self.cancel(code)

    def pending_label(self, room_code: str) -> Optional[str]:
        pending = self._pending.get(room_code)
        if pending is None or pending.task.done():
            return None
        return pending.label

    def _forget(self, room_code: str, task: asyncio.Task) -> None:
        pending = self._pending.get(room_code)
        if pending is not None and pending.task is task:
            self._pending.pop(room_code, None)

    async def _run(self, room_code: str, delay: float, fn, args, label: str) -> None:
        try:
            if delay > 0:
                await asyncio.sleep(delay)
            await fn(*args)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("deferred action failed room=%s label=%s", room_code, label)
