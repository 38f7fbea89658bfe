from __future__ import annotations

import time


def now_ts() -> float:
    """Wall-clock seconds since the epoch."""
    return time.time()
