# sketchroom/domain/common/validation.py
from __future__ import annotations

import math
import random
import re
import string
from typing import Any, Optional

from sketchroom.store.errors import InvalidRoomCodeError
from sketchroom.store.models import RoomStore

_CODE_RE = re.compile(r"^[A-Z0-9]{4,8}$")

DEFAULT_NAME = "Guest"
NAME_MAX = 24


def gen_room_code(n: int = 6) -> str:
    alphabet = string.ascii_uppercase + string.digits
    return "".join(random.choice(alphabet) for _ in range(n))


def normalize_room_code(raw: Optional[str]) -> str:
    """Uppercase + validate. Raises InvalidRoomCodeError."""
    code = (raw or "").strip().upper()
    if not _CODE_RE.match(code):
        raise InvalidRoomCodeError("Room code must be 4-8 letters or digits", room_code=code)
    return code


def normalize_name(raw: Optional[str]) -> str:
    name = " ".join((raw or "").split())
    # drop control characters
    name = "".join(ch for ch in name if ord(ch) >= 32)
    return name[:NAME_MAX] or DEFAULT_NAME


def clamp_rounds(raw: Any, *, default: int = 6, lo: int = 3, hi: int = 20) -> int:
    """Numeric input is clamped to [lo, hi]; anything else yields the default."""
    if isinstance(raw, bool) or raw is None:
        return default
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, (float, str)):
        try:
            number = float(raw.strip() if isinstance(raw, str) else raw)
        except ValueError:
            return default
        # NaN and +/-Infinity
        if not math.isfinite(number):
            return default
        value = int(number)
    else:
        return default
    return max(lo, min(hi, value))


def is_drawer(room: Optional[RoomStore], pid: Optional[str]) -> bool:
    return room is not None and pid is not None and room.current_drawer == pid
