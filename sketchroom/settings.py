from __future__ import annotations

from pydantic import BaseModel
import os


class Settings(BaseModel):
    APP_NAME: str = "sketchroom-server"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Dev
    LOG_LEVEL: str = "INFO"

    # WebSocket origin policy (comma-separated)
    WS_ALLOWED_ORIGINS: str = "http://localhost:5173,http://127.0.0.1:5173,null"
    # Dev helper: allow any private LAN IP on port 5173
    WS_ALLOW_LAN_ORIGINS: bool = True

    # Rooms
    ROOM_CAP: int = 12
    DEFAULT_ROUNDS: int = 6
    MIN_ROUNDS: int = 3
    MAX_ROUNDS: int = 20

    # Game pacing (seconds)
    START_DELAY_SEC: float = 3
    CHOOSE_WORD_SEC: float = 15
    ROUND_DURATION_SEC: int = 80
    TICK_SEC: float = 1
    TIMEOUT_GRACE_SEC: float = 5
    ALL_GUESSED_GRACE_SEC: float = 4
    DRAWER_LEFT_GRACE_SEC: float = 3
    WORD_CHOICES: int = 3


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "y", "on")


def get_settings() -> Settings:
    return Settings(
        APP_NAME=os.getenv("APP_NAME", "sketchroom-server"),
        HOST=os.getenv("HOST", "0.0.0.0"),
        PORT=int(os.getenv("PORT", "8000")),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),

        WS_ALLOWED_ORIGINS=os.getenv(
            "WS_ALLOWED_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173,null",
        ),
        WS_ALLOW_LAN_ORIGINS=_flag("WS_ALLOW_LAN_ORIGINS", "true"),

        # cap never drops below 10
        ROOM_CAP=max(10, int(os.getenv("ROOM_CAP", "12"))),
        DEFAULT_ROUNDS=int(os.getenv("DEFAULT_ROUNDS", "6")),

        START_DELAY_SEC=float(os.getenv("START_DELAY_SEC", "3")),
        CHOOSE_WORD_SEC=float(os.getenv("CHOOSE_WORD_SEC", "15")),
        ROUND_DURATION_SEC=int(os.getenv("ROUND_DURATION_SEC", "80")),
        TICK_SEC=float(os.getenv("TICK_SEC", "1")),
        TIMEOUT_GRACE_SEC=float(os.getenv("TIMEOUT_GRACE_SEC", "5")),
        ALL_GUESSED_GRACE_SEC=float(os.getenv("ALL_GUESSED_GRACE_SEC", "4")),
        DRAWER_LEFT_GRACE_SEC=float(os.getenv("DRAWER_LEFT_GRACE_SEC", "3")),
    )
